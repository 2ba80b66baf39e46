"""
keeps the version file in sync with the latest git tag

"""

from __future__ import annotations

import importlib.util
import os
import re
import subprocess

RELEASE_MATCHER = re.compile(r"^\d+\.\d+\.\d+$")
DESCRIBE_MATCHER = re.compile(r"^(?P<release>\d+\.\d+\.\d+)-(?P<commits>\d+)-g(?P<sha>[0-9a-f]+)$")


def pep440ify(git_describe_version: str) -> str:
    """Turn `git describe --tags` output into a PEP 440 version, or an empty string"""
    if RELEASE_MATCHER.match(git_describe_version):
        return git_describe_version
    match = DESCRIBE_MATCHER.match(git_describe_version)
    if match:
        return "{release}+g{sha}".format(**match.groupdict())
    return ""


def _read_file_version(version_file: str) -> str | None:
    spec = importlib.util.spec_from_file_location("version", version_file)
    if spec is None or spec.loader is None:
        return None
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except (OSError, SyntaxError):
        return None
    return getattr(module, "__version__", None)


def get_project_version(version_file: str) -> str:
    version_file = os.path.join(os.path.dirname(os.path.realpath(__file__)), version_file)
    file_ver = _read_file_version(version_file)

    try:
        proc = subprocess.run(
            ["git", "describe", "--tags", "--always"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
        git_ver = pep440ify(proc.stdout.decode("utf-8").strip()) if proc.returncode == 0 else ""
        if git_ver and git_ver != file_ver:
            with open(version_file, "w") as fp:
                fp.write('__version__ = "{}"\n'.format(git_ver))
            return git_ver
    except OSError:
        pass

    if not file_ver:
        raise Exception("version not available from git or from file %r" % version_file)

    return file_ver


if __name__ == "__main__":
    import sys

    get_project_version(sys.argv[1])
