# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from setuptools import setup, find_packages
import sys
import version

LATEST = [
    "requests >= 2.9.1",
    "certifi >= 2015.11.20.1",
]

if sys.platform.startswith("linux"):
    REQUIRES = [
        # no bundled certifi as distro packages are expected to be patched to use system ca certs
        "requests >= 2.2.1",
    ]
else:
    REQUIRES = LATEST

setup(
    author="Aiven",
    author_email="support@aiven.io",
    entry_points={
        "console_scripts": [
            "sheldon = sheldon.spell.__main__:main",
        ],
    },
    install_requires=REQUIRES,
    extras_require={
        "completion": ["argcomplete"],
        "test": ["pytest"],
    },
    license="Apache 2.0",
    name="sheldon-spell",
    packages=find_packages(exclude=["tests"]),
    package_data={"sheldon.spell": ["lang/*/*.txt"]},
    platforms=["POSIX", "MacOS", "Windows"],
    description="Dictionary lookups and edit-distance spelling suggestions",
    long_description=open("README.rst").read(),
    python_requires=">=3.8",
    version=version.get_project_version("sheldon/spell/version.py"),
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
