# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from .argx import arg

arg.json = arg("--json", help="Raw json output", action="store_true", default=False)
arg.word = arg("word", help="Word to look up")
arg.files = arg("files", nargs="*", metavar="FILE", help="Files to check (default: standard input)")
arg.ignore_word = arg(
    "--ignore-word",
    action="append",
    default=[],
    dest="ignore_words",
    metavar="WORD",
    help="Word to accept without looking it up, may be repeated",
)
arg.ignore_pattern = arg(
    "--ignore-pattern",
    action="append",
    default=[],
    dest="ignore_patterns",
    metavar="REGEX",
    help="Skip words matching the regular expression, may be repeated",
)
arg.ignore_block = arg(
    "--ignore-block",
    action="append",
    default=[],
    dest="ignore_blocks",
    metavar="MARKER",
    help="Skip lines between a pair of lines starting with MARKER, e.g. '```', may be repeated",
)
arg.url = arg("--url", help="Base URL of the language pack server [SHELDON_LANG_URL]")
arg.timeout = arg("--timeout", type=int, help="Wait for up to N seconds for a response (default: infinite)")
