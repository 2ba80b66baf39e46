# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from typing import Iterable

import re

# stripped in this order, keeping the text before the first occurrence
ESCAPED_CHARS = ("\n", ".", ",", ":", ";", "?", ")", "(", '"', "'", "!", "[", "]", "{", "}", "`")

number_re = re.compile(r"[0-9]*")


def normalize(word: str) -> str:
    for char in ESCAPED_CHARS:
        tokens = [token for token in word.split(char) if token]
        if not tokens:
            # nothing but separators left, keep what we have
            break
        word = tokens[0]
    return word.split("'s", 1)[0]


def is_number(word: str) -> bool:
    return number_re.fullmatch(word) is not None


def match_in_patterns(word: str, patterns: Iterable[str | re.Pattern[str]]) -> bool:
    return any(re.search(pattern, word) for pattern in patterns)
