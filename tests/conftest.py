# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from pathlib import Path

import pytest

WORDS = [
    "the",
    "world",
    "hello",
    "spelling",
    "dictionary",
    "end",
    "of",
    "line",
    "Monday",
    "café",
    "cat",
    "cast",
]
FILLERS = [
    "Bazinga!",
    "That is not a word.",
    "I checked twice.",
    "Bazinga!",
]


def write_pack(lang_dir: Path, language: str, words: list[str], fillers: list[str]) -> Path:
    pack_dir = lang_dir / language
    pack_dir.mkdir(parents=True, exist_ok=True)
    (pack_dir / "dictionary.txt").write_text("\n".join(words) + "\n", encoding="utf-8")
    (pack_dir / "bazinga.txt").write_text("\n".join(fillers) + "\n", encoding="utf-8")
    return pack_dir


@pytest.fixture(name="lang_dir")
def fixture_lang_dir(tmp_path: Path) -> str:
    lang_dir = tmp_path / "lang"
    write_pack(lang_dir, "eng", WORDS, FILLERS)
    return str(lang_dir)
