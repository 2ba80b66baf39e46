# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Scan text for words missing from a dictionary"""
from __future__ import annotations

from .candidates import candidates
from .dictionary import DictionaryStore
from .utils import is_number, match_in_patterns, normalize
from typing import Any, Iterable, Iterator, NamedTuple

import logging

log = logging.getLogger("sheldon.checker")


class Misspelled(NamedTuple):
    line_number: int
    word: str
    candidates: list[str]


class Report(NamedTuple):
    misspelled: list[Misspelled]
    bazinga: str | None = None

    @property
    def ok(self) -> bool:
        return not self.misspelled

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "bazinga": self.bazinga,
            "misspelled_words": [item._asdict() for item in self.misspelled],
        }


def iter_lines(text: str, ignore_blocks: Iterable[tuple[str, str]] = ()) -> Iterator[tuple[int, str]]:
    """Numbered lines of `text`, leaving out ignored blocks

    A block opens on a line starting with an opening marker and closes on the
    next line containing the matching closing marker; both lines are skipped.
    """
    blocks = list(ignore_blocks)
    closing: str | None = None
    for line_number, line in enumerate(text.splitlines(), start=1):
        if closing is not None:
            if closing in line:
                closing = None
            continue
        stripped = line.lstrip()
        for opening, close_marker in blocks:
            if stripped.startswith(opening):
                rest = stripped[len(opening) :]
                closing = None if close_marker in rest else close_marker
                break
        else:
            yield line_number, line


def check(
    text: str,
    store: DictionaryStore,
    ignore_words: Iterable[str] = (),
    ignore_patterns: Iterable[str] = (),
    ignore_blocks: Iterable[tuple[str, str]] = (),
) -> Report:
    ignored = {word.lower() for word in ignore_words}
    patterns = list(ignore_patterns)
    misspelled: list[Misspelled] = []

    for line_number, line in iter_lines(text, ignore_blocks):
        for raw_word in line.split():
            word = normalize(raw_word)
            if not word or is_number(word) or word.lower() in ignored:
                continue
            if not any(char.isalpha() for char in word):
                continue
            if patterns and (match_in_patterns(raw_word, patterns) or match_in_patterns(word, patterns)):
                continue
            if store.is_member(word):
                continue
            misspelled.append(Misspelled(line_number, word, sorted(candidates(word, store))))

    if not misspelled:
        return Report([])

    log.debug("%d misspelled words in %d lines", len(misspelled), len(text.splitlines()))
    return Report(misspelled, bazinga=store.random_filler() if store.fillers else None)
