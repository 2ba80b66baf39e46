# Spelling Corrector in Python 3; see http://norvig.com/spell-correct.html
#
# Copyright (c) 2007-2016 Peter Norvig
# MIT license: www.opensource.org/licenses/mit-license.php
from __future__ import annotations

from .dictionary import DictionaryStore
from typing import AbstractSet, Iterable, Iterator

LETTERS = "abcdefghijklmnopqrstuvwxyz"


def known(words: Iterable[str], keys: AbstractSet[str]) -> set[str]:
    """The subset of `words` that appear in the dictionary key set."""
    return set(w for w in words if w in keys)


def edits1(word: str) -> set[str]:
    """All edits that are one edit away from `word`."""
    splits = [(word[:i], word[i:]) for i in range(len(word) + 1)]
    deletes = [L + R[1:] for L, R in splits if R]
    transposes = [L + R[1] + R[0] + R[2:] for L, R in splits if len(R) > 1]
    replaces = [L + c + R[1:] for L, R in splits if R for c in LETTERS]
    inserts = [L + c + R for L, R in splits for c in LETTERS]
    return set(deletes + transposes + replaces + inserts)


def edits2(word: str) -> Iterator[str]:
    """All edits that are two edits away from `word`."""
    return (e2 for e1 in edits1(word) for e2 in edits1(e1))


def candidates(word: str, store: DictionaryStore) -> list[str]:
    """Known words at the smallest edit distance from `word`

    Distance 0 wins over distance 1, which wins over distance 2. Order within
    a distance carries no meaning. Falls back to the word itself.
    """
    word = word.lower()
    keys = store.keys
    found = known([word], keys) or known(edits1(word), keys) or known(edits2(word), keys)
    return list(found) if found else [word]


def correction(word: str, store: DictionaryStore) -> str | None:
    """A known word at the smallest edit distance from `word`, if any"""
    best = candidates(word, store)
    if best == [word.lower()] and word.lower() not in store.keys:
        return None
    return best[0]
