# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Per-language word dictionaries and bazinga phrases"""
from __future__ import annotations

from . import envdefault
from typing import Any, cast, Final, Iterable, Iterator, List, Literal, Mapping

import logging
import os
import pickle
import random
import re
import stat
import tempfile
import threading

DICTIONARY_TEXT: Final = "dictionary.txt"
DICTIONARY_SNAPSHOT: Final = "dictionary.bin"
BAZINGA_TEXT: Final = "bazinga.txt"

SNAPSHOT_FORMAT: Final = "sheldon-dictionary"
SNAPSHOT_VERSION: Final = 1

language_re = re.compile(r"[a-z]{2,3}(_[a-z0-9]+)?")

_umask_lock = threading.Lock()


class Error(Exception):
    """Dictionary error"""


class InvalidLanguage(Error, ValueError):
    """Language tag is not valid"""


class SourceNotFound(Error):
    """Word or bazinga source file does not exist"""

    def __init__(self, language: str, path: str) -> None:
        Error.__init__(self, "no source for language {!r}: {!r} does not exist".format(language, path))
        self.language = language
        self.path = path


class SourceUnreadable(Error):
    """Word or bazinga source file exists but cannot be read"""


class SnapshotCorrupt(Error):
    """Dictionary snapshot cannot be restored"""


class SnapshotWriteError(Error):
    """Dictionary snapshot cannot be written"""


class UninitializedLanguage(Error, LookupError):
    """Language was queried before it was initialized"""


class EmptyFillerSet(Error):
    """No bazingas are loaded"""


def validate_language(language: str) -> str:
    if not isinstance(language, str) or not language_re.fullmatch(language):
        raise InvalidLanguage("Invalid language {!r}: expected a tag such as 'eng' or 'en_gb'".format(language))
    return language


def dictionary_key(language: str) -> str:
    """Name of the dictionary storage for `language`"""
    return "sheldon_" + validate_language(language)


def bazinga_key(language: str) -> str:
    return "bazinga_" + validate_language(language)


def language_dir(language: str, lang_dir: str | None = None) -> str:
    return os.path.join(lang_dir or envdefault.SHELDON_LANG_DIR, validate_language(language))


def dictionary_path(kind: Literal["text", "binary"], language: str, lang_dir: str | None = None) -> str:
    filename = DICTIONARY_TEXT if kind == "text" else DICTIONARY_SNAPSHOT
    return os.path.join(language_dir(language, lang_dir), filename)


def bazinga_path(language: str, lang_dir: str | None = None) -> str:
    return os.path.join(language_dir(language, lang_dir), BAZINGA_TEXT)


def available_languages(lang_dir: str | None = None) -> list[str]:
    """Languages with a word list or a snapshot under `lang_dir`"""
    lang_dir = lang_dir or envdefault.SHELDON_LANG_DIR
    try:
        names = os.listdir(lang_dir)
    except FileNotFoundError:
        return []

    languages = []
    for name in sorted(names):
        if not language_re.fullmatch(name):
            continue
        if any(os.path.isfile(os.path.join(lang_dir, name, f)) for f in (DICTIONARY_TEXT, DICTIONARY_SNAPSHOT)):
            languages.append(name)
    return languages


def read_lines(path: str, language: str) -> list[str]:
    """Non-blank lines of a UTF-8 source file, one entry per line"""
    try:
        with open(path, encoding="utf-8") as fp:
            return [line for line in (raw.strip() for raw in fp) if line]
    except FileNotFoundError as ex:
        raise SourceNotFound(language, path) from ex
    except (OSError, UnicodeDecodeError) as ex:
        raise SourceUnreadable("Failed to read {!r}: {}: {}".format(path, ex.__class__.__name__, ex)) from ex


def load_snapshot(path: str, language: str) -> tuple[list[str], list[str]]:
    """Return the entries and key set stored in a snapshot file"""
    try:
        with open(path, "rb") as fp:
            payload = pickle.load(fp)
    except OSError as ex:
        raise SourceUnreadable("Failed to read {!r}: {}: {}".format(path, ex.__class__.__name__, ex)) from ex
    except Exception as ex:
        # damaged pickles fail in many ways, e.g. OverflowError or MemoryError on a bogus frame length
        raise SnapshotCorrupt("Invalid snapshot {!r}: {}: {}".format(path, ex.__class__.__name__, ex)) from ex

    if not isinstance(payload, Mapping) or payload.get("format") != SNAPSHOT_FORMAT:
        raise SnapshotCorrupt("Invalid snapshot {!r}: not a dictionary snapshot".format(path))
    if payload.get("version") != SNAPSHOT_VERSION:
        raise SnapshotCorrupt("Invalid snapshot {!r}: unsupported version {!r}".format(path, payload.get("version")))
    if payload.get("language") != language:
        raise SnapshotCorrupt(
            "Invalid snapshot {!r}: built for language {!r}, not {!r}".format(path, payload.get("language"), language)
        )

    entries, keys = payload.get("entries"), payload.get("keys")
    for field, value in (("entries", entries), ("keys", keys)):
        if not isinstance(value, list) or not all(isinstance(word, str) for word in value):
            raise SnapshotCorrupt("Invalid snapshot {!r}: malformed {}".format(path, field))
    if not entries:
        raise SnapshotCorrupt("Invalid snapshot {!r}: no entries".format(path))
    return cast(List[str], entries), cast(List[str], keys)


def file_mode(path: str) -> int:
    """Permissions for a file replacing `path`: those of `path`, or the umask default for new files"""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        pass
    with _umask_lock:
        umask = os.umask(0o022)
        os.umask(umask)
    return 0o666 & ~umask


def stage_file(path: str, data: bytes, prefix: str) -> str:
    """Write `data` to a temporary file next to `path` and return the temporary file's name

    The temporary file is removed again if writing fails. Its mode is set with
    `file_mode()` so that replacing `path` with it keeps the file readable to
    the same users as before.
    """
    target_dir = os.path.dirname(os.path.abspath(path))
    os.makedirs(target_dir, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=prefix, suffix=".tmp", dir=target_dir)
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)
        os.chmod(tmp_path, file_mode(path))
    except BaseException:
        os.unlink(tmp_path)
        raise
    return tmp_path


def replace_file(path: str, data: bytes, prefix: str) -> None:
    """Atomically replace the contents of `path` with `data`"""
    tmp_path = stage_file(path, data, prefix)
    try:
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


class DictionaryStore:
    """Words and bazingas of one language

    The store is immutable once built and can be shared between threads.
    """

    log = logging.getLogger("sheldon.dictionary")

    def __init__(
        self,
        language: str,
        entries: Iterable[str],
        fillers: Iterable[str] = (),
        keys: Iterable[str] | None = None,
        lang_dir: str | None = None,
        source: Literal["text", "snapshot", "memory"] = "memory",
        rng: random.Random | None = None,
    ) -> None:
        self.language = validate_language(language)
        self.name = dictionary_key(language)
        self.bazinga_name = bazinga_key(language)
        self.lang_dir = lang_dir or envdefault.SHELDON_LANG_DIR
        self.source = source
        self._entries = frozenset(word.lower() for word in entries)
        # snapshots carry their key set, everything else derives it from the entries
        self._keys = self._entries if keys is None else frozenset(keys)
        self._fillers = tuple(fillers)
        self._rng = rng or random.Random()

    @classmethod
    def from_text(cls, language: str, lang_dir: str | None = None, rng: random.Random | None = None) -> DictionaryStore:
        words = read_lines(dictionary_path("text", language, lang_dir), language)
        fillers = read_lines(bazinga_path(language, lang_dir), language)
        return cls(language, words, fillers=fillers, lang_dir=lang_dir, source="text", rng=rng)

    @classmethod
    def from_snapshot(
        cls, language: str, lang_dir: str | None = None, rng: random.Random | None = None
    ) -> DictionaryStore:
        entries, keys = load_snapshot(dictionary_path("binary", language, lang_dir), language)
        fillers = read_lines(bazinga_path(language, lang_dir), language)
        return cls(language, entries, fillers=fillers, keys=keys, lang_dir=lang_dir, source="snapshot", rng=rng)

    @property
    def keys(self) -> frozenset[str]:
        return self._keys

    @property
    def fillers(self) -> tuple[str, ...]:
        return self._fillers

    @property
    def snapshot_path(self) -> str:
        return dictionary_path("binary", self.language, self.lang_dir)

    def is_member(self, word: str) -> bool:
        return word.lower() in self._entries

    def random_filler(self) -> str:
        if not self._fillers:
            raise EmptyFillerSet("No bazingas loaded for language {!r}".format(self.language))
        return self._rng.choice(self._fillers)

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "format": SNAPSHOT_FORMAT,
            "version": SNAPSHOT_VERSION,
            "language": self.language,
            "name": self.name,
            "entries": sorted(self._entries),
            "keys": sorted(self._keys),
        }

    def persist_snapshot(self, path: str | None = None) -> str:
        """Write the dictionary to its snapshot file for faster loading"""
        path = path or self.snapshot_path
        data = pickle.dumps(self.to_snapshot(), protocol=pickle.HIGHEST_PROTOCOL)
        try:
            replace_file(path, data, prefix=".dictionary-")
        except OSError as ex:
            raise SnapshotWriteError(
                "Failed to write snapshot {!r}: {}: {}".format(path, ex.__class__.__name__, ex)
            ) from ex

        self.log.info("wrote %d words of %r to %r", len(self._entries), self.name, path)
        return path

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_member(word)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return "<{} {} words={} fillers={} source={}>".format(
            self.__class__.__name__, self.name, len(self._entries), len(self._fillers), self.source
        )


def initialize(language: str, lang_dir: str | None = None, rng: random.Random | None = None) -> DictionaryStore:
    """Load the dictionary and bazingas for `language`

    A snapshot next to the word list is restored as-is when present. A corrupt
    snapshot is an error; the text source is not used as a fallback.
    """
    language = validate_language(language)
    if os.path.isfile(dictionary_path("binary", language, lang_dir)):
        store = DictionaryStore.from_snapshot(language, lang_dir, rng=rng)
    else:
        store = DictionaryStore.from_text(language, lang_dir, rng=rng)
    if not len(store):
        raise SourceUnreadable("Dictionary for language {!r} has no words".format(language))
    DictionaryStore.log.debug("initialized %r", store)
    return store


def is_member(word: str, store: DictionaryStore) -> bool:
    return store.is_member(word)


def random_filler(store: DictionaryStore) -> str:
    return store.random_filler()


def persist_snapshot(store: DictionaryStore, path: str | None = None) -> str:
    return store.persist_snapshot(path)


class StoreRegistry:
    """Hands out one store per language, loading each language at most once"""

    def __init__(self, lang_dir: str | None = None, rng: random.Random | None = None) -> None:
        self.lang_dir = lang_dir
        self.rng = rng
        self._lock = threading.Lock()
        self._guards: dict[str, threading.Lock] = {}
        self._stores: dict[str, DictionaryStore] = {}

    def initialize(self, language: str) -> DictionaryStore:
        language = validate_language(language)
        with self._lock:
            guard = self._guards.setdefault(language, threading.Lock())

        with guard:
            store = self._stores.get(language)
            if store is None:
                store = initialize(language, self.lang_dir, rng=self.rng)
                self._stores[language] = store
            return store

    def get(self, language: str) -> DictionaryStore:
        try:
            return self._stores[validate_language(language)]
        except KeyError as ex:
            raise UninitializedLanguage("Language {!r} has not been initialized".format(language)) from ex

    def languages(self) -> list[str]:
        return sorted(self._stores)

    def __contains__(self, language: object) -> bool:
        return language in self._stores
