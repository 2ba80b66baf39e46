# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from .candidates import candidates, correction, edits1, edits2
from .checker import check, Misspelled, Report
from .dictionary import (
    dictionary_key,
    DictionaryStore,
    EmptyFillerSet,
    Error,
    initialize,
    InvalidLanguage,
    is_member,
    persist_snapshot,
    random_filler,
    SnapshotCorrupt,
    SnapshotWriteError,
    SourceNotFound,
    SourceUnreadable,
    StoreRegistry,
    UninitializedLanguage,
)
from .utils import is_number, match_in_patterns, normalize

try:
    from .version import __version__
except ImportError:
    __version__ = "UNKNOWN"

__all__ = [
    "candidates",
    "check",
    "correction",
    "dictionary_key",
    "DictionaryStore",
    "edits1",
    "edits2",
    "EmptyFillerSet",
    "Error",
    "initialize",
    "InvalidLanguage",
    "is_member",
    "is_number",
    "match_in_patterns",
    "Misspelled",
    "normalize",
    "persist_snapshot",
    "random_filler",
    "Report",
    "SnapshotCorrupt",
    "SnapshotWriteError",
    "SourceNotFound",
    "SourceUnreadable",
    "StoreRegistry",
    "UninitializedLanguage",
]
