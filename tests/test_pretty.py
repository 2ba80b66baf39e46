# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from pathlib import Path
from sheldon.spell.pretty import CustomJsonEncoder, flatten_list, format_item, print_table, TableLayout, yield_table
from typing import Any

import io
import json
import pytest


@pytest.mark.parametrize(
    "value,expected",
    [
        (1, "1"),
        (True, "true"),
        (None, ""),
        ("a_string", "a_string"),
        ("café", "café"),
        ('say "hi"', '"say \\"hi\\""'),
        (["the", "then"], "the, then"),
        ({"then", "the"}, "the, then"),
        ({"b": 1, "a": ["x"]}, '{"a": ["x"], "b": 1}'),
    ],
)
def test_format_item(value: Any, expected: str) -> None:
    assert format_item(None, value) == expected


def test_json_encoder() -> None:
    encoded = json.dumps({"keys": frozenset(["b", "a"]), "path": Path("/tmp/eng")}, cls=CustomJsonEncoder, sort_keys=True)
    assert json.loads(encoded) == {"keys": ["a", "b"], "path": "/tmp/eng"}


def test_flatten_list() -> None:
    original_list: TableLayout = [["file", "line_number", "word"], "candidates"]
    flat_list = flatten_list(original_list)
    assert original_list == [["file", "line_number", "word"], "candidates"]  # ensure it doesn't have side effects
    assert flat_list == ["file", "line_number", "word", "candidates"]
    assert flatten_list(None) == []


ROWS = [
    {"file": "README.md", "line_number": 3, "word": "teh", "candidates": ["the"]},
    {"file": "README.md", "line_number": 12, "word": "wrdl", "candidates": ["world", "word"]},
]


def test_yield_table() -> None:
    result = yield_table(ROWS, table_layout=["line_number", "word"])
    assert list(result) == [
        "LINE_NUMBER  WORD",
        "===========  ====",
        "3            teh",
        "12           wrdl",
    ]


def test_yield_table_vertical_fields() -> None:
    result = yield_table(ROWS, table_layout=[["file", "line_number", "word"], "candidates"])
    assert list(result) == [
        "FILE       LINE_NUMBER  WORD",
        "=========  ===========  ====",
        "README.md  3            teh",
        "    candidates = the",
        "",
        "README.md  12           wrdl",
        "    candidates = world, word",
    ]


def test_yield_table_default_layout() -> None:
    result = yield_table([{"word": "teh", "member": False}])
    assert list(result) == [
        "MEMBER  WORD",
        "======  ====",
        "false   teh",
    ]


def test_print_table() -> None:
    temp_io = io.StringIO()
    print_table(ROWS, table_layout=["word", "candidates"], header=False, file=temp_io)
    assert temp_io.getvalue() == "teh   the\nwrdl  world, word\n"


def test_print_table_plain_values() -> None:
    temp_io = io.StringIO()
    print_table(["the", "then"], file=temp_io)
    assert temp_io.getvalue() == "the\nthen\n"

    temp_io = io.StringIO()
    print_table([], file=temp_io)
    assert temp_io.getvalue() == ""
