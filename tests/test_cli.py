# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from conftest import FILLERS
from pathlib import Path
from pytest import CaptureFixture, LogCaptureFixture, MonkeyPatch
from sheldon.spell import envdefault
from sheldon.spell.cli import SheldonCLI
from sheldon.spell.sources import PackWriteError
from unittest import mock

import io
import json
import os
import pytest


def run(tmp_path: Path, lang_dir: str, *args: str) -> int | None:
    base = ["--config", str(tmp_path / "sheldon.json"), "--lang-dir", lang_dir]
    return SheldonCLI().run(args=base + list(args))


def test_cli() -> None:
    with pytest.raises(SystemExit) as excinfo:
        SheldonCLI().run(args=["--help"])
    assert excinfo.value.code == 0


def test_check_file(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    document = tmp_path / "document.txt"
    document.write_text("Hello wrld.\n\nThe end of teh line\n", encoding="utf-8")

    assert run(tmp_path, lang_dir, "check", str(document)) == 1

    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0].split() == ["FILE", "LINE_NUMBER", "WORD"]
    assert lines[2].split() == [str(document), "1", "wrld"]
    assert "    candidates = world" in lines
    assert lines[5].split() == [str(document), "3", "teh"]
    assert "    candidates = the" in lines
    assert lines[-1] in FILLERS


def test_check_clean_file(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    document = tmp_path / "document.txt"
    document.write_text("Hello world.\n", encoding="utf-8")

    assert run(tmp_path, lang_dir, "check", str(document)) == 0
    assert capsys.readouterr().out == ""


def test_check_stdin_json(
    tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str], monkeypatch: MonkeyPatch
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("helo world\n```\nzzz\n```\n"))

    assert run(tmp_path, lang_dir, "check", "--json", "--ignore-block", "```") == 1

    result = json.loads(capsys.readouterr().out)
    assert len(result) == 1
    assert result[0]["file"] == "-"
    assert result[0]["ok"] is False
    assert result[0]["bazinga"] in FILLERS
    assert result[0]["misspelled_words"] == [{"line_number": 1, "word": "helo", "candidates": ["hello"]}]


def test_check_ignore_options(tmp_path: Path, lang_dir: str) -> None:
    (tmp_path / "sheldon.json").write_text(json.dumps({"ignore_words": ["sheldon"]}))
    document = tmp_path / "document.txt"
    document.write_text("Sheldon said hello to https://example.com\n", encoding="utf-8")

    assert run(tmp_path, lang_dir, "check", str(document), "--ignore-word", "said") == 1
    args = ["check", str(document), "--ignore-word", "said", "--ignore-word", "to", "--ignore-pattern", "^https?://"]
    assert run(tmp_path, lang_dir, *args) == 0


def test_check_missing_file(tmp_path: Path, lang_dir: str, caplog: LogCaptureFixture) -> None:
    assert run(tmp_path, lang_dir, "check", str(tmp_path / "missing.txt")) == 1
    assert "command failed: UserError" in caplog.text


def test_word_member(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    assert run(tmp_path, lang_dir, "word", "member", "HELLO", "--json") == 0
    assert json.loads(capsys.readouterr().out) == {"word": "HELLO", "language": "eng", "member": True}

    assert run(tmp_path, lang_dir, "word", "member", "helo") == 1
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["LANGUAGE", "MEMBER", "WORD"]
    assert lines[2].split() == ["eng", "false", "helo"]


def test_word_candidates(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    run(tmp_path, lang_dir, "word", "candidates", "teh", "--json")
    assert json.loads(capsys.readouterr().out) == ["the"]

    run(tmp_path, lang_dir, "word", "candidates", "cst")
    assert capsys.readouterr().out == "cast\ncat\n"

    run(tmp_path, lang_dir, "word", "candidates", "qqqqqqqq")
    assert capsys.readouterr().out == "qqqqqqqq\n"


def test_bazinga(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    run(tmp_path, lang_dir, "bazinga")
    assert capsys.readouterr().out.rstrip("\n") in FILLERS


def test_dictionary_snapshot_and_info(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    run(tmp_path, lang_dir, "dictionary", "info", "--json")
    info = json.loads(capsys.readouterr().out)
    assert info["name"] == "sheldon_eng"
    assert info["bazinga_name"] == "bazinga_eng"
    assert info["source"] == "text"
    assert info["words"] == 12
    assert info["bazingas"] == len(FILLERS)
    assert info["snapshot_exists"] is False

    run(tmp_path, lang_dir, "dictionary", "snapshot")
    snapshot = capsys.readouterr().out.strip()
    assert snapshot == os.path.join(lang_dir, "eng", "dictionary.bin")

    run(tmp_path, lang_dir, "dictionary", "info")
    lines = capsys.readouterr().out.splitlines()
    assert lines[2].split() == ["sheldon_eng", "eng", "snapshot", "12", str(len(FILLERS))]
    assert "    snapshot_exists = true" in lines


def test_unknown_language(tmp_path: Path, lang_dir: str, caplog: LogCaptureFixture) -> None:
    assert run(tmp_path, lang_dir, "-l", "fra", "word", "member", "bonjour") == 1
    assert "command failed: SourceNotFound" in caplog.text


def test_language_from_config(tmp_path: Path, lang_dir: str, caplog: LogCaptureFixture) -> None:
    (tmp_path / "sheldon.json").write_text(json.dumps({"language": "fra"}))
    assert run(tmp_path, lang_dir, "bazinga") == 1
    assert "no source for language 'fra'" in caplog.text


def test_language_list(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    run(tmp_path, lang_dir, "language", "list", "--json")
    assert json.loads(capsys.readouterr().out) == ["eng"]


def test_language_fetch_without_server(
    tmp_path: Path, lang_dir: str, caplog: LogCaptureFixture, monkeypatch: MonkeyPatch
) -> None:
    monkeypatch.setattr(envdefault, "SHELDON_LANG_URL", None)
    assert run(tmp_path, lang_dir, "language", "fetch", "fra") == 1
    assert "No language pack server" in caplog.text


def test_language_fetch(tmp_path: Path, lang_dir: str, capsys: CaptureFixture[str]) -> None:
    with mock.patch("sheldon.spell.cli.fetch_language", return_value=["a", "b"]) as fetch:
        run(tmp_path, lang_dir, "language", "fetch", "fra", "--url", "https://packs.example.com", "--timeout", "5")

    fetch.assert_called_once_with("fra", "https://packs.example.com", lang_dir=lang_dir, timeout=5, show_http=False)
    assert capsys.readouterr().out == "a\nb\n"


def test_language_fetch_write_failure(tmp_path: Path, lang_dir: str, caplog: LogCaptureFixture) -> None:
    error = PackWriteError("Failed to write language pack 'fra': OSError: read-only file system")
    with mock.patch("sheldon.spell.cli.fetch_language", side_effect=error):
        assert run(tmp_path, lang_dir, "language", "fetch", "fra", "--url", "https://packs.example.com") == 1
    assert "command failed: PackWriteError" in caplog.text
