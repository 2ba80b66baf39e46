# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from . import argx, checker, envdefault
from .candidates import candidates
from .checker import Report
from .cliarg import arg
from .dictionary import available_languages, DictionaryStore, StoreRegistry
from .sources import fetch_language
from argparse import ArgumentParser
from typing import Any, Callable

import os
import sys

CHECK_LAYOUT = [["file", "line_number", "word"], "candidates"]
INFO_LAYOUT = [["name", "language", "source", "words", "bazingas"], "bazinga_name", "snapshot", "snapshot_exists"]


class SheldonCLI(argx.CommandLineTool):
    def __init__(self) -> None:
        argx.CommandLineTool.__init__(self, "sheldon")
        self.registry: StoreRegistry | None = None

    def add_args(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "-l",
            "--language",
            help="Dictionary language [SHELDON_LANGUAGE] (default: from config or {!r})".format(
                envdefault.SHELDON_LANGUAGE
            ),
        )
        parser.add_argument(
            "--lang-dir",
            help="Directory holding the language packs [SHELDON_LANG_DIR]",
            metavar="DIR",
        )
        parser.add_argument("--show-http", help="Show HTTP requests and responses", action="store_true")

    def pre_run(self, func: Callable[[], int | None]) -> None:
        self.registry = StoreRegistry(lang_dir=self.get_lang_dir())

    def get_language(self) -> str:
        """Return language given as cmdline argument or the default language from config file"""
        if getattr(self.args, "language", None):
            return self.args.language
        return self.config.get("language") or envdefault.SHELDON_LANGUAGE

    def get_lang_dir(self) -> str:
        if getattr(self.args, "lang_dir", None):
            return self.args.lang_dir
        return self.config.get("lang_dir") or envdefault.SHELDON_LANG_DIR

    def get_store(self) -> DictionaryStore:
        assert self.registry is not None
        return self.registry.initialize(self.get_language())

    def _read_inputs(self) -> list[tuple[str, str]]:
        if not self.args.files:
            return [("-", sys.stdin.read())]

        inputs = []
        for path in self.args.files:
            try:
                with open(path, encoding="utf-8") as fp:
                    inputs.append((path, fp.read()))
            except (OSError, UnicodeDecodeError) as ex:
                raise argx.UserError("Failed to read {!r}: {}: {}".format(path, ex.__class__.__name__, ex)) from ex
        return inputs

    @arg.json
    @arg.files
    @arg.ignore_word
    @arg.ignore_pattern
    @arg.ignore_block
    def check(self) -> int:
        """Check files for misspelled words"""
        store = self.get_store()
        ignore_words = list(self.config.get("ignore_words", [])) + self.args.ignore_words
        ignore_patterns = list(self.config.get("ignore_patterns", [])) + self.args.ignore_patterns
        ignore_blocks = [(marker, marker) for marker in self.args.ignore_blocks]

        reports: list[tuple[str, Report]] = []
        for name, text in self._read_inputs():
            report = checker.check(
                text,
                store,
                ignore_words=ignore_words,
                ignore_patterns=ignore_patterns,
                ignore_blocks=ignore_blocks,
            )
            reports.append((name, report))

        if self.args.json:
            self.print_response([dict(report.to_dict(), file=name) for name, report in reports])
        else:
            rows: list[dict[str, Any]] = [
                dict(item._asdict(), file=name) for name, report in reports for item in report.misspelled
            ]
            self.print_response(rows, json=False, table_layout=CHECK_LAYOUT)
            bazingas = [report.bazinga for _, report in reports if report.bazinga]
            if bazingas:
                print(bazingas[0])

        return 0 if all(report.ok for _, report in reports) else 1

    @arg.json
    @arg.word
    def word__member(self) -> int:
        """Tell whether a word is in the dictionary"""
        store = self.get_store()
        found = store.is_member(self.args.word)
        self.print_response(
            {"word": self.args.word, "language": store.language, "member": found},
            json=self.args.json,
            single_item=True,
        )
        return 0 if found else 1

    @arg.json
    @arg.word
    def word__candidates(self) -> None:
        """List the closest dictionary words for a word"""
        result = sorted(candidates(self.args.word, self.get_store()))
        self.print_response(result, json=self.args.json)

    @arg()
    def bazinga(self) -> None:
        """Print a random bazinga"""
        print(self.get_store().random_filler())

    @arg("--output", metavar="FILE", help="Snapshot location (default: next to the word list)")
    def dictionary__snapshot(self) -> None:
        """Save the dictionary in its binary form for faster loading"""
        path = self.get_store().persist_snapshot(self.args.output)
        print(path)

    @arg.json
    def dictionary__info(self) -> None:
        """Show dictionary details"""
        store = self.get_store()
        info = {
            "name": store.name,
            "bazinga_name": store.bazinga_name,
            "language": store.language,
            "source": store.source,
            "words": len(store),
            "bazingas": len(store.fillers),
            "snapshot": store.snapshot_path,
            "snapshot_exists": os.path.isfile(store.snapshot_path),
        }
        self.print_response(info, json=self.args.json, single_item=True, table_layout=INFO_LAYOUT)

    @arg.json
    def language__list(self) -> None:
        """List installed languages"""
        self.print_response(available_languages(self.get_lang_dir()), json=self.args.json)

    @arg.url
    @arg.timeout
    @arg("fetch_language", metavar="LANGUAGE", help="Language to download, e.g. 'eng'")
    def language__fetch(self) -> None:
        """Download a language pack"""
        base_url = self.args.url or self.config.get("url") or envdefault.SHELDON_LANG_URL
        if not base_url:
            raise argx.UserError("No language pack server: use --url, the 'url' config key or SHELDON_LANG_URL")
        paths = fetch_language(
            self.args.fetch_language,
            base_url,
            lang_dir=self.get_lang_dir(),
            timeout=self.args.timeout,
            show_http=self.args.show_http,
        )
        self.print_response(paths, json=False)


def main(args: list[str] | None = None) -> None:
    SheldonCLI().main(args)


if __name__ == "__main__":
    main()
