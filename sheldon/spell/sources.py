# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Download language packs over HTTP"""
from __future__ import annotations

from .dictionary import (
    BAZINGA_TEXT,
    DICTIONARY_SNAPSHOT,
    DICTIONARY_TEXT,
    Error,
    language_dir,
    SourceUnreadable,
    stage_file,
    validate_language,
)
from .session import get_requests_session
from requests import Response
from typing import Final, NamedTuple
from urllib.parse import quote

import datetime
import logging
import os
import requests
import time

PACK_FILES: Final = (DICTIONARY_TEXT, BAZINGA_TEXT)


class RetrySpec(NamedTuple):
    attempts: int = 3
    sleep: datetime.timedelta = datetime.timedelta(milliseconds=200)


class FetchError(Error):
    """Language pack request error"""

    def __init__(self, response: Response, status: int = 520) -> None:
        Exception.__init__(self, response.text, status)
        self.response = response
        self.status = status

    def __str__(self) -> str:
        response_text, status = self.args
        return f"{response_text}, status={status}"


class PackWriteError(Error):
    """Downloaded language pack cannot be written"""


class LanguagePackClient:
    """Fetches `dictionary.txt` and `bazinga.txt` from `<base_url>/<language>/`"""

    NO_RETRY: Final = RetrySpec(attempts=1)
    DEFAULT_RETRY: Final = RetrySpec()

    def __init__(
        self,
        base_url: str,
        show_http: bool = False,
        request_timeout: int | None = None,
        retry_spec: RetrySpec = DEFAULT_RETRY,
    ) -> None:
        self.log = logging.getLogger("sheldon.sources")
        self.base_url = base_url.rstrip("/")
        self.log.debug("using %r", self.base_url)
        self.session = get_requests_session(timeout=request_timeout)
        self.http_log = logging.getLogger("sheldon_http")
        self.init_http_logging(show_http)
        self.retry_spec = retry_spec

    def init_http_logging(self, show_http: bool) -> None:
        if not self.http_log.handlers:
            http_handler = logging.StreamHandler()
            http_handler.setFormatter(logging.Formatter("%(message)s"))
            self.http_log.addHandler(http_handler)
        self.http_log.propagate = False
        self.http_log.setLevel(logging.INFO)
        if show_http:
            self.http_log.setLevel(logging.DEBUG)

    @staticmethod
    def build_path(*parts: str) -> str:
        return "/" + "/".join(quote(part, safe="") for part in parts)

    def _execute(self, url: str) -> Response:
        self.http_log.debug("-----Request Begin-----")
        self.http_log.debug("GET %s", url)
        for header, header_value in self.session.headers.items():
            self.http_log.debug("%s: %s", header, header_value)
        self.http_log.debug("-----Request End-----")

        response = self.session.get(url)

        self.http_log.debug("-----Response Begin-----")
        self.http_log.debug("%s %s", response.status_code, response.reason)
        for header, header_value in response.headers.items():
            self.http_log.debug("%s: %s", header, header_value)
        self.http_log.debug("%d bytes", len(response.content))
        self.http_log.debug("-----Response End-----")

        if not str(response.status_code).startswith("2"):
            raise FetchError(response, status=response.status_code)

        return response

    def get(self, path: str) -> bytes:
        """HTTP GET with retries on connection errors"""
        url = self.base_url + path
        attempts = self.retry_spec.attempts

        while True:
            attempts -= 1
            try:
                return self._execute(url).content
            except requests.exceptions.ConnectionError as ex:
                if attempts <= 0:
                    raise
                self.log.warning(
                    "GET %s failed: %s: %s; retrying in %s seconds, %s attempts left",
                    url,
                    ex.__class__.__name__,
                    ex,
                    self.retry_spec.sleep.total_seconds(),
                    attempts,
                )
                time.sleep(self.retry_spec.sleep.total_seconds())

    def fetch_file(self, language: str, filename: str) -> str:
        content = self.get(self.build_path(validate_language(language), filename))
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as ex:
            raise SourceUnreadable("{} for language {!r} is not valid UTF-8".format(filename, language)) from ex

    def fetch_language(self, language: str, lang_dir: str | None = None) -> list[str]:
        """Download a language pack and return the paths written

        Both files are downloaded and staged next to their targets before
        anything is replaced. A snapshot left over from a previous pack is
        removed first so that the new words are used.
        """
        contents = {filename: self.fetch_file(language, filename) for filename in PACK_FILES}

        target_dir = language_dir(language, lang_dir)
        stale_snapshot = os.path.join(target_dir, DICTIONARY_SNAPSHOT)
        staged: list[tuple[str, str, str]] = []
        written = []
        try:
            if os.path.exists(stale_snapshot):
                os.unlink(stale_snapshot)
                self.log.info("removed stale snapshot %r", stale_snapshot)
            for filename, text in contents.items():
                path = os.path.join(target_dir, filename)
                staged.append((stage_file(path, text.encode("utf-8"), prefix=".pack-"), path, text))
            for tmp_path, path, text in staged:
                os.replace(tmp_path, path)
                written.append(path)
                self.log.info("wrote %d lines to %r", text.count("\n"), path)
        except OSError as ex:
            raise PackWriteError(
                "Failed to write language pack {!r} to {!r}: {}: {}".format(
                    language, target_dir, ex.__class__.__name__, ex
                )
            ) from ex
        finally:
            for tmp_path, _, _ in staged:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)

        return written


def fetch_language(
    language: str,
    base_url: str,
    lang_dir: str | None = None,
    timeout: int | None = None,
    retry: int = 3,
    show_http: bool = False,
) -> list[str]:
    client = LanguagePackClient(
        base_url,
        show_http=show_http,
        request_timeout=timeout,
        retry_spec=LanguagePackClient.DEFAULT_RETRY._replace(attempts=max(retry, 1)),
    )
    return client.fetch_language(language, lang_dir)
