"""Resolve source references (paths, URLs, literal code) to text.

A source reference is a plain string. It is a URL when it starts with
``http://``, ``https://`` or ``//``; literal code when it contains ``{`` and
``}`` or a ``;``; a filesystem path otherwise.
"""
from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import httpx

from assetmin.config import HttpTimeout
from assetmin.errors import SourceError, SourceNotFoundError


class SourceType(Enum):
    URL = "url"
    PATH = "path"
    STRING = "string"

    @classmethod
    def detect(cls, ref: str) -> SourceType:
        stripped = ref.strip()
        if stripped.startswith(("http://", "https://", "//")):
            return cls.URL
        if ("{" in stripped and "}" in stripped) or ";" in stripped:
            return cls.STRING
        return cls.PATH


@dataclass(frozen=True)
class Source:
    """A resolved source: its cache key, where it came from and its text."""

    key: str
    type: SourceType
    ref: str
    text: str


def _hash(text: str, length: int = 16) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]


def source_key(ref: str, extension: str) -> str:
    """Stable key for a source reference."""
    kind = SourceType.detect(ref)
    if kind is SourceType.STRING:
        return f"raw:{_hash(ref)}"
    if kind is SourceType.URL:
        return f"url:{ref.strip()}"
    return f"{extension}:{Path(ref).expanduser().resolve().as_posix()}"


def fingerprint(contents: Mapping[str, str]) -> str:
    """Digest of keyed source contents, usable as a cache key."""
    return hashlib.sha256(
        json.dumps(dict(contents), sort_keys=True).encode("utf-8")
    ).hexdigest()


def _to_url(ref: str) -> str:
    ref = ref.strip()
    return f"https:{ref}" if ref.startswith("//") else ref


class SourceReader:
    """Reads sources of one kind (``css`` or ``js``).

    URL fetching goes through an :class:`httpx.Client`; pass ``client`` to
    supply one (tests inject a mock transport this way).
    """

    def __init__(
        self,
        extension: str,
        *,
        timeout: HttpTimeout | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.extension = extension.lstrip(".").lower()
        t = timeout or HttpTimeout()
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(
                connect=t.connect, read=t.request, write=t.request, pool=t.connect
            ),
            follow_redirects=True,
        )

    def read(self, ref: str) -> Source:
        """Resolve *ref* to a :class:`Source`.

        Raises SourceNotFoundError for a missing file or a 404, and SourceError
        for any other failure.
        """
        kind = SourceType.detect(ref)
        key = source_key(ref, self.extension)
        if kind is SourceType.STRING:
            return Source(key=key, type=kind, ref=ref, text=ref)
        if kind is SourceType.URL:
            return Source(key=key, type=kind, ref=ref, text=self._fetch(_to_url(ref)))
        return Source(key=key, type=kind, ref=ref, text=self._read_file(ref))

    def _read_file(self, ref: str) -> str:
        path = Path(ref).expanduser()
        if not path.is_file():
            raise SourceNotFoundError(f"Source file not found: {ref}", source=ref)
        if path.suffix.lower() != f".{self.extension}":
            raise SourceError(
                f"Source {ref} is not a .{self.extension} file", source=ref
            )
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceError(f"Unable to read source {ref}: {exc}", source=ref, cause=exc) from exc

    def _fetch(self, url: str) -> str:
        try:
            resp = self._client.get(url)
        except httpx.HTTPError as exc:
            raise SourceError(f"Unable to fetch {url}: {exc}", source=url, cause=exc) from exc
        if resp.status_code == 404:
            raise SourceNotFoundError(f"Source URL not found: {url}", source=url)
        if resp.status_code >= 300:
            raise SourceError(
                f"Fetching {url} returned HTTP {resp.status_code}", source=url
            )
        return resp.text

    def close(self) -> None:
        self._client.close()
