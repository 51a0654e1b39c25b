"""High-level facades: register sources, minify, and report.

``StylesheetMinifier`` merges any number of CSS sources into one stylesheet.
``ScriptMinifier`` concatenates JavaScript sources and runs the scanner, then
optionally hands the result to a :class:`~assetmin.remote.RemoteCompressor`.

Invalid sources (missing files, wrong extension, failed fetches) are logged
and dropped; they never abort a run.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass

from assetmin.config import CompilerConfig, ScriptConfig
from assetmin.errors import MinifierLockedError, SourceError
from assetmin.javascript.scanner import JavaScriptMinifier
from assetmin.remote import RemoteCompressor
from assetmin.report import SizeReport, size_report
from assetmin.sources import SourceReader, fingerprint
from assetmin.stylesheet.compiler import Compiler


@dataclass(frozen=True)
class Output:
    """Result of a facade run."""

    key: str
    fingerprint: str
    string: str
    report: SizeReport

    def __str__(self) -> str:
        return self.string


class _SourceSet:
    """Ordered, keyed source texts with lock handling shared by both facades."""

    extension = ""
    generator = ""

    def __init__(
        self,
        sources: Iterable[str] = (),
        *,
        logger: logging.Logger | None = None,
        reader: SourceReader | None = None,
    ) -> None:
        self._log = logger or logging.getLogger("assetmin")
        self._owns_reader = reader is None
        self._reader = reader or SourceReader(self.extension)
        self._sources: dict[str, str] = {}
        self._locked = False
        self.add_source(*sources)

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def sources(self) -> dict[str, str]:
        return dict(self._sources)

    def add_source(self, *refs: str) -> _SourceSet:
        """Resolve and enqueue source references.

        Raises MinifierLockedError while a run is in progress.
        """
        if self._locked:
            raise MinifierLockedError(
                f"Unable to add new source; {type(self).__name__} is locked by the build process."
            )
        for ref in refs:
            if not ref or not ref.strip():
                self._log.warning(
                    "%s was provided an empty source string. It was not enqueued.",
                    type(self).__name__,
                )
                continue
            try:
                source = self._reader.read(ref)
            except SourceError as exc:
                self._log.error("Unable to add new source %s: %s", ref, exc)
                continue
            if source.key in self._sources:
                self._log.warning("Source %s is already enqueued; keeping the first.", source.key)
                continue
            self._sources[source.key] = source.text
        return self

    def close(self) -> None:
        """Close the source reader if this facade created it."""
        if self._owns_reader:
            self._reader.close()

    def _output(self, result: str, started: float) -> Output:
        digest = fingerprint(self._sources)
        keys = list(self._sources)
        key = keys[0] if len(keys) == 1 else f"bundle:{digest[:16]}"
        report = size_report(
            self.generator,
            "".join(self._sources.values()),
            result,
            key=key,
            elapsed=(time.perf_counter() - started) * 1000,
        )
        self._log.info(report.message)
        return Output(key=key, fingerprint=digest, string=result, report=report)


class StylesheetMinifier(_SourceSet):
    extension = "css"
    generator = "StylesheetMinifier"

    def __init__(
        self,
        sources: Iterable[str] = (),
        *,
        logger: logging.Logger | None = None,
        config: CompilerConfig | None = None,
        reader: SourceReader | None = None,
    ) -> None:
        self.config = config or CompilerConfig()
        super().__init__(sources, logger=logger, reader=reader)

    def minify(self) -> Output:
        started = time.perf_counter()
        self._locked = True
        try:
            compiler = Compiler(
                self._sources,
                logger=logging.getLogger(f"{self._log.name}.stylesheet"),
                config=self.config,
            )
            css = compiler.compile()
        finally:
            self._locked = False
        return self._output(css, started)


class ScriptMinifier(_SourceSet):
    extension = "js"
    generator = "ScriptMinifier"

    def __init__(
        self,
        sources: Iterable[str] = (),
        *,
        logger: logging.Logger | None = None,
        config: ScriptConfig | None = None,
        reader: SourceReader | None = None,
        compressor: RemoteCompressor | None = None,
    ) -> None:
        self.config = config or ScriptConfig()
        self.compressor = compressor
        super().__init__(sources, logger=logger, reader=reader)

    def minify(self) -> Output:
        started = time.perf_counter()
        self._locked = True
        try:
            script = JavaScriptMinifier(
                "\n".join(self._sources.values()), config=self.config
            ).minify()
            if self.compressor is not None and script:
                script = self.compressor.compress(script)
        finally:
            self._locked = False
        return self._output(script, started)
