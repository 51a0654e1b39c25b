"""Tests for the StylesheetMinifier and ScriptMinifier facades."""
from __future__ import annotations

import logging

import httpx
import pytest

from assetmin.config import CompilerConfig, ScriptConfig
from assetmin.errors import ConflictError, MinifierLockedError
from assetmin.minifier import Output, ScriptMinifier, StylesheetMinifier
from assetmin.remote import RemoteCompressor
from assetmin.sources import SourceReader


# ---------------------------------------------------------------------------
# StylesheetMinifier
# ---------------------------------------------------------------------------


class TestStylesheetMinifier:
    def test_literal_sources_merge(self) -> None:
        result = StylesheetMinifier(["div{color:red}", "div{margin:0}"]).minify()
        assert isinstance(result, Output)
        assert result.string == "div{color:red;margin:0}"
        assert str(result) == result.string

    def test_file_source(self, tmp_path) -> None:
        path = tmp_path / "site.css"
        path.write_text("body {\n  margin: 0px;\n}\n", encoding="utf-8")
        result = StylesheetMinifier([str(path)]).minify()
        assert result.string == "body{margin:0}"
        assert result.key.startswith("css:")

    def test_invalid_path_logged_and_dropped(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger="assetmin"):
            minifier = StylesheetMinifier([str(tmp_path / "missing.css"), "a{b:c}"])
        assert len(minifier.sources) == 1
        assert "missing.css" in caplog.text
        assert minifier.minify().string == "a{b:c}"

    def test_empty_source_warned(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="assetmin"):
            minifier = StylesheetMinifier(["  "])
        assert minifier.sources == {}
        assert "empty source" in caplog.text

    def test_duplicate_source_kept_once(self) -> None:
        minifier = StylesheetMinifier(["a{b:c}", "a{b:c}"])
        assert len(minifier.sources) == 1

    def test_report_and_fingerprint(self) -> None:
        result = StylesheetMinifier(["a { color : red ; }", "b{x:y}"]).minify()
        assert result.key.startswith("bundle:")
        assert len(result.fingerprint) == 64
        assert result.report.before > result.report.after
        assert result.report.generator == "StylesheetMinifier"

    def test_strict_config_passed_through(self) -> None:
        minifier = StylesheetMinifier(
            ['@charset "utf-8";a{b:c}', '@charset "latin1";'],
            config=CompilerConfig(strict=True),
        )
        with pytest.raises(ConflictError):
            minifier.minify()
        assert minifier.locked is False

    def test_locked_rejects_new_sources(self) -> None:
        minifier = StylesheetMinifier()
        minifier._locked = True
        with pytest.raises(MinifierLockedError):
            minifier.add_source("a{b:c}")

    def test_unlocked_after_run(self) -> None:
        minifier = StylesheetMinifier(["a{b:c}"])
        minifier.minify()
        assert minifier.locked is False
        minifier.add_source("d{e:f}")
        assert len(minifier.sources) == 2

    def test_close_releases_own_reader(self) -> None:
        minifier = StylesheetMinifier(["a{b:c}"])
        minifier.minify()
        minifier.close()
        assert minifier._reader._client.is_closed

    def test_close_leaves_injected_reader_open(self) -> None:
        reader = SourceReader("css")
        minifier = StylesheetMinifier(["a{b:c}"], reader=reader)
        minifier.close()
        assert not reader._client.is_closed
        reader.close()


# ---------------------------------------------------------------------------
# ScriptMinifier
# ---------------------------------------------------------------------------


class TestScriptMinifier:
    def test_sources_concatenated(self) -> None:
        result = ScriptMinifier(["var a = 1;", "var b = 2;"]).minify()
        assert result.string == "var a=1;var b=2;"
        assert result.report.generator == "ScriptMinifier"

    def test_file_source(self, tmp_path) -> None:
        path = tmp_path / "app.js"
        path.write_text("// hi\nvar a = 1;\n", encoding="utf-8")
        assert ScriptMinifier([str(path)]).minify().string == "var a=1;"

    def test_css_file_rejected(self, tmp_path, caplog) -> None:
        path = tmp_path / "site.css"
        path.write_text("a{b:c}", encoding="utf-8")
        with caplog.at_level(logging.ERROR, logger="assetmin"):
            minifier = ScriptMinifier([str(path)])
        assert minifier.sources == {}

    def test_flagged_comment_config(self) -> None:
        result = ScriptMinifier(
            ["/*! license */\nvar a;"], config=ScriptConfig(flagged_comments=False)
        ).minify()
        assert result.string == "var a;"

    def test_remote_compressor_applied(self) -> None:
        received: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(request.content)
            return httpx.Response(200, text="compressed")

        compressor = RemoteCompressor(client=httpx.Client(transport=httpx.MockTransport(handler)))
        result = ScriptMinifier(["var a = 1;"], compressor=compressor).minify()
        assert result.string == "compressed"
        assert received == [b"input=var+a%3D1%3B"]
