"""Tests for the ``python -m pystl`` command line and logging setup."""

from __future__ import annotations

import io
import logging
import sys

import pytest

from pystl import Document, Normal, StlFormat, Vertex
from pystl.__main__ import main
from pystl.logging_config import setup_logging
from conftest import SCENARIO_TEXT, make_document


@pytest.fixture
def text_path(tmp_path):
    path = tmp_path / "cube_text.stl"
    make_document().save_as_text(str(path))
    return path


@pytest.fixture
def binary_path(tmp_path):
    path = tmp_path / "cube_binary.stl"
    make_document().save_as_binary(str(path))
    return path


def _format_of(path) -> StlFormat:
    with open(path, "rb") as f:
        return Document.detect_format(f)


# ---------------------------------------------------------------------------
# TestCli
# ---------------------------------------------------------------------------


class TestCli:
    def test_info(self, text_path, capsys):
        assert main(["info", str(text_path)]) == 0
        out = capsys.readouterr().out
        assert "name: cube" in out
        assert "format: text" in out
        assert "facets: 12" in out

    def test_convert_flips_format_by_default(self, text_path, tmp_path):
        dst = tmp_path / "out.stl"
        assert main(["convert", str(text_path), str(dst)]) == 0
        assert _format_of(dst) is StlFormat.BINARY
        assert Document.open(str(dst)).facets == make_document().facets

    def test_convert_binary_to_text(self, binary_path, tmp_path):
        dst = tmp_path / "out.stl"
        assert main(["convert", str(binary_path), str(dst)]) == 0
        assert _format_of(dst) is StlFormat.TEXT

    def test_convert_explicit_text(self, text_path, tmp_path):
        dst = tmp_path / "out.stl"
        assert main(["convert", str(text_path), str(dst), "--text"]) == 0
        assert Document.open(str(dst)) == make_document()

    def test_shift(self, binary_path, tmp_path):
        dst = tmp_path / "shifted.stl"
        assert main(["shift", str(binary_path), str(dst), "1", "-2", "0.5"]) == 0
        doc = Document.open(str(dst))
        assert doc[0].vertices[0] == Vertex(1, -2, 0.5)

    def test_invert_as_text(self, binary_path, tmp_path):
        dst = tmp_path / "flipped.stl"
        assert main(["invert", str(binary_path), str(dst), "--text"]) == 0
        doc = Document.open(str(dst))
        assert doc[0].normal == Normal(0, 0, 1)

    def test_bad_input_exits_nonzero(self, tmp_path, capsys):
        bad = tmp_path / "bad.stl"
        bad.write_text("not an stl")
        assert main(["info", str(bad)]) == 1
        assert capsys.readouterr().err.startswith("pystl: ")

    def test_missing_file_exits_nonzero(self, tmp_path, capsys):
        assert main(["info", str(tmp_path / "nope.stl")]) == 1
        assert "nope.stl" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# TestLoggingConfig
# ---------------------------------------------------------------------------


class TestLoggingConfig:
    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging()
        logger = setup_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "pystl.log"
        logger = setup_logging(logging.DEBUG, log_file=str(log_file))
        logger.debug("hello from the test")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from the test" in log_file.read_text(encoding="utf-8")

    def test_console_handler_writes_to_stderr(self):
        logger = setup_logging()
        assert logger.handlers[0].stream is sys.stderr

    def test_explicit_stream(self):
        buf = io.StringIO()
        logger = setup_logging(logging.DEBUG, stream=buf)
        logger.debug("into the buffer")
        assert "into the buffer" in buf.getvalue()


# ---------------------------------------------------------------------------
# TestCliOutput
# ---------------------------------------------------------------------------


class TestCliOutput:
    def test_verbose_info_keeps_stdout_clean(self, text_path, capsys):
        assert main(["-v", "info", str(text_path)]) == 0
        captured = capsys.readouterr()
        assert captured.out == "name: cube\nformat: text\nfacets: 12\n"
        assert "Detected text STL" in captured.err

    def test_convert_non_ascii_name_to_text(self, tmp_path):
        src = tmp_path / "teil.stl"
        src.write_bytes(SCENARIO_TEXT.replace("T", "Teil_ä").encode("utf-8"))
        dst = tmp_path / "teil_out.stl"
        assert main(["convert", str(src), str(dst), "--text"]) == 0
        assert dst.read_bytes().endswith(b"endsolid Teil_??")
        assert len(Document.open(str(dst))) == 1
