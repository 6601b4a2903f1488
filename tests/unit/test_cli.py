"""Tests for the textus-render command."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest

from textus import cli

if TYPE_CHECKING:
    from pathlib import Path

_REQUEST = {
    "text": "a <b>",
    "offset": 10,
    "typography": [{"start": 12, "end": 15, "css": "h1"}],
    "semantics": [{"start": 10, "end": 11, "id": "n1"}],
}

_EXPECTED = (
    '<span class="textus-annotation-start" annotation-id="n1"></span>'
    '<span offset="10">a</span>'
    '<span class="textus-annotation-end" annotation-id="n1"></span>'
    '<span offset="11"> </span>'
    '<h1 offset="12" class="h1"><span offset="12">&lt;b&gt;</span></h1> '
)


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep repeated main() calls from stacking handlers on the root logger."""
    monkeypatch.setattr(cli, "setup_logging", lambda *_args: None)


def _write_request(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "request.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestRenderToStdout:
    """Markup goes to stdout, untouched."""

    def test_file_input(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli.main([str(_write_request(tmp_path, _REQUEST))])
        assert capsys.readouterr().out == _EXPECTED

    def test_stdin_input(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(_REQUEST)))
        cli.main(["-"])
        assert capsys.readouterr().out == _EXPECTED

    def test_offset_and_annotations_optional(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli.main([str(_write_request(tmp_path, {"text": "plain"}))])
        assert capsys.readouterr().out == '<span offset="0">plain</span> '


class TestOptions:
    """Flags and output file."""

    def test_output_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        out = tmp_path / "out.html"
        cli.main([str(_write_request(tmp_path, _REQUEST)), "--output", str(out)])

        assert out.read_text(encoding="utf-8") == _EXPECTED
        assert capsys.readouterr().out == ""

    def test_legacy_escape_flag(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        request = {"text": "<<>>"}
        cli.main([str(_write_request(tmp_path, request)), "--legacy-escape"])
        assert capsys.readouterr().out == '<span offset="0">&lt;<&gt;></span> '

    def test_legacy_escape_from_env(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("RENDER__LEGACY_ESCAPE", "1")
        cli.main([str(_write_request(tmp_path, {"text": "<<"}))])
        assert capsys.readouterr().out == '<span offset="0">&lt;<</span> '

    def test_legacy_priority_flag(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        request = {
            "text": "abc",
            "typography": [
                {"start": 0, "end": 3, "css": "bold"},
                {"start": 0, "end": 3, "css": "h1"},
            ],
        }
        path = _write_request(tmp_path, request)

        cli.main([str(path)])
        assert capsys.readouterr().out.startswith("<h1")

        cli.main([str(path), "--legacy-priority"])
        assert capsys.readouterr().out.startswith('<span offset="0" class="bold">')


class TestErrors:
    """Bad input prints an error and exits 1."""

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            (["not", "an", "object"], "JSON object"),
            ({"offset": 0}, "'text'"),
            ({"text": "x", "typography": "h1"}, "'typography'"),
            ({"text": "x", "semantics": [{"start": 0, "end": 1}]}, "'id'"),
            ({"text": "x", "offset": "ten"}, "'offset'"),
        ],
    )
    def test_bad_request(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
        payload: object,
        message: str,
    ) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(_write_request(tmp_path, payload))])

        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error:" in captured.err
        assert message in captured.err

    def test_invalid_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(path)])

        assert excinfo.value.code == 1
        assert "invalid JSON" in capsys.readouterr().err

    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(tmp_path / "absent.json")])

        assert excinfo.value.code == 1
        assert "cannot read" in capsys.readouterr().err

    def test_non_utf8_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe{")

        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(path)])

        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error:" in captured.err
        assert "not UTF-8" in captured.err

    def test_non_utf8_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b"\xff{"), encoding="utf-8")
        monkeypatch.setattr("sys.stdin", stdin)

        with pytest.raises(SystemExit) as excinfo:
            cli.main(["-"])

        assert excinfo.value.code == 1
        assert "not UTF-8" in capsys.readouterr().err
