"""Tests for the jsxtv command line."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from jsxtv import __version__
from jsxtv.cli import build_parser, load_config, main
from jsxtv.exceptions import ConfigError

SOURCE = "const Card = ({ title }) => <p>{title}</p>;\nCard.templateVars = ['title'];\n"


@pytest.fixture
def card(tmp_path: Path) -> Path:
    path = tmp_path / "Card.jsx"
    path.write_text(SOURCE, encoding="utf-8")
    return path


class TestMain:
    def test_prints_rewritten_module(self, card: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(card)]) == 0
        out = capsys.readouterr().out
        assert "getLanguageReplace('format', 'title', _uid2)" in out
        assert "templateVars" not in out

    def test_writes_output_file(self, card: Path, tmp_path: Path) -> None:
        target = tmp_path / "Card.tv.jsx"
        assert main([str(card), "-o", str(target)]) == 0
        assert "<p>{_uid}</p>" in target.read_text(encoding="utf-8")

    def test_tidy_only(self, card: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(card), "--tidy-only"]) == 0
        assert capsys.readouterr().out == "const Card = ({ title }) => <p>{title}</p>;\n"

    def test_config_file(self, card: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        options = tmp_path / "jsxtv.json"
        options.write_text(json.dumps({"replaceMarker": "tplValue"}), encoding="utf-8")
        assert main([str(card), "--config", str(options)]) == 0
        assert "tplValue('format', 'title', _uid2)" in capsys.readouterr().out

    def test_ast_output_round_trips_through_json(
        self, card: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([str(card), "--ast"]) == 0
        tree_json = tmp_path / "Card.json"
        tree_json.write_text(capsys.readouterr().out, encoding="utf-8")
        assert json.loads(tree_json.read_text(encoding="utf-8"))["type"] == "Program"

        assert main([str(tree_json), "--from-json"]) == 0
        # the descriptor is already gone, so the tree prints unchanged
        assert "<p>{_uid}</p>" in capsys.readouterr().out

    def test_standard_input(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(SOURCE))
        assert main(["-"]) == 0
        assert "<p>{_uid}</p>" in capsys.readouterr().out


class TestErrors:
    def test_syntax_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        broken = tmp_path / "Broken.jsx"
        broken.write_text("const = ;\n", encoding="utf-8")
        assert main([str(broken)]) == 1
        err = capsys.readouterr().err
        assert err.startswith("jsxtv: [JTV-PAR-001]")
        assert "Broken.jsx:1" in err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "nope.jsx")]) == 1
        assert capsys.readouterr().err.startswith("jsxtv: ")

    def test_invalid_json_tree(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        tree_json = tmp_path / "tree.json"
        tree_json.write_text('{"type": "Identifier"}', encoding="utf-8")
        assert main([str(tree_json), "--from-json"]) == 1
        assert "JTV-PAR-002" in capsys.readouterr().err

    def test_unknown_option_in_config(self, card: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        options = tmp_path / "jsxtv.json"
        options.write_text('{"colour": "red"}', encoding="utf-8")
        assert main([str(card), "--config", str(options)]) == 1
        assert "JTV-CFG-001" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_verbose_and_quiet_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.jsx", "-v", "-q"])


class TestLoadConfig:
    def test_defaults_without_file(self) -> None:
        assert load_config(None).tidy_only is False

    def test_flag_overrides_file(self, tmp_path: Path) -> None:
        options = tmp_path / "jsxtv.json"
        options.write_text('{"tidyOnly": false}', encoding="utf-8")
        assert load_config(str(options), tidy_only=True).tidy_only is True

    @pytest.mark.parametrize("text", ["{broken", "[1, 2]"])
    def test_rejects_bad_files(self, tmp_path: Path, text: str) -> None:
        options = tmp_path / "jsxtv.json"
        options.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(options))
