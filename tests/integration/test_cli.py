#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the command line interface."""

import json
import logging

import pytest

from newsformat.cli import (
    EXIT_ALERT_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    main,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def article(tmp_path):
    path = tmp_path / "article.html"
    path.write_text("<p>Hello from the CLI.</p><hr>", encoding="utf-8")
    return path


@pytest.mark.cli
@pytest.mark.integration
class TestCli:
    """Tests for newsformat.cli.main."""

    def test_prints_document(self, article, capsys):
        """Test the document is written to stdout."""
        assert main([str(article), "--title", "Hello"]) == EXIT_SUCCESS

        document = json.loads(capsys.readouterr().out)
        assert [component["role"] for component in document["components"]] == ["title", "body", "divider"]
        assert "body-layout" in document["componentLayouts"]

    def test_metadata_options(self, article, capsys):
        """Test author and date compose the byline."""
        assert main([str(article), "--author", "Ann Lee", "--date", "2024-03-01"]) == EXIT_SUCCESS

        document = json.loads(capsys.readouterr().out)
        assert document["components"][0]["text"] == "by Ann Lee | Mar 01, 2024"

    def test_output_file(self, article, tmp_path, capsys):
        """Test writing the document to a file."""
        output = tmp_path / "out.json"

        assert main([str(article), "-o", str(output), "--indent", "0"]) == EXIT_SUCCESS

        document = json.loads(output.read_text(encoding="utf-8"))
        assert len(document["components"]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Wrote 2 component(s)" in captured.err

    def test_missing_input(self, tmp_path, capsys):
        """Test unreadable input exits with the file error code."""
        assert main([str(tmp_path / "missing.html")]) == EXIT_FILE_ERROR
        assert "Could not read" in capsys.readouterr().err

    def test_invalid_settings(self, article, tmp_path, capsys):
        """Test invalid settings exit with the validation code."""
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"component_alerts": "sometimes"}), encoding="utf-8")

        assert main([str(article), "--settings", str(settings)]) == EXIT_VALIDATION_ERROR
        assert "component_alerts" in capsys.readouterr().err

    def test_settings_file(self, tmp_path, capsys):
        """Test settings files are applied."""
        source = tmp_path / "article.html"
        source.write_text("<p>Read <strong>this</strong></p>", encoding="utf-8")
        settings = tmp_path / "newsformat.yaml"
        settings.write_text("html_support: no\n", encoding="utf-8")

        assert main([str(source), "--settings", str(settings)]) == EXIT_SUCCESS

        document = json.loads(capsys.readouterr().out)
        assert document["components"][0]["text"] == "Read **this**"

    def test_alert_failure(self, tmp_path, capsys):
        """Test unmatched markup with fail alerts exits with the alert code."""
        source = tmp_path / "article.html"
        source.write_text("<marquee>x</marquee>", encoding="utf-8")
        settings = tmp_path / "settings.toml"
        settings.write_text('component_alerts = "fail"\n', encoding="utf-8")

        assert main([str(source), "--settings", str(settings)]) == EXIT_ALERT_ERROR
        assert "marquee" in capsys.readouterr().err

    def test_theme_file(self, article, tmp_path, capsys):
        """Test theme files are loaded and activated."""
        theme = tmp_path / "large.json"
        theme.write_text(json.dumps({"values": {"body_size": 24}}), encoding="utf-8")

        assert main([str(article), "--theme", str(theme)]) == EXIT_SUCCESS

        document = json.loads(capsys.readouterr().out)
        assert document["componentTextStyles"]["default-body"]["fontSize"] == 24

    def test_bad_theme_file(self, article, tmp_path, capsys):
        """Test unreadable themes exit with the generic error code."""
        assert main([str(article), "--theme", str(tmp_path / "missing.json")]) == EXIT_ERROR
        assert "Could not load theme file" in capsys.readouterr().err

    def test_invalid_date(self, article):
        """Test malformed dates are rejected by the parser."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args([str(article), "--date", "yesterday"])

        assert exc_info.value.code == 2

    def test_latin1_input(self, tmp_path, capsys):
        """Test non-UTF-8 input is decoded with the detected encoding."""
        path = tmp_path / "latin1.html"
        path.write_bytes(
            "<p>Le café de la gare est fermé depuis l'été dernier, à la déception des habitués.</p>".encode(
                "latin-1"
            )
        )

        assert main([str(path)]) == EXIT_SUCCESS

        document = json.loads(capsys.readouterr().out)
        assert "café" in document["components"][0]["text"]

    def test_short_latin1_input(self, tmp_path, capsys):
        """Test a short non-UTF-8 file does not crash the CLI."""
        path = tmp_path / "short.html"
        path.write_bytes(b"<p>caf\xe9</p>")

        assert main([str(path)]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["components"][0]["role"] == "body"

    def test_undecodable_input(self, tmp_path, monkeypatch, capsys):
        """Test input no encoding decodes exits with the file error code."""
        monkeypatch.setattr("newsformat.utils.encoding.chardet.detect", lambda data: {"encoding": None})
        path = tmp_path / "binary.html"
        path.write_bytes(b"<p>\xff\xfe\xfa</p>")

        assert main([str(path)]) == EXIT_FILE_ERROR
        assert "Could not decode" in capsys.readouterr().err
