"""Tests for configuration helpers and the command-line interface.

WHY: The CLI is how links reach files outside an editor. Wrong
document-type detection silently picks the wrong rendering, and
--in-place writes straight into the user's file.

HOW: Config helpers are called directly. The CLI is driven through
main() with explicit argv; stdout/stderr are captured with capsys.

RULES:
- All file I/O tests use tmp_path fixtures for isolation.
"""

import json

import pytest

from modelinks import config
from modelinks.cli import build_parser, main


class TestDetectDocumentType:

    @pytest.mark.parametrize("name,expected", [
        ("page.html", "html"),
        ("PAGE.HTM", "html"),
        ("notes.txt", "plain-text"),
        ("init.el", "source-code"),
        ("agenda.org", "org"),
        ("README.md", "markdown"),
    ])
    def test_known_extensions(self, name, expected):
        assert config.detect_document_type(name) == expected

    def test_unknown_extension_falls_back(self):
        assert config.detect_document_type("data.xyz") == config.DEFAULT_DOCUMENT_TYPE


class TestIntEnv:

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("MODELINKS_TEST_INT", raising=False)
        assert config._int_env("MODELINKS_TEST_INT", 3) == 3

    def test_parsed(self, monkeypatch):
        monkeypatch.setenv("MODELINKS_TEST_INT", " 2 ")
        assert config._int_env("MODELINKS_TEST_INT", 3) == 2

    @pytest.mark.parametrize("raw", ["two", "-1"])
    def test_invalid(self, monkeypatch, raw):
        monkeypatch.setenv("MODELINKS_TEST_INT", raw)
        with pytest.raises(ValueError, match="MODELINKS_TEST_INT"):
            config._int_env("MODELINKS_TEST_INT", 3)


class TestParseLogLevel:

    def test_case_insensitive(self):
        assert config.parse_log_level(" debug ") == "DEBUG"

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="MODELINKS_LOG_LEVEL"):
            config.parse_log_level("verbose")


class TestLoadConfiguredTemplates:

    def test_nothing_configured(self, monkeypatch):
        monkeypatch.setattr(config, "TEMPLATES_FILE", None)
        assert config.load_configured_templates() == {}

    def test_environment_file(self, monkeypatch, tmp_path):
        path = tmp_path / "t.json"
        path.write_text(json.dumps({"formatters": {"md": "<{url}>"}}), encoding="utf-8")
        monkeypatch.setattr(config, "TEMPLATES_FILE", str(path))
        assert set(config.load_configured_templates()) == {"md"}


class TestCli:

    def test_parser_defaults(self):
        args = build_parser().parse_args(["notes.txt", "--url", "https://x.com"])
        assert args.file == "notes.txt"
        assert args.point is None
        assert not args.in_place

    def test_stdout_rewrite(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("Read: ", encoding="utf-8")

        main([str(path), "--url", "https://example.com", "--description", "Example Site"])

        captured = capsys.readouterr()
        assert captured.out == "Read: Example Site (see https://example.com)"
        assert "Rewrote link" in captured.err
        assert path.read_text(encoding="utf-8") == "Read: "

    def test_in_place_html_at_point(self, tmp_path, capsys):
        path = tmp_path / "page.html"
        path.write_text("<p></p>\n", encoding="utf-8")

        main([str(path), "--url", "https://x.com", "--description", "X", "--point", "3", "--in-place"])

        assert path.read_text(encoding="utf-8") == (
            '<p><a href="https://x.com" target="_blank">X</a></p>\n'
        )
        assert capsys.readouterr().out == ""

    def test_in_place_keeps_crlf_line_endings(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"line1\r\nRead: \r\nline3\r\n")

        main([str(path), "--url", "https://x.com", "--description", "X", "--point", "13", "--in-place"])

        assert path.read_bytes() == b"line1\r\nRead: X (see https://x.com)\r\nline3\r\n"

    def test_capture_failure_reported(self, tmp_path, capsys, monkeypatch):
        def broken_capture(self, buffer):
            raise OSError("clipboard unavailable")

        monkeypatch.setattr("modelinks.cli.NativeLinkInserter.__call__", broken_capture)
        path = tmp_path / "notes.txt"
        path.write_text("keep", encoding="utf-8")

        main([str(path), "--url", "https://x.com"])

        captured = capsys.readouterr()
        assert "Link capture or search failed" in captured.err
        assert "Rewrite for" not in captured.err
        assert captured.out == "keep"

    def test_invalid_log_level(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setattr("modelinks.cli.LOG_LEVEL", "LOUD")
        with pytest.raises(SystemExit) as exc_info:
            main(["--list-types"])
        assert exc_info.value.code == 1
        assert "Error: MODELINKS_LOG_LEVEL must be one of" in capsys.readouterr().err

    def test_type_override_without_formatter(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("", encoding="utf-8")

        main([str(path), "--url", "https://x.com", "--type", "fundamental"])

        captured = capsys.readouterr()
        assert captured.out == "[[https://x.com]]"
        assert "No formatter for 'fundamental'" in captured.err

    def test_templates_option(self, tmp_path, capsys):
        templates = tmp_path / "templates.json"
        templates.write_text(json.dumps({"formatters": {"markdown": "[{description}]({url})"}}), encoding="utf-8")
        path = tmp_path / "README.md"
        path.write_text("See ", encoding="utf-8")

        main([str(path), "--url", "https://x.com", "--description", "X", "--templates", str(templates)])

        assert capsys.readouterr().out == "See [X](https://x.com)"

    def test_list_types(self, capsys):
        main(["--list-types"])
        out = capsys.readouterr().out
        assert "html\tHTML anchor" in out
        assert "plain-text\tPlain Text" in out

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.txt"), "--url", "https://x.com"])
        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_point_out_of_range(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("abc", encoding="utf-8")
        with pytest.raises(SystemExit):
            main([str(path), "--url", "https://x.com", "--point", "10"])
        assert "outside the file" in capsys.readouterr().err

    def test_bad_templates_file(self, tmp_path, capsys):
        templates = tmp_path / "templates.json"
        templates.write_text("[]", encoding="utf-8")
        with pytest.raises(SystemExit):
            main(["--list-types", "--templates", str(templates)])
        assert "Invalid templates" in capsys.readouterr().err
