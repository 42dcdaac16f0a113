"""Integration tests for the CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from vibecoder.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    """Run every command in tmp_path with its own history database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("VIBECODER_DB_URL", f"sqlite:///{tmp_path}/test.db")
    monkeypatch.delenv("VIBECODER_PLUGINS", raising=False)
    monkeypatch.delenv("VIBECODER_AUTO_SAVE", raising=False)
    return tmp_path


def test_parse_json(workspace):
    (workspace / "doc.md").write_text("# Hello\n\nWorld\n\n- a\n- b\n")
    result = runner.invoke(app, ["parse", "doc.md", "--json"])
    assert result.exit_code == 0, result.output
    blocks = json.loads(result.output)["blocks"]
    assert [b["type"] for b in blocks] == ["title", "paragraph", "list"]
    assert blocks[2]["items"] == ["a", "b"]


def test_parse_text_output(workspace):
    (workspace / "doc.md").write_text("## Sub\n\n```py\nx = 1\n```\n")
    result = runner.invoke(app, ["parse", "doc.md"])
    assert result.exit_code == 0, result.output
    assert "## Sub" in result.output
    assert "```py\nx = 1\n```" in result.output


def test_parse_missing_file():
    result = runner.invoke(app, ["parse", "missing.md"])
    assert result.exit_code != 0


def test_ask_history_export(workspace):
    """ask records the interaction; history lists it; export writes it out."""
    result = runner.invoke(app, ["ask", "Write a hello world function"])
    assert result.exit_code == 0, result.output
    assert "# AI Response" in result.output
    assert "```python" in result.output

    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0, result.output
    assert "[Mock Provider]" in result.output
    assert "Write a hello world function" in result.output

    result = runner.invoke(app, ["export", "--format", "json", "--out-dir", "out", "--name", "demo"])
    assert result.exit_code == 0, result.output
    assert "Exported 1 interaction(s)" in result.output
    data = json.loads((workspace / "out" / "demo.json").read_text())
    assert data[0]["user_prompt"] == "Write a hello world function"


def test_ask_no_save_leaves_history_empty():
    assert runner.invoke(app, ["ask", "hi", "--no-save"]).exit_code == 0
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 1
    assert "No session history found." in result.output


def test_history_search(workspace):
    runner.invoke(app, ["ask", "about rust"])
    runner.invoke(app, ["ask", "about python"])
    result = runner.invoke(app, ["history", "--search", "rust"])
    assert result.exit_code == 0, result.output
    assert "about rust" in result.output
    assert "about python" not in result.output


def test_export_empty_history():
    result = runner.invoke(app, ["export"])
    assert result.exit_code == 1
    assert "No session history to export." in result.output


def test_ask_json_output():
    result = runner.invoke(app, ["ask", "x", "--json", "--no-save"])
    assert result.exit_code == 0, result.output
    titles = [b["text"] for b in json.loads(result.output)["blocks"] if b["type"] == "title"]
    assert titles == ["AI Response", "Code Example", "Explanation"]


def test_ask_with_plugins(monkeypatch):
    monkeypatch.setenv("VIBECODER_PLUGINS", "uppercase,code-formatter")
    result = runner.invoke(app, ["ask", "shout", "--no-save"])
    assert result.exit_code == 0, result.output
    assert "You asked: SHOUT" in result.output
    assert "// Formatted by Code Formatter Plugin" in result.output


def test_ask_unknown_plugin(monkeypatch):
    monkeypatch.setenv("VIBECODER_PLUGINS", "nope")
    result = runner.invoke(app, ["ask", "x"])
    assert result.exit_code == 1
    assert "Setup failed" in result.output
    assert "Plugin not found: nope" in result.output


def test_ask_bad_provider_index():
    result = runner.invoke(app, ["ask", "x", "--provider", "3"])
    assert result.exit_code == 1
    assert "out of bounds" in result.output


def test_providers_lists_configured(workspace):
    (workspace / "config.yaml").write_text(
        "providers:\n"
        "  - name: Primary\n"
        "  - name: Backup\n"
    )
    result = runner.invoke(app, ["providers"])
    assert result.exit_code == 0, result.output
    assert "* 0  Primary" in result.output
    assert "  1  Backup" in result.output


def test_plugins_marks_enabled(monkeypatch):
    monkeypatch.setenv("VIBECODER_PLUGINS", "code-formatter")
    result = runner.invoke(app, ["plugins"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert any(line.startswith("* code-formatter") for line in lines)
    assert any(line.startswith("  uppercase") for line in lines)


def test_init_reset(workspace):
    runner.invoke(app, ["ask", "keep me"])
    result = runner.invoke(app, ["init", "--reset"])
    assert result.exit_code == 0, result.output
    assert "Existing data cleared." in result.output
    assert runner.invoke(app, ["history"]).exit_code == 1


def test_invalid_log_level():
    result = runner.invoke(app, ["--log-level", "LOUD", "providers"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_errors_reported_once():
    result = runner.invoke(app, ["ask", "hi", "--provider", "5", "--no-save"])
    assert result.exit_code == 1
    assert result.output.count("Setup failed") == 1
    assert "| WARNING |" not in result.output


@pytest.mark.parametrize("limit", ["0", "-2"])
def test_history_rejects_non_positive_limit(limit):
    runner.invoke(app, ["ask", "one"])
    result = runner.invoke(app, ["history", "--limit", limit])
    assert result.exit_code == 2
