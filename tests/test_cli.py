"""Tests for the offline CLI commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from linguist import cli
from linguist.config import AppConfig, UsageConfig
from linguist.logging.models import UsageLog
from linguist.logging.usage_store import UsageStore

runner = CliRunner()


@pytest.fixture
def draft(tmp_path: Path) -> Path:
    path = tmp_path / "draft.txt"
    path.write_text("This are fine. It include a mistaks.", encoding="utf-8")
    return path


@pytest.fixture
def analysis_file(tmp_path: Path, sample_analysis) -> Path:
    path = tmp_path / "analysis.json"
    path.write_text(sample_analysis.model_dump_json(by_alias=True), encoding="utf-8")
    return path


class TestApplyCommand:
    def test_apply_all_to_file(self, draft, analysis_file, tmp_path):
        out = tmp_path / "out.txt"
        result = runner.invoke(cli.app, ["apply", str(draft), str(analysis_file), "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "This is fine. It include a mistakes."
        assert "2 applied" in result.output
        assert "3 could not be located" in result.output

    def test_apply_selected_ids(self, draft, analysis_file, tmp_path):
        out = tmp_path / "out.txt"
        result = runner.invoke(
            cli.app,
            ["apply", str(draft), str(analysis_file), "--id", "sug-3", "-o", str(out)],
        )

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "This are fine. It include a mistakes."

    def test_apply_unknown_id_fails(self, draft, analysis_file):
        result = runner.invoke(cli.app, ["apply", str(draft), str(analysis_file), "--id", "nope"])
        assert result.exit_code == 1
        assert "Unknown suggestion id" in result.output

    def test_missing_file_fails(self, tmp_path, analysis_file):
        result = runner.invoke(cli.app, ["apply", str(tmp_path / "nope.txt"), str(analysis_file)])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_analysis_fails(self, draft, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json", encoding="utf-8")
        result = runner.invoke(cli.app, ["apply", str(draft), str(bad)])
        assert result.exit_code == 1
        assert "Invalid analysis file" in result.output


class TestReviewCommand:
    def test_review_lists_unlocated_suggestions(self, draft, analysis_file):
        result = runner.invoke(cli.app, ["review", str(draft), str(analysis_file)])

        assert result.exit_code == 0
        assert "This are fine." in result.output
        assert "Not shown (3)" in result.output


class TestUsageCommand:
    def test_usage_shows_prompt_count(self, tmp_path, monkeypatch):
        db = tmp_path / "usage.db"
        UsageStore(db).save_log(UsageLog(mode="analyze"))
        config = AppConfig(usage=UsageConfig(db_path=str(db)))
        monkeypatch.setattr(cli, "load_config", lambda: config)

        result = runner.invoke(cli.app, ["usage"])

        assert result.exit_code == 0
        assert "Prompts (all time): 1" in result.output


class TestDocumentOutput:
    def test_apply_stdout_keeps_long_lines(self, tmp_path, sample_analysis):
        line = "This are " + "a very long sentence that keeps going " * 6 + "to the end."
        draft = tmp_path / "long.txt"
        draft.write_text(line, encoding="utf-8")
        analysis = tmp_path / "analysis.json"
        analysis.write_text(sample_analysis.model_dump_json(by_alias=True), encoding="utf-8")

        result = runner.invoke(cli.app, ["apply", str(draft), str(analysis)])

        assert result.exit_code == 0
        assert len(line) > 80
        assert line.replace("This are", "This is") in result.output.splitlines()

    def test_rewrite_stdout_keeps_long_lines(self, tmp_path, monkeypatch):
        rewritten = "A calm and professional rewrite " * 5 + "of the whole draft."

        class FakeRewriter:
            def __init__(self, llm, model=None):
                pass

            async def rewrite(self, text, instruction):
                return rewritten

        config = AppConfig(usage=UsageConfig(db_path=str(tmp_path / "usage.db")))
        monkeypatch.setattr(cli, "load_config", lambda: config)
        monkeypatch.setattr(cli, "LLMClient", MagicMock())
        monkeypatch.setattr(cli, "Rewriter", FakeRewriter)
        draft = tmp_path / "draft.txt"
        draft.write_text("hey, whats up", encoding="utf-8")

        result = runner.invoke(cli.app, ["rewrite", str(draft), "-i", "Make it formal"])

        assert result.exit_code == 0
        assert rewritten in result.output.splitlines()
