"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from docscout.cli import SNIPPET_WIDTH, _parse_day, _setup_logging, app
from docscout.utils.text import truncate_text


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("docscout.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("docscout.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestParseDay:
    """Tests for _parse_day helper."""

    def test_end_of_day(self) -> None:
        parsed = _parse_day("2023-01-31", end_of_day=True)
        assert (parsed.hour, parsed.minute) == (23, 59)

    def test_none(self) -> None:
        assert _parse_day(None) is None


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_prints_results(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["search", "revenue", str(corpus_file)])

        assert result.exit_code == 0
        assert "report.pdf" in result.stdout
        assert "Score" in result.stdout

    def test_search_no_matches(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["search", "zebra", str(corpus_file)])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_no_corpus(self, tmp_path: Path) -> None:
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()

        result = runner.invoke(app, ["search", "revenue", str(empty_dir)])

        assert result.exit_code == 0
        assert "No corpus files found" in result.stdout

    def test_search_semantic(self, tmp_path: Path) -> None:
        path = tmp_path / "corpus.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "a", "name": "annual.pdf", "summary": "Annual financial results and outlook"},
                    {"id": "b", "name": "food.pdf", "summary": "Cooking recipes for dinner"},
                ]
            )
        )

        result = runner.invoke(app, ["search", "financial results", str(path), "--semantic"])

        assert result.exit_code == 0
        assert "annual.pdf" in result.stdout
        assert "food.pdf" not in result.stdout
        assert "0.40" in result.stdout

    def test_search_invalid_threshold(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["search", "revenue", str(corpus_file), "--threshold", "2"])

        assert result.exit_code != 0

    def test_search_passes_options(self, corpus_file: Path) -> None:
        with patch("docscout.cli.SearchEngine") as mock_engine_class:
            mock_engine_class.return_value.search.return_value = []
            result = runner.invoke(
                app,
                ["search", "revenue", str(corpus_file), "--no-ocr", "--sort-by", "name", "--max-results", "3"],
            )

        assert result.exit_code == 0
        options = mock_engine_class.return_value.search.call_args[0][2]
        assert options.include_ocr is False
        assert options.sort_by == "name"
        assert options.max_results == 3

    def test_search_semantic_default_limit(self, corpus_file: Path) -> None:
        with patch("docscout.cli.SearchEngine") as mock_engine_class:
            mock_engine_class.return_value.semantic_search.return_value = []
            result = runner.invoke(app, ["search", "revenue", str(corpus_file), "--semantic"])

        assert result.exit_code == 0
        assert mock_engine_class.return_value.semantic_search.call_args[1]["max_results"] == 20

    def test_search_default_limit(self, corpus_file: Path) -> None:
        with patch("docscout.cli.SearchEngine") as mock_engine_class:
            mock_engine_class.return_value.search.return_value = []
            runner.invoke(app, ["search", "revenue", str(corpus_file)])

        assert mock_engine_class.return_value.search.call_args[0][2].max_results == 50

    def test_context_truncated_for_display(self, corpus_file: Path) -> None:
        with patch("docscout.cli.truncate_text", wraps=truncate_text) as mock_truncate:
            result = runner.invoke(app, ["search", "revenue", str(corpus_file)])

        assert result.exit_code == 0
        assert mock_truncate.called
        assert all(call[0][1] == SNIPPET_WIDTH for call in mock_truncate.call_args_list)


class TestAdvancedCommand:
    """Tests for the advanced command."""

    def test_filter_only(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["advanced", str(corpus_file), "--type", "docx"])

        assert result.exit_code == 0
        assert "recipes.docx" in result.stdout
        assert "report.pdf" not in result.stdout

    def test_date_range(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["advanced", str(corpus_file), "--from", "2023-04-02", "--to", "2023-04-02"])

        assert result.exit_code == 0
        assert "report.pdf" in result.stdout
        assert "recipes.docx" not in result.stdout

    def test_invalid_date(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["advanced", str(corpus_file), "--from", "soon"])

        assert result.exit_code != 0

    def test_timezone_aware_date_is_usage_error(self, corpus_file: Path) -> None:
        """Upload dates are naive, so an offset in --from cannot be compared."""
        result = runner.invoke(app, ["advanced", str(corpus_file), "--from", "2023-01-01T00:00:00+00:00"])

        assert result.exit_code == 2
        assert not isinstance(result.exception, TypeError)

    def test_with_query(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["advanced", str(corpus_file), "--query", "zebra"])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout


class TestFacetsCommand:
    """Tests for the facets command."""

    def test_facets(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["facets", str(corpus_file)])

        assert result.exit_code == 0
        for title in ("File types", "Languages", "Topics", "Authors"):
            assert title in result.stdout
        assert "docx" in result.stdout
        assert "unknown" in result.stdout


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    def test_analyze(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["analyze", str(corpus_file)])

        assert result.exit_code == 0
        assert "report.pdf" in result.stdout
        assert "Statistics" in result.stdout
        assert "neutral" in result.stdout

    def test_analyze_verbose_logging(self, corpus_file: Path) -> None:
        with patch("docscout.cli.logging.basicConfig") as mock_config:
            result = runner.invoke(app, ["analyze", str(corpus_file), "--verbose"])

        assert result.exit_code == 0
        assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_analyze_timeline(self, tmp_path: Path) -> None:
        path = tmp_path / "corpus.json"
        path.write_text(
            json.dumps([{"id": "a", "name": "plan.txt", "text": "Kickoff on 2024-03-01. Launch on June 5, 2024."}])
        )

        result = runner.invoke(app, ["analyze", str(path), "--timeline"])

        assert result.exit_code == 0
        assert "2024-03-01" in result.stdout
        assert "2024-06-05" in result.stdout
        assert "Event 2" in result.stdout

    def test_analyze_timeline_without_dates(self, corpus_file: Path) -> None:
        result = runner.invoke(app, ["analyze", str(corpus_file), "--timeline"])

        assert result.exit_code == 0
        assert "No dated events in report.pdf" in result.stdout


class TestWebCommand:
    """Tests for the web command."""

    def test_web_starts_uvicorn(self, corpus_file: Path) -> None:
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["web", "--corpus", str(corpus_file), "--port", "9000"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert mock_run.call_args[1]["port"] == 9000

    def test_web_missing_corpus_warns(self, tmp_path: Path) -> None:
        with patch("uvicorn.run"):
            result = runner.invoke(app, ["web", "--corpus", str(tmp_path / "missing.json")])

        assert result.exit_code == 0
        assert "corpus not found" in result.stdout
