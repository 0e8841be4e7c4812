"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from docscout.config import AppConfig, SearchOptions


class TestSearchOptions:
    """Test SearchOptions dataclass."""

    def test_defaults(self) -> None:
        """Should create options with documented defaults."""
        options = SearchOptions()

        assert options.include_text is True
        assert options.include_ocr is True
        assert options.include_metadata is True
        assert options.sort_by == "relevance"
        assert options.max_results == 50
        assert options.threshold == 0.1

    def test_unknown_sort_key_accepted(self) -> None:
        """Unknown sort keys mean discovery order, not an error."""
        assert SearchOptions(sort_by="date").sort_by == "date"

    def test_negative_max_results(self) -> None:
        with pytest.raises(ValueError, match="max_results"):
            SearchOptions(max_results=-1)

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold: float) -> None:
        with pytest.raises(ValueError, match="threshold"):
            SearchOptions(threshold=threshold)


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should resolve a default corpus path and default options."""
        config = AppConfig()

        assert config.corpus_path is not None
        assert config.corpus_path.name == "corpus.json"
        assert config.search == SearchOptions()

    def test_custom_config(self) -> None:
        config = AppConfig(corpus_path=Path("/custom/corpus.json"), search=SearchOptions(max_results=5))

        assert config.corpus_path == Path("/custom/corpus.json")
        assert config.search.max_results == 5

    def test_resolve_corpus_path_absolute(self) -> None:
        """Should return absolute path as-is."""
        config = AppConfig(corpus_path=Path("/absolute/corpus.json"))

        assert config.resolve_corpus_path(Path("/base")) == Path("/absolute/corpus.json")

    def test_resolve_corpus_path_relative_no_base(self) -> None:
        config = AppConfig(corpus_path=Path("relative/corpus.json"))

        assert config.resolve_corpus_path(base_dir=None) == Path("relative/corpus.json")

    def test_resolve_corpus_path_relative_with_base(self) -> None:
        """Should resolve relative path against base_dir."""
        config = AppConfig(corpus_path=Path("relative/corpus.json"))

        resolved = config.resolve_corpus_path(base_dir=Path("/base/directory"))

        assert resolved == Path("/base/directory/relative/corpus.json")

    def test_local_data_directory_preferred(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should use data/corpus.json when it exists in the working directory."""
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "corpus.json").write_text("[]", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert AppConfig().corpus_path == Path("data/corpus.json")

    def test_falls_back_to_documents_folder(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert AppConfig().corpus_path == Path.home() / "Documents" / "DocScout" / "corpus.json"
