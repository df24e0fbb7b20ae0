"""Unit tests for the page catalog loader."""

from pathlib import Path

import pytest

from worldclock.catalog import is_usable_line, load_catalog, parse_catalog
from worldclock.exceptions import CatalogError

FIXTURE_DIR = Path(__file__).parent / "fixtures"


class TestParseCatalog:
    def test_skips_blank_and_commented_lines(self) -> None:
        lines = [
            "",
            "   ",
            "# Asia=https://example.com/asia",
            "// Europa=https://example.com/europe",
            "  # Afrika=https://example.com/africa",
            "Australasia=https://example.com/australasia",
        ]
        assert parse_catalog(lines) == {"Australasia": "https://example.com/australasia"}

    def test_trims_keys_and_values(self) -> None:
        assert parse_catalog(["  North Americas =  https://example.com/na  \n"]) == {
            "North Americas": "https://example.com/na"
        }

    def test_splits_on_first_equals_only(self) -> None:
        urls = parse_catalog(["Popular=https://example.com/worldclock/?continent=a&x=1"])
        assert urls == {"Popular": "https://example.com/worldclock/?continent=a&x=1"}

    def test_ignores_lines_without_value(self) -> None:
        assert parse_catalog(["Asia=", "Europa", "Afrika=   "]) == {}

    def test_later_duplicates_overwrite_earlier_ones(self) -> None:
        urls = parse_catalog(["Asia=first", "Asia=second"])
        assert urls == {"Asia": "second"}

    def test_is_usable_line(self) -> None:
        assert is_usable_line("Asia=A")
        assert not is_usable_line("\t\n")
        assert not is_usable_line("//Asia=A")


class TestLoadCatalog:
    def test_loads_only_valid_entries(self) -> None:
        urls = load_catalog(FIXTURE_DIR / "urls-some-commented-out.txt")
        assert urls == {
            "Afrika": "A",
            "Asia": "A",
            "Europa": "E",
            "North Americas": "N",
            "South Americas": "S",
        }

    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "urls.txt"
        path.write_text("Zürich=https://example.com/zürich\n", encoding="utf-8")
        assert load_catalog(path) == {"Zürich": "https://example.com/zürich"}

    def test_missing_file_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="missing.txt"):
            load_catalog(tmp_path / "missing.txt")
