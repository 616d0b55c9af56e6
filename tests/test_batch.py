"""Tests for CSV batch facet filling."""

import pandas as pd
import pytest

from catalog.classification import FacetCSVProcessor

HEADER = "title,description,authors,published_date,page_count,rating,source_type,functions,difficulty,traditions"

ROWS = [
    # Fully missing facets
    "Capital Volume I,,Karl Marx,1867,,4.5,,,,",
    # Already classified on every axis
    "Imperialism,,Vladimir Lenin,1917,120,,primary,theory,beginner,leninism;marxism_leninism",
    # Negative page count
    "Broken Pages,,Someone,,-5,,,,,",
    # Rating out of range
    "Broken Rating,,Someone,,,7,,,,",
    # Existing difficulty is kept
    "Grundrisse,,Karl Marx,1858,,,,,beginner,",
    # Existing value outside the taxonomy
    "Bad Facet,,Someone,,,,,,expert,",
]


@pytest.fixture
def books_csv(tmp_path):
    path = tmp_path / "books.csv"
    path.write_text("\n".join([HEADER] + ROWS) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def processor():
    return FacetCSVProcessor()


class TestFacetCSVProcessor:

    def test_process_csv(self, processor, books_csv, tmp_path):
        output = tmp_path / "out.csv"

        updated, skipped = processor.process_csv(str(books_csv), str(output))

        assert (updated, skipped) == (2, 4)
        df = pd.read_csv(output, dtype=str, keep_default_na=False)
        assert len(df) == len(ROWS)

        capital = df.iloc[0]
        assert capital["source_type"] == "primary"
        assert capital["functions"] == "foundational"
        assert capital["difficulty"] == "advanced"
        assert capital["traditions"] == "classical_marxism"

        classified = df.iloc[1]
        assert classified["functions"] == "theory"
        assert classified["traditions"] == "leninism;marxism_leninism"

        grundrisse = df.iloc[4]
        assert grundrisse["difficulty"] == "beginner"
        assert grundrisse["source_type"] == "primary"

        for index in (2, 3, 5):
            assert df.iloc[index]["source_type"] == ""

    def test_sample_size(self, processor, books_csv):
        df = processor.load_books(str(books_csv), sample_size=2)
        assert list(df["title"]) == ["Capital Volume I", "Imperialism"]

    def test_missing_facet_columns_are_added(self, processor, tmp_path):
        path = tmp_path / "plain.csv"
        path.write_text("title,authors\nGardening for Everyone,Jane Doe\n", encoding="utf-8")

        df, updated, skipped = processor.fill_frame(processor.load_books(str(path)))

        assert (updated, skipped) == (1, 0)
        row = df.iloc[0]
        assert row["source_type"] == "secondary"
        assert row["functions"] == "educational"
        assert row["difficulty"] == "intermediate"
        assert row["traditions"] == ""

    def test_fill_frame_leaves_input_untouched(self, processor, books_csv):
        df = processor.load_books(str(books_csv))
        processor.fill_frame(df)
        assert df.iloc[0]["source_type"] == ""

    def test_fractional_page_count_is_skipped(self, processor, tmp_path):
        path = tmp_path / "fractional.csv"
        path.write_text(
            "\n".join([HEADER, "Fractional Pages,,Someone,,149.9,,,,,", "Whole Pages,,Someone,,300.0,,,,,"]) + "\n",
            encoding="utf-8",
        )

        df, updated, skipped = processor.fill_frame(processor.load_books(str(path)))

        assert (updated, skipped) == (1, 1)
        assert df.iloc[0]["difficulty"] == ""
        assert df.iloc[0]["source_type"] == ""
        assert df.iloc[1]["source_type"] == "secondary"
