import json

import pandas as pd
import pytest

from src.core.data_processor import COLUMNS, DataProcessor
from src.core.models import BookmarkEntry


@pytest.fixture
def processor():
    return DataProcessor()


@pytest.fixture
def entries():
    return [
        BookmarkEntry(id="/works/OL2W", title="Emma", author_names=["Jane Austen"],
                      review="Matchmaking gone wrong", added_at="2024-01-01T08:00:00.000Z",
                      updated_at="2024-03-01T08:00:00.000Z"),
        BookmarkEntry(id="/works/OL1W", title="Dune", author_names=["Frank Herbert"],
                      cover_image_id=12345, catalog_key="/works/OL1W",
                      added_at="2024-02-01T08:00:00.000Z"),
        BookmarkEntry(id="Old||A||", title="Old", author_names=["A"], added_at="not a date"),
    ]


def test_to_frame_keeps_collection_order(processor, entries):
    df = processor.to_frame(entries)

    assert list(df.columns) == COLUMNS
    assert list(df['id']) == ["/works/OL2W", "/works/OL1W", "Old||A||"]
    assert df.iloc[1]['authors'] == "Frank Herbert"
    assert df.iloc[1]['updated_at'] == ""


def test_to_frame_empty(processor):
    df = processor.to_frame([])
    assert df.empty
    assert list(df.columns) == COLUMNS


def test_sort_by_added_newest_first(processor, entries):
    df = processor.sort_by_added(processor.to_frame(entries))
    assert list(df['id']) == ["/works/OL1W", "/works/OL2W", "Old||A||"]


@pytest.mark.parametrize("text, expected", [
    ("dune", ["/works/OL1W"]),
    ("AUSTEN", ["/works/OL2W"]),
    ("matchmaking", ["/works/OL2W"]),
    ("zzz", []),
])
def test_filter_frame(processor, entries, text, expected):
    df = processor.filter_frame(processor.to_frame(entries), text)
    assert list(df['id']) == expected


def test_filter_frame_no_text_returns_all(processor, entries):
    df = processor.to_frame(entries)
    assert processor.filter_frame(df, "") is df


def test_export_json(processor, entries, tmp_path):
    path = processor.export(entries, tmp_path / "out" / "bookmarks.json")

    records = json.loads(path.read_text(encoding="utf-8"))
    assert [r['title'] for r in records] == ["Emma", "Dune", "Old"]


def test_export_csv(processor, entries, tmp_path):
    path = processor.export(entries, tmp_path / "bookmarks.csv")

    df = pd.read_csv(path)
    assert list(df['title']) == ["Emma", "Dune", "Old"]
