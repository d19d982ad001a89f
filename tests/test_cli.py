import json

import pytest
import respx
from httpx import Response

from src.interfaces.cli.cli_main import run


@pytest.fixture
def cli(tmp_path):
    base = ["--config", str(tmp_path / "settings.json"),
            "--bookmarks", str(tmp_path / "bookmark.json")]

    def invoke(*args):
        return run(base + list(args))
    return invoke


def test_add_list_review_remove(cli, capsys, tmp_path):
    assert cli("add", "--key", "/works/OL1W", "--title", "Dune",
               "--author", "Frank Herbert", "--cover", "12345") == 0
    assert "Bookmarked /works/OL1W" in capsys.readouterr().out

    assert cli("review", "/works/OL1W", "Great") == 0
    capsys.readouterr()

    assert cli("list", "--json") == 0
    entries = json.loads(capsys.readouterr().out)
    assert entries[0]["_id"] == "/works/OL1W"
    assert entries[0]["review"] == "Great"
    assert entries[0]["raw"]["author_name"] == ["Frank Herbert"]

    assert cli("remove", "/works/OL1W") == 0
    assert "Removed /works/OL1W" in capsys.readouterr().out

    assert cli("list") == 0
    assert "No bookmarks yet." in capsys.readouterr().out
    assert json.loads((tmp_path / "bookmark.json").read_text(encoding="utf-8")) == []


def test_add_keyless_book_uses_composite_id(cli, capsys):
    assert cli("add", "--title", "No Key Book", "--author", "X", "--cover", "1") == 0
    assert cli("add", "--title", "No Key Book", "--author", "X", "--cover", "1") == 0
    capsys.readouterr()

    cli("list", "--json")
    entries = json.loads(capsys.readouterr().out)
    assert [e["_id"] for e in entries] == ["No Key Book||X||1"]


def test_add_needs_key_or_title(cli, capsys):
    assert cli("add", "--author", "Nobody") == 1
    assert "at least --key or --title" in capsys.readouterr().err


def test_check_exit_codes(cli, capsys):
    cli("add", "--key", "/works/OL1W", "--title", "Dune")
    assert cli("check", "/works/OL1W") == 0
    assert cli("check", "/works/NOPE") == 2


def test_review_of_unknown_bookmark_fails(cli, capsys):
    assert cli("review", "/works/NOPE", "text") == 1
    assert "Bookmark not found: /works/NOPE" in capsys.readouterr().err


def test_corrupt_file_is_reported(cli, capsys, tmp_path):
    (tmp_path / "bookmark.json").write_text("{oops", encoding="utf-8")

    assert cli("list") == 1
    assert "corrupt" in capsys.readouterr().err
    assert (tmp_path / "bookmark.json").read_text(encoding="utf-8") == "{oops"


def test_list_by_added(cli, capsys, tmp_path):
    (tmp_path / "bookmark.json").write_text(json.dumps([
        {"_id": "a", "title": "Older activity, newer bookmark", "addedAt": "2024-02-01T00:00:00.000Z"},
        {"_id": "b", "title": "Newer activity, older bookmark", "addedAt": "2024-01-01T00:00:00.000Z"},
    ]), encoding="utf-8")

    cli("list", "--by-added", "--json")
    assert [e["_id"] for e in json.loads(capsys.readouterr().out)] == ["a", "b"]


def test_export(cli, capsys, tmp_path):
    cli("add", "--key", "/works/OL1W", "--title", "Dune")
    assert cli("export", str(tmp_path / "export.json")) == 0

    records = json.loads((tmp_path / "export.json").read_text(encoding="utf-8"))
    assert records[0]["id"] == "/works/OL1W"


def test_search_and_bookmark_result(cli, capsys):
    with respx.mock(base_url="https://openlibrary.org") as mock_api:
        mock_api.get("/search.json").mock(return_value=Response(200, json={"docs": [
            {"key": "/works/OL1W", "title": "Dune", "author_name": ["Frank Herbert"], "cover_i": 1},
            {"key": "/works/OL3W", "title": "Dune Messiah", "author_name": ["Frank Herbert"], "cover_i": 2},
        ]}))
        assert cli("search", "dune", "--bookmark", "2") == 0

    out = capsys.readouterr().out
    assert "Dune Messiah - Frank Herbert" in out
    assert "Bookmarked /works/OL3W" in out

    assert cli("check", "/works/OL3W") == 0


def test_search_rejects_result_number_zero(cli, capsys):
    with respx.mock(base_url="https://openlibrary.org") as mock_api:
        mock_api.get("/search.json").mock(return_value=Response(200, json={"docs": [
            {"key": "/works/OL1W", "title": "Dune", "author_name": ["Frank Herbert"], "cover_i": 1},
        ]}))
        assert cli("search", "dune", "--bookmark", "0") == 1

    assert "No result number 0" in capsys.readouterr().err
    assert cli("check", "/works/OL1W") == 2
