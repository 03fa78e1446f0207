from pathlib import Path

import pytest

from notegraph.services.database import DatabaseService
from notegraph.services.search_index import InvalidQueryError, SearchIndex


@pytest.fixture()
def index(tmp_path: Path) -> SearchIndex:
    return SearchIndex(DatabaseService(tmp_path / "search.db"))


def test_query_matches_body_and_returns_title(index: SearchIndex) -> None:
    index.upsert("notes/graph.md", "Graph Theory", "Edges connect vertices.", ["math"])

    results = index.query("vertices")

    assert [result.path for result in results] == ["notes/graph.md"]
    assert results[0].title == "Graph Theory"
    assert results[0].snippet == "Edges connect vertices."


def test_upsert_replaces_previous_document(index: SearchIndex) -> None:
    index.upsert("a.md", "A", "alpha content", [])
    index.upsert("a.md", "A", "beta content", [])

    assert index.query("alpha") == []
    assert [result.path for result in index.query("beta")] == ["a.md"]
    assert index.document_count() == 1


def test_remove_deletes_document(index: SearchIndex) -> None:
    index.upsert("a.md", "A", "shared words", [])
    index.upsert("b.md", "B", "shared words", [])

    index.remove("a.md")
    index.remove("never-indexed.md")

    assert [result.path for result in index.query("shared")] == ["b.md"]


def test_tags_are_searchable(index: SearchIndex) -> None:
    index.upsert("a.md", "A", "nothing relevant", ["projectx", "draft"])

    assert [result.path for result in index.query("projectx")] == ["a.md"]


def test_snippet_is_truncated_to_200_characters(index: SearchIndex) -> None:
    body = "needle " + "x" * 300
    index.upsert("long.md", "Long", body, [])

    snippet = index.query("needle")[0].snippet

    assert snippet == body[:200] + "..."
    assert len(snippet) == 203


def test_query_respects_limit_and_orders_by_score(index: SearchIndex) -> None:
    for number in range(3):
        index.upsert(f"n{number}.md", f"Note {number}", "common term here", [])

    results = index.query("common", limit=2)

    assert len(results) == 2
    assert results[0].score >= results[1].score


def test_search_handles_apostrophes(index: SearchIndex) -> None:
    index.upsert(
        "notes/obrien.md",
        "O'Brien Authentication",
        "Details about O'Brien's authentication flow.",
        [],
    )

    results = index.query("O'Brien")

    assert results
    assert results[0].path == "notes/obrien.md"


def test_search_preserves_prefix_queries(index: SearchIndex) -> None:
    index.upsert("notes/auth.md", "Authorization Overview", "Prefix search on auth tokens.", [])

    results = index.query("auth*")

    assert results
    assert results[0].path == "notes/auth.md"


@pytest.mark.parametrize("query", ["", "   ", "&& ||", "***"])
def test_query_rejects_unsearchable_text(index: SearchIndex, query: str) -> None:
    with pytest.raises(InvalidQueryError):
        index.query(query)


def test_clear_empties_index(index: SearchIndex) -> None:
    index.upsert("a.md", "A", "text", [])

    index.clear()

    assert index.document_count() == 0


def test_query_matches_accented_and_cjk_words(index: SearchIndex) -> None:
    index.upsert("cafe.md", "Cafe", "Notes on café culture", [])
    index.upsert("trip.md", "Trip", "Spring trip to 東京 with friends", [])

    assert [result.path for result in index.query("café")] == ["cafe.md"]
    assert [result.path for result in index.query("東京")] == ["trip.md"]


def test_default_index_is_private_to_each_instance() -> None:
    first = SearchIndex()
    second = SearchIndex()
    first.upsert("a.md", "A", "alpha", [])

    second.clear()

    assert first.document_count() == 1
    assert second.document_count() == 0
    assert first.db_service.db_path is None
