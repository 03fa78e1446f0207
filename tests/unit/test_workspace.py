from pathlib import Path

import pytest

from notegraph.services.config import AppConfig
from notegraph.services.search_index import SearchIndexError
from notegraph.services.vault import VaultError, VaultNotOpenError
from notegraph.services.workspace import VaultContext


def _write(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(index_db_path=tmp_path / "search.db", local_graph_depth=1, search_limit=2)


@pytest.fixture()
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    _write(root, "a.md", "[[b]] alpha")
    _write(root, "b.md", "[[c]] alpha")
    _write(root, "c.md", "alpha #leaf")
    (root / ".git").mkdir()
    return root


@pytest.fixture()
def context(config: AppConfig) -> VaultContext:
    ctx = VaultContext(config)
    yield ctx
    ctx.close()


def test_open_vault_indexes_notes(context: VaultContext, vault: Path) -> None:
    info = context.open(vault)

    assert info.is_git_repo is True
    assert info.name == "vault"
    assert context.is_open
    assert context.vault_path == vault.resolve()
    assert context.get_note_names() == ["a", "b", "c"]
    assert context.get_backlinks("b.md") == ["a.md"]
    assert context.resolve_wikilink("c") == "c.md"
    assert context.resolve_wikilink("zzz") is None


def test_open_missing_directory_raises(context: VaultContext, tmp_path: Path) -> None:
    with pytest.raises(VaultError):
        context.open(tmp_path / "missing")

    assert not context.is_open


def test_operations_require_open_vault(context: VaultContext) -> None:
    with pytest.raises(VaultNotOpenError):
        context.reindex_file("a.md")
    with pytest.raises(VaultNotOpenError):
        context.parse_file("a.md")
    with pytest.raises(VaultNotOpenError):
        context.rebuild()

    assert context.get_backlinks("a.md") == []


def test_local_graph_uses_configured_default_depth(context: VaultContext, vault: Path) -> None:
    context.open(vault)

    default = context.get_local_graph("a.md")
    deeper = context.get_local_graph("a.md", 2)

    assert {node.id for node in default.nodes} == {"a", "b"}
    assert {node.id for node in deeper.nodes} == {"a", "b", "c"}


def test_search_uses_configured_default_limit(context: VaultContext, vault: Path) -> None:
    context.open(vault)

    assert len(context.search_notes("alpha")) == 2
    assert len(context.search_notes("alpha", limit=3)) == 3


def test_reindex_and_remove_file(context: VaultContext, vault: Path) -> None:
    context.open(vault)
    _write(vault, "c.md", "now links [[a]]")

    parsed = context.reindex_file("c.md")
    context.remove_file("b.md")

    assert parsed.links == ["a"]
    assert context.get_backlinks("a.md") == ["c.md"]
    assert context.resolve_wikilink("b") is None
    assert context.get_backlinks("c.md") == []


def test_parse_file_reads_without_indexing(context: VaultContext, vault: Path) -> None:
    context.open(vault)
    _write(vault, "new.md", "---\ntitle: Fresh\n---\n[[a]]")

    parsed = context.parse_file("new.md")

    assert parsed.frontmatter == {"title": "Fresh"}
    assert parsed.links == ["a"]
    assert context.get_backlinks("a.md") == []


def test_reopen_replaces_previous_vault(context: VaultContext, vault: Path, tmp_path: Path) -> None:
    other = tmp_path / "other"
    _write(other, "solo.md", "no links")
    context.open(vault)

    context.open(other)

    assert context.get_note_names() == ["solo"]
    assert context.search_notes("alpha") == []


def test_close_discards_state(context: VaultContext, vault: Path) -> None:
    context.open(vault)

    context.close()

    assert not context.is_open
    assert context.get_note_names() == []
    assert context.search_index.document_count() == 0


def test_rebuild_picks_up_new_files(context: VaultContext, vault: Path) -> None:
    context.open(vault)
    _write(vault, "d.md", "[[a]]")

    stats = context.rebuild()

    assert stats.notes_indexed == 4
    assert context.get_backlinks("a.md") == ["d.md"]


def test_default_contexts_keep_separate_search_indexes(tmp_path: Path) -> None:
    first_vault = tmp_path / "v1"
    second_vault = tmp_path / "v2"
    _write(first_vault, "one.md", "alpha")
    _write(second_vault, "two.md", "beta")
    first = VaultContext(AppConfig())
    second = VaultContext(AppConfig())

    first.open(first_vault)
    second.open(second_vault)

    assert [result.path for result in first.search_notes("alpha")] == ["one.md"]
    assert first.search_notes("beta") == []

    second.close()

    assert first.search_index.document_count() == 1
    first.close()


def test_failed_reopen_keeps_previous_vault(
    context: VaultContext, vault: Path, tmp_path: Path, monkeypatch
) -> None:
    other = tmp_path / "other"
    _write(other, "solo.md", "no links")
    context.open(vault)

    def broken_clear() -> None:
        raise SearchIndexError("disk full")

    monkeypatch.setattr(context.search_index, "clear", broken_clear)

    with pytest.raises(SearchIndexError):
        context.open(other)

    assert context.vault_path == vault.resolve()
    assert context.resolve_wikilink("b") == "b.md"
    assert context.get_backlinks("b.md") == ["a.md"]
