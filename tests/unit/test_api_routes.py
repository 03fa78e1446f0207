from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from notegraph.api.main import create_app
from notegraph.services.config import AppConfig
from notegraph.services.workspace import VaultContext


def _write(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture()
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    _write(root, "index.md", "---\ntitle: Welcome\n---\nSee [[Design]] and [[Roadmap]] #start")
    _write(root, "docs/Design.md", "Architecture notes linking [[index]].")
    return root


@pytest.fixture()
def context(tmp_path: Path) -> VaultContext:
    ctx = VaultContext(AppConfig(index_db_path=tmp_path / "search.db"))
    yield ctx
    ctx.close()


@pytest.fixture()
def client(context: VaultContext) -> TestClient:
    return TestClient(create_app(context))


@pytest.fixture()
def opened(client: TestClient, vault: Path) -> TestClient:
    response = client.post("/api/vault/open", json={"path": str(vault)})
    assert response.status_code == 200
    return client


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "vault_open": False, "notes": 0}


def test_open_vault_returns_config(client: TestClient, vault: Path) -> None:
    response = client.post("/api/vault/open", json={"path": str(vault)})

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "vault"
    assert data["is_git_repo"] is False


def test_open_missing_vault_is_bad_request(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/api/vault/open", json={"path": str(tmp_path / "missing")})

    assert response.status_code == 400
    assert response.json()["error"] == "vault_error"


def test_backlinks_and_names(opened: TestClient) -> None:
    assert opened.get("/api/backlinks/docs/Design.md").json() == ["index.md"]
    assert opened.get("/api/backlinks/index.md").json() == ["docs/Design.md"]
    assert opened.get("/api/notes/names").json() == ["Design", "index"]


def test_resolve_wikilink(opened: TestClient) -> None:
    found = opened.get("/api/notes/resolve", params={"name": "Design"}).json()
    dangling = opened.get("/api/notes/resolve", params={"name": "Roadmap"}).json()

    assert found == {"name": "Design", "path": "docs/Design.md"}
    assert dangling == {"name": "Roadmap", "path": None}


def test_parsed_note(opened: TestClient) -> None:
    response = opened.get("/api/notes/parsed/index.md")

    assert response.status_code == 200
    assert response.json() == {
        "links": ["Design", "Roadmap"],
        "tags": ["start"],
        "frontmatter": {"title": "Welcome"},
    }


def test_parsed_note_missing_is_not_found(opened: TestClient) -> None:
    response = opened.get("/api/notes/parsed/nope.md")

    assert response.status_code == 404
    assert response.json()["error"] == "note_not_found"


def test_graph_data(opened: TestClient) -> None:
    data = opened.get("/api/graph").json()

    nodes = {node["id"]: node for node in data["nodes"]}
    assert set(nodes) == {"index", "Design", "Roadmap"}
    assert nodes["Roadmap"]["path"] == "Roadmap.md"
    assert nodes["Design"]["backlink_count"] == 1
    assert {(edge["source"], edge["target"]) for edge in data["edges"]} == {
        ("index", "Design"),
        ("index", "Roadmap"),
        ("Design", "index"),
    }


def test_local_graph(opened: TestClient) -> None:
    center_only = opened.get("/api/graph/local/index.md", params={"depth": 0}).json()
    neighborhood = opened.get("/api/graph/local/index.md").json()

    assert [node["id"] for node in center_only["nodes"]] == ["index"]
    assert center_only["edges"] == []
    assert {node["id"] for node in neighborhood["nodes"]} == {"index", "Design", "Roadmap"}


def test_local_graph_rejects_negative_depth(opened: TestClient) -> None:
    response = opened.get("/api/graph/local/index.md", params={"depth": -1})

    assert response.status_code == 400


def test_search(opened: TestClient) -> None:
    results = opened.get("/api/search", params={"q": "architecture"}).json()

    assert [result["path"] for result in results] == ["docs/Design.md"]
    assert results[0]["title"] == "Design"


def test_search_rejects_symbol_only_query(opened: TestClient) -> None:
    response = opened.get("/api/search", params={"q": "&&"})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"


def test_reindex_and_remove(opened: TestClient, vault: Path) -> None:
    _write(vault, "Roadmap.md", "Plans referencing [[Design]]")

    reindexed = opened.post("/api/index/reindex", json={"path": "Roadmap.md"})
    removed = opened.post("/api/index/remove", json={"path": "index.md"})

    assert reindexed.json() == {"status": "indexed", "path": "Roadmap.md"}
    assert removed.json() == {"status": "removed", "path": "index.md"}
    assert opened.get("/api/backlinks/docs/Design.md").json() == ["Roadmap.md"]


def test_reindex_missing_note_is_not_found(opened: TestClient) -> None:
    response = opened.post("/api/index/reindex", json={"path": "ghost.md"})

    assert response.status_code == 404


def test_reindex_without_vault_is_conflict(client: TestClient) -> None:
    response = client.post("/api/index/reindex", json={"path": "index.md"})

    assert response.status_code == 409
    assert response.json()["error"] == "vault_not_open"


def test_rebuild_and_close(opened: TestClient) -> None:
    stats = opened.post("/api/index/rebuild").json()
    closed = opened.post("/api/vault/close").json()

    assert stats["notes_indexed"] == 2
    assert closed == {"status": "closed"}
    assert opened.get("/api/notes/names").json() == []
