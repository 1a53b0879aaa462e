"""Tests router FastAPI /email-builder — TestClient + DB SQLite temporaire."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from email_builder import database as store
from email_builder.database import get_db
from email_builder.router import router


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client(tmp_path):
    """Client de test avec DB SQLite temporaire."""
    engine = store.make_engine(str(tmp_path / "test.db"))
    store.init_db(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c


def _put_document(client, blocks):
    r = client.put("/email-builder/document", json={"blocks": blocks})
    assert r.status_code == 200
    return r.json()


# ── Sans état ─────────────────────────────────────────────────────────────

def test_render(client):
    r = client.post("/email-builder/render", json={"blocks": [{"block_type": "text", "content": "Bonjour"}]})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "Bonjour" in r.text


def test_validate(client):
    ok = client.post("/email-builder/validate", json={"blocks": []}).json()
    assert ok == {"valid": True}
    bad = client.post("/email-builder/validate", json={"blocks": [{"block_type": "marquee"}]}).json()
    assert bad["valid"] is False
    assert "error" in bad


def test_catalog(client):
    data = client.get("/email-builder/catalog").json()
    types = [b["block_type"] for b in data["blocks"]]
    assert "calendar" in types and "layout" in types
    assert any(p["kind"] == "two-column" and p["is_layout"] for p in data["palette"])


def test_new_block(client):
    r = client.post("/email-builder/blocks/button", json={"text": "Go"})
    assert r.status_code == 200
    assert r.json()["text"] == "Go"
    assert client.post("/email-builder/blocks/three-column").json()["column_count"] == 3


def test_new_block_errors(client):
    assert client.post("/email-builder/blocks/carousel").status_code == 400
    assert client.post("/email-builder/blocks/image", json={"width": 500}).status_code == 422


def test_duplicate(client):
    block = client.post("/email-builder/blocks/social").json()
    clone = client.post("/email-builder/duplicate", json=block).json()
    assert clone["id"] != block["id"]
    assert {l["id"] for l in clone["links"]}.isdisjoint({l["id"] for l in block["links"]})


def test_calendar(client):
    r = client.post("/email-builder/calendar", json={
        "block_type": "calendar", "id": "cal_1",
        "start": "2024-01-01T10:00:00", "end": "2024-01-01T11:00:00",
    })
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/calendar")
    assert "DTSTART:20240101T100000Z" in r.text
    assert "DTEND:20240101T110000Z" in r.text


# ── Document courant ──────────────────────────────────────────────────────

def test_document_round_trip(client):
    assert client.get("/email-builder/document").json()["blocks"] == []
    _put_document(client, [{"block_type": "text", "id": "t1", "content": "Salut"}])
    assert client.get("/email-builder/document").json()["blocks"][0]["content"] == "Salut"
    assert "Salut" in client.get("/email-builder/document/html").text


def test_put_invalid_document(client):
    r = client.put("/email-builder/document", json={"blocks": [{"block_type": "nope"}]})
    assert r.status_code == 400


def test_patch_and_delete_block(client):
    _put_document(client, [{"block_type": "text", "id": "t1"}, {"block_type": "spacer", "id": "s1"}])
    r = client.patch("/email-builder/document/blocks/t1", json={"content": "Modifié"})
    assert r.status_code == 200
    assert r.json()["blocks"][0]["content"] == "Modifié"
    r = client.delete("/email-builder/document/blocks/s1")
    assert [b["id"] for b in r.json()["blocks"]] == ["t1"]


def test_patch_unknown_field_422(client):
    _put_document(client, [{"block_type": "text", "id": "t1"}])
    r = client.patch("/email-builder/document/blocks/t1", json={"colour": "#ff0000"})
    assert r.status_code == 422


def test_move_block(client):
    _put_document(client, [
        {"block_type": "text", "id": "t1"},
        {"block_type": "spacer", "id": "s1"},
        {"block_type": "layout", "id": "l1"},
    ])
    r = client.post("/email-builder/document/blocks/t1/move", json={"location": {"kind": "root", "index": 1}})
    assert r.status_code == 200
    assert [b["id"] for b in r.json()["blocks"]] == ["s1", "t1", "l1"]

    r = client.post("/email-builder/document/blocks/s1/move", json={
        "location": {"kind": "column", "layout_id": "l1", "column_index": 1},
    })
    blocks = r.json()["blocks"]
    assert [b["id"] for b in blocks] == ["t1", "l1"]
    assert blocks[1]["columns"][1]["components"][0]["id"] == "s1"


def test_move_block_errors(client):
    _put_document(client, [{"block_type": "text", "id": "t1"}])
    root = {"location": {"kind": "root", "index": 0}}
    assert client.post("/email-builder/document/blocks/nope/move", json=root).status_code == 404
    missing_layout = {"location": {"kind": "column", "layout_id": "nope", "column_index": 0}}
    assert client.post("/email-builder/document/blocks/t1/move", json=missing_layout).status_code == 404
    assert client.post("/email-builder/document/blocks/t1/move", json={"location": {"kind": "x"}}).status_code == 422


def test_duplicate_persisted_block(client):
    _put_document(client, [{"block_type": "text", "id": "t1", "content": "Copie"}, {"block_type": "spacer", "id": "s1"}])
    r = client.post("/email-builder/document/blocks/t1/duplicate")
    assert r.status_code == 200
    blocks = r.json()["blocks"]
    assert len(blocks) == 3
    assert blocks[0]["id"] == "t1" and blocks[2]["id"] == "s1"
    assert blocks[1]["content"] == "Copie" and blocks[1]["id"] != "t1"
    assert client.post("/email-builder/document/blocks/nope/duplicate").status_code == 404


def test_missing_block_404(client):
    assert client.patch("/email-builder/document/blocks/nope", json={"content": "x"}).status_code == 404
    assert client.delete("/email-builder/document/blocks/nope").status_code == 404


def test_locked_block_409(client):
    _put_document(client, [{"block_type": "text", "id": "t1"}])
    assert client.post("/email-builder/document/blocks/t1/lock").status_code == 200
    assert client.patch("/email-builder/document/blocks/t1", json={"content": "x"}).status_code == 409
    assert client.delete("/email-builder/document/blocks/t1").status_code == 409
    client.post("/email-builder/document/blocks/t1/unlock")
    assert client.delete("/email-builder/document/blocks/t1").status_code == 200


# ── Favoris / templates ───────────────────────────────────────────────────

def test_favorites(client):
    block = client.post("/email-builder/blocks/text").json()
    r = client.post("/email-builder/favorites", json={"name": "Intro", "block": block})
    assert r.status_code == 201
    fav = r.json()
    assert fav["block"]["id"] != block["id"]
    assert [f["name"] for f in client.get("/email-builder/favorites").json()] == ["Intro"]
    assert client.delete(f"/email-builder/favorites/{fav['id']}").status_code == 200
    assert client.delete(f"/email-builder/favorites/{fav['id']}").status_code == 404


def test_templates_apply(client):
    _put_document(client, [{"block_type": "text", "id": "t1", "content": "Modèle"}])
    tpl = client.post("/email-builder/templates", json={"name": "Base"}).json()
    _put_document(client, [])

    doc = client.post(f"/email-builder/templates/{tpl['id']}/apply").json()
    assert doc["blocks"][0]["content"] == "Modèle"
    assert doc["blocks"][0]["id"] != "t1"
    assert client.post("/email-builder/templates/nope/apply").status_code == 404


# ── Sauvegarde / palette ──────────────────────────────────────────────────

def test_backup_export_import(client):
    _put_document(client, [{"block_type": "emoji", "id": "e1"}])
    client.put("/email-builder/palette", json=["emoji"])
    exported = client.get("/email-builder/backup").json()
    assert exported["document"]["blocks"][0]["id"] == "e1"
    assert exported["palette_order"][0] == "emoji"

    _put_document(client, [])
    r = client.post("/email-builder/backup", json=exported)
    assert r.status_code == 200
    assert r.json()["blocks"] == 1
    assert client.get("/email-builder/document").json()["blocks"][0]["id"] == "e1"


def test_backup_invalid(client):
    assert client.post("/email-builder/backup", json={"version": 42}).status_code == 400


def test_palette(client):
    order = client.get("/email-builder/palette").json()
    assert order[0] == "text"
    saved = client.put("/email-builder/palette", json=["logo", "text"]).json()
    assert saved[:2] == ["logo", "text"]


def test_duplicate_invalid_block(client):
    assert client.post("/email-builder/duplicate", json={"block_type": "marquee"}).status_code == 400
