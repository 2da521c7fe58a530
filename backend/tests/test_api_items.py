from fastapi.testclient import TestClient

from api.main import create_app
from domain.errors import StoreFailure
from domain.models import Book, Disc
from repositories.memory import InMemoryCounterStore, InMemoryItemStore


class SwitchableItemStore(InMemoryItemStore):
    def __init__(self, items=None):
        super().__init__(items)
        self.broken = False

    def upsert(self, item):
        if self.broken:
            raise StoreFailure("database is read-only")
        super().upsert(item)

    def delete(self, item):
        if self.broken:
            raise StoreFailure("database is read-only")
        super().delete(item)


def _client(items=None, counters=None, flush_on_shutdown=False):
    store = SwitchableItemStore(items)
    counter_store = InMemoryCounterStore(counters)
    app = create_app(item_store=store, counter_store=counter_store, flush_on_shutdown=flush_on_shutdown)
    return TestClient(app), store, counter_store


def test_create_and_fetch_item():
    client, store, counters = _client()
    with client:
        resp = client.post(
            "/items",
            json={"category": "book", "title": "Dune", "creator": "Frank Herbert", "detail": 412},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data == {
            "item_id": "B100001",
            "category": "book",
            "title": "Dune",
            "creator": "Frank Herbert",
            "detail_label": "Pages",
            "detail_value": 412,
        }

        resp = client.get("/items/B100001")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Dune"

    assert "B100001" in store.rows
    assert counters.counters == {"B1": 1}


def test_create_validation_and_category_errors():
    client, store, counters = _client()
    with client:
        resp = client.post("/items", json={"category": "book", "title": "Dune", "creator": "FH", "detail": 0})
        assert resp.status_code == 400
        assert "Pages" in resp.json()["detail"]

        resp = client.post("/items", json={"category": "comic", "title": "X", "creator": "Y", "detail": 1})
        assert resp.status_code == 400

        resp = client.post("/items", json={"category": "", "title": "X", "creator": "Y", "detail": 1})
        assert resp.status_code == 400

    assert store.rows == {}
    assert counters.counters == {}


def test_list_is_sorted_and_filterable():
    items = [
        Disc("D200001", "Inception", "Christopher Nolan", 148),
        Book("B100001", "Dune", "Frank Herbert", 412),
    ]
    client, _, _ = _client(items)
    with client:
        resp = client.get("/items")
        assert [i["item_id"] for i in resp.json()] == ["B100001", "D200001"]

        resp = client.get("/items", params={"category": "dvd"})
        assert [i["item_id"] for i in resp.json()] == ["D200001"]

        resp = client.get("/items", params={"category": "comic"})
        assert resp.status_code == 400


def test_patch_updates_fields():
    client, store, _ = _client([Book("B100001", "Dune", "Frank Herbert", 412)])
    with client:
        resp = client.patch("/items/B100001", json={"title": "Dune Messiah", "detail": "256"})
        assert resp.status_code == 200
        assert resp.json()["title"] == "Dune Messiah"
        assert resp.json()["detail_value"] == 256

        resp = client.patch("/items/B100001", json={"detail": -1})
        assert resp.status_code == 400

        resp = client.patch("/items/B199999", json={"title": "Nope"})
        assert resp.status_code == 404

    assert store.rows["B100001"].pages == 256


def test_delete_item():
    client, store, _ = _client([Book("B100001", "Dune", "Frank Herbert", 412)])
    with client:
        assert client.delete("/items/B100001").status_code == 204
        assert client.get("/items/B100001").status_code == 404
        assert client.delete("/items/B100001").status_code == 404
    assert store.rows == {}


def test_store_failure_maps_to_503_and_keeps_catalog():
    client, store, _ = _client([Book("B100001", "Dune", "Frank Herbert", 412)])
    with client:
        store.broken = True
        resp = client.patch("/items/B100001", json={"title": "Changed"})
        assert resp.status_code == 503
        assert client.delete("/items/B100001").status_code == 503

        resp = client.get("/items/B100001")
        assert resp.json()["title"] == "Dune"


def test_shutdown_flush_rewrites_items():
    client, store, _ = _client([Book("B100001", "Dune", "Frank Herbert", 412)], flush_on_shutdown=True)
    with client:
        store.rows.clear()
        assert client.get("/health").json() == {"status": "healthy", "items": 1}
    assert list(store.rows) == ["B100001"]
