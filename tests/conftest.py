import itertools

import pytest

from safeway.app import create_app
from safeway.errors import LocationNotFound
from safeway.models.types import Coordinate


class MemoryStore:
    """In-memory stand-in for FirestoreStore with the same method surface."""

    def __init__(self):
        self.collections = {}
        self._ids = itertools.count(1)
        self._ticks = itertools.count(1)

    def _col(self, collection):
        return self.collections.setdefault(collection, {})

    def _stamp(self):
        return f"2026-10-19T00:00:00.{next(self._ticks):06d}+00:00"

    def add(self, collection, data):
        doc_id = f"doc{next(self._ids)}"
        self._col(collection)[doc_id] = {**data, "createdAt": data.get("createdAt") or self._stamp()}
        return doc_id

    def get(self, collection, doc_id):
        doc = self._col(collection).get(doc_id)
        return None if doc is None else {**doc, "id": doc_id}

    def set(self, collection, doc_id, data, merge=False):
        col = self._col(collection)
        col[doc_id] = {**col.get(doc_id, {}), **data} if merge else dict(data)

    def update(self, collection, doc_id, data):
        self._col(collection)[doc_id].update(data)

    def delete(self, collection, doc_id):
        self._col(collection).pop(doc_id, None)

    def increment(self, collection, doc_id, field, amount=1):
        doc = self._col(collection)[doc_id]
        doc[field] = doc.get(field, 0) + amount

    def list(self, collection, where=None, order_by=None, descending=False, limit=None):
        docs = [{**d, "id": k} for k, d in self._col(collection).items()]
        for field, op, value in (where or []):
            assert op == "=="
            docs = [d for d in docs if d.get(field) == value]
        if order_by:
            docs.sort(key=lambda d: d.get(order_by) or "", reverse=descending)
        return docs[:limit] if limit else docs

    def delete_where(self, collection, field, value):
        col = self._col(collection)
        doomed = [k for k, d in col.items() if d.get(field) == value]
        for k in doomed:
            del col[k]
        return len(doomed)


CITY_HALL_PATH = [
    Coordinate(37.5668, 126.9790),
    Coordinate(37.5669, 126.9791),
    Coordinate(37.5670, 126.9792),
]


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def cctvs():
    return []


@pytest.fixture
def app(store, cctvs):
    def geocoder(query):
        known = {"서울시청": Coordinate(37.5665, 126.9780), "광화문": Coordinate(37.5759, 126.9769)}
        if query not in known:
            raise LocationNotFound(query)
        return known[query]

    app = create_app(store=store, cctv_source=lambda: list(cctvs), geocoder=geocoder)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
