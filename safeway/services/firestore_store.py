# services/firestore_store.py
"""
Thin document-store facade over Firestore.

Collections are addressed by slash-separated paths, e.g.
"users/<uid>/emergency_contacts". Documents come back as plain dicts with the
document id under "id". Timestamps are written as ISO-8601 UTC strings so they
sort lexicographically and serialize to JSON unchanged.

The Firebase Admin app is initialized lazily on first use so that importing
the package (tests, scripts) never needs credentials.
"""

import datetime
import logging

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as gexc

from safeway.config import FIREBASE_KEY_PATH
from safeway.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def init_firebase():
    """Initialize the default Firebase Admin app once per process."""
    if not firebase_admin._apps:
        cred = credentials.Certificate(FIREBASE_KEY_PATH)
        firebase_admin.initialize_app(cred)
        logger.info("Firebase Admin initialized from %s", FIREBASE_KEY_PATH)
    return firebase_admin.get_app()


def utc_now_iso():
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def _doc_to_dict(snapshot):
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return data


class FirestoreStore:
    """Document store backed by Cloud Firestore."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            init_firebase()
            self._client = firestore.client()
        return self._client

    def _run(self, what, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (gexc.GoogleAPICallError, gexc.RetryError) as e:
            logger.error("Firestore %s failed: %s", what, e)
            raise StoreUnavailable(f"Firestore {what} failed: {e}") from e

    def add(self, collection, data):
        payload = {**data, "createdAt": data.get("createdAt") or utc_now_iso()}
        _, ref = self._run("add", self.client.collection(collection).add, payload)
        return ref.id

    def get(self, collection, doc_id):
        snap = self._run("get", self.client.collection(collection).document(doc_id).get)
        if not snap.exists:
            return None
        return _doc_to_dict(snap)

    def set(self, collection, doc_id, data, merge=False):
        ref = self.client.collection(collection).document(doc_id)
        self._run("set", ref.set, data, merge=merge)

    def update(self, collection, doc_id, data):
        ref = self.client.collection(collection).document(doc_id)
        self._run("update", ref.update, {**data, "updatedAt": utc_now_iso()})

    def delete(self, collection, doc_id):
        ref = self.client.collection(collection).document(doc_id)
        self._run("delete", ref.delete)

    def increment(self, collection, doc_id, field, amount=1):
        ref = self.client.collection(collection).document(doc_id)
        self._run("increment", ref.update, {field: firestore.Increment(amount)})

    def list(self, collection, where=None, order_by=None, descending=False, limit=None):
        """Return documents of `collection`.

        where: optional list of (field, op, value) filters.
        """
        query = self.client.collection(collection)
        for field, op, value in (where or []):
            query = query.where(filter=firestore.FieldFilter(field, op, value))
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit:
            query = query.limit(limit)
        return [_doc_to_dict(s) for s in self._run("query", query.stream)]

    def delete_where(self, collection, field, value):
        """Delete every document whose `field` equals `value`; returns the count."""
        batch = self.client.batch()
        count = 0
        for snap in self._run("query", self.client.collection(collection).where(
                filter=firestore.FieldFilter(field, "==", value)).stream):
            batch.delete(snap.reference)
            count += 1
        if count:
            self._run("batch delete", batch.commit)
        return count

    def add_many(self, collection, rows, batch_size=400):
        """Bulk insert with batched writes (Firestore caps a batch at 500)."""
        written = 0
        col = self.client.collection(collection)
        batch = self.client.batch()
        pending = 0
        for row in rows:
            batch.set(col.document(), row)
            pending += 1
            if pending >= batch_size:
                self._run("batch write", batch.commit)
                written += pending
                batch = self.client.batch()
                pending = 0
        if pending:
            self._run("batch write", batch.commit)
            written += pending
        return written
