"""In-memory document store for studio session state."""
from copy import deepcopy
from uuid import uuid4
from threading import Lock
from typing import Dict, Any, Optional, List

from utils.logger import get_logger

logger = get_logger("database")


class InMemoryStore:
    """A tiny thread-safe in-memory document store.

    - Collections: arbitrary string keys (e.g. 'sessions')
    - Each collection is a dict of id -> document
    - Documents are plain dicts; insert_one assigns an 'id' when missing
    - Reads and writes hand out deep copies, so callers never share state
    - Nothing is written to disk; evict() bounds what stays in memory
    """

    def __init__(self):
        self._lock = Lock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        # Caller must hold the lock
        return self._collections.setdefault(name, {})

    def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a document into a collection."""
        doc = deepcopy(document)
        if "id" not in doc:
            doc["id"] = str(uuid4())
        with self._lock:
            self._collection(collection)[doc["id"]] = doc
            return deepcopy(doc)

    def find_one(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a document by id."""
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            return deepcopy(doc) if doc is not None else None

    def update_one(self, collection: str, doc_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a shallow patch to a document and return the updated copy."""
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            if doc is None:
                raise KeyError("document not found")
            doc.update(deepcopy(patch))
            return deepcopy(doc)

    def append_to(
        self,
        collection: str,
        doc_id: str,
        field: str,
        item: Any,
        patch: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Append item to a list field (and apply patch) in one locked step."""
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            if doc is None:
                raise KeyError("document not found")
            doc.setdefault(field, []).append(deepcopy(item))
            if patch:
                doc.update(deepcopy(patch))
            return deepcopy(doc)

    def delete_one(self, collection: str, doc_id: str) -> Dict[str, Any]:
        """Remove a document by id and return it."""
        with self._lock:
            removed = self._collection(collection).pop(doc_id, None)
        if removed is None:
            raise KeyError("document not found")
        logger.debug(f"Deleted {doc_id} from {collection}")
        return removed

    def evict(self, collection: str, stale_before: str, max_docs: int, key: str = "updated_at") -> List[str]:
        """
        Drop documents whose `key` sorts before stale_before, then the oldest
        by `key` until at most max_docs remain.

        Returns:
            Ids of the evicted documents
        """
        with self._lock:
            docs = self._collection(collection)
            evicted = [doc_id for doc_id, doc in docs.items() if doc.get(key, "") < stale_before]
            for doc_id in evicted:
                del docs[doc_id]

            overflow = len(docs) - max(max_docs, 0)
            if overflow > 0:
                oldest = sorted(docs, key=lambda doc_id: docs[doc_id].get(key, ""))[:overflow]
                for doc_id in oldest:
                    del docs[doc_id]
                evicted.extend(oldest)

        if evicted:
            logger.info(f"Evicted {len(evicted)} document(s) from {collection}")
        return evicted

    def count(self, collection: str) -> int:
        with self._lock:
            return len(self._collection(collection))


db = InMemoryStore()
