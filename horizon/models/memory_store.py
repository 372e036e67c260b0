# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import copy
import itertools
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from horizon.models.document_store import (
    DocumentSnapshot,
    DocumentStore,
    SnapshotCallback,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


class _ServerTimestamp:
    def __repr__(self):
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0]


class InMemoryDocumentStore(DocumentStore):
    """
    Process-local document store with Firestore-like semantics.

    Used for local development (STORE_BACKEND=memory) and in tests.
    Listeners fire synchronously after every write to their collection.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._docs: Dict[str, Dict[str, Any]] = {}
        self._order: Dict[str, int] = {}
        self._seq = itertools.count()
        self._watchers: Dict[int, tuple] = {}
        self._watch_ids = itertools.count()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._last_ts: Optional[datetime] = None

    # ---------------------- helpers ----------------------

    def _timestamp(self) -> datetime:
        now = self._clock()
        # Keep server timestamps strictly increasing so ordering is stable
        if self._last_ts is not None and now <= self._last_ts:
            now = self._last_ts + timedelta(microseconds=1)
        self._last_ts = now
        return now

    def _resolve(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        resolved = copy.deepcopy({k: v for k, v in fields.items() if v is not SERVER_TIMESTAMP})
        for key, value in fields.items():
            if value is SERVER_TIMESTAMP:
                resolved[key] = self._timestamp()
        return resolved

    def _collection(self, collection_path: str) -> List[str]:
        paths = [p for p in self._docs if _parent(p) == collection_path]
        return sorted(paths, key=lambda p: self._order[p])

    def _snapshots(self, paths: List[str]) -> List[DocumentSnapshot]:
        return [
            DocumentSnapshot(id=p.rsplit("/", 1)[1], path=p, data=copy.deepcopy(self._docs[p]))
            for p in paths
        ]

    def _query(self, collection_path: str, order_by: str, descending: bool) -> List[DocumentSnapshot]:
        # Documents without the ordering field are left out, as Firestore does
        paths = [p for p in self._collection(collection_path) if self._docs[p].get(order_by) is not None]
        paths.sort(key=lambda p: (self._docs[p][order_by], self._order[p]), reverse=descending)
        return self._snapshots(paths)

    def _notify(self, collection_path: str):
        for watched, order_by, descending, callback in list(self._watchers.values()):
            if watched != collection_path:
                continue
            if order_by is None:
                callback(self._snapshots(self._collection(collection_path)))
            else:
                callback(self._query(collection_path, order_by, descending))

    def _watch(self, collection_path: str, order_by: Optional[str], descending: bool,
               callback: SnapshotCallback) -> Unsubscribe:
        watch_id = next(self._watch_ids)
        self._watchers[watch_id] = (collection_path, order_by, descending, callback)
        if order_by is None:
            callback(self._snapshots(self._collection(collection_path)))
        else:
            callback(self._query(collection_path, order_by, descending))

        def unsubscribe():
            self._watchers.pop(watch_id, None)

        return unsubscribe

    # ---------------------- DocumentStore ----------------------

    async def create(self, collection_path: str, fields: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        path = f"{collection_path}/{doc_id}"
        self._docs[path] = self._resolve(fields)
        self._order[path] = next(self._seq)
        self._notify(collection_path)
        return doc_id

    async def set_at_path(self, path: str, fields: Dict[str, Any]) -> None:
        if path not in self._order:
            self._order[path] = next(self._seq)
        self._docs[path] = self._resolve(fields)
        self._notify(_parent(path))

    async def get_at_path(self, path: str) -> Optional[Dict[str, Any]]:
        data = self._docs.get(path)
        return copy.deepcopy(data) if data is not None else None

    def subscribe_to_query(self, collection_path: str, order_by: str, callback: SnapshotCallback,
                           descending: bool = False) -> Unsubscribe:
        return self._watch(collection_path, order_by, descending, callback)

    def subscribe_to_collection(self, collection_path: str, callback: SnapshotCallback) -> Unsubscribe:
        return self._watch(collection_path, None, False, callback)

    async def delete_at_path(self, path: str) -> None:
        if self._docs.pop(path, None) is not None:
            self._order.pop(path, None)
            self._notify(_parent(path))

    async def batch_delete(self, paths: List[str]) -> None:
        touched = set()
        for path in paths:
            if self._docs.pop(path, None) is not None:
                self._order.pop(path, None)
                touched.add(_parent(path))
        for collection_path in touched:
            self._notify(collection_path)
        logger.debug(f"🗑️ Batch removed {len(paths)} documents")

    async def list_documents(self, collection_path: str) -> List[str]:
        return self._collection(collection_path)

    def server_timestamp(self) -> Any:
        return SERVER_TIMESTAMP
