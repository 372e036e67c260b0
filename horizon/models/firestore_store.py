# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
import logging
from typing import Any, Dict, List, Optional

from firebase_admin import firestore
from more_itertools import chunked

from horizon.models.document_store import (
    DocumentSnapshot,
    DocumentStore,
    SnapshotCallback,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

# Firestore rejects batches larger than this
MAX_BATCH_WRITES = 500


class FirestoreDocumentStore(DocumentStore):
    """
    Cloud Firestore backend.

    The admin client is synchronous, so every call runs in a worker thread.
    Snapshot listeners fire on Firestore's own thread and are handed back
    to the event loop that subscribed.
    """

    def __init__(self, client=None):
        self._db = client or firestore.client()

    async def create(self, collection_path: str, fields: Dict[str, Any]) -> str:
        _, ref = await asyncio.to_thread(self._db.collection(collection_path).add, fields)
        return ref.id

    async def set_at_path(self, path: str, fields: Dict[str, Any]) -> None:
        await asyncio.to_thread(self._db.document(path).set, fields)

    async def get_at_path(self, path: str) -> Optional[Dict[str, Any]]:
        snap = await asyncio.to_thread(self._db.document(path).get)
        return snap.to_dict() if snap.exists else None

    def _listen(self, target, callback: SnapshotCallback) -> Unsubscribe:
        loop = asyncio.get_running_loop()

        def on_snapshot(docs, changes, read_time):
            snapshots = [
                DocumentSnapshot(id=doc.id, path=doc.reference.path, data=doc.to_dict() or {})
                for doc in docs
            ]
            loop.call_soon_threadsafe(callback, snapshots)

        watch = target.on_snapshot(on_snapshot)
        return watch.unsubscribe

    def subscribe_to_query(self, collection_path: str, order_by: str, callback: SnapshotCallback,
                           descending: bool = False) -> Unsubscribe:
        direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
        query = self._db.collection(collection_path).order_by(order_by, direction=direction)
        return self._listen(query, callback)

    def subscribe_to_collection(self, collection_path: str, callback: SnapshotCallback) -> Unsubscribe:
        return self._listen(self._db.collection(collection_path), callback)

    async def delete_at_path(self, path: str) -> None:
        await asyncio.to_thread(self._db.document(path).delete)

    async def batch_delete(self, paths: List[str]) -> None:
        def commit_all():
            for group in chunked(paths, MAX_BATCH_WRITES):
                batch = self._db.batch()
                for path in group:
                    batch.delete(self._db.document(path))
                batch.commit()

        await asyncio.to_thread(commit_all)
        logger.info(f"🗑️ Batch deleted {len(paths)} documents")

    async def list_documents(self, collection_path: str) -> List[str]:
        def collect():
            return [doc.reference.path for doc in self._db.collection(collection_path).stream()]

        return await asyncio.to_thread(collect)

    def server_timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP
