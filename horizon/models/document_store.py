# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class DocumentSnapshot:
    id: str
    path: str
    data: Dict[str, Any] = field(default_factory=dict)


SnapshotCallback = Callable[[List[DocumentSnapshot]], None]


class DocumentStore:
    """
    Interface of the managed document database.

    Writes and reads are coroutines. Subscriptions are registered
    synchronously and hand back an unsubscribe callable; callbacks always
    run on the event loop that registered them.
    """

    async def create(self, collection_path: str, fields: Dict[str, Any]) -> str:
        raise NotImplementedError

    async def set_at_path(self, path: str, fields: Dict[str, Any]) -> None:
        raise NotImplementedError

    async def get_at_path(self, path: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def subscribe_to_query(
        self,
        collection_path: str,
        order_by: str,
        callback: SnapshotCallback,
        descending: bool = False,
    ) -> Unsubscribe:
        raise NotImplementedError

    def subscribe_to_collection(self, collection_path: str, callback: SnapshotCallback) -> Unsubscribe:
        raise NotImplementedError

    async def delete_at_path(self, path: str) -> None:
        raise NotImplementedError

    async def batch_delete(self, paths: List[str]) -> None:
        raise NotImplementedError

    async def list_documents(self, collection_path: str) -> List[str]:
        raise NotImplementedError

    def server_timestamp(self) -> Any:
        raise NotImplementedError


class SnapshotStream:
    """
    Lazy, restartable async iteration over a live subscription.

    Each ``async for`` opens its own subscription, and leaving the loop
    (break, cancellation or error) always unsubscribes.
    """

    def __init__(self, subscribe: Callable[[SnapshotCallback], Unsubscribe]):
        self._subscribe = subscribe

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        queue: "asyncio.Queue[List[DocumentSnapshot]]" = asyncio.Queue()
        unsubscribe = self._subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()


def query_stream(
    store: DocumentStore, collection_path: str, order_by: str, descending: bool = False
) -> SnapshotStream:
    return SnapshotStream(
        lambda callback: store.subscribe_to_query(collection_path, order_by, callback, descending=descending)
    )
