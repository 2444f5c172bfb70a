"""
Key-value store holding every collection as one JSON document per key.

Two backends:
- FirestoreKVStore: one Firestore document per key in settings.KV_COLLECTION,
  value serialized as JSON text. update() runs inside a Firestore transaction.
- MemoryKVStore: process-local dict, used for local development and tests.
  update() is serialized with a per-key asyncio.Lock.

update(key, mutator, default) is the only read-modify-write entry point:
the mutator receives the current value (or a fresh copy of default) and
returns (new_value, result). It may be called more than once when Firestore
retries a contended transaction, so it must only work on its argument.
Returning None as the new value leaves the key untouched.
"""

import asyncio
import copy
import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..core.config import settings
from ..core.firebase_init import initialize_firebase, is_firebase_available

logger = logging.getLogger(__name__)

Mutator = Callable[[Any], Tuple[Any, Any]]


class KVStore:
    """Contract shared by the KV backends"""

    async def get(self, key: str) -> Any:
        raise NotImplementedError

    async def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def get_by_prefix(self, prefix: str) -> List[Any]:
        raise NotImplementedError

    async def update(self, key: str, mutator: Mutator, default: Any = None) -> Any:
        raise NotImplementedError

    async def mget(self, keys: Iterable[str]) -> List[Any]:
        return [await self.get(k) for k in keys]

    async def mset(self, mapping: Dict[str, Any]) -> None:
        for k, v in mapping.items():
            await self.set(k, v)

    async def mdel(self, keys: Iterable[str]) -> None:
        for k in keys:
            await self.delete(k)


class MemoryKVStore(KVStore):
    def __init__(self):
        self._data: Dict[str, str] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    async def get(self, key: str) -> Any:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def get_by_prefix(self, prefix: str) -> List[Any]:
        return [json.loads(v) for k, v in sorted(self._data.items()) if k.startswith(prefix)]

    async def update(self, key: str, mutator: Mutator, default: Any = None) -> Any:
        async with self._lock(key):
            current = await self.get(key)
            if current is None:
                current = copy.deepcopy(default)
            new_value, result = mutator(current)
            if new_value is not None:
                await self.set(key, new_value)
            return result

    def clear(self):
        self._data.clear()


class FirestoreKVStore(KVStore):
    def __init__(self, collection_name: str):
        self.collection_name = collection_name
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not is_firebase_available() and not initialize_firebase():
                raise RuntimeError("Firebase initialization failed - KV store not available")
            from firebase_admin import firestore
            self._client = firestore.client()
        return self._client

    def _ref(self, key: str):
        return self.client.collection(self.collection_name).document(key)

    @staticmethod
    def _encode(key: str, value: Any) -> Dict[str, Any]:
        return {"key": key, "value": json.dumps(value)}

    @staticmethod
    def _decode(snapshot) -> Any:
        data = snapshot.to_dict() or {}
        raw = data.get("value")
        return json.loads(raw) if raw is not None else None

    async def get(self, key: str) -> Any:
        snapshot = self._ref(key).get()
        if not snapshot.exists:
            return None
        return self._decode(snapshot)

    async def set(self, key: str, value: Any) -> None:
        self._ref(key).set(self._encode(key, value))

    async def delete(self, key: str) -> None:
        self._ref(key).delete()

    async def get_by_prefix(self, prefix: str) -> List[Any]:
        from google.cloud.firestore_v1.base_query import FieldFilter

        query = (
            self.client.collection(self.collection_name)
            .where(filter=FieldFilter("key", ">=", prefix))
            .where(filter=FieldFilter("key", "<", prefix + "\uf8ff"))
        )
        return [self._decode(doc) for doc in query.stream()]

    async def update(self, key: str, mutator: Mutator, default: Any = None) -> Any:
        from firebase_admin import firestore

        ref = self._ref(key)

        @firestore.transactional
        def _txn(transaction):
            snapshot = ref.get(transaction=transaction)
            current = self._decode(snapshot) if snapshot.exists else None
            if current is None:
                current = copy.deepcopy(default)
            new_value, result = mutator(current)
            if new_value is not None:
                transaction.set(ref, self._encode(key, new_value))
            return result

        return _txn(self.client.transaction())


_kv_store: Optional[KVStore] = None


def get_kv_store() -> KVStore:
    """Process-wide store selected by settings.KV_BACKEND"""
    global _kv_store
    if _kv_store is None:
        if settings.KV_BACKEND == "memory":
            logger.info("Using in-memory KV store")
            _kv_store = MemoryKVStore()
        else:
            logger.info(f"Using Firestore KV store (collection '{settings.KV_COLLECTION}')")
            _kv_store = FirestoreKVStore(settings.KV_COLLECTION)
    return _kv_store


kv_store = get_kv_store()
