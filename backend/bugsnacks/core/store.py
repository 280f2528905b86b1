"""
Document store access.

The API only needs get / set / update / delete / query-by-equality with an
optional order-by, so every backend is wrapped behind ``DocumentStore``:

- ``FirestoreDocumentStore``: Cloud Firestore via ``google.cloud.firestore.AsyncClient``
- ``InMemoryDocumentStore``: dict-backed, for local development and tests

Each single call is atomic; there are no cross-call transactions. Any failure
raised by the underlying client surfaces as ``StoreError``.

The store is created once at process start (``create_store``) and handed to
handlers through the ``get_store`` dependency.
"""
import copy
import secrets
import string
import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from fastapi import Request

from bugsnacks.core.config import Settings
from bugsnacks.core.exceptions import StoreError
from bugsnacks.core.logging_config import logger

# (document key, field map)
DocumentSnapshot = Tuple[str, Dict[str, Any]]

_AUTO_ID_ALPHABET = string.ascii_letters + string.digits
_AUTO_ID_LENGTH = 20


def generate_document_id() -> str:
    """20-character random key, same shape as Firestore auto-ids"""
    return "".join(secrets.choice(_AUTO_ID_ALPHABET) for _ in range(_AUTO_ID_LENGTH))


class DocumentStore(ABC):
    """Abstract async document store"""

    @abstractmethod
    def new_id(self, collection: str) -> str:
        """Generate a fresh document key without writing anything"""

    @abstractmethod
    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """Return the document's fields, or None when it does not exist"""

    @abstractmethod
    async def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        """Create or overwrite a document"""

    @abstractmethod
    async def update(self, collection: str, key: str, patch: Dict[str, Any]) -> None:
        """Merge fields into an existing document; fails if it does not exist"""

    @abstractmethod
    async def delete(self, collection: str, key: str) -> None:
        """Remove a document; deleting a missing document is not an error"""

    @abstractmethod
    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[DocumentSnapshot]:
        """Documents whose ``field`` equals ``value``, optionally ordered"""

    async def close(self) -> None:
        """Release client resources"""


@asynccontextmanager
async def _store_call(operation: str, collection: str) -> AsyncIterator[Dict[str, int]]:
    """Time a store call, log it, and wrap client failures in StoreError"""
    start = time.perf_counter()
    stats = {"documents": 0}
    try:
        yield stats
    except StoreError:
        raise
    except Exception as e:
        raise StoreError(operation, collection, f"{type(e).__name__}: {e}") from e
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.log_store_op(operation, collection, duration_ms, documents=stats["documents"])


class FirestoreDocumentStore(DocumentStore):
    """Cloud Firestore backend"""

    def __init__(
        self,
        project: Optional[str] = None,
        database: Optional[str] = None,
        client: Any = None,
    ):
        from google.cloud import firestore

        self._firestore = firestore
        self._client = client if client is not None else firestore.AsyncClient(project=project or None, database=database or None)

    def new_id(self, collection: str) -> str:
        return self._client.collection(collection).document().id

    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        async with _store_call("get", collection) as stats:
            snapshot = await self._client.collection(collection).document(key).get()
            if not snapshot.exists:
                return None
            stats["documents"] = 1
            return snapshot.to_dict()

    async def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        async with _store_call("set", collection) as stats:
            await self._client.collection(collection).document(key).set(data)
            stats["documents"] = 1

    async def update(self, collection: str, key: str, patch: Dict[str, Any]) -> None:
        async with _store_call("update", collection) as stats:
            await self._client.collection(collection).document(key).update(patch)
            stats["documents"] = 1

    async def delete(self, collection: str, key: str) -> None:
        async with _store_call("delete", collection) as stats:
            await self._client.collection(collection).document(key).delete()
            stats["documents"] = 1

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[DocumentSnapshot]:
        from google.cloud.firestore_v1.base_query import FieldFilter

        async with _store_call("query", collection) as stats:
            query = self._client.collection(collection).where(
                filter=FieldFilter(field, "==", value)
            )
            if order_by:
                direction = (
                    self._firestore.Query.DESCENDING if descending
                    else self._firestore.Query.ASCENDING
                )
                query = query.order_by(order_by, direction=direction)
            results = [(snapshot.id, snapshot.to_dict()) async for snapshot in query.stream()]
            stats["documents"] = len(results)
            return results

    async def close(self) -> None:
        # The gRPC channel only exists once the first call has been made
        api = getattr(self._client, "_firestore_api_internal", None)
        if api is not None:
            await api.transport.close()
            logger.info("Firestore client closed")


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store with Firestore-like semantics:
    - reads return copies, so callers never alias stored state
    - update() on a missing document fails
    - ordered queries skip documents that lack the order field
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def new_id(self, collection: str) -> str:
        docs = self._collections.get(collection, {})
        key = generate_document_id()
        while key in docs:
            key = generate_document_id()
        return key

    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        async with _store_call("get", collection) as stats:
            data = self._collections.get(collection, {}).get(key)
            if data is None:
                return None
            stats["documents"] = 1
            return copy.deepcopy(data)

    async def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        async with _store_call("set", collection) as stats:
            self._collections.setdefault(collection, {})[key] = copy.deepcopy(data)
            stats["documents"] = 1

    async def update(self, collection: str, key: str, patch: Dict[str, Any]) -> None:
        async with _store_call("update", collection) as stats:
            docs = self._collections.get(collection, {})
            if key not in docs:
                raise StoreError("update", collection, f"No document to update: {key}")
            docs[key].update(copy.deepcopy(patch))
            stats["documents"] = 1

    async def delete(self, collection: str, key: str) -> None:
        async with _store_call("delete", collection) as stats:
            if self._collections.get(collection, {}).pop(key, None) is not None:
                stats["documents"] = 1

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[DocumentSnapshot]:
        async with _store_call("query", collection) as stats:
            matches = [
                (key, copy.deepcopy(data))
                for key, data in self._collections.get(collection, {}).items()
                if field in data and data[field] == value
            ]
            if order_by:
                matches = [m for m in matches if order_by in m[1]]
                matches.sort(key=lambda m: m[1][order_by], reverse=descending)
            stats["documents"] = len(matches)
            return matches

    def clear(self) -> None:
        self._collections.clear()


def create_store(config: Settings) -> DocumentStore:
    """Build the process-wide store from settings"""
    backend = config.DOCUMENT_STORE.lower()
    if backend == "memory":
        logger.info("Using in-memory document store")
        return InMemoryDocumentStore()
    if backend == "firestore":
        logger.info(
            f"Using Firestore document store "
            f"(project={config.FIRESTORE_PROJECT_ID or 'default'}, database={config.FIRESTORE_DATABASE})"
        )
        return FirestoreDocumentStore(
            project=config.FIRESTORE_PROJECT_ID,
            database=config.FIRESTORE_DATABASE,
        )
    raise ValueError(f"Unknown DOCUMENT_STORE: {config.DOCUMENT_STORE!r}")


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency: the store created at startup"""
    return request.app.state.store
