"""
Entity Repository - typed access to one collection of the document store

Routers never touch raw documents: records go through the entity's
``DocumentConverter`` on the way in and out.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Tuple, Type

from bugsnacks.core.collections import (
    COLLECTION_BUG_REPORTS,
    COLLECTION_PROJECTS,
    COLLECTION_TEST_REQUESTS,
    COLLECTION_USERS,
)
from bugsnacks.core.converter import DocumentConverter, RecordT, converter_for
from bugsnacks.core.store import DocumentStore
from bugsnacks.models.records import BugReport, Project, TestRequest, User


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntityRepository(Generic[RecordT]):
    """
    CRUD plus equality queries for a single entity type.

    Existence checks followed by update/delete are not transactional: a
    concurrent delete between the read and the write is possible, and
    concurrent patches are last-write-wins.
    """

    def __init__(self, store: DocumentStore, model: Type[RecordT], collection: str):
        self.store = store
        self.model = model
        self.collection = collection
        self.converter: DocumentConverter[RecordT] = converter_for(model)

    @property
    def id_field(self) -> str:
        return self.converter.id_field

    def new_id(self) -> str:
        return self.store.new_id(self.collection)

    async def create(self, record: RecordT) -> str:
        key = record.model_dump(by_alias=True)[self.id_field]
        await self.store.set(self.collection, key, self.converter.to_store(record))
        return key

    async def get(self, key: str) -> Optional[RecordT]:
        data = await self.store.get(self.collection, key)
        if data is None:
            return None
        return self.converter.from_store(data, key)

    async def exists(self, key: str) -> bool:
        return await self.store.get(self.collection, key) is not None

    async def update(self, key: str, patch: Dict[str, Any]) -> None:
        """Blind merge of wire-named fields; an empty patch writes nothing"""
        data = self.converter.patch_to_store(patch)
        if data:
            await self.store.update(self.collection, key, data)

    async def delete(self, key: str) -> None:
        await self.store.delete(self.collection, key)

    async def find_by(
        self,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Tuple[str, RecordT]]:
        matches = await self.store.query(
            self.collection, field, value, order_by=order_by, descending=descending
        )
        return [(key, self.converter.from_store(data, key)) for key, data in matches]


def with_id(key: str, record: RecordT) -> Dict[str, Any]:
    """JSON-ready record annotated with its document key as ``id``"""
    return {"id": key, **record.model_dump(mode="json", by_alias=True, exclude_none=True)}


def users_repo(store: DocumentStore) -> EntityRepository[User]:
    return EntityRepository(store, User, COLLECTION_USERS)


def projects_repo(store: DocumentStore) -> EntityRepository[Project]:
    return EntityRepository(store, Project, COLLECTION_PROJECTS)


def requests_repo(store: DocumentStore) -> EntityRepository[TestRequest]:
    return EntityRepository(store, TestRequest, COLLECTION_TEST_REQUESTS)


def bugs_repo(store: DocumentStore) -> EntityRepository[BugReport]:
    return EntityRepository(store, BugReport, COLLECTION_BUG_REPORTS)
