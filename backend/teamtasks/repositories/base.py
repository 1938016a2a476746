"""
Base Repository Pattern

Provides a generic, type-safe base class for all repositories.
Writes that carry a precondition raise ConditionalWriteError when the
precondition does not hold; services decide what that means to the caller.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from teamtasks.core.metrics import track_db_operation

# Type variable for the model class
T = TypeVar("T", bound=BaseModel)


class ConditionalWriteError(Exception):
    """A write precondition (item must / must not exist, field unchanged) failed."""


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        T: The Pydantic model class this repository manages

    Usage:
        class TaskRepository(BaseRepository[Task]):
            collection_name = "tasks"
            model_class = Task
    """

    # Subclasses must define these
    collection_name: str
    model_class: Type[T]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _to_model(self, data: Optional[Dict[str, Any]]) -> Optional[T]:
        """Convert a raw document to a model instance."""
        if data is None:
            return None
        return self.model_class(**data)

    def _to_model_list(self, docs: List[Dict[str, Any]]) -> List[T]:
        """Convert a list of raw documents to model instances."""
        return [self.model_class(**doc) for doc in docs]

    async def get_by_id(self, id: str) -> Optional[T]:
        """Get a document by ID and return as model instance."""
        with track_db_operation(self.collection_name, "find_one"):
            data = await self.collection.find_one({"_id": id})
        return self._to_model(data)

    async def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        """Find one document matching query and return as model instance."""
        with track_db_operation(self.collection_name, "find_one"):
            data = await self.collection.find_one(query)
        return self._to_model(data)

    async def find_many(self, query: Dict[str, Any]) -> List[T]:
        """Find all documents matching query and return as model instances."""
        with track_db_operation(self.collection_name, "find"):
            docs = await self.collection.find(query).to_list(None)
        return self._to_model_list(docs)

    async def create(self, model: T, session=None) -> T:
        """
        Insert a new document. The document must not already exist.

        Raises:
            ConditionalWriteError: If a document with the same key exists
        """
        try:
            with track_db_operation(self.collection_name, "insert_one"):
                await self.collection.insert_one(model.model_dump(by_alias=True), session=session)
        except DuplicateKeyError as e:
            raise ConditionalWriteError(f"{self.collection_name}: item already exists") from e
        return model

    async def update_where(
        self,
        key: Dict[str, Any],
        update_data: Dict[str, Any],
        precondition: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Set fields on the document matching key, if precondition still holds.

        Returns:
            The updated model

        Raises:
            ConditionalWriteError: If no document matches key + precondition
        """
        query = {**key, **(precondition or {})}
        with track_db_operation(self.collection_name, "find_one_and_update"):
            data = await self.collection.find_one_and_update(
                query,
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )
        if data is None:
            raise ConditionalWriteError(f"{self.collection_name}: precondition failed")
        return self._to_model(data)

    async def delete_where(self, key: Dict[str, Any]) -> bool:
        """Delete the document matching key."""
        with track_db_operation(self.collection_name, "delete_one"):
            result = await self.collection.delete_one(key)
        return result.deleted_count > 0
