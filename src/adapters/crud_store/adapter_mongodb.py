import asyncio
import random
import re
from datetime import UTC, datetime
from functools import wraps
from typing import Any, Generic, TypeVar

import pymongo
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection

from src.adapters.crud_store.exceptions import (
    DuplicateItemError,
    ItemDoesNotExist,
    StoreQueryFailed,
)
from src.adapters.crud_store.port import RecordStore
from src.config.dependencies import DMongoDBDatabase
from src.domain.entities.pagination import SortDirection
from src.domain.entities.predicates import (
    And,
    ArchivedFlag,
    Compare,
    Contains,
    Equals,
    Predicate,
)
from src.domain.exceptions import ClientError, ServiceError
from src.utils.logging import make_logger

logger = make_logger(__name__)

T = TypeVar("T")

# Fields the store owns; partial updates never overwrite them
PROTECTED_FIELDS = frozenset({"_id", "id", "created_at", "updated_at", "archived"})


def retry_write_operation(max_retries: int = 3, base_delay: float = 0.1):
    """
    Decorator to retry MongoDB write operations with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts
        base_delay: Base delay in seconds between retries
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (
                    pymongo.errors.AutoReconnect,
                    pymongo.errors.NetworkTimeout,
                    pymongo.errors.ServerSelectionTimeoutError,
                ) as e:
                    last_exception = e
                    if attempt < max_retries:
                        # Exponential backoff with jitter
                        delay = base_delay * (2**attempt) + random.uniform(0, 0.1)
                        logger.warning(
                            f"Write operation failed on attempt {attempt + 1}, retrying in {delay:.2f}s: {e}"
                        )
                        await asyncio.sleep(delay)
                    else:
                        logger.error(
                            f"Write operation failed after {max_retries + 1} attempts: {e}"
                        )

            raise ServiceError(
                message=f"Write operation failed after {max_retries + 1} attempts",
                detail=str(last_exception),
            ) from last_exception

        return wrapper

    return decorator


def _convert_id(id_value: Any) -> ObjectId | Any:
    """Convert a string ID to ObjectId if applicable."""
    if isinstance(id_value, str):
        try:
            return ObjectId(id_value)
        except InvalidId:
            return id_value
    return id_value


_COMPARISON_OPERATORS = {
    "lt": "$lt",
    "lte": "$lte",
    "gt": "$gt",
    "gte": "$gte",
}


def _field_name(field: str) -> str:
    return "_id" if field == "id" else field


def _field_value(field: str, value: Any) -> Any:
    return _convert_id(value) if field == "id" else value


def predicate_to_mongodb_query(predicate: Predicate) -> dict[str, Any]:
    """Translate a single typed predicate to its MongoDB query form."""
    if isinstance(predicate, ArchivedFlag):
        return {"archived": predicate.archived}
    if isinstance(predicate, Equals):
        return {
            _field_name(predicate.field): _field_value(predicate.field, predicate.value)
        }
    if isinstance(predicate, Contains):
        return {
            _field_name(predicate.field): {
                "$regex": re.escape(predicate.value),
                "$options": "i",
            }
        }
    if isinstance(predicate, Compare):
        operator = _COMPARISON_OPERATORS[predicate.operator.value]
        return {
            _field_name(predicate.field): {
                operator: _field_value(predicate.field, predicate.value)
            }
        }
    raise ClientError(f"Unsupported predicate: {predicate!r}")


def to_mongodb_query(predicate: And) -> dict[str, Any]:
    """
    Translate a conjunction of typed predicates to a MongoDB query dict.

    e.g. And([ArchivedFlag(False), Equals("batch", 3)])
    -> {"$and": [{"archived": False}, {"batch": 3}]}
    """
    if not predicate.predicates:
        return {}
    return {"$and": [predicate_to_mongodb_query(p) for p in predicate.predicates]}


class MongoDBCRUDRepository(RecordStore[T], Generic[T]):
    """
    A generic MongoDB record store for arbitrary pydantic models.

    The repository handles conversion between model's .id field and MongoDB's _id field.
    Callers should always work with .id fields, and the conversion to/from _id is handled internally.
    The ObjectId assigned on insert is also the ordering key used for cursor pagination.

    Automatic timestamp handling:
    - created_at: Automatically set when a document is created
    - updated_at: Automatically updated when a document is modified

    Reads are never retried here; a failed read surfaces as StoreQueryFailed.
    """

    def __init__(
        self,
        db: DMongoDBDatabase,
        collection_name: str,
        model_class: type[T],
    ):
        self.db = db
        self.collection: Collection = db[collection_name]
        self.model_class = model_class

    def _serialize(self, obj: T) -> dict[str, Any]:
        """
        Convert a model object to a dictionary for MongoDB storage.
        Maps .id to _id field for MongoDB.
        """
        if isinstance(obj, dict):
            data = obj.copy()
        elif hasattr(obj, "model_dump"):
            data = obj.model_dump()
        else:
            raise ValueError("Unable to serialize object of unknown type.")

        if "id" in data:
            id_value = data.pop("id")
            if id_value is not None:
                data["_id"] = _convert_id(id_value)

        return data

    def _deserialize(self, data: dict[str, Any]) -> T | None:
        """
        Convert a MongoDB document to a model object.
        Maps _id to .id field for model consistency.
        """
        if not data:
            return None

        if "_id" in data:
            _id = data.pop("_id")
            data["id"] = str(_id) if isinstance(_id, ObjectId) else _id

        return self.model_class.model_validate(data)

    @retry_write_operation()
    async def create(self, item: T) -> T:
        """
        Insert a new document and let MongoDB assign its ObjectId.
        Sets created_at and updated_at, and returns the item with its new id.
        """
        try:
            data = self._serialize(item)
            data.pop("_id", None)

            now = datetime.now(UTC)
            data["created_at"] = now
            data["updated_at"] = now

            result = self.collection.insert_one(data)

            item.id = str(result.inserted_id)
            item.created_at = now
            item.updated_at = now
            return item
        except pymongo.errors.DuplicateKeyError as e:
            raise DuplicateItemError(
                message="Item with this id already exists. IDs must be unique.",
                detail=str(e),
            ) from e
        except (pymongo.errors.AutoReconnect, ClientError):
            raise
        except Exception as e:
            raise ServiceError(
                message=f"Failed to create item in MongoDB: {e}", detail=str(e)
            ) from e

    async def get(self, id: str) -> T:
        """
        Retrieve a document by its ID.
        Maps .id to _id when querying and _id to .id in returned item.
        """
        try:
            document = self.collection.find_one({"_id": _convert_id(id)})
        except Exception as e:
            raise StoreQueryFailed(
                message=f"Failed to get item from MongoDB: {e}", detail=str(e)
            ) from e
        if document is None:
            raise ItemDoesNotExist(f"Item with id '{id}' does not exist.")
        return self._deserialize(document)

    @retry_write_operation()
    async def update_fields(self, id: str, fields: dict[str, Any]) -> T:
        """
        Apply a partial update ($set) to an existing document.
        Automatically updates the updated_at timestamp.
        """
        update_data = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        if not update_data:
            raise ClientError("No updatable fields were provided.")
        update_data["updated_at"] = datetime.now(UTC)

        id_value = _convert_id(id)
        try:
            result = self.collection.update_one(
                {"_id": id_value}, {"$set": update_data}
            )
            if result.matched_count == 0:
                raise ItemDoesNotExist(f"Item with id '{id}' does not exist.")
            updated_doc = self.collection.find_one({"_id": id_value})
            return self._deserialize(updated_doc)
        except (pymongo.errors.AutoReconnect, ClientError):
            raise
        except Exception as e:
            raise ServiceError(
                message=f"Failed to update item in MongoDB: {e}", detail=str(e)
            ) from e

    @retry_write_operation()
    async def set_archived(self, id: str, archived: bool) -> None:
        try:
            result = self.collection.update_one(
                {"_id": _convert_id(id)},
                {"$set": {"archived": archived, "updated_at": datetime.now(UTC)}},
            )
            if result.matched_count == 0:
                raise ItemDoesNotExist(f"Item with id '{id}' does not exist.")
        except (pymongo.errors.AutoReconnect, ClientError):
            raise
        except Exception as e:
            raise ServiceError(
                message=f"Failed to archive item in MongoDB: {e}", detail=str(e)
            ) from e

    async def find(
        self,
        predicate: And,
        sort_key: str,
        sort_direction: SortDirection,
        limit: int,
    ) -> list[T]:
        """
        Find documents matching a typed predicate, sorted on a single key.
        Maps _id to .id for each returned item.
        """
        try:
            cursor = (
                self.collection.find(to_mongodb_query(predicate))
                .sort(_field_name(sort_key), sort_direction.pymongo_direction)
                .limit(limit)
            )
            documents = list(cursor)
        except Exception as e:
            raise StoreQueryFailed(
                message=f"Failed to find items in MongoDB: {e}", detail=str(e)
            ) from e
        return [self._deserialize(doc) for doc in documents]

    async def count_where(self, predicate: And) -> int:
        try:
            return self.collection.count_documents(to_mongodb_query(predicate))
        except Exception as e:
            raise StoreQueryFailed(
                message=f"Failed to count items in MongoDB: {e}", detail=str(e)
            ) from e
