"""
MongoDB index management module.

Indexes are declared on repository classes (`INDEXES`) and created once during
application startup, not on every request.
"""

from typing import Any

from pymongo.database import Database as MongoDBDatabase
from pymongo.errors import OperationFailure

from src.utils.logging import make_logger

logger = make_logger(__name__)

INDEX_OPTION_KEYS = (
    "unique",
    "sparse",
    "expireAfterSeconds",
    "partialFilterExpression",
)


def _repository_classes() -> list[type]:
    # Imported here to avoid circular imports
    from src.domain.repositories.batch_repository import BatchRepository
    from src.domain.repositories.order_repository import OrderRepository
    from src.domain.repositories.product_repository import ProductRepository

    return [OrderRepository, ProductRepository, BatchRepository]


def ensure_mongodb_indexes(mongodb_database: MongoDBDatabase) -> None:
    """
    Create all MongoDB indexes defined in repository classes.

    Args:
        mongodb_database: The MongoDB database instance
    """
    logger.info("Starting MongoDB index creation...")

    for repo_class in _repository_classes():
        collection_name = getattr(repo_class, "COLLECTION_NAME", None)
        indexes = getattr(repo_class, "INDEXES", None)
        if not collection_name or not indexes:
            continue

        logger.info(f"Creating indexes for collection '{collection_name}'...")
        collection = mongodb_database[collection_name]

        for index_spec in indexes:
            name = index_spec.get("name")
            try:
                index_kwargs: dict[str, Any] = {"name": name} if name else {}
                for key in INDEX_OPTION_KEYS:
                    if key in index_spec:
                        index_kwargs[key] = index_spec[key]

                result = collection.create_index(index_spec["keys"], **index_kwargs)

                description = index_spec.get("description")
                if description:
                    logger.info(f"  Created index '{name or result}': {description}")
                else:
                    logger.info(f"  Created index '{name or result}'")

            except OperationFailure as e:
                if "already exists with different options" in str(e):
                    logger.warning(
                        f"  Index '{name or 'unnamed'}' already exists "
                        f"with different options. You may need to drop and recreate it."
                    )
                else:
                    logger.error(f"  Failed to create index: {e}")

    logger.info("MongoDB index creation completed.")
