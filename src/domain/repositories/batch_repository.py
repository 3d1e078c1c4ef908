from datetime import UTC, datetime
from typing import Annotated

import pymongo
from fastapi import Depends

from src.adapters.crud_store.adapter_mongodb import (
    MongoDBCRUDRepository,
    retry_write_operation,
)
from src.config.dependencies import DMongoDBDatabase
from src.domain.entities.batches import BatchEntity
from src.domain.exceptions import ServiceError
from src.utils.logging import make_logger

logger = make_logger(__name__)


class BatchRepository(MongoDBCRUDRepository[BatchEntity]):
    """Repository for the numbered batches orders are grouped into."""

    COLLECTION_NAME = "batches"

    INDEXES = []

    def __init__(self, db: DMongoDBDatabase):
        super().__init__(
            db=db, collection_name=self.COLLECTION_NAME, model_class=BatchEntity
        )

    @retry_write_operation()
    async def register_order(self, batch_id: int, order_id: str) -> bool:
        """
        Append an order id to its batch.

        Returns:
            False when no batch with that number exists, True otherwise
        """
        try:
            result = self.collection.update_one(
                {"_id": batch_id},
                {
                    "$push": {"orders": order_id},
                    "$set": {"updated_at": datetime.now(UTC)},
                },
            )
        except pymongo.errors.AutoReconnect:
            raise
        except Exception as e:
            raise ServiceError(
                message=f"Failed to register order in batch: {e}", detail=str(e)
            ) from e
        if result.matched_count == 0:
            logger.warning(
                f"Order '{order_id}' references batch {batch_id}, which does not exist"
            )
            return False
        return True


DBatchRepository = Annotated[BatchRepository, Depends(BatchRepository)]
