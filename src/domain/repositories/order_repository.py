from typing import Annotated

import pymongo
from fastapi import Depends

from src.adapters.crud_store.adapter_mongodb import MongoDBCRUDRepository
from src.config.dependencies import DMongoDBDatabase
from src.domain.entities.orders import OrderEntity


class OrderRepository(MongoDBCRUDRepository[OrderEntity]):
    """Repository for managing orders in MongoDB."""

    COLLECTION_NAME = "orders"

    INDEXES = [
        {
            "keys": [
                ("archived", pymongo.ASCENDING),
                ("batch", pymongo.ASCENDING),
                ("_id", pymongo.DESCENDING),
            ],
            "name": "archived_batch_id_idx",
            "description": "Compound index for listing orders of a batch newest first",
        },
        {
            "keys": [("archived", pymongo.ASCENDING), ("_id", pymongo.DESCENDING)],
            "name": "archived_id_idx",
            "description": "Index for listing unarchived orders newest first",
        },
    ]

    def __init__(self, db: DMongoDBDatabase):
        super().__init__(
            db=db, collection_name=self.COLLECTION_NAME, model_class=OrderEntity
        )


DOrderRepository = Annotated[OrderRepository, Depends(OrderRepository)]
