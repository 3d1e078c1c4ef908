from typing import Annotated

import pymongo
from fastapi import Depends

from src.adapters.crud_store.adapter_mongodb import MongoDBCRUDRepository
from src.config.dependencies import DMongoDBDatabase
from src.domain.entities.products import ProductEntity


class ProductRepository(MongoDBCRUDRepository[ProductEntity]):
    """Repository for managing catalog products in MongoDB."""

    COLLECTION_NAME = "products"

    INDEXES = [
        {
            "keys": [("archived", pymongo.ASCENDING), ("_id", pymongo.ASCENDING)],
            "name": "archived_id_idx",
            "description": "Index for listing unarchived products oldest first",
        },
    ]

    def __init__(self, db: DMongoDBDatabase):
        super().__init__(
            db=db, collection_name=self.COLLECTION_NAME, model_class=ProductEntity
        )


DProductRepository = Annotated[ProductRepository, Depends(ProductRepository)]
