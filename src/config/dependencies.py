from typing import Annotated

import pymongo
from fastapi import Depends
from pymongo.database import Database as MongoDBDatabase

from src.config.environment_variables import EnvironmentVariables
from src.utils.logging import make_logger

logger = make_logger(__name__)


class Singleton(type):
    _instances = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


class GlobalDependencies(metaclass=Singleton):
    def __init__(self):
        self.environment_variables: EnvironmentVariables = (
            EnvironmentVariables.refresh()
        )
        self.mongodb_client: pymongo.MongoClient | None = None
        self.mongodb_database: MongoDBDatabase | None = None
        self._loaded = False

    async def load(self):
        if self._loaded:
            return

        self.environment_variables = EnvironmentVariables.refresh()

        try:
            mongodb_uri = self.environment_variables.MONGODB_URI
            mongodb_database_name = self.environment_variables.MONGODB_DATABASE_NAME
            timeout_ms = self.environment_variables.MONGODB_TIMEOUT_MS

            logger.info("Connecting to MongoDB")

            self.mongodb_client = pymongo.MongoClient(
                mongodb_uri,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
                socketTimeoutMS=timeout_ms,
                maxPoolSize=self.environment_variables.MONGODB_MAX_POOL_SIZE,
                minPoolSize=self.environment_variables.MONGODB_MIN_POOL_SIZE,
                maxIdleTimeMS=30000,  # Close connections after 30 seconds of inactivity
                waitQueueTimeoutMS=5000,  # Wait up to 5 seconds for a connection from pool
            )
            self.mongodb_database = self.mongodb_client[mongodb_database_name]

            self.mongodb_client.admin.command("ping")
            logger.info(
                f"Successfully connected to MongoDB database '{mongodb_database_name}'"
            )

            # Indexes are created once at startup, not per request
            from src.config.mongodb_indexes import ensure_mongodb_indexes

            try:
                ensure_mongodb_indexes(self.mongodb_database)
                logger.info("MongoDB indexes ensured successfully")
            except Exception as index_error:
                # Listings still work without the indexes, just slower
                logger.error(f"Failed to create MongoDB indexes: {index_error}")

        except Exception as e:
            logger.error(f"Failed to initialize MongoDB client: {e}")
            self.mongodb_client = None
            self.mongodb_database = None

        self._loaded = True


async def startup_global_dependencies():
    global_dependencies = GlobalDependencies()
    await global_dependencies.load()


async def async_shutdown():
    global_dependencies = GlobalDependencies()

    if global_dependencies.mongodb_client:
        global_dependencies.mongodb_client.close()


def resolve_environment_variable_dependency(environment_variable_key: str):
    return getattr(GlobalDependencies().environment_variables, environment_variable_key)


def environment_variables() -> EnvironmentVariables:
    return GlobalDependencies().environment_variables


def mongodb_database() -> MongoDBDatabase:
    return GlobalDependencies().mongodb_database


DEnvironmentVariables = Annotated[
    EnvironmentVariables, Depends(environment_variables)
]
DMongoDBDatabase = Annotated[MongoDBDatabase, Depends(mongodb_database)]
