from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field

from src.utils.logging import make_logger
from src.utils.model_utils import BaseModel

PROJECT_ROOT = Path(__file__).resolve().parents[2]
logger = make_logger(__name__)


class EnvVarKeys(str, Enum):
    ENVIRONMENT = "ENVIRONMENT"
    MONGODB_URI = "MONGODB_URI"
    MONGODB_DATABASE_NAME = "MONGODB_DATABASE_NAME"
    MONGODB_MAX_POOL_SIZE = "MONGODB_MAX_POOL_SIZE"
    MONGODB_MIN_POOL_SIZE = "MONGODB_MIN_POOL_SIZE"
    MONGODB_TIMEOUT_MS = "MONGODB_TIMEOUT_MS"
    ALLOWED_ORIGINS = "ALLOWED_ORIGINS"
    ORDERS_PAGE_SIZE = "ORDERS_PAGE_SIZE"
    PRODUCTS_PAGE_SIZE = "PRODUCTS_PAGE_SIZE"


class Environment(str, Enum):
    DEV = "development"


refreshed_environment_variables = None


class EnvironmentVariables(BaseModel):
    ENVIRONMENT: str | None = Environment.DEV
    MONGODB_URI: str | None = None
    MONGODB_DATABASE_NAME: str | None = "catalog"
    MONGODB_MAX_POOL_SIZE: int = 50
    MONGODB_MIN_POOL_SIZE: int = 5
    MONGODB_TIMEOUT_MS: int = 20000  # Server selection / connect / socket timeout
    ALLOWED_ORIGINS: str | None = None
    ORDERS_PAGE_SIZE: int = Field(30, ge=1)
    PRODUCTS_PAGE_SIZE: int = Field(29, ge=1)

    @classmethod
    def refresh(cls, force_refresh: bool = False) -> EnvironmentVariables | None:
        global refreshed_environment_variables
        if refreshed_environment_variables is not None and not force_refresh:
            return refreshed_environment_variables

        if os.environ.get(EnvVarKeys.ENVIRONMENT) == Environment.DEV:
            load_dotenv(dotenv_path=Path(PROJECT_ROOT / ".env"), override=True)
        environment_variables = EnvironmentVariables(
            ENVIRONMENT=os.environ.get(EnvVarKeys.ENVIRONMENT),
            MONGODB_URI=os.environ.get(EnvVarKeys.MONGODB_URI),
            MONGODB_DATABASE_NAME=os.environ.get(
                EnvVarKeys.MONGODB_DATABASE_NAME, "catalog"
            ),
            MONGODB_MAX_POOL_SIZE=int(
                os.environ.get(EnvVarKeys.MONGODB_MAX_POOL_SIZE, "50")
            ),
            MONGODB_MIN_POOL_SIZE=int(
                os.environ.get(EnvVarKeys.MONGODB_MIN_POOL_SIZE, "5")
            ),
            MONGODB_TIMEOUT_MS=int(
                os.environ.get(EnvVarKeys.MONGODB_TIMEOUT_MS, "20000")
            ),
            ALLOWED_ORIGINS=os.environ.get(EnvVarKeys.ALLOWED_ORIGINS, "*"),
            ORDERS_PAGE_SIZE=int(os.environ.get(EnvVarKeys.ORDERS_PAGE_SIZE, "30")),
            PRODUCTS_PAGE_SIZE=int(
                os.environ.get(EnvVarKeys.PRODUCTS_PAGE_SIZE, "29")
            ),
        )
        refreshed_environment_variables = environment_variables
        return refreshed_environment_variables
