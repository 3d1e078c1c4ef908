from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from src.domain.entities.pagination import SortDirection
from src.domain.entities.predicates import And

T = TypeVar("T")


class RecordStore(ABC, Generic[T]):
    @abstractmethod
    async def find(
        self,
        predicate: And,
        sort_key: str,
        sort_direction: SortDirection,
        limit: int,
    ) -> list[T]:
        pass

    @abstractmethod
    async def count_where(self, predicate: And) -> int:
        pass

    @abstractmethod
    async def get(self, id: str) -> T:
        pass

    @abstractmethod
    async def create(self, item: T) -> T:
        pass

    @abstractmethod
    async def update_fields(self, id: str, fields: dict[str, Any]) -> T:
        pass

    @abstractmethod
    async def set_archived(self, id: str, archived: bool) -> None:
        pass
