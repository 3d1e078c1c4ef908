from datetime import datetime
from typing import Annotated, Any

from fastapi import Depends

from src.config.dependencies import DEnvironmentVariables
from src.domain.entities.orders import OrderEntity, OrderItemEntity
from src.domain.entities.pagination import Page
from src.domain.exceptions import ClientError
from src.domain.repositories.batch_repository import DBatchRepository
from src.domain.repositories.order_repository import DOrderRepository
from src.domain.services.listing_service import ORDERS_LISTING, paginate
from src.utils.logging import make_logger

logger = make_logger(__name__)


class OrdersUseCase:
    def __init__(
        self,
        order_repository: DOrderRepository,
        batch_repository: DBatchRepository,
        environment_variables: DEnvironmentVariables,
    ):
        self.order_repository = order_repository
        self.batch_repository = batch_repository
        self.listing = ORDERS_LISTING.with_page_size(
            environment_variables.ORDERS_PAGE_SIZE
        )

    async def list_orders(
        self, search: str | None = None, after_cursor: str | None = None
    ) -> Page[OrderEntity]:
        """
        List unarchived orders newest first.

        Args:
            search: Batch number to restrict the listing to
            after_cursor: End cursor of the previous page
        """
        return await paginate(
            self.order_repository,
            self.listing,
            search=search,
            after_cursor=after_cursor,
        )

    async def create(
        self,
        client: str,
        batch: int,
        deliver_at: datetime,
        items: list[OrderItemEntity],
    ) -> OrderEntity:
        """
        Create an order and register it in its batch.
        """
        order = await self.order_repository.create(
            OrderEntity(
                client=client,
                batch=batch,
                deliver_at=deliver_at,
                items=items,
                archived=False,
            )
        )
        await self.batch_repository.register_order(batch_id=batch, order_id=order.id)
        logger.info(f"Created order {order.id} in batch {batch}")
        return order

    async def get(self, id: str) -> OrderEntity:
        return await self.order_repository.get(id=id)

    async def update(self, id: str, fields: dict[str, Any]) -> OrderEntity:
        """
        Partially update an order. Only non-empty fields are applied.
        """
        changes = {k: v for k, v in fields.items() if v}
        if not changes:
            raise ClientError(
                "At least one of client, batch, deliverAt or items is required"
            )
        return await self.order_repository.update_fields(id=id, fields=changes)

    async def archive(self, id: str) -> None:
        await self.order_repository.set_archived(id=id, archived=True)
        logger.info(f"Archived order {id}")


DOrdersUseCase = Annotated[OrdersUseCase, Depends(OrdersUseCase)]
