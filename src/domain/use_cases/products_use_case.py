from typing import Annotated, Any

from fastapi import Depends

from src.config.dependencies import DEnvironmentVariables
from src.domain.entities.pagination import Page
from src.domain.entities.products import ProductEntity, UnitConversionEntity
from src.domain.exceptions import ClientError
from src.domain.repositories.product_repository import DProductRepository
from src.domain.services.listing_service import PRODUCTS_LISTING, paginate
from src.utils.logging import make_logger

logger = make_logger(__name__)


class ProductsUseCase:
    def __init__(
        self,
        product_repository: DProductRepository,
        environment_variables: DEnvironmentVariables,
    ):
        self.product_repository = product_repository
        self.listing = PRODUCTS_LISTING.with_page_size(
            environment_variables.PRODUCTS_PAGE_SIZE
        )

    async def list_products(
        self, search: str | None = None, after_cursor: str | None = None
    ) -> Page[ProductEntity]:
        """
        List unarchived products in catalog order, optionally filtered by a
        case-insensitive fragment of their description.
        """
        return await paginate(
            self.product_repository,
            self.listing,
            search=search,
            after_cursor=after_cursor,
        )

    async def create(
        self,
        description: str,
        default_measurement_unit: str,
        conversions: list[UnitConversionEntity],
    ) -> ProductEntity:
        product = await self.product_repository.create(
            ProductEntity(
                description=description,
                default_measurement_unit=default_measurement_unit,
                conversions=conversions,
                archived=False,
            )
        )
        logger.info(f"Created product {product.id}")
        return product

    async def get(self, id: str) -> ProductEntity:
        return await self.product_repository.get(id=id)

    async def update(self, id: str, fields: dict[str, Any]) -> ProductEntity:
        changes = {k: v for k, v in fields.items() if v}
        if not changes:
            raise ClientError(
                "At least one of description, defaultMeasurementUnit or conversions is required"
            )
        return await self.product_repository.update_fields(id=id, fields=changes)

    async def archive(self, id: str) -> None:
        await self.product_repository.set_archived(id=id, archived=True)
        logger.info(f"Archived product {id}")


DProductsUseCase = Annotated[ProductsUseCase, Depends(ProductsUseCase)]
