from fastapi import APIRouter, Query, Response, status

from src.api.schemas.pagination import CreatedResponse
from src.api.schemas.products import (
    CreateProductRequest,
    Product,
    ProductConnection,
    UpdateProductRequest,
)
from src.domain.entities.products import UnitConversionEntity
from src.domain.use_cases.products_use_case import DProductsUseCase

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=ProductConnection,
)
async def list_products(
    products_use_case: DProductsUseCase,
    search: str | None = Query(
        None, description="Case-insensitive fragment of the product description"
    ),
    after_cursor: str | None = Query(
        None,
        alias="afterCursor",
        description="The `endCursor` of the previous page",
    ),
) -> ProductConnection:
    page = await products_use_case.list_products(
        search=search, after_cursor=after_cursor
    )
    return ProductConnection.model_validate(page.model_dump())


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    request: CreateProductRequest,
    products_use_case: DProductsUseCase,
) -> CreatedResponse:
    product = await products_use_case.create(
        description=request.description,
        default_measurement_unit=request.default_measurement_unit,
        conversions=[
            UnitConversionEntity.model_validate(conversion.model_dump())
            for conversion in request.conversions
        ],
    )
    return CreatedResponse(id=product.id)


@router.get(
    "/{product_id}",
    response_model=Product,
)
async def get_product(
    product_id: str,
    products_use_case: DProductsUseCase,
) -> Product:
    product = await products_use_case.get(id=product_id)
    return Product.model_validate(product.model_dump())


@router.put(
    "/{product_id}",
    response_model=Product,
)
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    products_use_case: DProductsUseCase,
) -> Product:
    product = await products_use_case.update(
        id=product_id, fields=request.model_dump(exclude_none=True)
    )
    return Product.model_validate(product.model_dump())


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_200_OK,
)
async def archive_product(
    product_id: str,
    products_use_case: DProductsUseCase,
) -> Response:
    await products_use_case.archive(id=product_id)
    return Response(status_code=status.HTTP_200_OK)
