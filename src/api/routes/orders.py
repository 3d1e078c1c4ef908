from fastapi import APIRouter, Query, Response, status

from src.api.schemas.orders import (
    CreateOrderRequest,
    Order,
    OrderConnection,
    UpdateOrderRequest,
)
from src.api.schemas.pagination import CreatedResponse
from src.domain.entities.orders import OrderItemEntity
from src.domain.use_cases.orders_use_case import DOrdersUseCase

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get(
    "",
    response_model=OrderConnection,
)
async def list_orders(
    orders_use_case: DOrdersUseCase,
    search: str | None = Query(None, description="Batch number to filter by"),
    after_cursor: str | None = Query(
        None,
        alias="afterCursor",
        description="The `endCursor` of the previous page",
    ),
) -> OrderConnection:
    page = await orders_use_case.list_orders(search=search, after_cursor=after_cursor)
    return OrderConnection.model_validate(page.model_dump())


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    request: CreateOrderRequest,
    orders_use_case: DOrdersUseCase,
) -> CreatedResponse:
    order = await orders_use_case.create(
        client=request.client,
        batch=request.batch,
        deliver_at=request.deliver_at,
        items=[
            OrderItemEntity.model_validate(item.model_dump()) for item in request.items
        ],
    )
    return CreatedResponse(id=order.id)


@router.get(
    "/{order_id}",
    response_model=Order,
)
async def get_order(
    order_id: str,
    orders_use_case: DOrdersUseCase,
) -> Order:
    order = await orders_use_case.get(id=order_id)
    return Order.model_validate(order.model_dump())


@router.put(
    "/{order_id}",
    response_model=Order,
)
async def update_order(
    order_id: str,
    request: UpdateOrderRequest,
    orders_use_case: DOrdersUseCase,
) -> Order:
    order = await orders_use_case.update(
        id=order_id, fields=request.model_dump(exclude_none=True)
    )
    return Order.model_validate(order.model_dump())


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_200_OK,
)
async def archive_order(
    order_id: str,
    orders_use_case: DOrdersUseCase,
) -> Response:
    await orders_use_case.archive(id=order_id)
    return Response(status_code=status.HTTP_200_OK)
