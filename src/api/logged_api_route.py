import time
from collections.abc import Callable
from typing import Any

from fastapi import BackgroundTasks, Request, Response
from fastapi.routing import APIRoute
from starlette.background import BackgroundTask

from src.utils.logging import ctx_var_request_id, make_logger
from src.utils.request_utils import decode_request_body, strip_sensitive_items

logger = make_logger(__name__)


def route_template(request: Request) -> str:
    """The matched path template, e.g. `/orders/{order_id}`."""
    route = request.scope.get("route")
    path = route.path if route is not None else request.url.path
    return request.scope.get("root_path", "") + path


def request_log_fields(request_id: str | None, request: Request) -> dict[str, Any]:
    return {
        "request_id": request_id,
        "method": request.method,
        "path": route_template(request),
        "query_params": dict(strip_sensitive_items(dict(request.query_params))),
    }


def log_request(request_id: str | None, request: Request, request_body: bytes):
    fields = request_log_fields(request_id, request)
    body = decode_request_body(request_body)
    logger.info(
        f"Request [{fields['method']} {fields['path']}] ({request_id}): "
        f"{fields['query_params'] or ''}{body or ''}",
        extra={
            **fields,
            "headers": dict(strip_sensitive_items(request.headers)),
            "body": body,
        },
    )


def log_response(
    request_id: str | None,
    request: Request,
    response: Response,
    started_at: float,
):
    fields = request_log_fields(request_id, request)
    duration_ms = round((time.perf_counter() - started_at) * 1000, 2)
    logger.info(
        f"Response[{response.status_code}] [{fields['method']} {fields['path']}] "
        f"({request_id}) in {duration_ms}ms",
        extra={
            **fields,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )


def attach_response_logging(
    response: Response, task: BackgroundTask
) -> BackgroundTasks | BackgroundTask:
    """Run `task` after the response is sent, keeping any background work already set."""
    if response.background is None:
        return task
    if isinstance(response.background, BackgroundTasks):
        response.background.add_task(task)
        return response.background
    tasks = BackgroundTasks()
    tasks.add_task(response.background)
    tasks.add_task(task)
    return tasks


class LoggedAPIRoute(APIRoute):
    """APIRoute that logs every request it handles and the response it returns."""

    def get_route_handler(self) -> Callable:
        # The parent factory is only called per request, after dependencies
        # are bound to this route
        parent_get_route_handler = super().get_route_handler

        async def logged_route_handler(request: Request) -> Response:
            started_at = time.perf_counter()
            request_id = ctx_var_request_id.get(None)
            log_request(request_id, request, await request.body())

            response = await parent_get_route_handler()(request)
            response.background = attach_response_logging(
                response,
                BackgroundTask(log_response, request_id, request, response, started_at),
            )
            return response

        return logged_route_handler
