from fastapi import APIRouter, status
from starlette.responses import Response

from src.config.dependencies import DMongoDBDatabase
from src.utils.logging import make_logger

logger = make_logger(__name__)

router = APIRouter(tags=["Health"])


def healthcheck() -> Response:
    """Returns 200 if the app is up."""
    return Response(status_code=status.HTTP_200_OK)


for health_check_url in ["healthcheck", "healthz"]:
    router.get(
        path=f"/{health_check_url}",
        operation_id=health_check_url,
        include_in_schema=False,
    )(healthcheck)


@router.get("/readyz", operation_id="readyz", include_in_schema=False)
def readiness(mongodb_database: DMongoDBDatabase) -> Response:
    """Returns 200 once the record store answers a ping, 503 otherwise."""
    if mongodb_database is None:
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    try:
        mongodb_database.command("ping")
    except Exception as e:
        logger.warning(f"Readiness ping to MongoDB failed: {e}")
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(status_code=status.HTTP_200_OK)
