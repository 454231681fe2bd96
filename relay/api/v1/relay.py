from fastapi import APIRouter, Depends, Request
import structlog

from relay.api.dependencies import get_blueprint_service
from relay.api.schemas import BlueprintResponse
from relay.core.observability import metrics
from relay.domain.exceptions import InternalRelayException, RelayException
from relay.services.blueprint import BlueprintService

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["relay"])


@router.api_route("/{path:path}", methods=["POST"], response_model=BlueprintResponse)
async def relay_blueprint(
    request: Request,
    service: BlueprintService = Depends(get_blueprint_service),
) -> BlueprintResponse:
    """Forward a prompt to the upstream model and return its blueprint.

    Any path is accepted. Other methods are rejected by the router with 405;
    OPTIONS never reaches here.
    """
    try:
        body = await request.body()
        response = await service.generate(body)
    except RelayException as e:
        metrics.record_outcome(type(e).__name__)
        raise
    except Exception as e:
        logger.exception("relay.unhandled_error", error=str(e))
        metrics.record_outcome("InternalRelayException")
        raise InternalRelayException(str(e)) from e

    metrics.record_outcome("success")
    return response
