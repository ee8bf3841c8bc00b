"""Search endpoint: one query in, one cited answer out."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from models.errors import ModelGatewayError, QueryValidationError, SchemaRepairExhaustedError
from orchestrator.core import SearchPipeline
from server.dependencies import get_pipeline
from server.schemas.requests import SearchRequest
from server.schemas.responses import ErrorDTO, SearchResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Search"])


def _error(status_code: int, message: str, kind: str | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorDTO(error=message, kind=kind).model_dump(exclude_none=True))


@router.post(
    "/search",
    response_model=SearchResponseDTO,
    responses={400: {"model": ErrorDTO}, 502: {"model": ErrorDTO}, 503: {"model": ErrorDTO}},
)
async def search(
    request: Request,
    body: SearchRequest,
    pipeline: SearchPipeline = Depends(get_pipeline),
):
    request_id = getattr(request.state, "request_id", "unknown")

    try:
        ctx = await pipeline.run(body.query)
    except QueryValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except SchemaRepairExhaustedError as e:
        logger.error(
            "Search failed: answer could not be repaired",
            extra={"extra_fields": {"request_id": request_id, "detail": e.detail}},
        )
        return _error(status.HTTP_502_BAD_GATEWAY, "The model returned an answer in an unusable format", e.kind)
    except ModelGatewayError as e:
        logger.error(
            "Search failed: model unavailable",
            extra={"extra_fields": {"request_id": request_id, "error_code": e.error.code}},
        )
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "The language model is unavailable", "model_unavailable")

    return SearchResponseDTO.from_context(ctx)
