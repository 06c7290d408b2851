"""Demo Routes — CRUD and three PATCH protocols for person records.

Invariants:
    - Routes never touch the repository directly (DemoService only)
    - PATCH /{demo_id} picks its protocol from Content-Type:
      application/json → age patch, application/merge-patch+json → RFC 7386,
      application/json-patch+json → RFC 6902; anything else → 415
    - POST responds 201 with a Location header pointing at the new record

Design Decisions:
    - One PATCH route with explicit media-type dispatch: FastAPI routes on
      path and method only, so the body is read raw and decoded per protocol
    - Age patch validated with DemoAgePatch and re-raised as
      RequestValidationError so it shares the 400 envelope of POST bodies
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from demo_api.core.domain_types import DemoId, PatchMediaType
from demo_api.core.errors import UnsupportedMediaTypeError
from demo_api.core.merge_patch import parse_merge_patch
from demo_api.infrastructure.demo_repository import DemoRepository, get_repository
from demo_api.schemas.demo import Demo, DemoAgePatch
from demo_api.services.demo_service import DemoService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/demos", tags=["demos"])

_PATCH_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            PatchMediaType.AGE_PATCH.value: {
                "schema": DemoAgePatch.model_json_schema(),
                "example": {"age": 30},
            },
            PatchMediaType.MERGE_PATCH.value: {
                "schema": {"type": "object"},
                "example": {"age": 30, "lastName": None},
            },
            PatchMediaType.JSON_PATCH.value: {
                "schema": {"type": "array", "items": {"type": "object"}},
                "example": [{"op": "replace", "path": "/age", "value": 30}],
            },
        },
    },
}


def get_demo_service(
    repository: DemoRepository = Depends(get_repository),
) -> DemoService:
    return DemoService(repository)


@router.get("", response_model=list[Demo])
async def list_demos(service: DemoService = Depends(get_demo_service)):
    """List all demos (order not guaranteed)."""
    logger.info("GET request", extra={"method": "GET"})
    result = service.list_demos()
    logger.info(f"GET result: {len(result)} demo(s)")
    return result


@router.get("/{demo_id}", response_model=Demo)
async def get_demo(
    demo_id: int, service: DemoService = Depends(get_demo_service),
):
    """Get a single demo by id."""
    return service.get_demo(DemoId(demo_id))


@router.post(
    "", response_model=Demo, status_code=status.HTTP_201_CREATED,
)
async def create_demo(
    body: Demo,
    response: Response,
    service: DemoService = Depends(get_demo_service),
):
    """Create a new demo; the store assigns its id."""
    logger.info(f"POST request: {body}", extra={"method": "POST"})
    result = service.create_demo(body)
    response.headers["Location"] = f"{router.prefix}/{result.id}"
    return result


@router.patch(
    "/{demo_id}", response_model=Demo, openapi_extra=_PATCH_REQUEST_BODY,
)
async def patch_demo(
    demo_id: int,
    request: Request,
    service: DemoService = Depends(get_demo_service),
):
    """Patch a demo with an age patch, a JSON merge patch or a JSON patch."""
    content_type = request.headers.get("content-type")
    media_type = PatchMediaType.from_content_type(content_type)
    body = await request.body()
    logger.info(
        "PATCH request",
        extra={"demo_id": demo_id, "method": "PATCH", "content_type": content_type},
    )

    match media_type:
        case PatchMediaType.AGE_PATCH:
            result = service.patch_age(DemoId(demo_id), _parse_age_patch(body))
        case PatchMediaType.MERGE_PATCH:
            result = service.merge_patch(DemoId(demo_id), parse_merge_patch(body))
        case PatchMediaType.JSON_PATCH:
            result = service.json_patch(DemoId(demo_id), body)
        case _:
            raise UnsupportedMediaTypeError(content_type)

    logger.info(f"PATCH result: {result}", extra={"demo_id": demo_id})
    return result


def _parse_age_patch(body: bytes) -> DemoAgePatch:
    try:
        return DemoAgePatch.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(
            [
                {**err, "loc": ("body", *err["loc"])}
                for err in e.errors(include_url=False)
            ],
        ) from e
