import io
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse, StreamingResponse

from core.logging import get_logger
from routers.dependencies import get_auto_service
from schemas.auto import AutoMitAusstattungenOut, AutoOut
from schemas.page import Page, create_page
from services.auto_service import AutoService
from services.pageable import create_pageable

router = APIRouter(prefix="/rest", tags=["auto"])

logger = get_logger("auto_router")

PAGING_PARAMS = ("page", "size", "only")


@router.get("", response_model=Page[AutoOut])
async def find(
    request: Request,
    page: Optional[str] = None,
    size: Optional[str] = None,
    only: Optional[str] = None,
    service: AutoService = Depends(get_auto_service),
):
    """
    Search autos. Every query parameter other than page, size and only is a
    search criterion, e.g. /rest?rating=4&sport=true.
    Any value of only (e.g. only=count) returns just the number of all autos.
    """
    if only is not None:
        return JSONResponse({"count": await service.count()})

    suchparameter = {
        key: value
        for key, value in request.query_params.items()
        if key not in PAGING_PARAMS
    }
    pageable = create_pageable(page, size)
    logger.debug("find: suchparameter=%s, pageable=%s", suchparameter, pageable)

    slice_ = await service.find(suchparameter, pageable)
    content = [AutoOut.model_validate(auto) for auto in slice_.content]
    return create_page(content, slice_.total_elements, pageable)


@router.get("/file/{id}")
async def get_file_by_id(id: int, service: AutoService = Depends(get_auto_service)):
    """Download the file attached to an auto."""
    auto_file = await service.find_file_by_auto_id(id)

    return StreamingResponse(
        io.BytesIO(auto_file.data),
        media_type=auto_file.mimetype or "image/png",
        headers={"Content-Disposition": f'inline; filename="{auto_file.filename}"'},
    )


@router.get("/{id}", name="get_by_id", response_model=AutoMitAusstattungenOut)
async def get_by_id(
    id: int,
    response: Response,
    if_none_match: Optional[str] = Header(None),
    service: AutoService = Depends(get_auto_service),
):
    """Fetch one auto including registration and equipment; honours If-None-Match."""
    auto = await service.find_by_id(id, mit_ausstattungen=True)

    etag = f'"{auto.version}"'
    if if_none_match is not None and if_none_match == etag:
        logger.debug("get_by_id: not modified, version=%s", auto.version)
        return Response(status_code=304, headers={"ETag": etag})

    response.headers["ETag"] = etag
    return AutoMitAusstattungenOut.model_validate(auto)
