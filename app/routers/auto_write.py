from typing import Optional

from fastapi import APIRouter, Depends, File, Header, HTTPException, Request, Response, UploadFile

from auth.auth_handler import CurrentUser
from auth.rbac import Permission, require_permission
from core.config import MAX_FILE_SIZE, MIME_TYPES
from core.logging import get_logger
from exceptions import FileTooLargeError, InvalidMimeTypeError
from routers.dependencies import get_auto_write_service
from schemas.auto import AutoDTO, AutoDtoOhneRef
from services.auto_write_service import AutoWriteService

router = APIRouter(prefix="/rest", tags=["auto"])

logger = get_logger("auto_write_router")


@router.post("", status_code=201)
async def create(
    auto_dto: AutoDTO,
    request: Request,
    user: CurrentUser = Depends(require_permission(Permission.CREATE_AUTO)),
    service: AutoWriteService = Depends(get_auto_write_service),
):
    """Create an auto with registration and equipment. Answers with the Location of the new auto."""
    logger.debug("create: user=%s, fin=%s", user.username, auto_dto.fin)
    auto_id = await service.create(auto_dto.to_auto())

    location = str(request.url_for("get_by_id", id=auto_id))
    return Response(status_code=201, headers={"Location": location})


@router.post("/{id}", status_code=204)
async def add_file(
    id: int,
    request: Request,
    file: UploadFile = File(...),
    user: CurrentUser = Depends(require_permission(Permission.UPLOAD_FILE)),
    service: AutoWriteService = Depends(get_auto_write_service),
):
    """Attach a picture or video to an auto, replacing the previous one."""
    logger.debug("add_file: id=%s, filename=%s, content_type=%s", id, file.filename, file.content_type)

    if file.content_type not in MIME_TYPES:
        raise InvalidMimeTypeError(file.content_type)

    data = await file.read()
    if len(data) > MAX_FILE_SIZE:
        raise FileTooLargeError(len(data))

    await service.add_file(id, data, file.filename or f"auto-{id}", len(data))

    location = str(request.url_for("get_file_by_id", id=id))
    return Response(status_code=204, headers={"Location": location})


@router.put("/{id}", status_code=204)
async def update(
    id: int,
    auto_dto: AutoDtoOhneRef,
    if_match: Optional[str] = Header(None),
    user: CurrentUser = Depends(require_permission(Permission.UPDATE_AUTO)),
    service: AutoWriteService = Depends(get_auto_write_service),
):
    """Overwrite the scalar fields of an auto. Requires the current version in If-Match."""
    logger.debug("update: id=%s, if_match=%s", id, if_match)

    if if_match is None:
        raise HTTPException(status_code=428, detail='Header "If-Match" fehlt')

    new_version = await service.update(id, auto_dto.to_update_values(), if_match)
    return Response(status_code=204, headers={"ETag": f'"{new_version}"'})


@router.delete("/{id}", status_code=204)
async def delete(
    id: int,
    user: CurrentUser = Depends(require_permission(Permission.DELETE_AUTO)),
    service: AutoWriteService = Depends(get_auto_write_service),
):
    """Delete an auto. Answers 204 whether or not it existed."""
    deleted = await service.delete(id)
    logger.debug("delete: id=%s, deleted=%s", id, deleted)
    return Response(status_code=204)
