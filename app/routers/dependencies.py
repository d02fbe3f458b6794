from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.db import get_db
from core.logging import get_logger
from services.auto_service import AutoService
from services.auto_write_service import AutoWriteService
from services.where_builder import WhereBuilder


def get_auto_service(db: AsyncSession = Depends(get_db)) -> AutoService:
    return AutoService(
        db=db,
        where_builder=WhereBuilder(logger=get_logger("where_builder")),
        logger=get_logger("auto_service"),
    )


def get_auto_write_service(
    read_service: AutoService = Depends(get_auto_service),
    db: AsyncSession = Depends(get_db),
) -> AutoWriteService:
    return AutoWriteService(
        db=db,
        read_service=read_service,
        logger=get_logger("auto_write_service"),
    )
