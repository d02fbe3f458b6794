import json
import logging
from typing import Iterable, List, Optional

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import set_committed_value

# Models
from models.auto import Auto
from models.auto_file import AutoFile

# Metrics
from core.metrics import track_performance

from services.exceptions import DatabaseQueryError, NotFoundError
from services.pageable import Pageable, Slice
from services.suchparameter import AUTOARTEN, GUELTIGE_NAMEN, Suchparameter
from services.where_builder import WhereBuilder


class AutoService:
    """
    Read access to autos.

    Provides:
    - Lookup by primary key, optionally with the equipment list
    - Flexible search via WhereBuilder with pagination
    - Counting
    - Lookup of the file attached to an auto

    "Nothing found" is always reported as NotFoundError, never as an empty
    result, so the transport layer can answer with 404 directly.
    """

    def __init__(
        self,
        db: AsyncSession,
        where_builder: Optional[WhereBuilder] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            db (AsyncSession): Active SQLAlchemy async database session
            where_builder (WhereBuilder): Builder for search predicates
            logger (logging.Logger): Component logger
        """
        self.db = db
        self.logger = logger or logging.getLogger("auto.auto_service")
        self.where_builder = where_builder or WhereBuilder(logger=self.logger)

    @track_performance(service_name="AutoService")
    async def find_by_id(self, id: int, mit_ausstattungen: bool = False) -> Auto:
        """
        Fetches one auto with its registration.

        Args:
            id (int): Primary key
            mit_ausstattungen (bool): Also load the equipment items

        Raises:
            NotFoundError: No auto with this id exists
        """
        self.logger.debug("find_by_id: id=%s, mit_ausstattungen=%s", id, mit_ausstattungen)

        options = [selectinload(Auto.fahrzeugschein)]
        if mit_ausstattungen:
            options.append(selectinload(Auto.ausstattungen))

        try:
            result = await self.db.execute(
                select(Auto).where(Auto.id == id).options(*options)
            )
            auto = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e)) from e

        if auto is None:
            self.logger.debug("find_by_id: no auto with id %s", id)
            raise NotFoundError(f"Es gibt kein Auto mit der ID {id}.")

        self._normalize(auto)
        return auto

    @track_performance(service_name="AutoService")
    async def find(self, suchparameter: Optional[Suchparameter], pageable: Pageable) -> Slice[Auto]:
        """
        Searches autos, one page at a time.

        Without search parameters all autos are paged through. Otherwise
        every key must be a known parameter or tag flag and "art" must be a
        valid Autoart.

        Raises:
            NotFoundError: invalid parameters, or nothing found on this page
        """
        self.logger.debug("find: suchparameter=%s, pageable=%s", suchparameter, pageable)

        if not suchparameter:
            return await self._find_all(pageable)

        if not self._check_keys(suchparameter.keys()) or not self._check_enums(suchparameter):
            self.logger.debug("find: invalid search parameters")
            raise NotFoundError("Ungueltige Suchparameter")

        where = self.where_builder.build(suchparameter)
        autos = await self._fetch_page(where, pageable)
        if not autos:
            self.logger.debug("find: no autos found")
            raise NotFoundError(
                f"Keine Autos gefunden: {json.dumps(dict(suchparameter))}, Seite {pageable.number}"
            )

        total_elements = await self._count(where)
        return self._create_slice(autos, total_elements)

    @track_performance(service_name="AutoService")
    async def count(self) -> int:
        """Number of all autos."""
        count = await self._count([])
        self.logger.debug("count: %d", count)
        return count

    @track_performance(service_name="AutoService")
    async def find_file_by_auto_id(self, id: int) -> AutoFile:
        """
        Raises:
            NotFoundError: the auto does not exist, or it has no file
        """
        self.logger.debug("find_file_by_auto_id: id=%s", id)

        try:
            auto_id = (
                await self.db.execute(select(Auto.id).where(Auto.id == id))
            ).scalar_one_or_none()
            if auto_id is None:
                raise NotFoundError(f"Es gibt kein Auto mit der ID {id}.")

            auto_file = (
                await self.db.execute(select(AutoFile).where(AutoFile.auto_id == id))
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e)) from e

        if auto_file is None:
            self.logger.debug("find_file_by_auto_id: no file for auto %s", id)
            raise NotFoundError(f"Keine Datei für Auto mit der ID {id} gefunden.")

        self.logger.debug("find_file_by_auto_id: filename=%s", auto_file.filename)
        return auto_file

    async def _find_all(self, pageable: Pageable) -> Slice[Auto]:
        autos = await self._fetch_page([], pageable)
        if not autos:
            self.logger.debug("_find_all: no autos on page %d", pageable.number)
            raise NotFoundError(f'Ungueltige Seite "{pageable.number}"')

        total_elements = await self._count([])
        return self._create_slice(autos, total_elements)

    async def _fetch_page(self, where: List[ColumnElement[bool]], pageable: Pageable) -> List[Auto]:
        stmt = (
            select(Auto)
            .where(*where)
            .options(selectinload(Auto.fahrzeugschein))
            .order_by(Auto.id)
            .offset(pageable.offset)
            .limit(pageable.limit)
        )
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e)) from e

    async def _count(self, where: List[ColumnElement[bool]]) -> int:
        stmt = select(func.count(Auto.id)).where(*where)
        try:
            result = await self.db.execute(stmt)
            return result.scalar_one()
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e)) from e

    def _create_slice(self, autos: List[Auto], total_elements: int) -> Slice[Auto]:
        for auto in autos:
            self._normalize(auto)
        return Slice(content=autos, total_elements=total_elements)

    @staticmethod
    def _normalize(auto: Auto) -> None:
        # committed value, so the row is not flagged dirty
        if auto.schlagwoerter is None:
            set_committed_value(auto, "schlagwoerter", [])

    def _check_keys(self, keys: Iterable[str]) -> bool:
        invalid = [key for key in keys if key not in GUELTIGE_NAMEN]
        for key in invalid:
            self.logger.debug("_check_keys: invalid search parameter %r", key)
        return not invalid

    def _check_enums(self, suchparameter: Suchparameter) -> bool:
        art = suchparameter.get("art")
        self.logger.debug("_check_enums: art=%s", art)
        return art is None or art in AUTOARTEN
