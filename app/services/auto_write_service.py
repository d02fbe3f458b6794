import logging
import re
from typing import Any, Dict, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Models
from models.auto import Auto
from models.auto_file import AutoFile

# Metrics
from core.metrics import track_performance

from services.auto_service import AutoService
from services.exceptions import (
    DatabaseQueryError,
    FinExistsError,
    NotFoundError,
    VersionInvalidError,
    VersionOutdatedError,
)
from services.file_type import guess_mime_type


class AutoWriteService:
    """
    Write access to autos: create, update, delete and file attachment.

    Concurrency Control:
        Updates use optimistic locking. The caller sends the version it has
        seen as a quoted number ("0", "1", ...). The update is rejected if
        that version is behind the stored one; otherwise a single
        conditional UPDATE ... WHERE version <= :seen increments the version,
        so two concurrent writers cannot both win with the same token.

        FIN uniqueness on create is checked before the insert. Two concurrent
        creates with the same FIN can both pass the check; the unique
        constraint on auto.fin rejects the second insert, which is then
        reported as FinExistsError as well.
    """

    VERSION_PATTERN = re.compile(r'"\d{1,3}"')

    def __init__(
        self,
        db: AsyncSession,
        read_service: AutoService,
        logger: Optional[logging.Logger] = None,
    ):
        self.db = db
        self.read_service = read_service
        self.logger = logger or logging.getLogger("auto.auto_write_service")

    @track_performance(service_name="AutoWriteService")
    async def create(self, auto: Auto) -> int:
        """
        Inserts a new auto together with its registration and equipment
        items in one transaction.

        Returns:
            int: id of the new auto

        Raises:
            FinExistsError: the FIN is already used
        """
        self.logger.debug("create: fin=%s", auto.fin)
        await self._validate_create(auto)

        auto.version = 0
        self.db.add(auto)
        try:
            await self.db.flush()
            auto_id = auto.id
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if "fin" in str(e.orig).lower():
                raise FinExistsError(auto.fin) from e
            raise DatabaseQueryError(str(e)) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e)) from e

        self.logger.debug("create: id=%s", auto_id)
        return auto_id

    @track_performance(service_name="AutoWriteService")
    async def update(self, id: Optional[int], values: Dict[str, Any], version: str) -> int:
        """
        Overwrites the scalar fields of an auto. Registration and equipment
        are left untouched.

        Args:
            id (int): id of the auto
            values (dict): column name -> new value
            version (str): version token as sent in If-Match, e.g. '"0"'

        Returns:
            int: the new version number

        Raises:
            NotFoundError: no auto with this id
            VersionInvalidError: malformed version token
            VersionOutdatedError: version token behind the stored version
            FinExistsError: the new FIN is already used by another auto
        """
        self.logger.debug("update: id=%s, values=%s, version=%s", id, values, version)
        if id is None:
            raise NotFoundError(f"Es gibt kein Auto mit der ID {id}.")

        version_number = await self._validate_update(id, version)

        stmt = (
            update(Auto)
            .where(Auto.id == id, Auto.version <= version_number)
            .values(**values, version=Auto.version + 1)
            .returning(Auto.version)
            .execution_options(synchronize_session="fetch")
        )
        try:
            new_version = (await self.db.execute(stmt)).scalar_one_or_none()
            if new_version is None:
                # another writer incremented the version after our check
                await self.db.rollback()
                raise VersionOutdatedError(version_number)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if "fin" in str(e.orig).lower():
                raise FinExistsError(values.get("fin")) from e
            raise DatabaseQueryError(str(e)) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e)) from e

        self.logger.debug("update: new version=%d", new_version)
        return new_version

    @track_performance(service_name="AutoWriteService")
    async def delete(self, id: int) -> bool:
        """
        Returns:
            bool: True if the auto existed and was deleted, False otherwise
        """
        self.logger.debug("delete: id=%s", id)
        try:
            auto = await self.db.get(Auto, id)
            if auto is None:
                self.logger.debug("delete: not found")
                return False

            await self.db.delete(auto)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e)) from e

        return True

    @track_performance(service_name="AutoWriteService")
    async def add_file(self, auto_id: int, data: bytes, filename: str, size: int) -> AutoFile:
        """
        Attaches a binary file to an existing auto, replacing any previous one.
        The MIME type is detected from the bytes.

        Raises:
            NotFoundError: no auto with this id
        """
        self.logger.debug("add_file: auto_id=%s, filename=%s, size=%d", auto_id, filename, size)

        try:
            auto = await self.db.get(Auto, auto_id)
            if auto is None:
                raise NotFoundError(f"Es gibt kein Auto mit der ID {auto_id}.")

            await self.db.execute(delete(AutoFile).where(AutoFile.auto_id == auto_id))

            mimetype = await guess_mime_type(data)
            self.logger.debug("add_file: mimetype=%s", mimetype)

            auto_file = AutoFile(
                filename=filename,
                data=data,
                mimetype=mimetype,
                auto_id=auto_id,
            )
            self.db.add(auto_file)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseQueryError(str(e)) from e

        self.logger.debug(
            "add_file: id=%s, byte_length=%d, filename=%s, mimetype=%s",
            auto_file.id, len(data), filename, mimetype,
        )
        return auto_file

    async def _validate_create(self, auto: Auto) -> None:
        if auto.fin is None:
            return

        try:
            result = await self.db.execute(
                select(func.count(Auto.id)).where(Auto.fin == auto.fin)
            )
            anzahl = result.scalar_one()
        except SQLAlchemyError as e:
            raise DatabaseQueryError(str(e)) from e

        if anzahl > 0:
            self.logger.debug("_validate_create: fin exists: %s", auto.fin)
            raise FinExistsError(auto.fin)

    async def _validate_update(self, id: int, version: str) -> int:
        if version is None or not self.VERSION_PATTERN.fullmatch(version):
            raise VersionInvalidError(version)

        version_number = int(version[1:-1])
        auto = await self.read_service.find_by_id(id)

        if version_number < auto.version:
            self.logger.debug("_validate_update: stored version=%d", auto.version)
            raise VersionOutdatedError(version_number)

        return version_number
