import dataclasses

import strawberry
from strawberry.types import Info

from auth.rbac import Permission, has_permission
from core.logging import get_logger
from resolvers.errors import forbidden, graphql_errors
from resolvers.types import AutoInput, AutoUpdateInput, CreatePayload, DeletePayload, UpdatePayload
from schemas.auto import AutoDTO, AutoDtoOhneRef
from services.exceptions import NotFoundError

logger = get_logger("auto_mutation_resolver")


def _check_permission(info: Info, permission: Permission) -> None:
    user = info.context.get("user")
    if not has_permission(user, permission):
        logger.debug("permission %s denied for %s", permission.value, getattr(user, "username", None))
        raise forbidden()


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create(self, info: Info, input: AutoInput) -> CreatePayload:
        _check_permission(info, Permission.CREATE_AUTO)
        logger.debug("create: fin=%s", input.fin)
        service = info.context["write_service"]

        with graphql_errors(logger):
            auto_dto = AutoDTO.model_validate(dataclasses.asdict(input))
            auto_id = await service.create(auto_dto.to_auto())

        logger.debug("create: id=%d", auto_id)
        return CreatePayload(id=auto_id)

    @strawberry.mutation
    async def update(self, info: Info, input: AutoUpdateInput) -> UpdatePayload:
        _check_permission(info, Permission.UPDATE_AUTO)
        logger.debug("update: id=%s, version=%s", input.id, input.version)
        service = info.context["write_service"]

        values = dataclasses.asdict(input)
        auto_id = values.pop("id")
        version = f'"{values.pop("version")}"'

        with graphql_errors(logger):
            if not str(auto_id).isdigit():
                raise NotFoundError(f"Es gibt kein Auto mit der ID {auto_id}.")
            auto_dto = AutoDtoOhneRef.model_validate(values)
            new_version = await service.update(int(auto_id), auto_dto.to_update_values(), version)

        logger.debug("update: new version=%d", new_version)
        return UpdatePayload(version=new_version)

    @strawberry.mutation
    async def delete(self, info: Info, id: strawberry.ID) -> DeletePayload:
        _check_permission(info, Permission.DELETE_AUTO)
        logger.debug("delete: id=%s", id)
        service = info.context["write_service"]

        with graphql_errors(logger):
            if not str(id).isdigit():
                return DeletePayload(success=False)
            deleted = await service.delete(int(id))

        return DeletePayload(success=deleted)
