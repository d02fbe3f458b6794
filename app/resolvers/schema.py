from typing import Optional

import strawberry
from fastapi import Depends
from strawberry.fastapi import GraphQLRouter

from auth.auth_bearer import JWTBearer
from auth.auth_handler import CurrentUser
from resolvers.mutation import Mutation
from resolvers.query import Query
from routers.dependencies import get_auto_service, get_auto_write_service
from services.auto_service import AutoService
from services.auto_write_service import AutoWriteService


async def get_context(
    read_service: AutoService = Depends(get_auto_service),
    write_service: AutoWriteService = Depends(get_auto_write_service),
    user: Optional[CurrentUser] = Depends(JWTBearer(optional=True)),
):
    """Per-request resolver context; queries are public, so the user may be None."""
    return {
        "read_service": read_service,
        "write_service": write_service,
        "user": user,
    }


schema = strawberry.Schema(query=Query, mutation=Mutation)

graphql_router = GraphQLRouter(schema, context_getter=get_context)
