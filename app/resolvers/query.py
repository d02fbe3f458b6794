from datetime import date
from enum import Enum
from typing import Dict, List, Optional

import strawberry
from strawberry.types import Info

from core.config import MAX_PAGE_SIZE
from core.logging import get_logger
from resolvers.errors import graphql_errors
from resolvers.types import Auto, SuchparameterInput
from services.exceptions import NotFoundError
from services.pageable import Pageable

logger = get_logger("auto_query_resolver")

# attribute name -> search parameter name
PARAMETER_NAMEN = {"identifikations_nummer": "identifikationsNummer"}


def to_suchparameter(input: Optional[SuchparameterInput]) -> Dict[str, str]:
    """GraphQL search input -> the string parameter bag the read service expects."""
    if input is None:
        return {}

    suchparameter = {}
    for attr, value in vars(input).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, Enum):
            value = value.value
        elif isinstance(value, date):
            value = value.isoformat()
        suchparameter[PARAMETER_NAMEN.get(attr, attr)] = str(value)
    return suchparameter


@strawberry.type
class Query:
    @strawberry.field
    async def auto(self, info: Info, id: strawberry.ID) -> Auto:
        logger.debug("auto: id=%s", id)
        service = info.context["read_service"]

        with graphql_errors(logger):
            try:
                auto_id = int(id)
            except ValueError:
                raise NotFoundError(f"Es gibt kein Auto mit der ID {id}.")
            auto = await service.find_by_id(auto_id, mit_ausstattungen=True)

        return Auto.from_model(auto, mit_ausstattungen=True)

    @strawberry.field
    async def autos(self, info: Info, suchparameter: Optional[SuchparameterInput] = None) -> List[Auto]:
        parameter = to_suchparameter(suchparameter)
        logger.debug("autos: suchparameter=%s", parameter)
        service = info.context["read_service"]

        with graphql_errors(logger):
            slice_ = await service.find(parameter, Pageable(number=0, size=MAX_PAGE_SIZE))

        return [Auto.from_model(auto) for auto in slice_.content]
