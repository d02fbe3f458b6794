import logging
from contextlib import contextmanager

from graphql import GraphQLError
from pydantic import ValidationError

from services.exceptions import AutoDomainError, DatabaseQueryError

BAD_USER_INPUT = "BAD_USER_INPUT"
FORBIDDEN_RESOURCE = "Forbidden resource"


def forbidden() -> GraphQLError:
    return GraphQLError(FORBIDDEN_RESOURCE, extensions={"code": BAD_USER_INPUT})


@contextmanager
def graphql_errors(logger: logging.Logger):
    """Turns service and validation errors into GraphQL errors with an error code."""
    try:
        yield
    except DatabaseQueryError as e:
        logger.error("GraphQL operation failed: %s", e)
        raise GraphQLError(str(e), extensions={"code": "INTERNAL_SERVER_ERROR"}) from e
    except AutoDomainError as e:
        logger.debug("GraphQL operation rejected: %s", e)
        raise GraphQLError(str(e), extensions={"code": BAD_USER_INPUT}) from e
    except ValidationError as e:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        logger.debug("GraphQL input invalid: %s", messages)
        raise GraphQLError("; ".join(messages), extensions={"code": BAD_USER_INPUT}) from e
