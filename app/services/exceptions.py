from typing import List


class AutoDomainError(Exception):
    """Base class for all errors the auto services report to their callers."""


class NotFoundError(AutoDomainError):
    """Raised when a record, a file or any search result does not exist, or the search parameters are invalid."""


class ValidationFailedError(AutoDomainError):
    """Raised when field constraints are violated. Carries one message per invalid field."""

    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__("; ".join(messages))


class FinExistsError(AutoDomainError):
    """Raised when a new auto would reuse an existing FIN."""

    def __init__(self, fin: str):
        self.fin = fin
        super().__init__(f"Die FIN {fin} existiert bereits.")


class VersionInvalidError(AutoDomainError):
    """Raised when the version token is not a quoted number with 1 to 3 digits."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Die Versionsnummer {version} ist ungueltig.")


class VersionOutdatedError(AutoDomainError):
    """Raised when the version token is behind the stored version."""

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Die Versionsnummer {version} ist nicht aktuell.")


class ForbiddenError(AutoDomainError):
    """Raised when the caller lacks the role for an operation."""


class DatabaseQueryError(AutoDomainError):
    """Raised when a database statement fails. Never retried."""
