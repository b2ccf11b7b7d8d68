"""Domain error taxonomy shared by every module.

Services raise these; the API layer translates them through
``modules.core.exception_handler``.  Each class carries a stable
``code`` plus the structured attributes callers need to react without
parsing the message.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for business-rule failures."""

    code = "domain_error"


class NotFound(DomainError):
    """A referenced entity does not exist."""

    code = "not_found"

    def __init__(self, kind: str, id: Any) -> None:
        self.kind = str(kind)
        self.id = id
        super().__init__(f"{self.kind} {id} not found.")


class InvalidData(DomainError):
    """A request is structurally valid but breaks an entity invariant."""

    code = "invalid_data"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class DuplicateResource(DomainError):
    """A natural key (code, name, email, ...) is already taken."""

    code = "duplicate_resource"

    def __init__(self, kind: str, key: Any) -> None:
        self.kind = str(kind)
        self.key = key
        super().__init__(f"{self.kind} with key {key!r} already exists.")


class ResourceInUse(DomainError):
    """Deletion blocked because dependents still point to the entity."""

    code = "resource_in_use"

    def __init__(self, kind: str, id: Any, blocking_dependent_kind: str) -> None:
        self.kind = str(kind)
        self.id = id
        self.blocking_dependent_kind = str(blocking_dependent_kind)
        super().__init__(
            f"{self.kind} {id} is still referenced by "
            f"{self.blocking_dependent_kind}."
        )


class IllegalOperation(DomainError):
    """The operation is not allowed in the entity's current state."""

    code = "illegal_operation"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
