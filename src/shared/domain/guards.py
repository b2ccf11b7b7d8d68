"""Referential guard: blocks deletion of entities that still have dependents.

A guard holds, per entity kind, an ordered list of *dependent checks*.
Each check answers one question ("is this status the status of any
warehouse?") for a given entity id.  The guard never caches answers;
every call observes whatever the enclosing transaction can see.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol

from modules.core.exceptions import ResourceInUse

DependentPredicate = Callable[[Any], bool]


@dataclass(frozen=True)
class DependentCheck:
    """One "is it referenced by ...?" predicate for an entity kind."""

    dependent_kind: str
    exists: DependentPredicate


class IReferentialGuard(Protocol):
    """Guard interface consumed by deletion services."""

    def blocking_dependent(self, kind: str, entity_id: Any) -> Optional[str]: ...

    def can_delete(self, kind: str, entity_id: Any) -> bool: ...

    def ensure_deletable(self, kind: str, entity_id: Any) -> None: ...


class ReferentialGuard:
    """Ordered predicate sets keyed by entity kind.

    Predicates are evaluated in registration order and evaluation stops
    at the first one that reports a dependent.  A kind with no registered
    checks is always deletable.
    """

    def __init__(self) -> None:
        self._checks: Dict[str, List[DependentCheck]] = {}

    def register(
        self,
        kind: str,
        dependent_kind: str,
        exists: DependentPredicate,
    ) -> None:
        checks = self._checks.setdefault(str(kind), [])
        if any(check.dependent_kind == str(dependent_kind) for check in checks):
            raise ValueError(
                f"Dependent {dependent_kind!r} already registered for {kind!r}."
            )
        checks.append(DependentCheck(str(dependent_kind), exists))

    def checks_for(self, kind: str) -> List[DependentCheck]:
        return list(self._checks.get(str(kind), []))

    def clear(self) -> None:
        self._checks.clear()

    def blocking_dependent(self, kind: str, entity_id: Any) -> Optional[str]:
        """Return the first dependent kind still referencing the entity."""
        for check in self._checks.get(str(kind), []):
            if check.exists(entity_id):
                return check.dependent_kind
        return None

    def can_delete(self, kind: str, entity_id: Any) -> bool:
        return self.blocking_dependent(kind, entity_id) is None

    def ensure_deletable(self, kind: str, entity_id: Any) -> None:
        """Raise ``ResourceInUse`` when any dependent still exists."""
        blocking = self.blocking_dependent(kind, entity_id)
        if blocking is not None:
            raise ResourceInUse(kind, entity_id, blocking)
