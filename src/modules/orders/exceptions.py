"""Order domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError


class InvalidOrder(DomainError):
    """The order request is structurally invalid.

    Empty line list, non-positive quantity or price, a status outside
    the ORDER category, or an ambiguous line reference.
    """

    code = "invalid_order"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
