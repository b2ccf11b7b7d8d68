"""Process-wide referential guard.

Rules are registered once from ``CoreConfig.ready()``; see
``modules.core.guard_rules`` for the wiring and its evaluation order.
"""

from __future__ import annotations

from shared.domain.guards import ReferentialGuard

referential_guard = ReferentialGuard()
