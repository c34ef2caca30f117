"""Audit logging for authorization decisions."""

from __future__ import annotations

import logging

__all__ = ["log_decision", "log_missing_policy"]

logger = logging.getLogger("pundit_authz")


def log_decision(
    *,
    handler: str | None,
    policy: type,
    query: str,
    actor: object,
    record: object,
    allowed: bool,
) -> None:
    """Log a single authorization decision.

    Logging levels:
    - INFO: Summary (policy, query, actor, outcome)
    - DEBUG: Detailed (handler identity and subject record)

    Example::

        log_decision(
            handler="Books::Index",
            policy=BookPolicy,
            query="index?",
            actor=current_user,
            record=None,
            allowed=True,
        )
    """
    outcome = "allowed" if allowed else "denied"
    logger.info(
        "Authorization %s: %s.%s for actor %r",
        outcome,
        policy.__name__,
        query,
        actor,
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Resolved handler %r to %s.%s — record: %r",
            handler,
            policy.__name__,
            query,
            record,
        )


def log_missing_policy(*, name: str | None, handler: str | None) -> None:
    """Log a missing policy that was denied by default."""
    logger.warning(
        "No policy registered as %r for handler %r — deny-by-default applied",
        name,
        handler,
    )
