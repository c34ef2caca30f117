"""Layered configuration for pundit-authz."""

from __future__ import annotations

from dataclasses import dataclass

from pundit_authz._types import OnMissingPolicy

__all__ = [
    "AuthzConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

_VALID_MISSING_POLICY: set[str] = {"raise", "deny"}


@dataclass(frozen=True, slots=True)
class AuthzConfig:
    """Naming and dispatch settings with merge semantics.

    Attributes:
        policy_suffix: Appended to the singular namespace to form the
            policy name (``Books`` -> ``BookPolicy``).
        query_suffix: Appended to the underscored action to form the
            query name (``Index`` -> ``index?``).
        on_missing_policy: Behavior when no policy class is registered.
            ``"raise"`` raises ``PolicyNotFoundError``.
            ``"deny"`` treats the check as a denial.
        log_decisions: Emit log records for every authorization decision.

    Example::

        config = AuthzConfig(on_missing_policy="deny")
        merged = config.merge(log_decisions=True)
    """

    policy_suffix: str = "Policy"
    query_suffix: str = "?"
    on_missing_policy: OnMissingPolicy = "raise"
    log_decisions: bool = False

    def __post_init__(self) -> None:
        if self.on_missing_policy not in _VALID_MISSING_POLICY:
            raise ValueError(
                f"on_missing_policy must be one of {_VALID_MISSING_POLICY!r}, "
                f"got {self.on_missing_policy!r}"
            )
        if not self.policy_suffix:
            raise ValueError("policy_suffix must be a non-empty string")
        if not self.query_suffix:
            raise ValueError("query_suffix must be a non-empty string")

    def merge(
        self,
        *,
        policy_suffix: str | None = None,
        query_suffix: str | None = None,
        on_missing_policy: OnMissingPolicy | None = None,
        log_decisions: bool | None = None,
    ) -> AuthzConfig:
        """Return a new config with non-None overrides applied.

        Example::

            base = AuthzConfig()
            strict = base.merge(on_missing_policy="raise")
        """
        return AuthzConfig(
            policy_suffix=policy_suffix if policy_suffix is not None else self.policy_suffix,
            query_suffix=query_suffix if query_suffix is not None else self.query_suffix,
            on_missing_policy=(
                on_missing_policy if on_missing_policy is not None else self.on_missing_policy
            ),
            log_decisions=log_decisions if log_decisions is not None else self.log_decisions,
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = AuthzConfig()


def get_global_config() -> AuthzConfig:
    """Return the current global configuration."""
    return _global_config


def configure(
    *,
    policy_suffix: str | None = None,
    query_suffix: str | None = None,
    on_missing_policy: OnMissingPolicy | None = None,
    log_decisions: bool | None = None,
) -> AuthzConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Returns the new global config.

    Args:
        policy_suffix: Suffix for derived policy names.
        query_suffix: Suffix for derived query names.
        on_missing_policy: Set to ``"raise"`` or ``"deny"``.
        log_decisions: Enable/disable logging of authorization decisions.

    Returns:
        The updated global ``AuthzConfig``.

    Example::

        configure(on_missing_policy="deny")
        # Handlers without a policy are now denied instead of erroring
    """
    global _global_config
    _global_config = _global_config.merge(
        policy_suffix=policy_suffix,
        query_suffix=query_suffix,
        on_missing_policy=on_missing_policy,
        log_decisions=log_decisions,
    )
    return _global_config


def _set_global_config(cfg: AuthzConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = AuthzConfig()
