"""Tests for AuthzConfig — layered configuration."""

from __future__ import annotations

import pytest

from pundit_authz.config._config import (
    AuthzConfig,
    _reset_global_config,
    _set_global_config,
    configure,
    get_global_config,
)


class TestAuthzConfigDefaults:
    def test_defaults(self) -> None:
        config = AuthzConfig()
        assert config.policy_suffix == "Policy"
        assert config.query_suffix == "?"
        assert config.on_missing_policy == "raise"
        assert config.log_decisions is False


class TestAuthzConfigValidation:
    def test_rejects_unknown_missing_policy_mode(self) -> None:
        with pytest.raises(ValueError, match="on_missing_policy"):
            AuthzConfig(on_missing_policy="ignore")  # type: ignore[arg-type]

    def test_rejects_empty_policy_suffix(self) -> None:
        with pytest.raises(ValueError, match="policy_suffix"):
            AuthzConfig(policy_suffix="")

    def test_rejects_empty_query_suffix(self) -> None:
        with pytest.raises(ValueError, match="query_suffix"):
            AuthzConfig(query_suffix="")

    def test_is_frozen(self) -> None:
        config = AuthzConfig()
        with pytest.raises(AttributeError):
            config.policy_suffix = "Rules"  # type: ignore[misc]


class TestAuthzConfigMerge:
    def test_merge_overrides(self) -> None:
        merged = AuthzConfig().merge(on_missing_policy="deny", log_decisions=True)
        assert merged.on_missing_policy == "deny"
        assert merged.log_decisions is True
        assert merged.policy_suffix == "Policy"

    def test_merge_with_none_keeps_values(self) -> None:
        config = AuthzConfig(query_suffix="_q")
        assert config.merge(query_suffix=None).query_suffix == "_q"

    def test_merge_returns_new_instance(self) -> None:
        config = AuthzConfig()
        merged = config.merge(policy_suffix="Rules")
        assert merged is not config
        assert config.policy_suffix == "Policy"


class TestGlobalConfig:
    def test_configure_updates_global(self) -> None:
        result = configure(on_missing_policy="deny")
        assert result is get_global_config()
        assert get_global_config().on_missing_policy == "deny"

    def test_configure_merges(self) -> None:
        configure(policy_suffix="Rules")
        configure(log_decisions=True)
        cfg = get_global_config()
        assert cfg.policy_suffix == "Rules"
        assert cfg.log_decisions is True

    def test_reset(self) -> None:
        configure(on_missing_policy="deny")
        _reset_global_config()
        assert get_global_config() == AuthzConfig()

    def test_set_snapshot(self) -> None:
        snapshot = AuthzConfig(query_suffix="_q")
        _set_global_config(snapshot)
        assert get_global_config() is snapshot
