"""Tests for gitpr.core.config — Settings and configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import SecretStr

from gitpr.core.config import Settings, get_settings
from gitpr.core.exceptions import AuthenticationError, ConfigurationError
from gitpr.core.models import ReviewDecision


class TestSettings:
    """Tests for the Settings Pydantic model."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
        assert s.github_token is None
        assert s.github_api_base == "https://api.github.com"
        assert s.per_page == 50
        assert s.request_timeout_seconds == 30.0
        assert s.pager == "delta"
        assert s.default_review == "approve"
        assert s.debug is False
        assert s.log_level == "WARNING"

    def test_token_from_bare_github_token(self):
        with patch.dict(os.environ, {"GITHUB_TOKEN": "ghp_bare"}, clear=True):
            s = Settings(_env_file=None)
        assert s.require_token() == "ghp_bare"

    def test_token_from_prefixed_var(self):
        with patch.dict(os.environ, {"GIT_PR_GITHUB_TOKEN": "ghp_prefixed"}, clear=True):
            s = Settings(_env_file=None)
        assert s.require_token() == "ghp_prefixed"

    def test_prefixed_fields(self):
        env = {"GIT_PR_PAGER": "less -R", "GIT_PR_PER_PAGE": "10", "GIT_PR_DEFAULT_REVIEW": "comment-only"}
        with patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)
        assert s.pager == "less -R"
        assert s.per_page == 10
        assert s.default_review == "comment-only"

    @pytest.mark.parametrize("value", ["1", "true", "TRUE"])
    def test_debug_flag_truthy(self, value: str):
        with patch.dict(os.environ, {"DEBUG": value}, clear=True):
            s = Settings(_env_file=None)
        assert s.debug is True
        assert s.effective_log_level == "DEBUG"

    def test_debug_flag_off(self):
        with patch.dict(os.environ, {"DEBUG": "0"}, clear=True):
            s = Settings(_env_file=None)
        assert s.debug is False
        assert s.effective_log_level == "WARNING"

    @pytest.mark.parametrize("value", ["*", "verbose", "", "express:*", "false"])
    def test_foreign_debug_values_are_off(self, value: str):
        with patch.dict(os.environ, {"DEBUG": value}, clear=True):
            s = get_settings()
        assert s.debug is False

    @pytest.mark.parametrize("value", ["yes", "On", " true "])
    def test_debug_truthy_words(self, value: str):
        with patch.dict(os.environ, {"GIT_PR_DEBUG": value}, clear=True):
            s = Settings(_env_file=None)
        assert s.debug is True

    def test_secret_not_leaked_in_repr(self):
        s = Settings(_env_file=None, github_token=SecretStr("ghp_super_secret"))
        assert "ghp_super_secret" not in repr(s)


class TestRequireToken:
    def test_missing_token(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
        with pytest.raises(AuthenticationError):
            s.require_token()

    def test_blank_token(self):
        s = Settings(_env_file=None, github_token=SecretStr("   "))
        with pytest.raises(AuthenticationError):
            s.require_token()


class TestDefaultDecision:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("approve", ReviewDecision.APPROVE),
            ("comment-only", ReviewDecision.COMMENT_ONLY),
            ("reject", ReviewDecision.REQUEST_CHANGES),
            ("explicit", None),
        ],
    )
    def test_mapping(self, value: str, expected: ReviewDecision | None):
        s = Settings(_env_file=None, default_review=value)
        assert s.default_decision == expected


class TestGetSettings:
    def test_returns_settings_instance(self):
        with patch.dict(os.environ, {"GITHUB_TOKEN": "ghp_x"}, clear=True):
            assert isinstance(get_settings(), Settings)

    def test_invalid_value_is_configuration_error(self):
        with patch.dict(os.environ, {"GIT_PR_DEFAULT_REVIEW": "maybe"}, clear=True):
            with pytest.raises(ConfigurationError, match="default_review"):
                get_settings()
