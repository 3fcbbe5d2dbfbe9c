"""Configuration for the activity normalization engine.

This module provides the EngineConfig dataclass which controls the GitHub
host URLs used when synthesising links and the preview sizes used when
building item bodies.

Usage
-----
Create a configuration with defaults:

>>> config = EngineConfig()
>>> config.html_base_url
'https://github.com'

Or point it at a GitHub Enterprise host:

>>> config = EngineConfig(html_base_url="https://github.example.com")
>>> config.repo_html_url("octo/widgets")
'https://github.example.com/octo/widgets'

:meth:`EngineConfig.from_env` builds the same configuration from the
``GHACTIVITY_*`` environment variables.

"""

from __future__ import annotations

import dataclasses as dc
import os

from ghactivity.errors import EngineConfigError
from ghactivity.logging import normalize_log_level

_DEFAULT_HTML_BASE_URL = "https://github.com"
_DEFAULT_API_BASE_URL = "https://api.github.com"
_DEFAULT_BODY_PREVIEW_LIMIT = 5
_DEFAULT_LOG_LEVEL = "INFO"


@dc.dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings shared by the event normalizer and the query helpers.

    Attributes
    ----------
    html_base_url
        Web host used for synthesised links (repository, tree, pull URLs).
    api_base_url
        REST API host; ``{api_base_url}/repos/`` is stripped from
        ``repository_url`` values to obtain ``owner/name`` slugs.
    body_preview_limit
        Maximum number of commit messages or wiki pages listed in a
        synthesised body before an "and N more" suffix is appended.
    log_level
        Normalized femtologging level for callers that configure logging.

    """

    html_base_url: str = _DEFAULT_HTML_BASE_URL
    api_base_url: str = _DEFAULT_API_BASE_URL
    body_preview_limit: int = _DEFAULT_BODY_PREVIEW_LIMIT
    log_level: str = _DEFAULT_LOG_LEVEL

    @property
    def api_repos_prefix(self) -> str:
        """Return the prefix preceding ``owner/name`` in API repository URLs."""
        return f"{self.api_base_url}/repos/"

    def repo_html_url(self, full_name: str) -> str:
        """Return the web URL for a repository slug."""
        return f"{self.html_base_url}/{full_name}"

    def repo_api_url(self, full_name: str) -> str:
        """Return the API URL for a repository slug."""
        return f"{self.api_repos_prefix}{full_name}"

    def user_html_url(self, login: str) -> str:
        """Return the profile URL for a login."""
        return f"{self.html_base_url}/{login}"

    @staticmethod
    def _parse_base_url(env_var: str, default: str) -> str:
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        value = raw.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise EngineConfigError.invalid_url(env_var, raw)
        return value

    @staticmethod
    def _parse_positive_int(env_var: str, default: int) -> int:
        """Read a positive integer env var, falling back to a default."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            raise EngineConfigError.not_an_integer(env_var, raw) from exc
        if value < 1:
            raise EngineConfigError.not_positive(env_var, value)
        return value

    @staticmethod
    def _parse_log_level(env_var: str, default: str) -> str:
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        level, invalid = normalize_log_level(raw)
        if invalid:
            raise EngineConfigError.invalid_log_level(env_var, raw)
        return level

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``GHACTIVITY_HTML_BASE_URL``: Web host for synthesised links.
        - ``GHACTIVITY_API_BASE_URL``: REST API host.
        - ``GHACTIVITY_BODY_PREVIEW_LIMIT``: Positive integer preview size.
        - ``GHACTIVITY_LOG_LEVEL``: femtologging level name.

        Returns
        -------
        EngineConfig
            Configuration instance with values from environment or defaults.

        Raises
        ------
        EngineConfigError
            If any variable is set to a malformed value.

        """
        return cls(
            html_base_url=cls._parse_base_url(
                "GHACTIVITY_HTML_BASE_URL", _DEFAULT_HTML_BASE_URL
            ),
            api_base_url=cls._parse_base_url(
                "GHACTIVITY_API_BASE_URL", _DEFAULT_API_BASE_URL
            ),
            body_preview_limit=cls._parse_positive_int(
                "GHACTIVITY_BODY_PREVIEW_LIMIT", _DEFAULT_BODY_PREVIEW_LIMIT
            ),
            log_level=cls._parse_log_level("GHACTIVITY_LOG_LEVEL", _DEFAULT_LOG_LEVEL),
        )


DEFAULT_CONFIG = EngineConfig()
