"""Errors raised by ghactivity configuration and caller input validation.

The normalization and query engine itself never raises; records it cannot use
are dropped and reported as diagnostics instead.
"""

from __future__ import annotations


class EngineConfigError(ValueError):
    """Raised when engine configuration from the environment is invalid."""

    @classmethod
    def not_an_integer(cls, env_var: str, raw: str) -> EngineConfigError:
        """Return an error for a non-integer environment value."""
        return cls(f"{env_var} must be an integer, got: {raw!r}")

    @classmethod
    def not_positive(cls, env_var: str, value: int) -> EngineConfigError:
        """Return an error for a non-positive integer value."""
        return cls(f"{env_var} must be positive, got: {value}")

    @classmethod
    def invalid_url(cls, env_var: str, raw: str) -> EngineConfigError:
        """Return an error for a base URL without an http(s) scheme."""
        return cls(f"{env_var} must be an http(s) URL, got: {raw!r}")

    @classmethod
    def invalid_log_level(cls, env_var: str, raw: str) -> EngineConfigError:
        """Return an error for an unrecognised log level."""
        return cls(f"{env_var} is not a recognised log level: {raw!r}")


class WindowError(ValueError):
    """Raised when caller-supplied date window bounds are malformed."""

    @classmethod
    def invalid_date(cls, field: str, raw: str) -> WindowError:
        """Return an error for a bound that is not a ``YYYY-MM-DD`` date."""
        return cls(f"{field} must be a YYYY-MM-DD date, got: {raw!r}")

    @classmethod
    def inverted(cls, start: str, end: str) -> WindowError:
        """Return an error when the start bound falls after the end bound."""
        return cls(f"start date {start} is after end date {end}")
