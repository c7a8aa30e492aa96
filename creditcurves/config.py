"""
Package-level defaults for curve construction.

Curve factories fall back to these values when the caller does not pass
a day count or interpolation method explicitly. The calendar is the one
bare "BUS/252" resolves to.
"""

from dataclasses import dataclass, replace

# Year fractions below this are treated as the valuation date itself
EFFECTIVE_ZERO = 1e-10


@dataclass(frozen=True)
class CurveConfig:
    """Defaults used when building curve views."""

    day_count: str = "ACT/365F"
    interpolation_method: str = "LINEAR"
    calendar: str = "WEEKEND"
    effective_zero: float = EFFECTIVE_ZERO


_DEFAULT_CONFIG = CurveConfig()


def get_default_config() -> CurveConfig:
    """Return the active default configuration."""
    return _DEFAULT_CONFIG


def set_default_config(config: CurveConfig = None, **overrides) -> CurveConfig:
    """
    Replace the default configuration.

    Args:
        config: New configuration; when None the current one is kept
        **overrides: Individual fields to override on top of ``config``

    Returns:
        The configuration now in effect
    """
    global _DEFAULT_CONFIG
    base = config if config is not None else _DEFAULT_CONFIG
    _DEFAULT_CONFIG = replace(base, **overrides) if overrides else base
    return _DEFAULT_CONFIG


def reset_default_config() -> CurveConfig:
    """Restore the built-in defaults."""
    global _DEFAULT_CONFIG
    _DEFAULT_CONFIG = CurveConfig()
    return _DEFAULT_CONFIG
