from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from disk or the command line
into strictly typed values, filling missing keys with domain defaults.
"""

import logging
from typing import Any, Dict, List, Tuple

from skeletree.domain.config import get_default_config

logger = logging.getLogger(__name__)

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises TypeError/ValueError instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in ("output_file", "target_dir", "templates_dir"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["save_log"] = _as_bool(merged.get("save_log"), defaults["save_log"], "save_log", warnings, strict)
    merged["max_depth"] = _as_non_negative_int(
        merged.get("max_depth"), defaults["max_depth"], "max_depth", warnings, strict
    )
    merged["exclude_patterns"] = _as_list_str(
        merged.get("exclude_patterns"), defaults["exclude_patterns"], "exclude_patterns", warnings, strict
    )

    level = str(merged.get("log_level") or "").strip().upper()
    if level not in _LEVELS:
        msg = f"Invalid field 'log_level': unknown level '{merged.get('log_level')}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        level = defaults["log_level"]
    merged["log_level"] = level

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce numeric strings and floats into a non-negative int."""
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value

    if not strict and not isinstance(value, bool):
        try:
            coerced = int(str(value).strip())
        except ValueError:
            coerced = -1
        if coerced >= 0:
            warnings.append(f"Field '{field}' converted from '{value}' to {coerced}.")
            return coerced

    msg = f"Invalid field '{field}': expected non-negative int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Accept a list of strings or a comma-separated string."""
    if value is None:
        return list(fallback)

    if isinstance(value, str):
        if strict:
            raise TypeError(f"Invalid field '{field}': expected list, received str.")
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return [p.strip() for p in value.split(",") if p.strip()]

    if isinstance(value, (list, tuple)):
        items = [str(p).strip() for p in value if p is not None]
        return [p for p in items if p]

    msg = f"Invalid field '{field}': expected list, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)
