"""
Helpers for reading typed values from environment variables.
"""
import os


def env_float(name: str, default: float) -> float:
    """
    Read a float from the environment.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset or blank.

    Returns:
        The parsed value.

    Raises:
        ValueError: If the variable is set but is not a number.
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


def env_int(name: str, default: int) -> int:
    """Read an integer from the environment, like env_float."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def env_str(name: str, default: str) -> str:
    """Read a string, treating a blank value as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()
