"""Utility functions for the readiness bot."""

import re
from pathlib import Path
from typing import Optional, Union

_CLOCK_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?$")


def get_user_directory(base_dir: Union[str, Path], user_id: Union[int, str], subdir: Optional[str] = None) -> Path:
    """
    Get a user-specific directory path, creating it if it doesn't exist.

    Args:
        base_dir: Base directory path
        user_id: Telegram user ID
        subdir: Optional subdirectory within the user directory

    Returns:
        Path object for the user directory
    """
    user_dir = Path(base_dir) / "user" / str(user_id)
    if subdir:
        user_dir = user_dir / subdir

    user_dir.mkdir(parents=True, exist_ok=True)
    return user_dir


def parse_clock_time(text: str) -> float:
    """
    Parse "HH:MM" or "HH" into decimal hours ("22:30" -> 22.5).

    Raises:
        ValueError: If the text is not a valid time of day.
    """
    match = _CLOCK_RE.match(text.strip())
    if not match:
        raise ValueError(f"Invalid time '{text}', expected HH:MM")
    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time '{text}', expected HH:MM")
    return hours + minutes / 60
