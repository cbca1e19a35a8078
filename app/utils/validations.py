import re
from typing import Optional

from app.constants.constants import DEFAULT_CATEGORY_COLOR
from app.core.exceptions import InvalidArgumentError

# #RGB, #RRGGBB or #RRGGBBAA
HEX_COLOR_PATTERN = re.compile(r"#([A-Fa-f0-9]{3}|[A-Fa-f0-9]{6}|[A-Fa-f0-9]{8})")


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def is_valid_hex_color(color: Optional[str]) -> bool:
    """Check whether the value is a #RGB, #RRGGBB or #RRGGBBAA hex color."""
    if is_blank(color):
        return False
    return HEX_COLOR_PATTERN.fullmatch(color) is not None


def normalize_color(color: Optional[str] = None) -> str:
    """
    Upper-case a valid hex color, or fall back to white.

    Never raises; applying it twice gives the same result as applying it once.
    """
    if not is_valid_hex_color(color):
        return DEFAULT_CATEGORY_COLOR
    return color.upper()


def require_text(value: Optional[str], field: str) -> str:
    """Return the trimmed value or raise InvalidArgumentError if it is blank."""
    if is_blank(value):
        raise InvalidArgumentError(f"{field} is required")
    return value.strip()
