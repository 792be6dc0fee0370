"""
Flag button layout and custom-id handling.

Kept free of discord imports so the layout rules can be used and tested
without a gateway connection.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

BUTTON_PREFIX = "tr"
BUTTONS_PER_ROW = 5
MAX_ROWS = 2

PROMPT_TEXT = "Translate this message:"
NOT_FOUND_TEXT = "Original message not found."
NO_TEXT_TEXT = "No text to translate in that message."
EMPTY_TRANSLATION_TEXT = "*Translation failed.*"
ERROR_TEXT = "An error occurred while translating."


@dataclass(frozen=True)
class FlagButton:
    label: str
    code: str
    custom_id: str


def make_custom_id(code: str, message_id) -> str:
    """
    Examples:
        >>> make_custom_id('PT-PT', 123)
        'tr:PT-PT:123'
    """
    return f"{BUTTON_PREFIX}:{code}:{message_id}"


def parse_custom_id(custom_id: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Split a button id into (code, message_id); None for ids this bot did not create.

    Examples:
        >>> parse_custom_id('tr:EN-US:42')
        ('EN-US', '42')
        >>> parse_custom_id('other:EN-US:42') is None
        True
    """
    if not custom_id or not custom_id.startswith(f"{BUTTON_PREFIX}:"):
        return None
    parts = custom_id.split(':')
    if len(parts) < 3 or not parts[1] or not parts[2]:
        return None
    return parts[1], parts[2]


def chunk(items: Sequence, size: int) -> List[list]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def build_flag_rows(
    flag_to_lang: Dict[str, str],
    message_id,
    per_row: int = BUTTONS_PER_ROW,
    max_rows: int = MAX_ROWS,
) -> List[List[FlagButton]]:
    """
    Lay out one button per flag, in mapping order.

    Pairs with an empty flag or code are dropped, rows hold at most
    `per_row` buttons and at most `max_rows` rows are returned.
    """
    buttons = [
        FlagButton(label=flag, code=code, custom_id=make_custom_id(code, message_id))
        for flag, code in flag_to_lang.items()
        if isinstance(flag, str) and flag and isinstance(code, str) and code
    ]

    rows = [row for row in chunk(buttons, per_row) if row]
    return rows[:max_rows]


def is_allowed_channel(channel_id, allowlist: Iterable[str]) -> bool:
    """Empty allowlist allows every channel."""
    allowed = set(allowlist)
    if not allowed:
        return True
    return channel_id is not None and str(channel_id) in allowed


def translation_title(code: str) -> str:
    return f"🌐 Translation ({code})"


def requested_by(username: str) -> str:
    return f"Requested by {username}"
