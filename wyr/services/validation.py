"""
Request validation for the poll endpoints.

Path parameters arrive as strings and submission bodies as arbitrary JSON;
these helpers turn them into typed values or raise an ``InvalidInput`` /
``DuplicateOptions`` error before anything touches the database.
"""

import enum
import re
from typing import Any, Tuple

from wyr.errors import DuplicateOptions, InvalidId, InvalidOption, InvalidOptionText
from wyr.models.question import OPTION_TEXT_MAX_LENGTH

# Upper bound of the INT primary key column.
MAX_QUESTION_ID = 2_147_483_647

_DIGITS = re.compile(r"[0-9]+")


class VoteOption(str, enum.Enum):
    A = "A"
    B = "B"


def parse_question_id(raw: Any) -> int:
    """Parse a positive integer question id."""
    if isinstance(raw, bool):
        raise InvalidId()
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _DIGITS.fullmatch(raw.strip()):
        value = int(raw.strip())
    else:
        raise InvalidId()

    if value <= 0 or value > MAX_QUESTION_ID:
        raise InvalidId()
    return value


def parse_vote_option(raw: Any) -> VoteOption:
    """Accept ``a``/``A``/``b``/``B``."""
    if not isinstance(raw, str):
        raise InvalidOption()
    try:
        return VoteOption(raw.upper())
    except ValueError:
        raise InvalidOption() from None


def normalize_option_text(raw: Any) -> str:
    """Trimmed text, or an empty string for anything that is not a string."""
    return raw.strip() if isinstance(raw, str) else ""


def options_match(text_a: str, text_b: str) -> bool:
    return text_a.strip().casefold() == text_b.strip().casefold()


def validate_submission(raw_a: Any, raw_b: Any) -> Tuple[str, str]:
    """Return both option texts trimmed, or raise."""
    text_a = normalize_option_text(raw_a)
    text_b = normalize_option_text(raw_b)

    if not text_a or not text_b:
        raise InvalidOptionText("Options required.")
    if len(text_a) > OPTION_TEXT_MAX_LENGTH or len(text_b) > OPTION_TEXT_MAX_LENGTH:
        raise InvalidOptionText(f"Options exceed {OPTION_TEXT_MAX_LENGTH} chars.")
    if options_match(text_a, text_b):
        raise DuplicateOptions()

    return text_a, text_b
