"""Predicates and coercions shared by field declarations.

Predicates never raise on bad input: they return False so the resolver can
re-prompt. Coercions assume their input already passed the matching
predicate and raise ValueError otherwise.
"""

import math
from typing import Any, Callable, Mapping

_YES = {"y", "yes"}
_NO = {"n", "no"}


def validate_input(text: str) -> str:
    """Validate that free text is a non-empty string.

    Returns the stripped input on success.
    Raises ValueError if input is empty or whitespace-only.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Input must be a non-empty string.")
    return text.strip()


def parse_number(raw: Any) -> float:
    """Parse raw operator input as a finite number.

    Accepts ints, floats and numeric strings (surrounding whitespace allowed).
    Raises ValueError for bools, empty or non-numeric strings, NaN and infinities.
    """
    if isinstance(raw, bool):
        raise ValueError(f"Not a number: {raw!r}")
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str) and raw.strip():
        try:
            value = float(raw.strip())
        except ValueError:
            raise ValueError(f"Not a number: {raw!r}") from None
    else:
        raise ValueError(f"Not a number: {raw!r}")

    if not math.isfinite(value):
        raise ValueError(f"Not a finite number: {raw!r}")
    return value


def is_number(raw: Any) -> bool:
    try:
        parse_number(raw)
    except ValueError:
        return False
    return True


def is_alphanumeric(text: Any) -> bool:
    """True iff text is non-blank and made only of letters, digits and spaces."""
    if not isinstance(text, str) or not text.strip():
        return False
    return all(ch.isalnum() or ch == " " for ch in text)


def is_positive_number(raw: Any) -> bool:
    return is_number(raw) and parse_number(raw) > 0


def is_percentage(raw: Any) -> bool:
    """True iff raw is a number on the 0-100 scale (before coercion)."""
    return is_number(raw) and 0 <= parse_number(raw) <= 100


def is_map_type(*names: str) -> Callable[[Mapping], bool]:
    """Return a visibility predicate matching when the chosen map type is one of names."""
    allowed = frozenset(names)

    def _predicate(answers: Mapping) -> bool:
        return answers.get("type") in allowed

    return _predicate


def to_integer(raw: Any) -> int:
    """Floor the parsed number: to_integer("-0.4") == -1."""
    return math.floor(parse_number(raw))


def to_percentage(raw: Any) -> float:
    """Convert a 0-100 scale answer into a 0.0-1.0 fraction."""
    return parse_number(raw) / 100


def is_yes_no(raw: Any) -> bool:
    if isinstance(raw, bool):
        return True
    return isinstance(raw, str) and raw.strip().lower() in _YES | _NO


def to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    answer = str(raw).strip().lower()
    if answer in _YES:
        return True
    if answer in _NO:
        return False
    raise ValueError(f"Expected yes or no, got {raw!r}")
