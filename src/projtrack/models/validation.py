"""
Validation and parsing of create/update payloads.

The dialogs hand over text, the CLI and tests hand over Python values; both
end up here before anything reaches a repository. Every field of a payload is
checked and all problems are reported together in one `ValidationError`,
keyed by field name.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .errors import ValidationError
from .types import BUGNOTE_KINDS, PRIORITIES, TASK_STATES


class _Problem(Exception):
    """Raised by a single-field parser; collected by `clean_payload`."""


def parse_text(value: Any) -> str:
    if not isinstance(value, str):
        raise _Problem("must be text")
    # blank is rejected, surrounding whitespace is kept as entered
    if not value.strip():
        raise _Problem("must not be empty")
    return value


def _parse_number(value: Any) -> float:
    # bool is an int subclass; a checkbox value is never a number of hours
    if isinstance(value, bool):
        raise _Problem("must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(",", "."))
        except ValueError as exc:
            raise _Problem("must be a number") from exc
    else:
        raise _Problem("must be a number")
    if number != number or number in (float("inf"), float("-inf")):
        raise _Problem("must be a finite number")
    return number


def parse_positive(value: Any) -> float:
    number = _parse_number(value)
    if number <= 0:
        raise _Problem("must be greater than 0")
    return number


def parse_non_negative(value: Any) -> float:
    number = _parse_number(value)
    if number < 0:
        raise _Problem("must be 0 or more")
    return number


def parse_date(value: Any) -> date:
    """Accepts a `date` or an ISO `YYYY-MM-DD` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise _Problem("must be a date in YYYY-MM-DD form") from exc
    raise _Problem("must be a date")


def parse_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise _Problem("must be an integer id")
    try:
        ident = int(value)
    except ValueError as exc:
        raise _Problem("must be an integer id") from exc
    if ident <= 0:
        raise _Problem("must be a positive id")
    return ident


def parse_optional_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return parse_id(value)


def parse_id_set(value: Any) -> list[int]:
    """Order-irrelevant set of ids; duplicates collapse, result is sorted."""
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise _Problem("must be a list of ids")
    return sorted({parse_id(v) for v in value})


def choice(options: tuple[str, ...]) -> Callable[[Any], str]:
    def _parse(value: Any) -> str:
        if value not in options:
            raise _Problem(f"must be one of: {', '.join(options)}")
        return value
    return _parse


@dataclass(frozen=True)
class Rule:
    parse: Callable[[Any], Any]
    required: bool = True
    default: Callable[[], Any] | None = None


PROJECT_RULES: Dict[str, Rule] = {
    "name": Rule(parse_text),
    "estimation_days": Rule(parse_positive),
    "users": Rule(parse_id_set, required=False, default=list),
}

TASK_RULES: Dict[str, Rule] = {
    "date": Rule(parse_date),
    "description": Rule(parse_text),
    "user_id": Rule(parse_optional_id, required=False, default=lambda: None),
    "priority": Rule(choice(PRIORITIES)),
    "hours_estimated": Rule(parse_positive),
    "hours_done": Rule(parse_non_negative, required=False, default=lambda: 0.0),
    "state": Rule(choice(TASK_STATES)),
}

BUGNOTE_RULES: Dict[str, Rule] = {
    "date": Rule(parse_date),
    "kind": Rule(choice(BUGNOTE_KINDS)),
    "content": Rule(parse_text),
    "task_id": Rule(parse_optional_id, required=False, default=lambda: None),
}

READ_ONLY_FIELDS = ("id", "project_id", "created_at_utc", "updated_at_utc")


def clean_payload(data: Mapping[str, Any], rules: Mapping[str, Rule], *, partial: bool = False) -> Dict[str, Any]:
    """
    Returns the parsed payload. With `partial=True` only the supplied fields
    are parsed and no defaults are filled in (update semantics).

    Raises:
        ValidationError: listing every offending field.
    """
    if not isinstance(data, Mapping):
        raise ValidationError.single("payload", "must be a mapping of field names to values")

    problems: Dict[str, str] = {}
    cleaned: Dict[str, Any] = {}

    for key in data:
        if key in READ_ONLY_FIELDS:
            problems[key] = "is read-only"
        elif key not in rules:
            problems[key] = "is not a known field"

    for name, rule in rules.items():
        if name not in data:
            if partial:
                continue
            if rule.required:
                problems[name] = "is required"
            elif rule.default is not None:
                cleaned[name] = rule.default()
            continue
        value = data[name]
        if value is None and rule.required:
            problems[name] = "is required"
            continue
        try:
            cleaned[name] = rule.parse(value)
        except _Problem as exc:
            problems[name] = str(exc)

    if problems:
        raise ValidationError(problems)
    return cleaned
