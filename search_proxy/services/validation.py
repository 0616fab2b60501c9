"""Declarative input validation and query sanitization."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from search_proxy.domain.models import ValidationResult
from search_proxy.services.exceptions import InvalidInput


@dataclass(frozen=True, slots=True)
class FieldRule:
    required: bool = False
    type: type | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | None = None


QUERY_MAX_LENGTH = 200

SEARCH_SCHEMA: dict[str, FieldRule] = {
    "query": FieldRule(required=True, type=str, max_length=QUERY_MAX_LENGTH),
}

_TYPE_NAMES = {str: "a string", int: "an integer", bool: "a boolean", list: "a list"}

_SCRIPT_BLOCK_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)
_LINE_BREAK_RE = re.compile(r"[\t\r\n]+")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")
_MARKUP_RE = re.compile(r"[<>]")


def _is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


def validate_input(data: Mapping[str, Any], schema: Mapping[str, FieldRule]) -> ValidationResult:
    """Check ``data`` against ``schema``; errors are reported in schema order."""

    errors: list[str] = []
    for field, rules in schema.items():
        value = data.get(field)

        if rules.required and _is_blank(value):
            errors.append(f"{field} is required")
            continue
        if _is_blank(value):
            continue

        if rules.type is not None and not isinstance(value, rules.type):
            type_name = _TYPE_NAMES.get(rules.type, rules.type.__name__)
            errors.append(f"{field} must be {type_name}")

        if rules.max_length is not None and hasattr(value, "__len__") and len(value) > rules.max_length:
            errors.append(f"{field} must be less than {rules.max_length} characters")

        if rules.pattern is not None and isinstance(value, str) and not rules.pattern.search(value):
            errors.append(f"{field} format is invalid")

    return ValidationResult(valid=not errors, errors=errors)


def ensure_valid(data: Mapping[str, Any], schema: Mapping[str, FieldRule] = SEARCH_SCHEMA) -> None:
    result = validate_input(data, schema)
    if not result.valid:
        raise InvalidInput(result.errors)


def _sanitize_once(value: str) -> str:
    value = _SCRIPT_BLOCK_RE.sub("", value)
    value = _JS_SCHEME_RE.sub("", value)
    value = _EVENT_HANDLER_RE.sub("", value)
    value = _LINE_BREAK_RE.sub(" ", value)
    value = _CONTROL_CHARS_RE.sub("", value)
    value = _MARKUP_RE.sub("", value)
    return value.strip()


def sanitize_input(value: Any) -> Any:
    """Strip markup, script vectors and control characters from a string.

    Passes are repeated until the text stops changing, so removing one pattern
    cannot assemble another one (``javajavascript:script:``) and the result is
    stable under re-sanitization. Non-string values are returned unchanged.
    """

    if not isinstance(value, str):
        return value
    while True:
        cleaned = _sanitize_once(value)
        if cleaned == value:
            return cleaned
        value = cleaned


__all__ = [
    "FieldRule",
    "QUERY_MAX_LENGTH",
    "SEARCH_SCHEMA",
    "ensure_valid",
    "sanitize_input",
    "validate_input",
]
