"""
Value coercion from raw JSON values to PDF field representations.

Handles text pass-through, checkbox state coercion, case-insensitive option
matching for select fields and ISO 8601 date reformatting.
"""

import json
import re
from typing import Any, Optional, Union

from .models import CoercionOptions, CoercionOutcome, FieldKind
from .resolver import MISSING

# YYYY-MM-DD with an optional time component
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(?:T.*)?", re.DOTALL)

TRUTHY_VALUES = frozenset({"true", "yes", "1"})
FALSY_VALUES = frozenset({"false", "no", "0"})

OPTION_KINDS = (FieldKind.SINGLE_SELECT, FieldKind.MULTI_SELECT)


def _stringify(value: Any) -> str:
    """Render a JSON value the way it reads in the payload."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _kind_label(kind: Union[FieldKind, str]) -> str:
    return kind.value if isinstance(kind, FieldKind) else str(kind)


def format_date(iso_date: str, date_format: str) -> CoercionOutcome:
    """Reformat an ISO 8601 date string.

    Supported tokens: ``YYYY``, ``YY``, ``DD``, ``D``, ``MM``, ``M``. Each is
    replaced once, longer tokens first so ``DD`` is not eaten by ``D``.

    Args:
        iso_date: ``YYYY-MM-DD`` optionally followed by a time component.
        date_format: Target pattern, e.g. ``DD/MM/YYYY``.

    Returns:
        CoercionOutcome: The formatted date or an invalid-date warning.
    """
    parts = iso_date[:10].split("-")
    if len(parts) != 3:
        return CoercionOutcome.fail(f"invalid date format: '{iso_date}'")

    try:
        year, month, day = (int(p) for p in parts)
    except ValueError:
        return CoercionOutcome.fail(f"invalid date components in: '{iso_date}'")

    full_year = f"{year:04d}"
    result = date_format
    result = result.replace("YYYY", full_year, 1)
    result = result.replace("YY", full_year[-2:], 1)
    result = result.replace("DD", f"{day:02d}", 1)
    result = result.replace("D", str(day), 1)
    result = result.replace("MM", f"{month:02d}", 1)
    result = result.replace("M", str(month), 1)

    return CoercionOutcome.ok(result)


def _coerce_text(value: Any, date_format: Optional[str]) -> CoercionOutcome:
    if date_format and isinstance(value, str) and ISO_DATE_PATTERN.fullmatch(value):
        return format_date(value, date_format)
    return CoercionOutcome.ok(_stringify(value))


def _coerce_checkbox(value: Any) -> CoercionOutcome:
    if isinstance(value, bool):
        return CoercionOutcome.ok(value)

    if isinstance(value, (int, float)):
        if value == 1:
            return CoercionOutcome.ok(True)
        if value == 0:
            return CoercionOutcome.ok(False)

    if isinstance(value, str):
        lowered = value.lower()
        if lowered in TRUTHY_VALUES:
            return CoercionOutcome.ok(True)
        if lowered in FALSY_VALUES:
            return CoercionOutcome.ok(False)

    return CoercionOutcome.fail(
        f"cannot coerce '{_stringify(value)}' to checkbox state"
    )


def _coerce_option(
    value: Any,
    kind: FieldKind,
    field_options: Optional[list[str]],
) -> CoercionOutcome:
    text = _stringify(value)

    if not field_options:
        return CoercionOutcome.fail(
            f"no options available for {_kind_label(kind)} field"
        )

    wanted = text.lower()
    for option in field_options:
        if option.lower() == wanted:
            return CoercionOutcome.ok(option)

    return CoercionOutcome.fail(
        f"value '{text}' not in options: {', '.join(field_options)}"
    )


def coerce_value(
    value: Any,
    kind: Union[FieldKind, str],
    options: Optional[CoercionOptions] = None,
) -> CoercionOutcome:
    """Coerce a raw payload value into the form a field kind accepts.

    Args:
        value: The raw value resolved from the data payload.
        kind: Target field kind.
        options: Date format and available field options.

    Returns:
        CoercionOutcome: Success with the coerced value, or failure with a
        warning explaining why the value was not usable.
    """
    options = options or CoercionOptions()

    if value is None or value is MISSING:
        return CoercionOutcome.fail("value is missing")

    try:
        kind = FieldKind(kind)
    except ValueError:
        return CoercionOutcome.fail(f"unsupported field type '{_kind_label(kind)}'")

    if kind == FieldKind.TEXT:
        return _coerce_text(value, options.date_format)
    if kind == FieldKind.CHECKBOX:
        return _coerce_checkbox(value)
    if kind in OPTION_KINDS:
        return _coerce_option(value, kind, options.field_options)

    return CoercionOutcome.fail(f"unsupported field type '{kind.value}'")
