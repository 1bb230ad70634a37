"""Tests for value coercion."""

import pytest

from formfill.coercer import coerce_value, format_date
from formfill.models import CoercionOptions, FieldKind
from formfill.resolver import MISSING


class TestMissingValues:
    @pytest.mark.parametrize("kind", list(FieldKind))
    @pytest.mark.parametrize("value", [None, MISSING])
    def test_missing_for_every_kind(self, kind, value):
        """None and MISSING fail regardless of kind."""
        outcome = coerce_value(value, kind)
        assert outcome.success is False
        assert outcome.warning == "value is missing"


class TestText:
    """Tests for text coercion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("hello", "hello"),
            (42, "42"),
            (3.5, "3.5"),
            (2.0, "2"),
            (True, "true"),
            (False, "false"),
            ("", ""),
        ],
    )
    def test_stringify(self, value, expected):
        """Scalars are stringified naturally."""
        outcome = coerce_value(value, FieldKind.TEXT)
        assert outcome.success is True
        assert outcome.value == expected

    def test_containers_as_json(self):
        """Dicts and lists become JSON text."""
        outcome = coerce_value({"a": [1, 2]}, FieldKind.TEXT)
        assert outcome.value == '{"a": [1, 2]}'

    def test_date_formatted(self):
        """ISO dates are reformatted when a format is given."""
        outcome = coerce_value(
            "2025-06-15", FieldKind.TEXT, CoercionOptions(date_format="DD/MM/YYYY")
        )
        assert outcome.value == "15/06/2025"

    def test_datetime_formatted(self):
        """ISO datetimes are reformatted from their date part."""
        outcome = coerce_value(
            "2025-06-15T10:30:00Z",
            FieldKind.TEXT,
            CoercionOptions(date_format="MM-DD-YYYY"),
        )
        assert outcome.value == "06-15-2025"

    def test_date_untouched_without_format(self):
        """Dates stay as-is without a format."""
        outcome = coerce_value("2025-06-15", FieldKind.TEXT)
        assert outcome.value == "2025-06-15"

    @pytest.mark.parametrize("value", ["15/06/2025", "2025-6-15", "2025-06-15 10:00", "on 2025-06-15"])
    def test_non_iso_strings_not_formatted(self, value):
        """Strings that are not ISO dates are left alone."""
        outcome = coerce_value(
            value, FieldKind.TEXT, CoercionOptions(date_format="DD/MM/YYYY")
        )
        assert outcome.value == value

    def test_numbers_not_formatted(self):
        """Numbers are never treated as dates."""
        outcome = coerce_value(
            20250615, FieldKind.TEXT, CoercionOptions(date_format="DD/MM/YYYY")
        )
        assert outcome.value == "20250615"


class TestFormatDate:
    """Tests for date token replacement."""

    def test_short_year(self):
        """YY gives a two-digit year."""
        assert format_date("2025-06-15", "DD/MM/YY").value == "15/06/25"

    def test_unpadded_tokens(self):
        """D and M drop leading zeros."""
        assert format_date("2025-06-05", "D/M/YYYY").value == "5/6/2025"

    def test_iso_round_trip_format(self):
        """An ISO-style format reproduces the date."""
        assert format_date("2025-01-09", "YYYY-MM-DD").value == "2025-01-09"

    def test_separators_pass_through(self):
        """Characters other than tokens pass through."""
        assert format_date("2025-12-31", "DD.MM.YYYY").value == "31.12.2025"

    def test_invalid_components(self):
        """Non-numeric date parts are reported."""
        outcome = format_date("20xx-06-15", "DD/MM/YYYY")
        assert outcome.success is False
        assert "invalid date" in outcome.warning

    def test_wrong_part_count(self):
        """Dates without three parts are reported."""
        outcome = format_date("2025/06/15", "DD/MM/YYYY")
        assert outcome.success is False
        assert "invalid date" in outcome.warning


class TestCheckbox:
    """Tests for checkbox coercion."""

    @pytest.mark.parametrize("value", [True, "true", "TRUE", "yes", "YES", 1, "1", 1.0])
    def test_truthy(self, value):
        """Truthy values check the box."""
        outcome = coerce_value(value, FieldKind.CHECKBOX)
        assert outcome.success is True
        assert outcome.value is True

    @pytest.mark.parametrize("value", [False, "false", "False", "no", "NO", 0, "0"])
    def test_falsy(self, value):
        """Falsy values uncheck the box."""
        outcome = coerce_value(value, FieldKind.CHECKBOX)
        assert outcome.success is True
        assert outcome.value is False

    @pytest.mark.parametrize("value", [2, -1, "banana", "y", [], {}])
    def test_unrecognised(self, value):
        """Anything else cannot be a checkbox state."""
        outcome = coerce_value(value, FieldKind.CHECKBOX)
        assert outcome.success is False
        assert "cannot coerce" in outcome.warning
        assert "checkbox state" in outcome.warning

    def test_warning_names_value(self):
        """The failure message quotes the value."""
        outcome = coerce_value("banana", FieldKind.CHECKBOX)
        assert outcome.warning == "cannot coerce 'banana' to checkbox state"

    def test_null_fails(self):
        """None is reported as missing."""
        assert coerce_value(None, FieldKind.CHECKBOX).success is False


class TestOptions:
    """Tests for select coercion."""

    OPTIONS = CoercionOptions(field_options=["UK", "US", "DE"])

    def test_case_insensitive_match_keeps_option_casing(self):
        """Matching ignores case but returns the option as declared."""
        outcome = coerce_value("uk", FieldKind.SINGLE_SELECT, self.OPTIONS)
        assert outcome.success is True
        assert outcome.value == "UK"

    def test_multi_select_matches_single_option(self):
        """Multi-select fields take a single option."""
        outcome = coerce_value("de", FieldKind.MULTI_SELECT, self.OPTIONS)
        assert outcome.value == "DE"

    def test_numbers_are_stringified(self):
        """Numbers are matched by their string form."""
        options = CoercionOptions(field_options=["1", "2"])
        assert coerce_value(2, FieldKind.SINGLE_SELECT, options).value == "2"

    def test_no_match_lists_options(self):
        """A value outside the options lists them."""
        outcome = coerce_value("FR", FieldKind.SINGLE_SELECT, self.OPTIONS)
        assert outcome.success is False
        assert outcome.warning == "value 'FR' not in options: UK, US, DE"

    @pytest.mark.parametrize("field_options", [None, []])
    def test_no_options(self, field_options):
        """Select fields without options cannot be coerced."""
        outcome = coerce_value(
            "UK", FieldKind.SINGLE_SELECT, CoercionOptions(field_options=field_options)
        )
        assert outcome.success is False
        assert outcome.warning == "no options available for singleSelect field"


class TestUnsupported:
    @pytest.mark.parametrize(
        "kind", [FieldKind.SIGNATURE, FieldKind.BUTTON, FieldKind.UNKNOWN]
    )
    def test_unsupported_kinds(self, kind):
        """Signature, button and unknown kinds are unsupported."""
        outcome = coerce_value("x", kind)
        assert outcome.success is False
        assert outcome.warning == f"unsupported field type '{kind.value}'"

    def test_unknown_kind_string(self):
        """Unrecognised kind strings are unsupported."""
        outcome = coerce_value("x", "barcode")
        assert outcome.warning == "unsupported field type 'barcode'"

    def test_kind_accepts_plain_strings(self):
        """Kinds may be given as plain strings."""
        assert coerce_value("x", "text").value == "x"
