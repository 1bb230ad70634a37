"""
Mapping-driven PDF form filling.

The engine validates a field mapping, resolves each entry's data path,
coerces the value for the target field kind and writes it through a
DocumentFieldAccessor. Per-field failures are recorded and never abort the
run; structural failures (bad mapping, unreadable PDF, no form) raise.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from .accessor import DocumentFieldAccessor, PypdfAccessor
from .coercer import coerce_value
from .errors import FormFillError, InvalidMappingError
from .models import (
    CoercionOptions,
    EngineOptions,
    FieldDescriptor,
    FieldKind,
    FillAttemptResult,
    FillStatus,
    FillSummary,
    MappingEntry,
)
from .resolver import MISSING, resolve_path

logger = logging.getLogger("formfill.engine")

DATA_KEY_NAMES = ("dataKey", "data_key")
TARGET_FIELD_NAMES = ("targetField", "target_field", "pdfField")
DATE_FORMAT_NAMES = ("dateFormat", "date_format")


def _first_present(entry: Mapping, names: tuple[str, ...]) -> Any:
    for name in names:
        if name in entry:
            return entry[name]
    return None


def validate_mapping(mapping: Any) -> list[MappingEntry]:
    """Validate a raw mapping and convert it to MappingEntry objects.

    Args:
        mapping: A list of MappingEntry objects or dicts with ``dataKey``,
            ``targetField`` (or ``pdfField``) and optional ``dateFormat``.

    Returns:
        list[MappingEntry]: Entries in input order.

    Raises:
        InvalidMappingError: On the first malformed entry.
    """
    if not isinstance(mapping, (list, tuple)):
        raise InvalidMappingError("Mapping must be an array")

    entries: list[MappingEntry] = []
    for i, entry in enumerate(mapping):
        if isinstance(entry, MappingEntry):
            entries.append(entry)
            continue
        if not isinstance(entry, Mapping):
            raise InvalidMappingError(f"Entry {i}: must be an object")

        data_key = _first_present(entry, DATA_KEY_NAMES)
        if not data_key or not isinstance(data_key, str):
            raise InvalidMappingError(
                f"Entry {i}: 'dataKey' is required and must be a string"
            )
        target_field = _first_present(entry, TARGET_FIELD_NAMES)
        if not target_field or not isinstance(target_field, str):
            raise InvalidMappingError(
                f"Entry {i}: 'targetField' is required and must be a string"
            )
        date_format = _first_present(entry, DATE_FORMAT_NAMES)
        if date_format is not None and not isinstance(date_format, str):
            raise InvalidMappingError(f"Entry {i}: 'dateFormat' must be a string")

        entries.append(
            MappingEntry(
                data_key=data_key,
                target_field=target_field,
                date_format=date_format or None,
            )
        )
    return entries


class FormFillEngine:
    """Central orchestrator for PDF form filling.

    A fresh accessor is created for every call, so one engine can serve
    independent fills of distinct documents.

    Args:
        accessor_factory: Callable returning a new DocumentFieldAccessor.
        options: Default engine options, overridable per fill.
    """

    def __init__(
        self,
        accessor_factory: Callable[[], DocumentFieldAccessor] = PypdfAccessor,
        options: Optional[EngineOptions] = None,
    ):
        self._accessor_factory = accessor_factory
        self.options = options or EngineOptions()

    def discover_fields(self, pdf_bytes: bytes) -> list[FieldDescriptor]:
        """Discover all form fields in a PDF.

        Args:
            pdf_bytes: The raw PDF file bytes.

        Returns:
            list[FieldDescriptor]: One descriptor per form field.
        """
        accessor = self._accessor_factory()
        accessor.load_document(pdf_bytes)
        return accessor.discover_fields()

    def fill_form(
        self,
        pdf_bytes: bytes,
        mapping: Union[list[MappingEntry], list[dict]],
        data: Any,
        options: Optional[EngineOptions] = None,
    ) -> FillSummary:
        """Fill a PDF using a mapping and a data payload.

        Entries are applied in order. Each one ends as filled, missing,
        skipped or error; none of those abort the run, and the document is
        serialized even when every entry failed.

        Args:
            pdf_bytes: The raw PDF template bytes.
            mapping: Field mapping entries.
            data: The JSON payload to read values from.
            options: Overrides the engine's default options for this call.

        Returns:
            FillSummary: Per-entry details, counts, warnings and output bytes.

        Raises:
            InvalidMappingError: If the mapping is malformed.
            PdfLoadError: If the PDF cannot be loaded.
            NoFormError: If the PDF has no form.
        """
        options = options or self.options
        entries = validate_mapping(mapping)

        accessor = self._accessor_factory()
        accessor.load_document(pdf_bytes)

        details = [
            self._process_entry(accessor, entry, data, options) for entry in entries
        ]

        summary = FillSummary.from_details(details, pdf_bytes=accessor.save_document())
        logger.info(
            "Fill %s: %d filled, %d missing, %d skipped, %d errored",
            summary.status.value,
            summary.filled_count,
            summary.missing_count,
            summary.skipped_count,
            summary.errored_count,
        )
        return summary

    def _process_entry(
        self,
        accessor: DocumentFieldAccessor,
        entry: MappingEntry,
        data: Any,
        options: EngineOptions,
    ) -> FillAttemptResult:
        target, key = entry.target_field, entry.data_key

        kind = accessor.get_field_kind(target)
        if kind is None:
            return self._record(
                entry, FillStatus.ERROR, f"field '{target}' not found in the document"
            )

        raw_value = resolve_path(data, key)
        if raw_value is MISSING:
            message = (
                f"mapped field '{key}' has no value in data payload"
                if options.warn_on_missing_values
                else None
            )
            return self._record(entry, FillStatus.MISSING, message)

        outcome = coerce_value(
            raw_value,
            kind,
            CoercionOptions(
                date_format=entry.date_format or options.default_date_format,
                field_options=accessor.get_field_options(target),
            ),
        )
        if not outcome.success:
            return self._record(entry, FillStatus.SKIPPED, outcome.warning)

        try:
            self._set_field_value(accessor, target, kind, outcome.value)
        except Exception as e:
            return self._record(entry, FillStatus.ERROR, str(e) or type(e).__name__)

        return self._record(entry, FillStatus.FILLED)

    @staticmethod
    def _set_field_value(
        accessor: DocumentFieldAccessor,
        name: str,
        kind: FieldKind,
        value: Union[bool, str],
    ) -> None:
        if kind == FieldKind.TEXT:
            accessor.set_text_field(name, value)
        elif kind == FieldKind.CHECKBOX:
            accessor.set_checkbox(name, value)
        elif kind in (FieldKind.SINGLE_SELECT, FieldKind.MULTI_SELECT):
            accessor.set_single_select(name, value)
        else:
            raise FormFillError(f"unsupported field type '{kind.value}'")

    @staticmethod
    def _record(
        entry: MappingEntry,
        status: FillStatus,
        message: Optional[str] = None,
    ) -> FillAttemptResult:
        if status == FillStatus.FILLED:
            logger.debug("Filled '%s' from '%s'", entry.target_field, entry.data_key)
        elif message:
            logger.warning("%s '%s': %s", status.value, entry.target_field, message)
        return FillAttemptResult(
            target_field=entry.target_field,
            data_key=entry.data_key,
            status=status,
            message=message,
        )
