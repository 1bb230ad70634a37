"""
Document field accessors.

Provides a DocumentFieldAccessor abstract base class, the only channel the
fill engine uses to touch a PDF, and a pypdf-backed implementation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Optional

from pypdf import PdfReader, PdfWriter
from pypdf.generic import BooleanObject, DictionaryObject, NameObject, TextStringObject

from .errors import FieldNotFoundError, FormFillError, NoFormError, PdfLoadError
from .fields import (
    OFF_STATE,
    FormField,
    collect_fields,
    describe,
    extract_options,
    on_states,
    resolved,
    widget_states,
)
from .models import FieldDescriptor, FieldKind

logger = logging.getLogger("formfill.accessor")


class DocumentFieldAccessor(ABC):
    """Abstract base class for loading, inspecting and mutating a PDF form.

    One instance holds at most one open document. Implementations are not
    expected to be safe for concurrent use.
    """

    @abstractmethod
    def load_document(self, pdf_bytes: bytes) -> None:
        """Load a PDF document from bytes.

        Raises:
            PdfLoadError: If the bytes are malformed or cannot be decrypted.
            NoFormError: If the document has no form data.
        """

    @abstractmethod
    def discover_fields(self) -> list[FieldDescriptor]:
        """Describe every form field of the loaded document.

        Raises:
            NoFormError: If no document is loaded.
        """

    @abstractmethod
    def get_field_kind(self, name: str) -> Optional[FieldKind]:
        """Kind of the named field, or None if it does not exist."""

    @abstractmethod
    def get_field_options(self, name: str) -> Optional[list[str]]:
        """Options of a select-like field, or None for other fields."""

    @abstractmethod
    def set_text_field(self, name: str, value: str) -> None:
        """Set a text field value.

        Raises:
            FieldNotFoundError: If the field does not exist.
        """

    @abstractmethod
    def set_checkbox(self, name: str, checked: bool) -> None:
        """Check or uncheck a checkbox.

        Raises:
            FieldNotFoundError: If the field does not exist.
        """

    @abstractmethod
    def set_single_select(self, name: str, option: str) -> None:
        """Select one option of a radio group, dropdown or list box.

        Raises:
            FieldNotFoundError: If the field does not exist.
        """

    @abstractmethod
    def save_document(self) -> bytes:
        """Serialize the (possibly mutated) document.

        Raises:
            PdfLoadError: If no document is loaded.
        """


class PypdfAccessor(DocumentFieldAccessor):
    """Access AcroForm fields through pypdf.

    Text and choice values go through
    PdfWriter.update_page_form_field_values so their widgets get fresh
    appearance streams. Button states are written straight into the field
    dictionaries. /NeedAppearances is set on save for viewers that rebuild
    appearances themselves.
    """

    def __init__(self):
        self._writer: Optional[PdfWriter] = None
        self._acroform: Optional[DictionaryObject] = None
        self._fields: dict[str, FormField] = {}

    def load_document(self, pdf_bytes: bytes) -> None:
        try:
            reader = PdfReader(BytesIO(pdf_bytes))
            if reader.is_encrypted and not reader.decrypt(""):
                raise PdfLoadError("document is encrypted")
            writer = PdfWriter(clone_from=reader)
        except PdfLoadError:
            raise
        except Exception as e:
            raise PdfLoadError(str(e) or type(e).__name__) from e

        acroform = resolved(writer.root_object, "/AcroForm")
        if not isinstance(acroform, DictionaryObject):
            raise NoFormError()

        try:
            fields = collect_fields(acroform)
        except Exception as e:
            raise PdfLoadError(f"malformed form field tree: {e}") from e

        self._writer = writer
        self._acroform = acroform
        self._fields = fields
        logger.debug("Loaded PDF with %d form fields", len(self._fields))

    def discover_fields(self) -> list[FieldDescriptor]:
        self._require_form()
        return [describe(field) for field in self._fields.values()]

    def get_field_kind(self, name: str) -> Optional[FieldKind]:
        self._require_form()
        field = self._fields.get(name)
        return field.kind if field is not None else None

    def get_field_options(self, name: str) -> Optional[list[str]]:
        self._require_form()
        field = self._fields.get(name)
        return extract_options(field) if field is not None else None

    def set_text_field(self, name: str, value: str) -> None:
        field = self._get_field(name, FieldKind.TEXT)
        self._write_value(field, value)

    def set_checkbox(self, name: str, checked: bool) -> None:
        field = self._get_field(name, FieldKind.CHECKBOX)
        if checked:
            states = on_states(field)
            state = NameObject(f"/{states[0]}" if states else "/Yes")
        else:
            state = NameObject(OFF_STATE)
        self._set_button_state(field, state)

    def set_single_select(self, name: str, option: str) -> None:
        field = self._get_field(name, FieldKind.SINGLE_SELECT, FieldKind.MULTI_SELECT)
        options = extract_options(field) or []
        if option not in options:
            raise FormFillError(
                f"option '{option}' is not available for field '{name}'"
            )

        if field.field_type == "/Btn":
            self._set_button_state(field, NameObject(f"/{option}"))
            return

        if "/I" in field.node:
            del field.node["/I"]
        self._write_value(field, option)

    def save_document(self) -> bytes:
        if self._writer is None:
            raise PdfLoadError("No document loaded")

        self._acroform[NameObject("/NeedAppearances")] = BooleanObject(True)
        buffer = BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()

    def _require_form(self) -> None:
        if self._acroform is None:
            raise NoFormError()

    def _get_field(self, name: str, *kinds: FieldKind) -> FormField:
        self._require_form()
        field = self._fields.get(name)
        if field is None:
            raise FieldNotFoundError(name)
        if field.kind not in kinds:
            raise FormFillError(
                f"field '{name}' is a {field.kind.value} field, "
                f"expected {' or '.join(k.value for k in kinds)}"
            )
        return field

    @staticmethod
    def _set_button_state(field: FormField, state: NameObject) -> None:
        field.node[NameObject("/V")] = state
        for widget in field.widgets:
            # Reason: each radio widget only carries its own on-state
            available = widget_states(widget)
            if available and state not in available:
                widget[NameObject("/AS")] = NameObject(OFF_STATE)
            else:
                widget[NameObject("/AS")] = state

    @staticmethod
    def _drop_appearances(field: FormField) -> None:
        for widget in field.widgets:
            if "/AP" in widget:
                del widget["/AP"]

    def _write_value(self, field: FormField, value: str) -> None:
        field.node[NameObject("/V")] = TextStringObject(value)

        widget_ids = {id(widget) for widget in field.widgets}
        pages = [
            page
            for page in self._writer.pages
            if any(
                id(annot.get_object()) in widget_ids
                for annot in resolved(page, "/Annots", [])
            )
        ]
        if not pages:
            self._drop_appearances(field)
            return

        try:
            for page in pages:
                self._writer.update_page_form_field_values(page, {field.name: value})
        except Exception as e:
            logger.warning(
                "Could not regenerate appearance for field '%s': %s", field.name, e
            )
            self._drop_appearances(field)
