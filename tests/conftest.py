"""Shared fixtures for formfill tests."""

from io import BytesIO
from typing import Optional

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from formfill.accessor import DocumentFieldAccessor
from formfill.engine import FormFillEngine
from formfill.errors import FieldNotFoundError
from formfill.fields import FF_RADIO
from formfill.models import FieldDescriptor, FieldKind

FF_COMBO = 1 << 17


def _appearance(on_state: str) -> DictionaryObject:
    normal = DictionaryObject()
    normal[NameObject(f"/{on_state}")] = DictionaryObject()
    normal[NameObject("/Off")] = DictionaryObject()
    ap = DictionaryObject()
    ap[NameObject("/N")] = normal
    return ap


class FormBuilder:
    """Builds small AcroForm PDFs out of pypdf generic objects."""

    def __init__(self):
        self.writer = PdfWriter()
        self.page = self.writer.add_blank_page(612, 792)
        self.page[NameObject("/Annots")] = ArrayObject()
        self.fields = ArrayObject()
        self._y = 740

    def _rect(self) -> ArrayObject:
        self._y -= 30
        return ArrayObject(
            [NumberObject(v) for v in (50, self._y, 250, self._y + 20)]
        )

    def _add_widget(self, entries: dict):
        widget = DictionaryObject()
        widget[NameObject("/Type")] = NameObject("/Annot")
        widget[NameObject("/Subtype")] = NameObject("/Widget")
        widget[NameObject("/Rect")] = self._rect()
        for key, value in entries.items():
            widget[NameObject(key)] = value
        ref = self.writer._add_object(widget)
        self.page["/Annots"].append(ref)
        return ref

    def text(self, name: str, value: Optional[str] = None, flags: int = 0):
        entries = {
            "/FT": NameObject("/Tx"),
            "/T": TextStringObject(name),
            "/Ff": NumberObject(flags),
        }
        if value is not None:
            entries["/V"] = TextStringObject(value)
        self.fields.append(self._add_widget(entries))
        return self

    def checkbox(self, name: str, on_state: str = "Yes", checked: bool = False):
        state = NameObject(f"/{on_state}" if checked else "/Off")
        entries = {
            "/FT": NameObject("/Btn"),
            "/T": TextStringObject(name),
            "/V": state,
            "/AS": state,
            "/AP": _appearance(on_state),
        }
        self.fields.append(self._add_widget(entries))
        return self

    def dropdown(self, name: str, options: list[str], flags: int = FF_COMBO):
        entries = {
            "/FT": NameObject("/Ch"),
            "/T": TextStringObject(name),
            "/Ff": NumberObject(flags),
            "/Opt": ArrayObject([TextStringObject(o) for o in options]),
        }
        self.fields.append(self._add_widget(entries))
        return self

    def radio(self, name: str, options: list[str]):
        parent = DictionaryObject()
        parent[NameObject("/FT")] = NameObject("/Btn")
        parent[NameObject("/T")] = TextStringObject(name)
        parent[NameObject("/Ff")] = NumberObject(FF_RADIO)
        parent[NameObject("/V")] = NameObject("/Off")
        parent_ref = self.writer._add_object(parent)

        kids = ArrayObject()
        for option in options:
            kids.append(
                self._add_widget(
                    {
                        "/Parent": parent_ref,
                        "/AS": NameObject("/Off"),
                        "/AP": _appearance(option),
                    }
                )
            )
        parent[NameObject("/Kids")] = kids
        self.fields.append(parent_ref)
        return self

    def build(self) -> bytes:
        acroform = DictionaryObject()
        acroform[NameObject("/Fields")] = self.fields
        self.writer.root_object[NameObject("/AcroForm")] = self.writer._add_object(
            acroform
        )
        buffer = BytesIO()
        self.writer.write(buffer)
        return buffer.getvalue()


@pytest.fixture
def mixed_form_pdf() -> bytes:
    """PDF with text, read-only text, checkbox, radio and dropdown fields."""
    return (
        FormBuilder()
        .text("name")
        .text("email")
        .text("locked", value="Pre-filled", flags=1)
        .checkbox("agree")
        .radio("colour", ["Red", "Blue"])
        .dropdown("country", ["UK", "US", "DE"])
        .build()
    )


@pytest.fixture
def blank_pdf() -> bytes:
    """PDF with one blank page and no AcroForm."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class FakeAccessor(DocumentFieldAccessor):
    """In-memory accessor recording writes instead of touching a PDF."""

    def __init__(
        self,
        fields: list[FieldDescriptor],
        failures: Optional[dict[str, Exception]] = None,
        load_error: Optional[Exception] = None,
    ):
        self.fields = {f.name: f for f in fields}
        self.failures = failures or {}
        self.load_error = load_error
        self.loaded: Optional[bytes] = None
        self.values: dict = {}
        self.calls: list[tuple[str, str]] = []
        self.saved = False

    def load_document(self, pdf_bytes: bytes) -> None:
        if self.load_error is not None:
            raise self.load_error
        self.loaded = pdf_bytes

    def discover_fields(self) -> list[FieldDescriptor]:
        return list(self.fields.values())

    def get_field_kind(self, name: str) -> Optional[FieldKind]:
        field = self.fields.get(name)
        return field.kind if field else None

    def get_field_options(self, name: str) -> Optional[list[str]]:
        field = self.fields.get(name)
        return field.options if field else None

    def _set(self, setter: str, name: str, value) -> None:
        self.calls.append((setter, name))
        if name not in self.fields:
            raise FieldNotFoundError(name)
        if name in self.failures:
            raise self.failures[name]
        self.values[name] = value

    def set_text_field(self, name: str, value: str) -> None:
        self._set("text", name, value)

    def set_checkbox(self, name: str, checked: bool) -> None:
        self._set("checkbox", name, checked)

    def set_single_select(self, name: str, option: str) -> None:
        self._set("select", name, option)

    def save_document(self) -> bytes:
        self.saved = True
        return b"%PDF-filled"


@pytest.fixture
def applicant_fields() -> list[FieldDescriptor]:
    return [
        FieldDescriptor(name="firstName", kind=FieldKind.TEXT),
        FieldDescriptor(name="lastName", kind=FieldKind.TEXT),
        FieldDescriptor(name="agree", kind=FieldKind.CHECKBOX, current_value=False),
    ]


@pytest.fixture
def fake_accessor(applicant_fields) -> FakeAccessor:
    return FakeAccessor(applicant_fields)


@pytest.fixture
def engine(fake_accessor) -> FormFillEngine:
    return FormFillEngine(accessor_factory=lambda: fake_accessor)
