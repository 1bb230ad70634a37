"""
AcroForm field discovery on pypdf object trees.

Walks the /AcroForm /Fields hierarchy, resolving fully qualified names and
inherited /FT and /Ff entries, and decides each terminal field's kind once.
"""

from dataclasses import dataclass
from typing import Optional, Union

from pypdf.generic import DictionaryObject, NameObject

from .models import FieldDescriptor, FieldKind

# /Ff flag bits, see PDF 32000-1:2008 tables 221, 226 and 230
FF_READ_ONLY = 1 << 0
FF_REQUIRED = 1 << 1
FF_RADIO = 1 << 15
FF_PUSHBUTTON = 1 << 16
FF_MULTI_SELECT = 1 << 21

OFF_STATE = "/Off"


def resolved(node: DictionaryObject, key: str, default=None):
    """Look up ``key`` in a PDF dictionary, following indirect references."""
    if key not in node:
        return default
    return node[key].get_object()


@dataclass
class FormField:
    """A terminal form field and the widget annotations that display it."""

    name: str
    node: DictionaryObject
    field_type: str
    flags: int
    widgets: list[DictionaryObject]

    @property
    def kind(self) -> FieldKind:
        return detect_kind(self.field_type, self.flags)


def detect_kind(field_type: str, flags: int) -> FieldKind:
    """Detect the field kind from its /FT entry and /Ff flags.

    Args:
        field_type: The (possibly inherited) /FT name, e.g. ``/Tx``.
        flags: The (possibly inherited) /Ff integer.

    Returns:
        FieldKind: Detected kind of the field.
    """
    if field_type == "/Tx":
        return FieldKind.TEXT
    elif field_type == "/Btn":
        if flags & FF_PUSHBUTTON:
            return FieldKind.BUTTON
        if flags & FF_RADIO:
            return FieldKind.SINGLE_SELECT
        return FieldKind.CHECKBOX
    elif field_type == "/Ch":
        if flags & FF_MULTI_SELECT:
            return FieldKind.MULTI_SELECT
        return FieldKind.SINGLE_SELECT
    elif field_type == "/Sig":
        return FieldKind.SIGNATURE
    return FieldKind.UNKNOWN


def collect_fields(acroform: DictionaryObject) -> dict[str, FormField]:
    """Collect terminal fields of an AcroForm keyed by qualified name.

    Args:
        acroform: The resolved /AcroForm dictionary.

    Returns:
        dict: Qualified field name -> FormField, in document order.
    """
    fields: dict[str, FormField] = {}
    seen: set[int] = set()
    for ref in resolved(acroform, "/Fields", []):
        _collect(ref.get_object(), "", "", 0, fields, seen)
    return fields


def _collect(
    node: DictionaryObject,
    parent_name: str,
    inherited_type: str,
    inherited_flags: int,
    out: dict[str, FormField],
    seen: set[int],
) -> None:
    if id(node) in seen:
        return
    seen.add(id(node))

    partial = resolved(node, "/T")
    if partial is None:
        name = parent_name
    elif parent_name:
        name = f"{parent_name}.{partial}"
    else:
        name = str(partial)

    field_type = str(resolved(node, "/FT", inherited_type))
    flags = int(resolved(node, "/Ff", inherited_flags))

    kids = [kid.get_object() for kid in resolved(node, "/Kids", [])]
    child_fields = [kid for kid in kids if "/T" in kid]
    if child_fields:
        for kid in child_fields:
            _collect(kid, name, field_type, flags, out, seen)
        return

    if name:
        # Reason: kids without /T are widgets; a field without kids is its own widget
        out[name] = FormField(
            name=name,
            node=node,
            field_type=field_type,
            flags=flags,
            widgets=kids or [node],
        )


def widget_states(widget: DictionaryObject) -> list[str]:
    """Appearance state names (e.g. ``/Yes``, ``/Off``) of a button widget."""
    ap = resolved(widget, "/AP")
    if ap is None:
        return []
    normal = resolved(ap, "/N")
    if normal is None:
        return []
    normal = normal.get_object()
    if not isinstance(normal, DictionaryObject):
        return []
    return [str(key) for key in normal.keys()]


def on_states(field: FormField) -> list[str]:
    """Non-off appearance states across a button field's widgets.

    Returns:
        list[str]: State names without the leading slash, in widget order.
    """
    states: list[str] = []
    for widget in field.widgets:
        for state in widget_states(widget):
            if state != OFF_STATE and state[1:] not in states:
                states.append(state[1:])
    return states


def extract_options(field: FormField) -> Optional[list[str]]:
    """Extract options from choice fields and radio groups.

    Choice fields list their /Opt export values; radio groups list the
    on-states of their widgets.

    Args:
        field: The form field.

    Returns:
        Optional[list[str]]: Available options, or None for other kinds.
    """
    if field.kind not in (FieldKind.SINGLE_SELECT, FieldKind.MULTI_SELECT):
        return None

    if field.field_type == "/Btn":
        return on_states(field)

    result = []
    for opt in resolved(field.node, "/Opt", []):
        opt = opt.get_object()
        if isinstance(opt, list) and len(opt) >= 2:
            result.append(str(opt[0].get_object()))
        else:
            result.append(str(opt))
    return result


def current_value(field: FormField) -> Optional[Union[bool, str]]:
    """Read the current /V of a field as text, checkbox state or option."""
    kind = field.kind
    value = resolved(field.node, "/V")

    if kind == FieldKind.CHECKBOX:
        return value is not None and str(value.get_object()) != OFF_STATE
    if value is None or kind in (FieldKind.SIGNATURE, FieldKind.BUTTON):
        return None

    value = value.get_object()
    if isinstance(value, list):
        if not value:
            return None
        value = value[0].get_object()
    if isinstance(value, NameObject):
        return None if value == OFF_STATE else str(value)[1:]
    return str(value)


def describe(field: FormField) -> FieldDescriptor:
    """Build the read-only descriptor for a form field."""
    return FieldDescriptor(
        name=field.name,
        kind=field.kind,
        is_read_only=bool(field.flags & FF_READ_ONLY),
        current_value=current_value(field),
        options=extract_options(field),
        required=bool(field.flags & FF_REQUIRED),
    )
