"""Exceptions raised by formfill.

Structural failures (bad mapping, unreadable PDF, PDF without a form) abort
a whole operation. Per-field failures are recorded in the fill summary
instead; :class:`FieldNotFoundError` only surfaces from accessor setters.
"""


class FormFillError(Exception):
    """Base exception for formfill operations."""


class PdfLoadError(FormFillError):
    """Raised when PDF bytes are invalid, corrupted or cannot be decrypted."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to load PDF: {detail}")


class NoFormError(FormFillError):
    """Raised when the PDF has no AcroForm data."""

    def __init__(self):
        super().__init__(
            "This PDF does not contain any form fields (AcroForm). "
            "XFA forms are not supported."
        )


class InvalidMappingError(FormFillError):
    """Raised when the field mapping is malformed."""

    def __init__(self, detail: str):
        super().__init__(f"Invalid field mapping: {detail}")


class FieldNotFoundError(FormFillError):
    """Raised when a named field does not exist in the loaded PDF."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"field '{field_name}' not found in the document")


class ConfigurationError(FormFillError):
    """Raised when a mapping, payload or options file cannot be used."""
