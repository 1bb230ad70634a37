"""
formfill - fill PDF form fields from JSON data with a declarative mapping.

Copyright (C) 2025 smilinTux
Licensed under GPL-3.0-or-later.
"""

__version__ = "0.1.0"

from .accessor import DocumentFieldAccessor, PypdfAccessor
from .coercer import coerce_value
from .engine import FormFillEngine, validate_mapping
from .errors import (
    ConfigurationError,
    FieldNotFoundError,
    FormFillError,
    InvalidMappingError,
    NoFormError,
    PdfLoadError,
)
from .models import (
    CoercionOptions,
    CoercionOutcome,
    EngineOptions,
    ExtractionResult,
    FieldDescriptor,
    FieldKind,
    FillAttemptResult,
    FillResult,
    FillStatus,
    FillSummary,
    MappingEntry,
    SummaryStatus,
)
from .resolver import MISSING, resolve_path

__all__ = [
    "CoercionOptions",
    "CoercionOutcome",
    "ConfigurationError",
    "DocumentFieldAccessor",
    "EngineOptions",
    "ExtractionResult",
    "FieldDescriptor",
    "FieldKind",
    "FieldNotFoundError",
    "FillAttemptResult",
    "FillResult",
    "FillStatus",
    "FillSummary",
    "FormFillEngine",
    "FormFillError",
    "InvalidMappingError",
    "MISSING",
    "MappingEntry",
    "NoFormError",
    "PdfLoadError",
    "PypdfAccessor",
    "SummaryStatus",
    "coerce_value",
    "resolve_path",
    "validate_mapping",
    "__version__",
]
