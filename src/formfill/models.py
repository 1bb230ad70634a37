"""
Pydantic models for formfill field discovery and mapping-driven filling.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FieldKind(str, Enum):
    """PDF form field kinds.

    ``SINGLE_SELECT`` covers radio groups as well as single-selection
    dropdowns and list boxes.
    """

    TEXT = "text"
    CHECKBOX = "checkbox"
    SINGLE_SELECT = "singleSelect"
    MULTI_SELECT = "multiSelect"
    SIGNATURE = "signature"
    BUTTON = "button"
    UNKNOWN = "unknown"


class FillStatus(str, Enum):
    """Outcome of a single mapping entry."""

    FILLED = "filled"
    MISSING = "missing"
    SKIPPED = "skipped"
    ERROR = "error"


class SummaryStatus(str, Enum):
    """Overall health of a fill run."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


class MappingEntry(BaseModel):
    """Binds one payload path to one PDF form field.

    Args:
        data_key: Dot-notation path into the data payload.
        target_field: Exact (fully qualified) PDF form field name.
        date_format: Optional date format override, e.g. ``DD/MM/YYYY``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("data_key", "dataKey"),
        serialization_alias="dataKey",
    )
    target_field: str = Field(
        min_length=1,
        validation_alias=AliasChoices("target_field", "targetField", "pdfField"),
        serialization_alias="targetField",
    )
    date_format: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("date_format", "dateFormat"),
        serialization_alias="dateFormat",
    )


class FieldDescriptor(BaseModel):
    """Snapshot of a single form field discovered in a PDF.

    Args:
        name: Fully qualified field name.
        kind: Field kind, decided once at discovery time.
        is_read_only: Whether the read-only flag is set.
        current_value: Current text, checkbox state or selected option.
        options: Available options for select-like fields.
        required: Whether the field is marked required.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: FieldKind = FieldKind.UNKNOWN
    is_read_only: bool = False
    current_value: Optional[Union[bool, str]] = None
    options: Optional[list[str]] = None
    required: bool = False


class CoercionOptions(BaseModel):
    """Per-value coercion settings."""

    model_config = ConfigDict(frozen=True)

    date_format: Optional[str] = None
    field_options: Optional[list[str]] = None


class CoercionOutcome(BaseModel):
    """Result of coercing a raw payload value for a field kind.

    Exactly one of ``value`` (on success) or ``warning`` (on failure) is set.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    value: Optional[Union[bool, str]] = None
    warning: Optional[str] = None

    @classmethod
    def ok(cls, value: Union[bool, str]) -> "CoercionOutcome":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, warning: str) -> "CoercionOutcome":
        return cls(success=False, warning=warning)


class FillAttemptResult(BaseModel):
    """Outcome of applying one mapping entry."""

    model_config = ConfigDict(frozen=True)

    target_field: str
    data_key: str
    status: FillStatus
    message: Optional[str] = None


class FillSummary(BaseModel):
    """Aggregated result of a fill run.

    Always build it through :meth:`from_details` so the counts, status and
    warnings stay consistent with ``details``.
    """

    model_config = ConfigDict(frozen=True)

    status: SummaryStatus
    filled_count: int = 0
    missing_count: int = 0
    skipped_count: int = 0
    errored_count: int = 0
    warnings: list[str] = Field(default_factory=list)
    details: list[FillAttemptResult] = Field(default_factory=list)
    pdf_bytes: Optional[bytes] = Field(default=None, exclude=True, repr=False)

    @classmethod
    def from_details(
        cls,
        details: list[FillAttemptResult],
        pdf_bytes: Optional[bytes] = None,
    ) -> "FillSummary":
        """Derive counts, overall status and warnings from attempt results.

        The run is an error when something errored and nothing was filled,
        partial when anything errored, was skipped or went missing with a
        warning, and a success otherwise.

        Args:
            details: One result per mapping entry, in input order.
            pdf_bytes: Serialized output document, if any.

        Returns:
            FillSummary: The aggregated summary.
        """
        counts = {status: 0 for status in FillStatus}
        for detail in details:
            counts[detail.status] += 1

        filled = counts[FillStatus.FILLED]
        skipped = counts[FillStatus.SKIPPED]
        errored = counts[FillStatus.ERROR]
        warned_missing = any(
            d.status == FillStatus.MISSING and d.message for d in details
        )

        if errored > 0 and filled == 0:
            status = SummaryStatus.ERROR
        elif errored > 0 or skipped > 0 or warned_missing:
            status = SummaryStatus.PARTIAL
        else:
            status = SummaryStatus.SUCCESS

        return cls(
            status=status,
            filled_count=filled,
            missing_count=counts[FillStatus.MISSING],
            skipped_count=skipped,
            errored_count=errored,
            warnings=[d.message for d in details if d.message],
            details=list(details),
            pdf_bytes=pdf_bytes,
        )


class EngineOptions(BaseModel):
    """Engine-wide fill settings.

    Args:
        warn_on_missing_values: Emit a warning for entries whose data path
            resolves to nothing.
        default_date_format: Date format used when an entry has none.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    warn_on_missing_values: bool = Field(
        default=True,
        validation_alias=AliasChoices("warn_on_missing_values", "warnOnMissingValues"),
    )
    default_date_format: str = Field(
        default="DD/MM/YYYY",
        validation_alias=AliasChoices("default_date_format", "defaultDateFormat"),
    )


class ExtractionResult(BaseModel):
    """Result of discovering fields in a PDF file.

    Args:
        filename: Source PDF filename.
        total_fields: Number of fields found.
        fields: Discovered field descriptors.
    """

    filename: str
    total_fields: int
    fields: list[FieldDescriptor]


class FillResult(BaseModel):
    """Result of filling a PDF file on disk.

    Args:
        output_path: Path to the filled PDF.
        summary: Per-entry outcomes and aggregated counts.
    """

    output_path: str
    summary: FillSummary
