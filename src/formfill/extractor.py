"""
PDF field extraction from files on disk.

Reads a PDF and returns the descriptors of its AcroForm fields.
"""

from pathlib import Path
from typing import Optional, Union

from .engine import FormFillEngine
from .models import ExtractionResult


def extract_fields(
    pdf_path: Union[str, Path],
    engine: Optional[FormFillEngine] = None,
) -> ExtractionResult:
    """Extract all form fields from a PDF file.

    Args:
        pdf_path: Path to the PDF file.
        engine: Engine to use; a pypdf-backed one by default.

    Returns:
        ExtractionResult: Structured extraction results.

    Raises:
        FileNotFoundError: If the PDF file doesn't exist.
        PdfLoadError: If the file is not a readable PDF.
        NoFormError: If the PDF has no form.
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    engine = engine or FormFillEngine()
    fields = engine.discover_fields(pdf_path.read_bytes())

    return ExtractionResult(
        filename=pdf_path.name,
        total_fields=len(fields),
        fields=fields,
    )
