"""
PDF form filler for files on disk.

Fills AcroForm fields of a PDF from a JSON payload using a field mapping
file, and writes the filled PDF next to the input by default.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import load_mapping, load_payload
from .engine import FormFillEngine
from .models import EngineOptions, FillResult

logger = logging.getLogger("formfill.filler")


def default_output_path(pdf_path: Path) -> Path:
    """``<input>_filled.pdf`` beside the input PDF."""
    return pdf_path.parent / f"{pdf_path.stem}_filled.pdf"


def fill_pdf(
    pdf_path: Union[str, Path],
    mapping_path: Union[str, Path],
    data_path: Union[str, Path],
    output_path: Union[str, Path, None] = None,
    options: Optional[EngineOptions] = None,
    mapping_property: Optional[str] = None,
) -> FillResult:
    """Fill a PDF form from a mapping file and a JSON payload.

    Args:
        pdf_path: Path to the input PDF with form fields.
        mapping_path: JSON/YAML file with the field mapping.
        data_path: JSON/YAML file with the data payload.
        output_path: Path for the filled PDF. Defaults to <input>_filled.pdf.
        options: Engine options for this fill.
        mapping_property: Property holding the mapping list when the
            mapping file is an object.

    Returns:
        FillResult: Output path and fill summary.

    Raises:
        FileNotFoundError: If the input PDF doesn't exist.
        ConfigurationError: If the mapping or payload file is unusable.
        FormFillError: On structural failures (mapping, load, no form).
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    mapping = load_mapping(mapping_path, mapping_property)
    data = load_payload(data_path)

    output_path = Path(output_path) if output_path else default_output_path(pdf_path)

    engine = FormFillEngine(options=options)
    summary = engine.fill_form(pdf_path.read_bytes(), mapping, data)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(summary.pdf_bytes)
    logger.info("Wrote filled PDF to %s", output_path)

    return FillResult(output_path=str(output_path), summary=summary)
