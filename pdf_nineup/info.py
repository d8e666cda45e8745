"""Lightweight inspection of source PDFs."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .exceptions import InputMissingError, InvalidPDFError, NineUpException
from .packer import page_count_for
from .types import PDFInfo
from .utils import resolve_path


def get_pdf_info(pdf_path: Union[str, Path]) -> PDFInfo:
    """Return page count, size and metadata for ``pdf_path``."""

    path = resolve_path(pdf_path)
    if not path.is_file():
        raise InputMissingError(f"PDF file not found: {path}")

    try:
        reader = PdfReader(str(path))
        num_pages = len(reader.pages)
        metadata = reader.metadata
    except PdfReadError as exc:
        raise InvalidPDFError(f"Corrupted or invalid PDF file: {path}. Error: {exc}") from exc
    except Exception as exc:
        raise InvalidPDFError(f"Unexpected error reading PDF: {path}. Error: {exc}") from exc

    return PDFInfo(
        num_pages=num_pages,
        file_size=path.stat().st_size,
        title=getattr(metadata, "title", None),
        author=getattr(metadata, "author", None),
        is_encrypted=reader.is_encrypted,
        output_pages=page_count_for(num_pages),
    )


def validate_pdf(pdf_path: Union[str, Path]) -> Tuple[bool, str]:
    """Perform lightweight validation of a PDF file."""

    path = Path(pdf_path)
    if not path.exists():
        return False, f"File not found: {pdf_path}"
    if not path.is_file():
        return False, f"Path is not a file: {pdf_path}"
    if path.suffix.lower() != ".pdf":
        return False, f"File does not have .pdf extension: {pdf_path}"

    try:
        get_pdf_info(path)
    except NineUpException as exc:
        return False, str(exc)
    return True, ""
