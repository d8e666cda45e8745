"""Utilities shared by PDF Nine-Up modules."""

from __future__ import annotations

import logging
import re
from pathlib import Path

_PDF_SUFFIX = re.compile(r"(\.pdf)?$", re.IGNORECASE)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve()


def build_output_filename(source_name: str, suffix: str = "_9in1") -> str:
    """Append ``suffix`` to ``source_name`` and normalise the extension to ``.pdf``.

    >>> build_output_filename("report.PDF")
    'report_9in1.pdf'
    >>> build_output_filename("notes")
    'notes_9in1.pdf'
    """

    return _PDF_SUFFIX.sub(f"{suffix}.pdf", Path(source_name).name, count=1)


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
