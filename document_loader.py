"""Loading of records from CSV, JSON and PDF sources."""

from __future__ import annotations

import csv
import json
import logging
import math
from pathlib import Path
from typing import Any

from pypdf import PdfReader

SUPPORTED_SUFFIXES = (".csv", ".json", ".pdf")


def extract_pdf_text(file_path: Path, logger: logging.Logger) -> str | None:
    """Extract text from a PDF file. Returns None for unreadable PDFs."""
    try:
        reader = PdfReader(str(file_path))
        chunks: list[str] = []
        for page in reader.pages:
            text = page.extract_text() or ""
            if text:
                chunks.append(text)
    except Exception as exc:
        logger.warning("Failed to read PDF %s: %s", file_path, exc)
        return None

    full_text = "\n".join(chunks).strip()
    return full_text or None


def load_pdf_document(
    file_path: Path, logger: logging.Logger, root: Path | None = None
) -> dict[str, Any] | None:
    """Turn a PDF into a single record, or None if it has no text.

    The stored path is relative to ``root`` (the file name when no root is
    given) because every value of a record is indexed.
    """
    text = extract_pdf_text(file_path, logger)
    if text is None:
        logger.info("Skipping empty or unreadable PDF: %s", file_path)
        return None
    relative = file_path.relative_to(root) if root is not None else Path(file_path.name)
    return {"file": file_path.name, "path": relative.as_posix(), "text": text}


def load_csv_records(file_path: Path) -> list[dict[str, Any]]:
    """Read a CSV file with a header row into one record per row."""
    with file_path.open("r", encoding="utf-8", newline="") as file:
        reader = csv.DictReader(file)
        return [
            {key: _coerce_cell(value) for key, value in row.items() if key is not None}
            for row in reader
        ]


def load_json_records(file_path: Path) -> list[dict[str, Any]]:
    """Read a JSON file holding an object or an array of objects."""
    with file_path.open("r", encoding="utf-8") as file:
        payload = json.load(file)

    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list) and all(isinstance(item, dict) for item in payload):
        return payload
    raise ValueError(f"{file_path} must contain a JSON object or an array of objects")


class DocumentLoader:
    """Collects records from configured files and directories."""

    def __init__(self, sources: list[Path], logger: logging.Logger) -> None:
        self._sources = sources
        self._logger = logger

    def load(self) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        for file_path, root in self._discover_files():
            records.extend(self._load_file(file_path, root))

        self._logger.info("Loaded %d records", len(records))
        return records

    def _discover_files(self) -> list[tuple[Path, Path]]:
        files: list[tuple[Path, Path]] = []
        for source in self._sources:
            if source.is_file():
                if source.suffix.lower() in SUPPORTED_SUFFIXES:
                    resolved = source.resolve()
                    files.append((resolved, resolved.parent))
                else:
                    self._logger.warning("Unsupported source file type: %s", source)
                continue

            if not source.is_dir():
                self._logger.warning("Source does not exist or is not accessible: %s", source)
                continue

            root = source.resolve()
            found = [
                path
                for path in root.rglob("*")
                if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES
            ]
            files.extend((path, root) for path in sorted(found))

        self._logger.info("Discovered %d source files", len(files))
        return files

    def _load_file(self, file_path: Path, root: Path) -> list[dict[str, Any]]:
        suffix = file_path.suffix.lower()
        if suffix == ".pdf":
            document = load_pdf_document(file_path, self._logger, root)
            return [document] if document is not None else []

        try:
            if suffix == ".csv":
                return load_csv_records(file_path)
            return load_json_records(file_path)
        except (OSError, ValueError, csv.Error) as exc:
            self._logger.warning("Failed to read %s: %s", file_path, exc)
            return []


def _coerce_cell(value: str | None) -> Any:
    if value is None:
        return None
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return value
    return number if math.isfinite(number) else value
