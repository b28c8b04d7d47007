"""Parse customer spreadsheets (CSV or XLSX) into insertable records."""

from __future__ import annotations

import csv
from io import BytesIO, StringIO
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

SUPPORTED_SUFFIXES = {".csv", ".xlsx"}
REQUIRED_FIELDS = ("name", "phone", "address")

# Header aliases, compared after lower-casing and replacing spaces/dashes with underscores.
COLUMN_PATTERNS = {
    "name": ["name", "customer_name", "customername", "nama", "nama_pelanggan"],
    "phone": ["phone", "phone_number", "telephone", "mobile", "telepon", "no_hp", "hp"],
    "address": ["address", "customer_address", "alamat"],
    "notes": ["notes", "note", "catatan", "remarks"],
}


class UnsupportedFileError(ValueError):
    """The uploaded file is not a CSV or XLSX spreadsheet."""


def _normalize_header(header: str) -> str:
    return header.lower().strip().replace(" ", "_").replace("-", "_")


def match_columns(headers: list[str]) -> dict[str, str]:
    """Map customer fields to the spreadsheet headers that hold them."""
    mappings: dict[str, str] = {}
    normalized_headers = {_normalize_header(h): h for h in headers if h}
    for field, pattern_list in COLUMN_PATTERNS.items():
        for pattern in pattern_list:
            if pattern in normalized_headers:
                mappings[field] = normalized_headers[pattern]
                break
    return mappings


def _read_rows(filename: str, content: bytes) -> list[dict[str, Any]]:
    suffix = Path(filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileError("Only .csv and .xlsx files are supported.")

    if suffix == ".csv":
        reader = csv.DictReader(StringIO(content.decode("utf-8-sig")))
        return list(reader)

    try:
        workbook = load_workbook(filename=BytesIO(content), read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError) as exc:
        raise ValueError(f"Could not read '{filename}' as an Excel workbook.") from exc

    try:
        worksheet = workbook.active
        rows_iter = worksheet.iter_rows(values_only=True)
        headers = [str(cell) if cell is not None else "" for cell in next(rows_iter, [])]
        rows = []
        for row_values in rows_iter:
            rows.append({headers[i]: ("" if cell is None else cell) for i, cell in enumerate(row_values) if i < len(headers)})
    finally:
        workbook.close()
    return rows


def parse_customer_file(filename: str, content: bytes) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Return (records, skipped) for an uploaded customer file.

    Each skipped entry holds the 1-based data row number and the missing fields.
    """
    rows = _read_rows(filename, content)
    if not rows:
        return [], []

    mappings = match_columns(list(rows[0].keys()))
    missing_columns = [field for field in REQUIRED_FIELDS if field not in mappings]
    if missing_columns:
        raise ValueError(f"Missing required columns: {', '.join(missing_columns)}")

    records: list[dict[str, Any]] = []
    skipped: list[dict[str, Any]] = []
    for row_number, row in enumerate(rows, start=1):
        values = {field: str(row.get(column) or "").strip() for field, column in mappings.items()}
        missing = [field for field in REQUIRED_FIELDS if not values.get(field)]
        if missing:
            skipped.append({"row": row_number, "missing": missing})
            continue
        records.append(
            {
                "name": values["name"],
                "phone": values["phone"],
                "address": values["address"],
                "notes": values.get("notes") or None,
            }
        )
    return records, skipped
