"""
Tabular decoder - turns uploaded CSV/Excel bytes into raw rows.

Each row is a plain ``{header: value}`` dict of strings. Headers are kept as
written in the file; matching them to student fields is the row normalizer's job.
"""
import csv
import io
from datetime import date, datetime
from typing import Any, Dict, List

import openpyxl

from ..errors import StructuralInputError

CSV = "csv"
XLSX = "xlsx"
SUPPORTED_FORMATS = {CSV, XLSX}


def format_for_filename(filename: str) -> str:
    """Pick the decoder format from the upload's file extension"""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in SUPPORTED_FORMATS:
        raise StructuralInputError("Unsupported file format. Please upload CSV or Excel file.")
    return ext


def decode(content: bytes, fmt: str) -> List[Dict[str, str]]:
    if fmt == CSV:
        return _decode_csv(content)
    if fmt == XLSX:
        return _decode_xlsx(content)
    raise StructuralInputError("Unsupported file format. Please upload CSV or Excel file.")


def _decode_csv(content: bytes) -> List[Dict[str, str]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise StructuralInputError(f"CSV file is not valid UTF-8: {e}") from e

    try:
        reader = csv.DictReader(io.StringIO(text))
        rows = []
        for record in reader:
            # Short rows leave None values; overflow cells land under a None key
            rows.append({
                header: (value or "")
                for header, value in record.items()
                if header is not None
            })
        return rows
    except csv.Error as e:
        raise StructuralInputError(f"CSV parse error: {e}") from e


def _cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _decode_xlsx(content: bytes) -> List[Dict[str, str]]:
    try:
        wb = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        raise StructuralInputError(f"Excel parse error: {e}") from e

    try:
        ws = wb.worksheets[0]
        sheet_rows = list(ws.iter_rows(values_only=True))
    finally:
        wb.close()

    if not sheet_rows:
        return []

    headers = [_cell_to_str(h) for h in sheet_rows[0]]
    rows = []
    for values in sheet_rows[1:]:
        cells = [_cell_to_str(v) for v in values]
        if not any(cell.strip() for cell in cells):
            continue
        rows.append({
            header: cell
            for header, cell in zip(headers, cells)
            if header.strip()
        })
    return rows
