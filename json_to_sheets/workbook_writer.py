"""
Workbook Writer Module
======================
Writes a :class:`~json_to_sheets.sheets.SheetCollection` to an ``.xlsx``
file, one worksheet per sheet, in collection order.

Each worksheet gets a header row built from the union of its rows' keys
(first-seen order) followed by one line per row record.
"""

import json
import logging
import os

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .errors import OutputError, OutputWriteError
from .sheet_names import resolve_sheet_titles

logger = logging.getLogger(__name__)

ARRAY_FORMATS = ("json", "join")
ARRAY_SEPARATOR = ", "

# Styling constants
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center")
MIN_COLUMN_WIDTH = 8
MAX_COLUMN_WIDTH = 60


def collect_columns(rows):
    """Union of the keys of *rows*, in first-seen order."""
    columns = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)
    return list(columns)


def _to_json_text(value):
    return json.dumps(value, ensure_ascii=False)


def format_cell_value(value, array_format="json"):
    """Convert a row value into something openpyxl can store in a cell.

    ``None`` and empty lists become blank cells.  Lists and dicts are
    flattened to text, either as JSON or (``array_format="join"``) as the
    items joined with ``", "``.  Characters XLSX cannot hold are removed.
    """
    if value is None:
        return None
    if isinstance(value, list):
        if not value:
            return None
        if array_format == "join":
            value = ARRAY_SEPARATOR.join(
                _to_json_text(v) if isinstance(v, (list, dict)) or v is None else str(v)
                for v in value
            )
        else:
            value = _to_json_text(value)
    elif isinstance(value, dict):
        value = _to_json_text(value)

    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _set_cell(ws, row, column, value):
    cell = ws.cell(row=row, column=column, value=value)
    # JSON strings such as "=1+1" are data, not formulas
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"
    return cell


def _write_header(ws, columns, style_header):
    for ci, name in enumerate(columns, 1):
        cell = _set_cell(ws, 1, ci, format_cell_value(name))
        if style_header:
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = HEADER_ALIGNMENT
    if style_header and columns:
        ws.freeze_panes = "A2"


def _fit_column_widths(ws, columns, rows):
    for ci, name in enumerate(columns, 1):
        width = len(str(name))
        for row in rows:
            value = row.get(name)
            if value is not None:
                width = max(width, len(str(value)))
        width = min(max(width + 2, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)
        ws.column_dimensions[get_column_letter(ci)].width = width


def write_sheet(ws, rows, array_format="json", style_header=True):
    """Fill worksheet *ws* with a header row and one line per record."""
    columns = collect_columns(rows)
    _write_header(ws, columns, style_header)

    formatted = []
    for ri, row in enumerate(rows, 2):
        values = {}
        for ci, name in enumerate(columns, 1):
            if name not in row:
                continue
            value = format_cell_value(row[name], array_format)
            values[name] = value
            _set_cell(ws, ri, ci, value)
        formatted.append(values)

    if style_header:
        _fit_column_widths(ws, columns, formatted)
    return columns


def write_workbook(sheets, output_path, sheet_name_policy="sanitize",
                   array_format="json", style_header=True):
    """Write *sheets* to *output_path* and return the path.

    Args:
        sheets: :class:`SheetCollection` or any mapping of sheet name ->
            list of row dicts.
        output_path: Destination ``.xlsx`` file.  Parent directories are
            created; an existing file is replaced.
        sheet_name_policy: ``"error"`` or ``"sanitize"``, see
            :func:`~json_to_sheets.sheet_names.resolve_sheet_titles`.
        array_format: ``"json"`` or ``"join"``, see :func:`format_cell_value`.
        style_header: Bold coloured header, frozen top row and fitted widths.

    Raises:
        OutputError: *sheets* is empty.
        SheetNameError: a name is invalid under the ``"error"`` policy.
        OutputWriteError: the file could not be saved.
    """
    if array_format not in ARRAY_FORMATS:
        raise ValueError(
            f"Invalid array format '{array_format}'. Must be one of {ARRAY_FORMATS}."
        )
    if len(sheets) == 0:
        raise OutputError("No sheets to write: the document has no scalar values")

    titles = resolve_sheet_titles(list(sheets), sheet_name_policy)

    wb = Workbook()
    wb.remove(wb.active)

    for name, rows in sheets.items():
        ws = wb.create_sheet(titles[name])
        columns = write_sheet(ws, rows, array_format, style_header)
        logger.debug(f"  Sheet '{ws.title}': {len(rows)} row(s), {len(columns)} column(s)")

    out_dir = os.path.dirname(output_path)
    try:
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        wb.save(output_path)
    except OSError as exc:
        raise OutputWriteError(f"Cannot write '{output_path}': {exc}") from exc
    finally:
        wb.close()

    logger.info(f"Wrote {len(sheets)} sheet(s) to {output_path}")
    return output_path
