"""JSON-to-Sheets Converter.

Converts a nested JSON document into a multi-sheet Excel workbook:

  * scalar values of each object level go to one row on that level's sheet,
  * nested objects get their own sheets, named after their key path,
  * arrays of objects are merged into a single sheet, one row per element.

Every row carries a ``Sheet Data`` column (``SHEET::<name>``) naming the
sub-tree it summarises.
"""

from .converter import convert_json_to_excel
from .decomposer import Decomposer, ValueShape, classify_value, decompose
from .sheets import SheetCollection
from .workbook_writer import write_workbook

__all__ = [
    "convert_json_to_excel",
    "decompose",
    "Decomposer",
    "ValueShape",
    "classify_value",
    "SheetCollection",
    "write_workbook",
]

__version__ = "0.1.0"
