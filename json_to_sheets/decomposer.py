"""
Decomposer
==========
Splits a nested JSON document into flat sheets.

Each object level becomes (at most) one single-row sheet holding that
level's scalar values.  Nested objects recurse into their own sheets and
arrays of objects are merged into one sheet with one row per element.

Sheet names are the key path joined with ``_`` (array elements contribute
their 1-based index), e.g.::

    {"user": {"name": "Al", "orders": [{"id": 1}, {"id": 2}]}}

produces::

    user_orders   rows: {"Sheet Data": "SHEET::user_orders_1", "id": 1}
                        {"Sheet Data": "SHEET::user_orders_2", "id": 2}
    user          rows: {"Sheet Data": "SHEET::user", "name": "Al"}

Every row starts with a ``Sheet Data`` column naming the sub-tree it came
from.
"""

import enum
import logging
from typing import Any, Dict

from .errors import StructuralError
from .sheets import SheetCollection

logger = logging.getLogger(__name__)

SHEET_DATA_COLUMN = "Sheet Data"
SHEET_MARKER_PREFIX = "SHEET::"
DEFAULT_ROOT_SHEET_NAME = "root"


class ValueShape(enum.Enum):
    """How a JSON value is laid out on sheets."""
    RECORDS = "records"   # non-empty array whose first element is an object
    OBJECT = "object"
    SCALAR = "scalar"     # scalars, null, empty arrays, arrays of non-objects


def classify_value(value: Any) -> ValueShape:
    """Return the :class:`ValueShape` of *value*."""
    if isinstance(value, list):
        if value and isinstance(value[0], dict):
            return ValueShape.RECORDS
        return ValueShape.SCALAR
    if isinstance(value, dict):
        return ValueShape.OBJECT
    return ValueShape.SCALAR


def sheet_marker(name: str) -> str:
    """``Sheet Data`` cell value for rows summarising sheet *name*."""
    return f"{SHEET_MARKER_PREFIX}{name}"


def _marked_row(name: str, values: Dict[str, Any]) -> Dict[str, Any]:
    row = {SHEET_DATA_COLUMN: sheet_marker(name)}
    row.update(values)
    return row


class Decomposer:
    """Turns one JSON document into a :class:`SheetCollection`.

    Args:
        root_sheet_name: Name of the sheet holding the top level's scalars.
        on_collision: ``"error"`` to fail when two sub-trees map to the same
            sheet name, ``"suffix"`` to rename the later one.
    """

    def __init__(self, root_sheet_name: str = DEFAULT_ROOT_SHEET_NAME,
                 on_collision: str = "error"):
        if not root_sheet_name:
            raise ValueError("root_sheet_name must be a non-empty string")
        self.root_sheet_name = root_sheet_name
        self.on_collision = on_collision

    def decompose(self, document: Any) -> SheetCollection:
        """Decompose *document* into a fresh :class:`SheetCollection`.

        A top-level array is handled as ``{root_sheet_name: document}``, one
        sheet for the whole array rather than one sheet per array index.
        The root sheet name never fails on a collision: if a key already
        produced a sheet with that name, the root sheet gets a suffix.
        Scalars and ``None`` produce an empty collection.
        """
        sheets = SheetCollection(on_collision=self.on_collision)

        if isinstance(document, list):
            document = {self.root_sheet_name: document}
        if not isinstance(document, dict):
            logger.debug(f"Nothing to decompose for {type(document).__name__} document")
            return sheets

        try:
            scalars = self._decompose_level(document, "", sheets)
        except RecursionError as exc:
            raise StructuralError("JSON nesting too deep to decompose") from exc
        if scalars:
            name = sheets.claim(self.root_sheet_name, on_collision="suffix")
            sheets.append(name, _marked_row(name, scalars))

        logger.debug(f"Decomposed document into {len(sheets)} sheet(s): {sheets.names()}")
        return sheets

    def _decompose_level(self, obj: Dict[Any, Any], prefix: str,
                         sheets: SheetCollection) -> Dict[str, Any]:
        """Walk one object level.

        Descendant sheets are added to *sheets*; the level's own scalar
        values are returned for the caller to place.
        """
        scalars: Dict[str, Any] = {}

        for raw_key, value in obj.items():
            key = str(raw_key)
            sheet_name = prefix + key
            shape = classify_value(value)

            if shape is ValueShape.RECORDS:
                self._decompose_records(key, value, sheet_name, sheets)

            elif shape is ValueShape.OBJECT:
                nested = self._decompose_level(value, sheet_name + "_", sheets)
                if nested:
                    name = sheets.claim(sheet_name)
                    sheets.append(name, _marked_row(name, nested))

            else:
                scalars[key] = value

        return scalars

    def _decompose_records(self, key, items, sheet_name, sheets):
        """Merge every element of an array of objects into one sheet."""
        name = sheets.claim(sheet_name)
        for index, item in enumerate(items, 1):
            item_name = f"{name}_{index}"
            if isinstance(item, dict):
                values = self._decompose_level(
                    item, item_name + "_", sheets)
            else:
                # stray non-object element in an array of objects
                values = {key: item}
            if values:
                sheets.append(name, _marked_row(item_name, values))
        logger.debug(f"Sheet '{name}': merged {len(sheets[name])} row(s) from {len(items)} element(s)")


def decompose(document: Any, root_sheet_name: str = DEFAULT_ROOT_SHEET_NAME,
              on_collision: str = "error") -> SheetCollection:
    """Convenience wrapper around :meth:`Decomposer.decompose`."""
    return Decomposer(root_sheet_name, on_collision).decompose(document)
