"""
Sheet Collection
================
Ordered mapping of sheet name -> list of row records, built by the
decomposer and consumed by the workbook writer.

The collection owns sheet-name uniqueness: a name can be claimed once.
A second claim either raises :class:`SheetNameCollisionError` or is given
the next free ``<name>_<n>`` suffix, depending on the collision policy.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import SheetNameCollisionError

logger = logging.getLogger(__name__)

COLLISION_POLICIES = ("error", "suffix")

Row = Dict[str, Any]


class SheetCollection:
    """Insertion-ordered sheets with unique names."""

    def __init__(self, on_collision: str = "error"):
        if on_collision not in COLLISION_POLICIES:
            raise ValueError(
                f"Invalid collision policy '{on_collision}'. "
                f"Must be one of {COLLISION_POLICIES}."
            )
        self.on_collision = on_collision
        self._sheets: Dict[str, List[Row]] = {}

    def claim(self, name: str, on_collision: Optional[str] = None) -> str:
        """Register *name* with an empty table and return the name used.

        *on_collision* overrides the collection policy for this one claim.
        """
        policy = on_collision or self.on_collision
        if name in self._sheets:
            if policy == "error":
                raise SheetNameCollisionError(name)
            n = 2
            while f"{name}_{n}" in self._sheets:
                n += 1
            renamed = f"{name}_{n}"
            logger.warning(f"Sheet name '{name}' already used, renamed to '{renamed}'")
            name = renamed
        self._sheets[name] = []
        return name

    def append(self, name: str, row: Row) -> None:
        """Append *row* to the already-claimed sheet *name*."""
        self._sheets[name].append(row)

    def names(self) -> List[str]:
        return list(self._sheets)

    def items(self) -> Iterator[Tuple[str, List[Row]]]:
        return iter(self._sheets.items())

    def as_dict(self) -> Dict[str, List[Row]]:
        """Plain ``dict`` copy, handy for comparisons in tests and logging."""
        return {name: [dict(r) for r in rows] for name, rows in self._sheets.items()}

    def __getitem__(self, name: str) -> List[Row]:
        return self._sheets[name]

    def __contains__(self, name) -> bool:
        return name in self._sheets

    def __len__(self) -> int:
        return len(self._sheets)

    def __iter__(self):
        return iter(self._sheets)

    def __repr__(self):
        return f"SheetCollection({self.names()!r})"
