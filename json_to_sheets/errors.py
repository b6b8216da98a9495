"""Exceptions raised by the JSON-to-sheets pipeline.

Everything derives from :class:`JsonToSheetsError` so the CLI can catch a
single type and report it.
"""


class JsonToSheetsError(Exception):
    """Base class for all conversion errors."""


class ConfigError(JsonToSheetsError):
    """The configuration file is unreadable or holds an invalid option."""


class InputError(JsonToSheetsError):
    """The input file is missing, unreadable, or not a usable JSON document."""


class StructuralError(JsonToSheetsError):
    """The JSON structure cannot be mapped onto distinct sheets."""


class SheetNameCollisionError(StructuralError):
    """Two different sub-trees resolve to the same sheet name."""

    def __init__(self, name):
        super().__init__(
            f"Sheet name collision: '{name}' is produced by more than one "
            f"part of the document"
        )
        self.name = name


class OutputError(JsonToSheetsError):
    """The workbook cannot be produced."""


class SheetNameError(OutputError):
    """A sheet name breaks the XLSX sheet-title rules."""

    def __init__(self, name, reason):
        super().__init__(f"Invalid sheet name '{name}': {reason}")
        self.name = name
        self.reason = reason


class OutputWriteError(OutputError):
    """The destination file could not be written."""
