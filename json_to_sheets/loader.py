"""Read the JSON document to convert."""

import json
import logging

from .errors import InputError

logger = logging.getLogger(__name__)


def load_json_document(path, encoding="utf-8"):
    """Load and return the JSON document at *path*.

    The whole file is read into memory.  Only objects and arrays are
    accepted as top-level values.

    Raises:
        InputError: the file is missing or unreadable, is not valid JSON, or
            its top-level value is null or a scalar.
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            text = f.read()
    except FileNotFoundError as exc:
        raise InputError(f"Input file not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise InputError(f"Input file is not valid {encoding} text: {path}") from exc
    except OSError as exc:
        raise InputError(f"Cannot read input file {path}: {exc}") from exc

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in {path}: {exc}") from exc
    except RecursionError as exc:
        raise InputError(f"JSON nesting too deep in {path}") from exc

    if document is None:
        raise InputError("JSON data is null or undefined.")
    if not isinstance(document, (dict, list)):
        raise InputError(
            f"JSON top-level value must be an object or an array, "
            f"got {type(document).__name__}"
        )

    logger.debug(f"Loaded {type(document).__name__} document from {path} ({len(text)} characters)")
    return document
