"""
Orchestrates the JSON -> multi-sheet workbook conversion.

Steps:
  1. Load the JSON document.
  2. Decompose it into sheets.
  3. Write the sheets to an ``.xlsx`` file.
"""

import logging

from .config import DEFAULT_CONFIG, validate_config
from .decomposer import Decomposer
from .loader import load_json_document
from .workbook_writer import write_workbook

logger = logging.getLogger(__name__)


def convert_json_to_excel(input_path, output_path, config=None):
    """Convert the JSON file at *input_path* into a workbook at *output_path*.

    Args:
        input_path: UTF-8 JSON file.
        output_path: Destination ``.xlsx`` file (overwritten).
        config: Options dict; missing keys fall back to
            :data:`~json_to_sheets.config.DEFAULT_CONFIG`.

    Returns:
        The path of the written workbook.
    """
    options = dict(DEFAULT_CONFIG)
    options.update(config or {})
    validate_config(options)

    logger.info(f"Step 1: Loading {input_path}")
    document = load_json_document(input_path)

    logger.info("Step 2: Decomposing JSON into sheets")
    decomposer = Decomposer(
        root_sheet_name=options["root_sheet_name"],
        on_collision=options["on_name_collision"],
    )
    sheets = decomposer.decompose(document)
    logger.info(f"  {len(sheets)} sheet(s): {', '.join(sheets.names())}")

    logger.info(f"Step 3: Writing workbook {output_path}")
    return write_workbook(
        sheets,
        output_path,
        sheet_name_policy=options["sheet_name_policy"],
        array_format=options["array_format"],
        style_header=options["style_header"],
    )
