"""
JSON-to-Sheets: command-line entry point.

Usage:
    json-to-sheets [config.yaml] [--input input.json] [--output output_file.xlsx]
    python -m json_to_sheets.main --input data.json --output data.xlsx --on-collision suffix

Options given on the command line override the config file, which overrides
the built-in defaults.
"""

import argparse
import logging
import sys

from json_to_sheets.config import load_config, validate_config
from json_to_sheets.converter import convert_json_to_excel
from json_to_sheets.errors import JsonToSheetsError
from json_to_sheets.sheet_names import SHEET_NAME_POLICIES
from json_to_sheets.sheets import COLLISION_POLICIES
from json_to_sheets.workbook_writer import ARRAY_FORMATS

logger = logging.getLogger(__name__)


def setup_logging(level_str: str = "INFO"):
    """Configure logging."""
    level = getattr(logging, str(level_str).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description='Convert a nested JSON document into a multi-sheet Excel workbook'
    )
    parser.add_argument(
        'config', nargs='?', default='config.yaml',
        help='Path to config YAML file (default: config.yaml, skipped if absent)'
    )
    parser.add_argument(
        '--input', '-i', dest='input_file', default=None,
        help='Path to the input JSON file (default: input.json)'
    )
    parser.add_argument(
        '--output', '-o', dest='output_file', default=None,
        help='Path to the output .xlsx file (default: output_file.xlsx)'
    )
    parser.add_argument(
        '--root-sheet-name', dest='root_sheet_name', default=None,
        help='Sheet name for the top-level scalar values (default: root)'
    )
    parser.add_argument(
        '--on-collision', dest='on_name_collision', choices=COLLISION_POLICIES,
        default=None, help='What to do when two sub-trees map to the same sheet name'
    )
    parser.add_argument(
        '--sheet-names', dest='sheet_name_policy', choices=SHEET_NAME_POLICIES,
        default=None, help='What to do with names Excel does not accept as sheet titles'
    )
    parser.add_argument(
        '--array-format', dest='array_format', choices=ARRAY_FORMATS,
        default=None, help='How arrays of scalars are written into a cell'
    )
    parser.add_argument(
        '--no-header-style', dest='style_header', action='store_const',
        const=False, default=None, help='Write plain, unstyled header rows'
    )
    parser.add_argument(
        '--log-level', dest='log_level', default=None,
        help='Logging level: DEBUG, INFO, WARNING, ERROR'
    )
    return parser


def main(argv=None):
    """Run the converter; return the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        overrides = {
            key: value for key, value in vars(args).items()
            if key != 'config' and value is not None
        }
        config.update(overrides)
        validate_config(config)
    except JsonToSheetsError as exc:
        setup_logging("INFO")
        logger.error(f"Error: {exc}")
        return 1

    setup_logging(config['log_level'])
    logger.debug(f"Configuration: {config}")

    try:
        output = convert_json_to_excel(config['input_file'], config['output_file'], config)
    except JsonToSheetsError as exc:
        logger.error(f"Error: {exc}")
        return 1

    print(f"Data successfully written to {output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
