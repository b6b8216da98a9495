"""Tests for sheet-title validation and sanitising."""

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from json_to_sheets.errors import SheetNameError
from json_to_sheets.sheet_names import (
    MAX_SHEET_TITLE_LENGTH,
    resolve_sheet_titles,
    sanitize_sheet_name,
    title_problem,
    validate_sheet_name,
)


LONG_NAME = "customers_1_addresses_2_geo_location"   # 36 characters


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("name", ["root", "user_address", "a" * 31, "Q1 (draft)", "it's"])
def test_valid_names(name):
    assert title_problem(name) is None
    assert validate_sheet_name(name) == name


@pytest.mark.parametrize("name, fragment", [
    ("", "empty"),
    (LONG_NAME, "31 characters"),
    ("a/b", "invalid character"),
    ("what?", "invalid character"),
    ("[x]", "invalid character"),
    ("'quoted", "apostrophe"),
    ("a\x01b", "control character"),
])
def test_invalid_names(name, fragment):
    assert fragment in title_problem(name)
    with pytest.raises(SheetNameError) as excinfo:
        validate_sheet_name(name)
    assert excinfo.value.name == name


# ---------------------------------------------------------------------------
# Sanitising
# ---------------------------------------------------------------------------

def test_sanitize_replaces_invalid_characters():
    assert sanitize_sheet_name("a/b:c*d?e[f]g\\h") == "a_b_c_d_e_f_g_h"


def test_sanitize_truncates():
    title = sanitize_sheet_name(LONG_NAME)
    assert title == LONG_NAME[:MAX_SHEET_TITLE_LENGTH]
    assert title_problem(title) is None


def test_sanitize_strips_apostrophes_and_falls_back():
    assert sanitize_sheet_name("'quoted'") == "quoted"
    assert sanitize_sheet_name("") == "Sheet"
    assert sanitize_sheet_name("''") == "Sheet"


# ---------------------------------------------------------------------------
# resolve_sheet_titles
# ---------------------------------------------------------------------------

def test_valid_names_unchanged(caplog):
    with caplog.at_level(logging.WARNING):
        titles = resolve_sheet_titles(["root", "user", "user_address"])
    assert titles == {"root": "root", "user": "user", "user_address": "user_address"}
    assert caplog.records == []


def test_sanitize_policy_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="json_to_sheets.sheet_names"):
        titles = resolve_sheet_titles(["a/b"], policy="sanitize")
    assert titles == {"a/b": "a_b"}
    assert "written as 'a_b'" in caplog.text


def test_truncated_names_made_unique():
    other = LONG_NAME[:-1] + "X"
    titles = resolve_sheet_titles([LONG_NAME, other])
    assert titles[LONG_NAME] == LONG_NAME[:31]
    assert titles[other] == LONG_NAME[:27] + " (2)"
    assert len(titles[other]) == MAX_SHEET_TITLE_LENGTH


def test_case_insensitive_duplicates_sanitized():
    titles = resolve_sheet_titles(["Data", "data"])
    assert titles == {"Data": "Data", "data": "data (2)"}


def test_error_policy_rejects_invalid_name():
    with pytest.raises(SheetNameError):
        resolve_sheet_titles(["ok", LONG_NAME], policy="error")


def test_error_policy_rejects_case_duplicates():
    with pytest.raises(SheetNameError) as excinfo:
        resolve_sheet_titles(["Data", "data"], policy="error")
    assert "case" in str(excinfo.value)


def test_unknown_policy():
    with pytest.raises(ValueError):
        resolve_sheet_titles(["a"], policy="truncate")


def test_sanitize_strips_control_characters(caplog):
    assert sanitize_sheet_name("a\x01b\x1f") == "ab"
    with caplog.at_level(logging.WARNING, logger="json_to_sheets.sheet_names"):
        titles = resolve_sheet_titles(["a\x01b"])
    assert titles == {"a\x01b": "ab"}
    assert "control character" in caplog.text


def test_error_policy_rejects_control_characters():
    with pytest.raises(SheetNameError, match="control character"):
        resolve_sheet_titles(["a\x01b"], policy="error")
