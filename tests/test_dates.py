"""Tests for the hhmmDDMMYY date codec."""

from datetime import datetime

import pytest

from salto_encoder_mcp.models.dates import format_date, parse_date


def test_format_date_layout():
    assert format_date(datetime(2024, 12, 31, 23, 59)) == "2359311224"


def test_format_drops_seconds():
    assert format_date(datetime(2024, 1, 2, 3, 4, 59)) == "0304020124"


def test_parse_date():
    assert parse_date("1200150624") == datetime(2024, 6, 15, 12, 0)


def test_parse_roundtrip_to_the_minute():
    value = datetime(2025, 3, 7, 14, 5)
    assert parse_date(format_date(value)) == value


@pytest.mark.parametrize("text", ["", "12001506", "12a0150624", "2500150624"])
def test_parse_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_date(text)
