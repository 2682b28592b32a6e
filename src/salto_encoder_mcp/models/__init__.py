"""Data models for decoded responses and field values."""

from .response import Field, Response
from .dates import format_date, parse_date
