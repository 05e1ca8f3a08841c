"""Utility functions for yardroute."""

from yardroute.utils.date_parser import parse_date, parse_month
from yardroute.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_month", "parse_amount"]
