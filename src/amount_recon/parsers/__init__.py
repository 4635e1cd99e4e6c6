"""Parsers for side files."""

from .csv_parser import RecordParser

__all__ = ["RecordParser"]
