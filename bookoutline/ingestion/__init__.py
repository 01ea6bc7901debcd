"""Outline ingestion: reading and parsing SUMMARY.md."""

from bookoutline.ingestion.parser import BACK_MATTER_TITLES, SummaryParser, parse_summary, read_text

__all__ = ["BACK_MATTER_TITLES", "SummaryParser", "parse_summary", "read_text"]
