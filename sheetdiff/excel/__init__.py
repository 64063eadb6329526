"""Spreadsheet reading (pandas / openpyxl)."""
