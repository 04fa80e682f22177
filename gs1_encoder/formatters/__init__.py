"""
Output formatters for the GS1 symbol encoder.
"""

from .json_formatter import (
    format_result_json,
    format_result_dict,
    format_result_text,
)

__all__ = [
    "format_result_json",
    "format_result_dict",
    "format_result_text",
]
