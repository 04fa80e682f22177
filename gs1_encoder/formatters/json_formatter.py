"""
JSON and text formatting of encode results.

Provides output for renderers and for inspection:
- Region list with patterns as plain integer lists
- Image dimensions in pixels
- Error code and message on failure
"""

from __future__ import annotations

import json
from typing import Any, Dict

from ..core.context import EncodeResult, PrintRegion


def format_result_dict(result: EncodeResult, include_patterns: bool = True) -> Dict[str, Any]:
    """
    Convert an encode result to a JSON-ready dict.

    Args:
        result: Result from encode()
        include_patterns: Include the module width lists (default: True)
    """
    output = result.to_dict()
    if not include_patterns:
        for region in output['regions']:
            del region['pattern']
    return output


def format_result_json(
    result: EncodeResult,
    include_patterns: bool = True,
    indent: int = 2
) -> str:
    """Format an encode result as a JSON string."""
    return json.dumps(
        format_result_dict(result, include_patterns=include_patterns),
        indent=indent,
        ensure_ascii=False,
    )


def _format_region(region: PrintRegion) -> str:
    flags = []
    if region.wht_first:
        flags.append("wht")
    if region.guards:
        flags.append("guards")
    if region.reverse:
        flags.append("rev")
    widths = "".join(str(w) if w < 10 else f"({w})" for w in region.pattern)
    return (f"{region.kind.value:<12} h={region.height:<3} "
            f"pad={region.left_pad}/{region.right_pad} "
            f"[{','.join(flags)}] {widths}")


def format_result_text(result: EncodeResult) -> str:
    """Format an encode result for display, one line per region."""
    lines = [
        "=" * 60,
        f"{result.symbology.value}: {result.data!r}",
        "=" * 60,
    ]
    if result.errors:
        for error in result.errors:
            lines.append(f"  [{error.code}] {error.message}")
        return '\n'.join(lines)

    lines.append(f"Primary: {result.primary}")
    lines.append(f"Size: {result.width} x {result.height} px")
    lines.append("-" * 40)
    for region in result.regions:
        lines.append(_format_region(region))
    return '\n'.join(lines)
