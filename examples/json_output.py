"""
Demo: JSON Output

Encodes one symbol of each linear symbology and prints the regions a
renderer would paint.
"""

from gs1_encoder import EncodeOptions, RasterOrder, Symbology, encode, format_result_json
from gs1_encoder.formatters.json_formatter import format_result_text


def demo_json_output():
    """Demonstrate JSON and text output for the linear symbologies."""

    print("=" * 80)
    print("  JSON OUTPUT DEMO")
    print("=" * 80)

    test_cases = [
        ("EAN-13", "590123412345", Symbology.EAN13),
        ("UPC-A", "03600029145", Symbology.UPCA),
        ("EAN-8", "0123456", Symbology.EAN8),
        ("UPC-E", "04210000526", Symbology.UPCE),
    ]

    for title, data, symbology in test_cases:
        print(f"\n{title}")
        print("-" * 80)
        print(f"Input: {data}")
        print("\nJSON Output:")
        print(format_result_json(encode(data, symbology)))

    print("\n\n" + "=" * 80)
    print("  TEXT FORMAT EXAMPLE")
    print("=" * 80)

    options = EncodeOptions(pix_mult=2, raster_order=RasterOrder.BOTTOM_UP)
    print(format_result_text(encode("590123412345", Symbology.EAN13, options)))

    print("\n\n" + "=" * 80)
    print("  ERROR EXAMPLE")
    print("=" * 80)
    print(format_result_text(encode("1234512345", Symbology.UPCE)))


if __name__ == "__main__":
    demo_json_output()
