"""
Demo: Clean JSON Output

Shows the JSON output for typical marking-code scans, including the error
object returned for a rejected scan.
"""

from gs1_label import parse_to_dict, parse_to_json

CODE44 = "MEUCIQDx2ZpTjHRWkZ3P2Km4NBwgD9Gf6cYhdC5b8wQl"


def demo_json_output():
    """Print JSON for a handful of scans."""

    print("=" * 80)
    print("  CLEAN JSON OUTPUT DEMO")
    print("=" * 80)

    test_cases = [
        ("GTIN + serial", "0100012345678905211234567"),
        ("Short crypto tail (93)", "0104600439931256215NtEuRRYbQofV<GS>93M/r1"),
        ("Key id (91) + code (92)", "0104600439931256215NtEuRRYbQofV<GS>91EE07<GS>92" + CODE44),
        ("Tail without separator", "010460043993125621ABCD93M/r1"),
        ("Rejected: no serial", "0104600439931256"),
    ]

    for title, scan in test_cases:
        print(f"\n{title}")
        print("-" * 80)
        print(f"Input: {scan}")
        print("\nJSON Output:")
        print(parse_to_json(scan))

    print("\n\n" + "=" * 80)
    print("  DICTIONARY FORMAT EXAMPLE")
    print("=" * 80)

    scan = test_cases[1][1]
    data = parse_to_dict(scan)

    print(f"\nScan: {scan}")
    print("\nParsed Fields:")
    for key, value in data.items():
        print(f"  {key:28s}: {value}")


if __name__ == "__main__":
    demo_json_output()
