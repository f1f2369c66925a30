"""
Basic usage example for OutputDiff.

This example demonstrates:
- Comparing two JSON documents
- Comparing text with limited context
- Rendering the same result in every output format
"""

from output_diff import DiffConfig, OutputFormat, compare_bytes, format_diff, has_changes


def main():
    # 1. Two versions of a JSON document
    old = b'{"user": {"name": "Alice", "tags": ["a", "b"]}, "active": true}'
    new = b'{"user": {"name": "Bob", "tags": ["a"]}, "active": "yes", "id": 7}'

    result = compare_bytes(old, new, old_hint="old.json", new_hint="new.json")
    print(f"JSON changed: {has_changes(result)}")

    for output_format in OutputFormat:
        config = DiffConfig(format=output_format, width=80)
        print(f"\n=== {output_format.value} ===")
        print(format_diff(result, "old.json", "new.json", config), end="")

    # 2. Text with two lines of context around each change
    old_text = "".join(f"line {i}\n" for i in range(1, 31)).encode()
    new_text = old_text.replace(b"line 5\n", b"line five\n").replace(b"line 25\n", b"")

    config = DiffConfig(context_lines=2)
    result = compare_bytes(old_text, new_text, config)
    print("\n=== text, 2 lines of context ===")
    print(format_diff(result, "old.txt", "new.txt", config), end="")


if __name__ == "__main__":
    main()
