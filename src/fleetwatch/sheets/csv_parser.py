from typing import List


def parse_line(line: str) -> List[str]:
    """
    Split one CSV line on commas that sit outside double quotes.

    Quote characters only toggle the quoted state and are dropped, so a doubled
    quote ("") inside a quoted field is not treated as an escaped quote. An
    unmatched quote keeps the rest of the line in the current field.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_csv(text: str) -> List[List[str]]:
    """Parse raw CSV text into rows of trimmed string fields, in source order."""
    return [parse_line(line) for line in text.split("\n")]
