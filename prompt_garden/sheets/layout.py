"""Sheet names, header rows and A1 range helpers for the backing spreadsheet."""

PROMPTS_SHEET = "Prompts"
TAGS_SHEET = "Tags"
CATEGORIES_SHEET = "Categories"

PROMPTS_HEADER = ["ID", "Title", "Content", "Tags", "Category", "Created At", "Updated At"]
TAGS_HEADER = ["Name", "Count", "Is Category"]
CATEGORIES_HEADER = ["Name", "Description"]

# Sheets created by setup, in creation order.
HEADERS = {
    PROMPTS_SHEET: PROMPTS_HEADER,
    TAGS_SHEET: TAGS_HEADER,
    CATEGORIES_SHEET: CATEGORIES_HEADER,
}

# Row 1 holds the header; data starts on row 2.
FIRST_DATA_ROW = 2


def column_letter(index: int) -> str:
    """Return the A1 column letter for a zero-based column index."""
    letters = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def last_column(sheet: str) -> str:
    return column_letter(len(HEADERS[sheet]) - 1)


def header_range(sheet: str) -> str:
    return f"{sheet}!A1:{last_column(sheet)}1"


def data_range(sheet: str) -> str:
    """Open-ended range covering every data row, e.g. ``Prompts!A2:G``."""
    return f"{sheet}!A{FIRST_DATA_ROW}:{last_column(sheet)}"


def row_range(sheet: str, row_number: int) -> str:
    """Range of a single sheet row (1-based, header included)."""
    return f"{sheet}!A{row_number}:{last_column(sheet)}{row_number}"


__all__ = [
    "PROMPTS_SHEET",
    "TAGS_SHEET",
    "CATEGORIES_SHEET",
    "HEADERS",
    "FIRST_DATA_ROW",
    "column_letter",
    "last_column",
    "header_range",
    "data_range",
    "row_range",
]
