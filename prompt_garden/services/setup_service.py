import structlog

from prompt_garden.extensions import sheets
from prompt_garden.sheets.layout import HEADERS, header_range

log = structlog.get_logger()


def initialize_sheets() -> dict:
    """Create the Prompts/Tags/Categories sheets and their header rows if absent.

    Safe to call repeatedly: existing sheets and headers are left alone.
    """
    client = sheets.client
    existing = set(client.get_sheet_titles())

    created = []
    headers_written = []
    for title, header in HEADERS.items():
        if title not in existing:
            client.add_sheet(title)
            created.append(title)
        elif client.get_values(header_range(title)):
            continue
        client.update_values(header_range(title), [header])
        headers_written.append(title)

    log.info("sheets.initialized", created=created, headers=headers_written)
    return {
        "created": created,
        "existing": [t for t in HEADERS if t not in created],
        "headers": headers_written,
    }
