import re

import pytest

from prompt_garden import create_app
from prompt_garden.sheets.client import SheetsAPIError
from prompt_garden.sheets.layout import HEADERS

RANGE_RE = re.compile(r"^(?P<sheet>[^!]+)!A(?P<start>\d+):[A-Z]+(?P<end>\d+)?$")


class InMemorySheet:
    """Stand-in for SheetsClient that keeps the spreadsheet in lists.

    Mirrors the parts of the Sheets API the app relies on: reads drop
    trailing empty rows and cells, cleared rows read back as [], appends
    land after the last non-empty row.
    """

    def __init__(self):
        self.sheets = {}
        self.calls = []

    def _locate(self, a1_range):
        m = RANGE_RE.match(a1_range)
        if not m or m.group("sheet") not in self.sheets:
            raise SheetsAPIError(f"Unable to parse range: {a1_range}", 400)
        rows = self.sheets[m.group("sheet")]
        start = int(m.group("start")) - 1
        end = int(m.group("end")) if m.group("end") else max(len(rows), start)
        return rows, start, end

    @staticmethod
    def _trim(row):
        row = [str(c) for c in row]
        while row and row[-1] == "":
            row.pop()
        return row

    def get_values(self, a1_range):
        self.calls.append(("get", a1_range))
        rows, start, end = self._locate(a1_range)
        window = [self._trim(r) for r in rows[start:end]]
        while window and not window[-1]:
            window.pop()
        return window

    def append_values(self, a1_range, new_rows):
        self.calls.append(("append", a1_range))
        rows, start, _ = self._locate(a1_range)
        last = max((i for i, r in enumerate(rows) if self._trim(r)), default=-1)
        at = max(start, last + 1)
        del rows[at:]
        while len(rows) < at:
            rows.append([])
        rows.extend([list(map(str, r)) for r in new_rows])
        return {"updates": {"updatedRows": len(new_rows)}}

    def update_values(self, a1_range, new_rows):
        self.calls.append(("update", a1_range))
        rows, start, _ = self._locate(a1_range)
        while len(rows) < start + len(new_rows):
            rows.append([])
        for offset, r in enumerate(new_rows):
            rows[start + offset] = list(map(str, r))
        return {"updatedRows": len(new_rows)}

    def clear_values(self, a1_range):
        self.calls.append(("clear", a1_range))
        rows, start, end = self._locate(a1_range)
        for i in range(start, min(end, len(rows))):
            rows[i] = []
        return {}

    def get_sheet_titles(self):
        self.calls.append(("titles", None))
        return list(self.sheets)

    def add_sheet(self, title):
        self.calls.append(("add_sheet", title))
        if title in self.sheets:
            raise SheetsAPIError(f'A sheet with the name "{title}" already exists.', 400)
        self.sheets[title] = []
        return {}


@pytest.fixture(scope='function')
def sheet():
    """An initialized, empty spreadsheet with header rows in place."""
    fake = InMemorySheet()
    for title, header in HEADERS.items():
        fake.sheets[title] = [list(header)]
    return fake


@pytest.fixture(scope='function')
def app(sheet):
    """
    Fixture that creates a test app instance backed by the in-memory sheet.
    """
    app = create_app('testing')
    app.extensions['sheets'] = sheet

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """A test client for the app."""
    return app.test_client()
