from flask import current_app
from flask_caching import Cache

from .sheets.client import SheetsClient

cache = Cache()


class Sheets:
    """Per-app holder for the spreadsheet client, used like other Flask extensions."""

    def init_app(self, app):
        app.extensions["sheets"] = SheetsClient(app.config)

    @property
    def client(self) -> SheetsClient:
        return current_app.extensions["sheets"]


sheets = Sheets()
