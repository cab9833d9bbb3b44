from typing import Any, Dict, List, Optional
from urllib.parse import quote

import structlog
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

log = structlog.get_logger()

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetsError(Exception):
    pass


class SheetsConfigError(SheetsError):
    pass


class SheetsAPIError(SheetsError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SheetsClient:
    """Minimal Google Sheets v4 client bound to a single spreadsheet.

    Credentials are resolved on the first request so the app can start
    (and serve docs) before the sheet is configured.
    """

    def __init__(self, config):
        # config may be app.config or any mapping-like object
        self.sheet_id = config.get("GOOGLE_SHEET_ID")
        self.base_url = (config.get("SHEETS_API_URL") or "https://sheets.googleapis.com/v4").rstrip("/")
        self.timeout = config.get("SHEETS_TIMEOUT") or 15
        self.service_account_file = config.get("GOOGLE_SERVICE_ACCOUNT_FILE")
        self.service_account_email = config.get("GOOGLE_SERVICE_ACCOUNT_EMAIL")
        self.private_key = config.get("GOOGLE_PRIVATE_KEY")
        self._session = None

    # --- auth -----------------------------------------------------------

    def _credentials(self):
        if self.service_account_file:
            return service_account.Credentials.from_service_account_file(
                self.service_account_file, scopes=SCOPES
            )
        if not self.service_account_email or not self.private_key:
            raise SheetsConfigError(
                "Google Sheets credentials are not properly configured in environment variables"
            )
        info = {
            "type": "service_account",
            "client_email": self.service_account_email,
            # keys pasted into .env files usually carry literal "\n" sequences
            "private_key": self.private_key.replace("\\n", "\n"),
            "token_uri": TOKEN_URI,
        }
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)

    @property
    def session(self) -> AuthorizedSession:
        if self._session is None:
            if not self.sheet_id:
                raise SheetsConfigError("GOOGLE_SHEET_ID is not configured")
            self._session = AuthorizedSession(self._credentials())
            log.info("sheets.session.created", sheet_id=self.sheet_id)
        return self._session

    # --- transport ------------------------------------------------------

    def _url(self, suffix: str = "") -> str:
        return f"{self.base_url}/spreadsheets/{self.sheet_id}{suffix}"

    def _values_url(self, a1_range: str, action: str = "") -> str:
        return self._url(f"/values/{quote(a1_range, safe='!:')}{action}")

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if not resp.ok:
            try:
                message = resp.json()["error"]["message"]
            except Exception:
                message = resp.text or f"HTTP {resp.status_code}"
            log.warning("sheets.request.failed", method=method, url=url, status=resp.status_code, error=message)
            raise SheetsAPIError(message, resp.status_code)
        if not resp.content:
            return {}
        return resp.json()

    # --- values API -----------------------------------------------------

    def get_values(self, a1_range: str) -> List[List[str]]:
        data = self._request("GET", self._values_url(a1_range))
        return data.get("values", [])

    def append_values(self, a1_range: str, rows: List[List[Any]]) -> Dict[str, Any]:
        return self._request(
            "POST",
            self._values_url(a1_range, ":append"),
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json={"values": rows},
        )

    def update_values(self, a1_range: str, rows: List[List[Any]]) -> Dict[str, Any]:
        return self._request(
            "PUT",
            self._values_url(a1_range),
            params={"valueInputOption": "RAW"},
            json={"range": a1_range, "values": rows},
        )

    def clear_values(self, a1_range: str) -> Dict[str, Any]:
        return self._request("POST", self._values_url(a1_range, ":clear"), json={})

    # --- spreadsheet API ------------------------------------------------

    def get_sheet_titles(self) -> List[str]:
        data = self._request("GET", self._url(), params={"fields": "sheets.properties.title"})
        return [s.get("properties", {}).get("title") for s in data.get("sheets", [])]

    def add_sheet(self, title: str) -> Dict[str, Any]:
        body = {"requests": [{"addSheet": {"properties": {"title": title}}}]}
        return self._request("POST", self._url(":batchUpdate"), json=body)


__all__ = ["SheetsClient", "SheetsError", "SheetsConfigError", "SheetsAPIError"]
