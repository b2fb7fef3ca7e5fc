import pytest

from leadfinder.vendors import google_sheets


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def json(self):
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = DummyResponse()

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append(("POST", url, None, json, headers))
        return self.response

    def put(self, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append(("PUT", url, params, json, headers))
        return self.response


@pytest.fixture(autouse=True)
def patch_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(google_sheets, "_SESSION", session)
    return session


def test_create_spreadsheet(patch_session):
    patch_session.response = DummyResponse(payload={"spreadsheetId": "abc", "spreadsheetUrl": "https://sheet"})

    result = google_sheets.create_spreadsheet("Leads", "gtok")

    assert result["spreadsheetId"] == "abc"
    method, url, _, body, headers = patch_session.calls[0]
    assert (method, url) == ("POST", "https://sheets.googleapis.com/v4/spreadsheets")
    assert body == {"properties": {"title": "Leads"}}
    assert headers["Authorization"] == "Bearer gtok"


def test_write_values(patch_session):
    patch_session.response = DummyResponse(payload={"updatedRange": "Sheet1!A1:B2"})
    values = [["Business Name", "Phone"], ["Acme", "123"]]

    result = google_sheets.write_values("abc", values, "gtok")

    assert result["updatedRange"] == "Sheet1!A1:B2"
    method, url, params, body, _ = patch_session.calls[0]
    assert url == "https://sheets.googleapis.com/v4/spreadsheets/abc/values/Sheet1!A1"
    assert params == {"valueInputOption": "RAW"}
    assert body["values"] == values


def test_rejected_token(patch_session):
    patch_session.response = DummyResponse(status_code=401, payload={"error": {"message": "Invalid Credentials"}})
    with pytest.raises(google_sheets.GoogleSheetsError) as excinfo:
        google_sheets.create_spreadsheet("Leads", "expired")
    assert excinfo.value.status_code == 401
    assert str(excinfo.value) == "Invalid Credentials"
