import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from agentpanel.config import Settings, get_settings


# --- Canned API responses ---

GMAIL_API_LIST = {
    "messages": [
        {"id": "msg1", "threadId": "thread1"},
        {"threadId": "orphan"},
        {"id": "msg2", "threadId": "thread2"},
    ],
}

GMAIL_API_METADATA = {
    "msg1": {
        "id": "msg1",
        "snippet": "Hey, just checking in...",
        "payload": {
            "headers": [
                {"name": "From", "value": "alice@example.com"},
                {"name": "Subject", "value": "Hello"},
                {"name": "Date", "value": "Mon, 1 Jan 2025 12:00:00 -0500"},
            ],
        },
    },
    "msg2": {
        "id": "msg2",
        "snippet": "Quarterly numbers attached",
        "payload": {
            "headers": [
                {"name": "From", "value": "bob@example.com"},
                {"name": "Subject", "value": "Report"},
                {"name": "Date", "value": ""},
            ],
        },
    },
}

NOTION_API_PAGE = {
    "object": "page",
    "id": "page123",
    "url": "https://www.notion.so/page123",
    "created_time": "2025-01-01T00:00:00.000Z",
    "last_edited_time": "2025-01-02T00:00:00.000Z",
    "properties": {
        "Name": {"id": "title", "type": "title", "title": [{"plain_text": "Groceries"}]},
    },
}

NOTION_API_QUERY = {
    "object": "list",
    "results": [
        NOTION_API_PAGE,
        {"object": "page", "id": "partial456"},
        {"object": "data_source", "id": "ds789", "url": "https://www.notion.so/ds789"},
    ],
    "has_more": False,
}

NOTION_API_CREATED = {
    "object": "page",
    "id": "new123",
    "url": "https://www.notion.so/new123",
}


def make_settings(**overrides) -> Settings:
    values = {
        "google_client_id": "client-id",
        "google_client_secret": "client-secret",
        "google_refresh_token": "refresh-token",
        "google_redirect_uri": "http://localhost:9000/callback",
        "notion_api_key": "secret_notion",
        "notion_database_id": "db123",
        "notion_data_source_id": "ds123",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def notion_response(status_code=200, data=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data if data is not None else {}
    resp.text = text
    return resp


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def mock_gmail_credentials(mocker):
    return mocker.patch("agentpanel.services.gmail.get_gmail_credentials", return_value=MagicMock())


@pytest.fixture
def mock_gmail_build(mocker):
    mock_svc = MagicMock()
    mocker.patch("agentpanel.services.gmail.build", return_value=mock_svc)
    return mock_svc


@pytest.fixture
def mock_gmail_service(mock_gmail_credentials, mock_gmail_build):
    """Fully mocked Gmail API service."""
    return mock_gmail_build


@pytest.fixture
def mock_notion_post(mocker):
    return mocker.patch("agentpanel.services.notion.requests.post")


@pytest.fixture
def api_client(settings):
    """FastAPI TestClient for router tests, with injected settings."""
    from agentpanel.main import api

    api.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(api, raise_server_exceptions=False)
    api.dependency_overrides.clear()
