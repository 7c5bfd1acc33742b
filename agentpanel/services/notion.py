import logging

import requests

from agentpanel.config import NOTION_ENV_VARS, Settings
from agentpanel.exceptions import (
    AuthenticationError,
    ConfigurationError,
    IntegrationError,
    RateLimitError,
)
from agentpanel.models.notion import (
    CreatePagePayload,
    CreatePageResponse,
    ListPagesPayload,
    ListPagesResponse,
    NotionPage,
)

logger = logging.getLogger(__name__)

TITLE_PROPERTY = "Name"


def _require_config(settings: Settings) -> None:
    if settings.missing(NOTION_ENV_VARS):
        raise ConfigurationError(
            "Missing required Notion environment variables. Ensure "
            f"{', '.join(NOTION_ENV_VARS.values())} are set."
        )


def _headers(settings: Settings) -> dict:
    return {
        "Authorization": f"Bearer {settings.notion_api_key}",
        "Notion-Version": settings.notion_api_version,
        "Content-Type": "application/json",
    }


def _handle_response(resp: requests.Response) -> dict:
    if resp.status_code == 429:
        raise RateLimitError("Notion API rate limit exceeded. Try again shortly.")
    if resp.status_code in (401, 403):
        raise AuthenticationError(
            "Notion API key is invalid or lacks access. Check NOTION_API_KEY and the integration's connections."
        )
    try:
        data = resp.json()
    except ValueError:
        data = {}
    if resp.status_code >= 400:
        if not isinstance(data, dict):
            data = {}
        code = data.get("code", resp.status_code)
        message = data.get("message") or resp.text
        raise IntegrationError(f"Notion API error: {code}: {message}")
    if not isinstance(data, dict):
        raise IntegrationError("Unexpected Notion API response format: body is not an object.")
    return data


def _post(path: str, body: dict, settings: Settings) -> dict:
    url = f"{settings.notion_api_base_url}{path}"
    try:
        resp = requests.post(url, headers=_headers(settings), json=body, timeout=settings.notion_timeout)
    except requests.RequestException as e:
        raise IntegrationError(f"Failed to call Notion API: {e}") from e
    return _handle_response(resp)


def build_filter(params: ListPagesPayload) -> dict | None:
    """Return a rich_text "contains" filter on one property, or None when unfiltered."""
    if params.filter_property and params.filter_value:
        return {
            "property": params.filter_property,
            "rich_text": {"contains": params.filter_value},
        }
    return None


def _is_full_page(item: dict) -> bool:
    # Partial objects only carry "object" and "id".
    return isinstance(item, dict) and item.get("object") == "page" and "url" in item


def list_pages(params: ListPagesPayload, settings: Settings) -> ListPagesResponse:
    """Query the configured data source and return the full page objects it yields."""
    _require_config(settings)
    body = {"page_size": params.page_size}
    query_filter = build_filter(params)
    if query_filter:
        body["filter"] = query_filter

    data = _post(f"/data_sources/{settings.notion_data_source_id}/query", body, settings)
    results = data.get("results", [])
    if not isinstance(results, list):
        raise IntegrationError("Unexpected Notion API response format: 'results' is not a list.")

    pages = [
        NotionPage(
            id=item["id"],
            url=item["url"],
            created_time=item.get("created_time", ""),
            last_edited_time=item.get("last_edited_time", ""),
            properties=item.get("properties", {}),
        )
        for item in results
        if _is_full_page(item)
    ]
    logger.debug("Notion query returned %d results, %d full pages", len(results), len(pages))
    return ListPagesResponse(pages=pages)


def create_page(params: CreatePagePayload, settings: Settings) -> CreatePageResponse:
    """Create a database entry with a title and a single paragraph of content."""
    _require_config(settings)
    body = {
        "parent": {"database_id": settings.notion_database_id},
        "properties": {
            TITLE_PROPERTY: {
                "title": [{"text": {"content": params.title}}],
            },
        },
        "children": [
            {
                "object": "block",
                "type": "paragraph",
                "paragraph": {
                    "rich_text": [{"type": "text", "text": {"content": params.content}}],
                },
            },
        ],
    }
    data = _post("/pages", body, settings)
    if "id" not in data:
        raise IntegrationError("Unexpected Notion API response format: created page has no id.")
    return CreatePageResponse(page_id=data["id"], url=data.get("url"))
