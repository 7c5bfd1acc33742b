from fastmcp import FastMCP

from agentpanel import dispatcher
from agentpanel.config import get_settings
from agentpanel.exceptions import AgentError
from agentpanel.models.agent import AgentAction

mcp = FastMCP("Agentpanel")


def _run(action: AgentAction, payload: dict) -> dict:
    """Run an action, returning errors as agent-friendly dicts instead of raising."""
    try:
        return dispatcher.run_action(action.value, payload, get_settings())
    except AgentError as e:
        return {"error": str(e)}


# --- Gmail tools ---

@mcp.tool
def gmail_list_messages(
    max_results: int = 10,
    label_ids: list[str] | None = None,
    include_spam_trash: bool | None = None,
) -> dict:
    """List recent Gmail messages with sender, subject, date and snippet.
    max_results must be between 1 and 20. Optionally filter by label IDs (e.g. 'INBOX', 'UNREAD')."""
    payload = {"maxResults": max_results}
    if label_ids is not None:
        payload["labelIds"] = label_ids
    if include_spam_trash is not None:
        payload["includeSpamTrash"] = include_spam_trash
    return _run(AgentAction.LIST_MESSAGES, payload)


@mcp.tool
def gmail_send_message(to: str, subject: str, body: str) -> dict:
    """Send a plain text email. Provide recipient address, subject line, and body."""
    return _run(AgentAction.SEND_MESSAGE, {"to": to, "subject": subject, "body": body})


# --- Notion tools ---

@mcp.tool
def notion_list_pages(
    page_size: int = 10,
    filter_property: str | None = None,
    filter_value: str | None = None,
) -> dict:
    """List pages from the configured Notion data source.
    To filter, give both filter_property and filter_value; pages whose property text contains the value are returned."""
    payload = {"pageSize": page_size}
    if filter_property is not None:
        payload["filterProperty"] = filter_property
    if filter_value is not None:
        payload["filterValue"] = filter_value
    return _run(AgentAction.LIST_PAGES, payload)


@mcp.tool
def notion_create_page(title: str, content: str) -> dict:
    """Create a Notion database entry with the given title and one paragraph of content.
    Returns the new page ID and its URL."""
    return _run(AgentAction.CREATE_PAGE, {"title": title, "content": content})
