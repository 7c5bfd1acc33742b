import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from email.mime.text import MIMEText
from typing import NoReturn

import httplib2
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from agentpanel.auth import get_gmail_credentials
from agentpanel.config import Settings
from agentpanel.exceptions import AuthenticationError, IntegrationError, RateLimitError
from agentpanel.models.gmail import (
    GmailMessageSummary,
    ListMessagesPayload,
    ListMessagesResponse,
    SendMessagePayload,
    SendStatus,
)

logger = logging.getLogger(__name__)

METADATA_HEADERS = ["From", "Subject", "Date"]


def _get_gmail_service(settings: Settings):
    creds = get_gmail_credentials(settings)
    return build("gmail", "v1", credentials=creds, cache_discovery=False), creds


def _handle_api_error(e: HttpError) -> NoReturn:
    if e.resp.status == 429:
        raise RateLimitError("Gmail API rate limit exceeded. Try again shortly.") from e
    if e.resp.status in (401, 403):
        raise AuthenticationError(
            "Gmail credentials expired or revoked. Check GOOGLE_REFRESH_TOKEN."
        ) from e
    raise IntegrationError(f"Gmail API error: {e}") from e


def _parse_headers(payload: dict | None) -> dict[str, str]:
    """Flatten the Gmail header list into a name -> value dict, skipping blanks."""
    headers = {}
    for header in (payload or {}).get("headers", []):
        name, value = header.get("name"), header.get("value")
        if name and value:
            headers[name] = value
    return headers


def _fetch_metadata(request, creds) -> dict:
    # httplib2 is not thread-safe, so every worker gets its own transport.
    return request.execute(http=AuthorizedHttp(creds, http=httplib2.Http()))


def list_messages(params: ListMessagesPayload, settings: Settings) -> ListMessagesResponse:
    """List recent messages and fetch From/Subject/Date metadata for each one concurrently."""
    service, creds = _get_gmail_service(settings)
    list_kwargs = {"userId": "me", "maxResults": params.max_results}
    if params.label_ids is not None:
        list_kwargs["labelIds"] = params.label_ids
    if params.include_spam_trash is not None:
        list_kwargs["includeSpamTrash"] = params.include_spam_trash

    try:
        listing = service.users().messages().list(**list_kwargs).execute()
        refs = [ref for ref in listing.get("messages", []) if ref.get("id")][: params.max_results]
        if not refs:
            return ListMessagesResponse(messages=[])

        detail_requests = [
            service.users().messages().get(
                userId="me", id=ref["id"], format="metadata", metadataHeaders=METADATA_HEADERS
            )
            for ref in refs
        ]
        with ThreadPoolExecutor(max_workers=len(detail_requests)) as pool:
            details = list(pool.map(lambda request: _fetch_metadata(request, creds), detail_requests))
    except HttpError as e:
        _handle_api_error(e)

    logger.debug("Fetched metadata for %d messages", len(details))
    return ListMessagesResponse(messages=[
        GmailMessageSummary(
            id=ref["id"],
            thread_id=ref.get("threadId"),
            snippet=detail.get("snippet"),
            headers=_parse_headers(detail.get("payload")),
        )
        for ref, detail in zip(refs, details)
    ])


def _encode_message(params: SendMessagePayload) -> str:
    mime = MIMEText(params.body, "plain", "utf-8")
    mime["To"] = params.to
    mime["Subject"] = params.subject
    return base64.urlsafe_b64encode(mime.as_bytes()).decode().rstrip("=")


def send_message(params: SendMessagePayload, settings: Settings) -> SendStatus:
    """Compose and send a plain-text email."""
    service, _ = _get_gmail_service(settings)
    raw = _encode_message(params)
    try:
        service.users().messages().send(userId="me", body={"raw": raw}).execute()
    except HttpError as e:
        _handle_api_error(e)
    return SendStatus(status="sent")
