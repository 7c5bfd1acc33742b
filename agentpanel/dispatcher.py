"""Validates agent requests and routes them to the Gmail and Notion handlers.

Each action tag maps to exactly one payload model and one handler. Validation
is pure and always completes before a handler reads configuration or touches
the network.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from agentpanel.config import Settings
from agentpanel.exceptions import RequestValidationFailed
from agentpanel.models.agent import AgentAction, AgentRequest
from agentpanel.models.gmail import ListMessagesPayload, SendMessagePayload
from agentpanel.models.notion import CreatePagePayload, ListPagesPayload
from agentpanel.services import gmail as gmail_service
from agentpanel.services import notion as notion_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionHandler:
    payload_model: type[BaseModel]
    handler: Callable[[Any, Settings], BaseModel]


@dataclass(frozen=True)
class ValidatedRequest:
    action: AgentAction
    payload: BaseModel


ACTIONS: dict[AgentAction, ActionHandler] = {
    AgentAction.LIST_MESSAGES: ActionHandler(ListMessagesPayload, gmail_service.list_messages),
    AgentAction.SEND_MESSAGE: ActionHandler(SendMessagePayload, gmail_service.send_message),
    AgentAction.LIST_PAGES: ActionHandler(ListPagesPayload, notion_service.list_pages),
    AgentAction.CREATE_PAGE: ActionHandler(CreatePagePayload, notion_service.create_page),
}


def format_validation_errors(errors: list[dict], prefix: tuple = ()) -> str:
    """Render pydantic error dicts as '<field>: <message>' joined by '; '."""
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in (*prefix, *err.get("loc", ())))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def validate_request(body: Any) -> ValidatedRequest:
    """Parse an untyped request body into an action and its typed payload."""
    try:
        request = AgentRequest.model_validate(body)
    except ValidationError as e:
        errors = e.errors()
        # An unknown action is reported on its own, whatever the payload holds.
        action_errors = [err for err in errors if err["loc"][:1] == ("action",)]
        raise RequestValidationFailed(format_validation_errors(action_errors or errors)) from e

    spec = ACTIONS[request.action]
    try:
        payload = spec.payload_model.model_validate(request.payload or {})
    except ValidationError as e:
        raise RequestValidationFailed(format_validation_errors(e.errors(), prefix=("payload",))) from e
    return ValidatedRequest(action=request.action, payload=payload)


def dispatch(request: ValidatedRequest, settings: Settings) -> BaseModel:
    """Run the handler registered for the request's action."""
    logger.info("[agent] running %s", request.action.value)
    try:
        return ACTIONS[request.action].handler(request.payload, settings)
    except Exception as e:
        logger.error("[agent] %s failed: %s", request.action.value, e)
        raise


def run_action(action: str, payload: dict | None, settings: Settings) -> dict:
    """Validate, dispatch and serialize one action to its camelCase JSON shape."""
    result = dispatch(validate_request({"action": action, "payload": payload}), settings)
    return result.model_dump(mode="json", by_alias=True)
