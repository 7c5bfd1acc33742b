from typing import Any

from fastapi import APIRouter, Body, Depends

from agentpanel import dispatcher
from agentpanel.config import GMAIL_ENV_VARS, NOTION_ENV_VARS, Settings, get_settings
from agentpanel.models.common import ErrorResponse

router = APIRouter(prefix="/api", tags=["agent"])


@router.post("/agent", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def run_agent(body: Any = Body(None), settings: Settings = Depends(get_settings)) -> dict:
    request = dispatcher.validate_request(body)
    result = dispatcher.dispatch(request, settings)
    return result.model_dump(mode="json", by_alias=True)


@router.get("/status")
def api_status(settings: Settings = Depends(get_settings)) -> dict:
    statuses = {}
    for name, env_vars in (("gmail", GMAIL_ENV_VARS), ("notion", NOTION_ENV_VARS)):
        missing = settings.missing(env_vars)
        statuses[name] = {"configured": not missing, "missing": missing}
    return {"integrations": statuses}
