import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from agentpanel.config import get_settings
from agentpanel.dispatcher import format_validation_errors
from agentpanel.exceptions import AgentError, RequestValidationFailed
from agentpanel.mcp_server import mcp
from agentpanel.routers.agent import router as agent_router
from agentpanel.routers.ui import router as ui_router

logger = logging.getLogger(__name__)


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if get_settings().localhost_only and client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(status_code=403, content={"error": "Localhost access only"})
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Agentpanel", version="0.1.0")
api.include_router(agent_router)
api.include_router(ui_router)


# --- Exception handlers ---

@api.exception_handler(RequestValidationFailed)
async def validation_error_handler(request: Request, exc: RequestValidationFailed):
    logger.warning("[agent] rejected request: %s", exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


@api.exception_handler(RequestValidationError)
async def request_body_error_handler(request: Request, exc: RequestValidationError):
    errors = [{**err, "loc": tuple(err.get("loc", ()))[1:]} for err in exc.errors()]
    logger.warning("[agent] malformed request body: %s", errors)
    return JSONResponse(status_code=400, content={"error": format_validation_errors(errors)})


@api.exception_handler(AgentError)
async def agent_error_handler(request: Request, exc: AgentError):
    logger.error("[agent] request error: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@api.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("[agent] unexpected error")
    message = str(exc) or "Unexpected error while handling request."
    return JSONResponse(status_code=500, content={"error": message})


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)

app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=mcp_app.lifespan,
)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "agentpanel.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
