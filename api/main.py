# api/main.py
# FastAPI app: two landing-page form endpoints that forward to HubSpot.
# - /capture-email : email only, best effort (never blocks the visitor)
# - /submit-form   : full callback form, errors are shown to the visitor
# Wrong methods get our own 405 JSON body, from the handler or the 405 hook below.

import json
from typing import Any, Optional

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import HubSpotCredentials, Settings, get_settings, settings
from app.errors import MethodNotAllowed
from app.forms import EmailCaptureHandler, FormHandler, FullFormHandler
from app.logging_setup import configure_logging
from app.observability import metrics_app

APP_NAME = "Form Relay"
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

configure_logging()

app = FastAPI(title=APP_NAME)

# CORS setup (set ALLOWED_ORIGINS to your landing page domains in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["POST"],
    allow_headers=["*"],
)

app.mount("/metrics", metrics_app)

FORM_PATHS = ("/capture-email", "/submit-form")


@app.exception_handler(StarletteHTTPException)
async def form_method_not_allowed(request: Request, exc: StarletteHTTPException):
    # Methods outside ALL_METHODS are rejected by routing before our handlers run;
    # keep the same 405 body the handlers return.
    if exc.status_code == 405 and request.url.path in FORM_PATHS:
        err = MethodNotAllowed(request.method)
        return JSONResponse(status_code=err.status_code, content=err.to_body())
    return await http_exception_handler(request, exc)


# ---- Dependencies (tests override these via app.dependency_overrides) ----

def get_credentials(s: Settings = Depends(get_settings)) -> HubSpotCredentials:
    return HubSpotCredentials.from_settings(s)


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    # None = real network. Tests return an httpx.MockTransport here.
    return None


async def _read_body(request: Request) -> Any:
    """Parsed JSON body, or {} when the body is empty or not JSON."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        return {}


async def _run(handler: FormHandler, request: Request) -> JSONResponse:
    body = await _read_body(request) if request.method == "POST" else {}
    result = await handler.handle(request.method, body)
    return JSONResponse(status_code=result.status_code, content=result.body)


@app.get("/healthz")
def health() -> str:
    return "ok"


@app.api_route("/capture-email", methods=ALL_METHODS)
async def capture_email(
    request: Request,
    creds: HubSpotCredentials = Depends(get_credentials),
    s: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
) -> JSONResponse:
    handler = EmailCaptureHandler(
        creds,
        site_name=s.SITE_NAME,
        base_url=s.HUBSPOT_API_BASE,
        timeout=s.HUBSPOT_TIMEOUT_S,
        transport=transport,
    )
    return await _run(handler, request)


@app.api_route("/submit-form", methods=ALL_METHODS)
async def submit_form(
    request: Request,
    creds: HubSpotCredentials = Depends(get_credentials),
    s: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
) -> JSONResponse:
    handler = FullFormHandler(
        creds,
        site_name=s.SITE_NAME,
        base_url=s.HUBSPOT_API_BASE,
        timeout=s.HUBSPOT_TIMEOUT_S,
        transport=transport,
    )
    return await _run(handler, request)
