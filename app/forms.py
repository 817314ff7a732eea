"""
The two form handlers: email capture (partial form) and full callback form.

Flow per request: method check -> validate -> credentials -> payload ->
HubSpot -> translate. The only difference in failure handling is the
gateway policy:
- EmailCaptureHandler: IGNORE    (fail-open, user always sees success)
- FullFormHandler:     PROPAGATE (fail-closed, user sees HubSpot's error)
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

import httpx

from app.config import HubSpotCredentials
from app.errors import (
    ConfigurationError,
    FormRelayError,
    GatewaySubmissionFailed,
    InternalError,
    MethodNotAllowed,
    ValidationError,
)
from app.integrations.hubspot import HubSpotFormsClient
from app.logging_setup import get_logger
from app.models import EmailCaptureRequest, FormSubmission, FullFormRequest, build_submission
from app.observability import HUBSPOT_LATENCY, SUBMISSIONS, tracer
from app.utils import clean, is_valid_email, maybe_redact_pii


class GatewayFailurePolicy(str, Enum):
    IGNORE = "ignore"
    PROPAGATE = "propagate"


@dataclass
class HandlerResult:
    status_code: int
    body: Dict[str, Any]


class FormHandler:
    """Shared request lifecycle. Subclasses fill in validate() and the constants."""

    endpoint: str = ""
    page_label: str = ""
    success_message: str = ""
    on_gateway_failure: GatewayFailurePolicy = GatewayFailurePolicy.PROPAGATE
    request_model: Type[Any]

    def __init__(
        self,
        credentials: HubSpotCredentials,
        site_name: str = "go.yepzy.com",
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.site_name = site_name
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self.log = get_logger(endpoint=self.endpoint)

    @property
    def page_name(self) -> str:
        return f"{self.site_name} {self.page_label}"

    def validate(self, req: Any) -> List[Tuple[str, str]]:
        """Return ordered (field name, trimmed value) pairs or raise ValidationError."""
        raise NotImplementedError

    async def handle(self, method: str, body: Any) -> HandlerResult:
        try:
            if (method or "").upper() != "POST":
                raise MethodNotAllowed(method)
            req = self.request_model.model_validate(body if isinstance(body, dict) else {})
            values = self.validate(req)
            creds = self._require_credentials()
            submission = build_submission(values, self.page_name, req.page_uri, req.hutk)
            result = await self._forward(creds, submission)
        except FormRelayError as e:
            SUBMISSIONS.labels(self.endpoint, e.outcome).inc()
            return HandlerResult(e.status_code, e.to_body())
        return result

    def _require_credentials(self) -> HubSpotCredentials:
        try:
            return self.credentials.require()
        except ConfigurationError as e:
            self.log.error("config_missing", missing=e.missing)
            raise

    def _noted(self) -> HandlerResult:
        SUBMISSIONS.labels(self.endpoint, "noted").inc()
        return HandlerResult(200, {"ok": True, "message": "Email noted"})

    async def _forward(self, creds: HubSpotCredentials, submission: FormSubmission) -> HandlerResult:
        client = HubSpotFormsClient(creds, base_url=self.base_url, timeout=self.timeout, transport=self.transport)
        try:
            with tracer.start_as_current_span("hubspot.submit"), HUBSPOT_LATENCY.labels(self.endpoint).time():
                resp = await client.submit(submission)
        except Exception as e:
            self.log.error("hubspot_call_failed", err=maybe_redact_pii(str(e)), exc_info=True)
            if self.on_gateway_failure is GatewayFailurePolicy.IGNORE:
                return self._noted()
            raise InternalError(str(e)) from e

        if not resp.ok:
            self.log.error(
                "hubspot_rejected",
                status=resp.status_code,
                body=maybe_redact_pii(json.dumps(resp.data)),
            )
            if self.on_gateway_failure is GatewayFailurePolicy.IGNORE:
                # They will most likely finish the full form anyway.
                return self._noted()
            raise GatewaySubmissionFailed(resp.status_code, resp.message)

        self.log.info("submission_accepted", status=resp.status_code)
        SUBMISSIONS.labels(self.endpoint, "accepted").inc()
        return HandlerResult(200, {"ok": True, "message": self.success_message})


class EmailCaptureHandler(FormHandler):
    """Best-effort lead capture for visitors who leave before the full form."""

    endpoint = "capture-email"
    page_label = "Email Capture"
    success_message = "Email captured successfully"
    on_gateway_failure = GatewayFailurePolicy.IGNORE
    request_model = EmailCaptureRequest

    def validate(self, req: EmailCaptureRequest) -> List[Tuple[str, str]]:
        email = clean(req.email)
        if not email:
            raise ValidationError(["Email is required"], single=True)
        if not is_valid_email(email):
            raise ValidationError(["Invalid email format"], single=True)
        return [("email", email)]


class FullFormHandler(FormHandler):
    endpoint = "submit-form"
    page_label = "Callback Request"
    success_message = "Form submitted successfully"
    on_gateway_failure = GatewayFailurePolicy.PROPAGATE
    request_model = FullFormRequest

    def validate(self, req: FullFormRequest) -> List[Tuple[str, str]]:
        firstname = clean(req.firstname)
        lastname = clean(req.lastname)
        email = clean(req.email)
        phone = clean(req.phone)

        errors = []
        if not firstname:
            errors.append("First name is required")
        if not lastname:
            errors.append("Last name is required")
        if not email:
            errors.append("Email is required")
        if not phone:
            errors.append("Phone is required")
        # format only matters once there is something to check
        if email and not is_valid_email(email):
            errors.append("Invalid email format")
        if errors:
            raise ValidationError(errors)

        values = [
            ("firstname", firstname),
            ("lastname", lastname),
            ("email", email),
            ("phone", phone),
        ]
        company = clean(req.company)
        if company:
            values.append(("company", company))
        return values
