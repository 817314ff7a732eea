"""
HubSpot Forms API (secure submit)
Docs: https://developers.hubspot.com/docs/api/marketing/forms
  POST /submissions/v3/integration/secure/submit/{portalId}/{formGuid}
Requires HUBSPOT_PORTAL_ID + HUBSPOT_FORM_GUID + HUBSPOT_PRIVATE_APP_TOKEN

This module only talks HTTP. It does NOT decide what a failure means for the
caller; the form handlers do that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from app.config import HubSpotCredentials, settings
from app.models import FormSubmission

SUBMIT_PATH = "/submissions/v3/integration/secure/submit/{portal_id}/{form_guid}"


@dataclass
class GatewayResponse:
    status_code: int
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def message(self) -> Optional[str]:
        msg = self.data.get("message")
        return msg if isinstance(msg, str) and msg else None


def _json_or_empty(resp: httpx.Response) -> Dict[str, Any]:
    # Error bodies are not always JSON; treat anything else as {}
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class HubSpotFormsClient:
    """
    One submit call per instance use. No retries.
    - transport: pass httpx.MockTransport in tests
    - timeout: None means wait as long as the platform lets us
    """

    def __init__(
        self,
        credentials: HubSpotCredentials,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials.require()
        self.base_url = (base_url or settings.HUBSPOT_API_BASE).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def submit_url(self) -> str:
        path = SUBMIT_PATH.format(
            portal_id=self.credentials.portal_id,
            form_guid=self.credentials.form_guid,
        )
        return f"{self.base_url}{path}"

    def _client(self) -> httpx.AsyncClient:
        headers = {
            "Authorization": f"Bearer {self.credentials.token}",
            "Content-Type": "application/json",
        }
        # HubSpot may answer with a redirect; follow it like a browser would
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            transport=self.transport,
            follow_redirects=True,
        )

    async def submit(self, submission: FormSubmission) -> GatewayResponse:
        """
        POST the submission. Returns GatewayResponse for any HTTP status;
        network errors (httpx.HTTPError) bubble up to the caller.
        """
        async with self._client() as client:
            resp = await client.post(self.submit_url, json=submission.to_json())
        if 200 <= resp.status_code < 300:
            return GatewayResponse(resp.status_code)
        return GatewayResponse(resp.status_code, _json_or_empty(resp))
