"""
Error taxonomy for the form endpoints.

Each error knows its HTTP status and the JSON body the caller sees, so the
handlers can raise them anywhere and convert once at the edge.
"""

from typing import Any, Dict, List, Optional


class FormRelayError(Exception):
    """Base class: carries status_code + client-facing error text."""
    status_code: int = 500
    public_message: str = "Internal server error"
    outcome: str = "error"  # metrics label

    def to_body(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.public_message}


class MethodNotAllowed(FormRelayError):
    status_code = 405
    outcome = "method_not_allowed"
    public_message = "Method not allowed"

    def __init__(self, method: str):
        super().__init__(f"{method} not allowed")
        self.method = method


class ValidationError(FormRelayError):
    """
    One or many field-level messages.
    - single=True  -> body {"ok": false, "error": "<first message>"}
    - single=False -> body {"ok": false, "errors": [...]}
    """
    status_code = 400
    outcome = "invalid"

    def __init__(self, messages: List[str], single: bool = False):
        super().__init__("; ".join(messages))
        self.messages = list(messages)
        self.single = single

    def to_body(self) -> Dict[str, Any]:
        if self.single:
            return {"ok": False, "error": self.messages[0]}
        return {"ok": False, "errors": self.messages}


class ConfigurationError(FormRelayError):
    status_code = 500
    outcome = "config_error"
    public_message = "Server configuration error"

    def __init__(self, missing: List[str]):
        super().__init__(f"Missing HubSpot settings: {', '.join(missing)}")
        self.missing = list(missing)


class GatewaySubmissionFailed(FormRelayError):
    """HubSpot answered non-2xx; we mirror its status code."""
    outcome = "rejected"
    public_message = "Failed to submit form to HubSpot"

    def __init__(self, status_code: int, details: Optional[str] = None):
        super().__init__(f"HubSpot returned {status_code}")
        self.status_code = status_code
        self.details = details or "Unknown error"

    def to_body(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.public_message, "details": self.details}


class InternalError(FormRelayError):
    status_code = 500
    public_message = "Internal server error"
