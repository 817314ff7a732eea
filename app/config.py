"""
Centralized settings using Pydantic Settings (v2).
Newbies: this reads environment variables so secrets are NOT hard-coded.
"""

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

from app.errors import ConfigurationError


class Settings(BaseSettings):
    # ---- HubSpot Forms API ----
    HUBSPOT_PORTAL_ID: str | None = None
    HUBSPOT_FORM_GUID: str | None = None
    HUBSPOT_PRIVATE_APP_TOKEN: str | None = Field(
        default=None,
        description="Private app token with the forms scope",
    )
    HUBSPOT_API_BASE: str = Field(default="https://api.hubapi.com")
    # No timeout unless set; the platform's own execution limit is the bound.
    HUBSPOT_TIMEOUT_S: float | None = None

    # ---- Forms ----
    SITE_NAME: str = Field(default="go.yepzy.com", description="Prefix for the pageName sent to HubSpot")

    # ---- CORS ----
    ALLOWED_ORIGINS: str = Field(default="*", description="Comma-separated list of origins")

    # ---- Observability ----
    OTEL_EXPORTER_OTLP_ENDPOINT: str | None = None  # set to export traces
    SERVICE_NAME: str = Field(default="form-relay")
    LOG_LEVEL: str = Field(default="INFO")

    # ---- PII Redaction ----
    PII_REDACTION_ENABLED: bool = Field(default=True)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("HUBSPOT_TIMEOUT_S", mode="before")
    @classmethod
    def _lenient_timeout(cls, v):
        # unparseable -> None, i.e. no timeout
        if v is None or isinstance(v, (int, float)):
            return v
        try:
            return float(str(v).strip())
        except ValueError:
            return None

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


@dataclass(frozen=True)
class HubSpotCredentials:
    """
    The three values every submission needs. Built per request and handed to
    the handlers, so tests can pass their own without touching os.environ.
    """
    portal_id: str | None = None
    form_guid: str | None = None
    token: str | None = None

    @classmethod
    def from_settings(cls, s: Settings) -> "HubSpotCredentials":
        return cls(
            portal_id=s.HUBSPOT_PORTAL_ID,
            form_guid=s.HUBSPOT_FORM_GUID,
            token=s.HUBSPOT_PRIVATE_APP_TOKEN,
        )

    @property
    def missing(self) -> list[str]:
        names = {
            "HUBSPOT_PORTAL_ID": self.portal_id,
            "HUBSPOT_FORM_GUID": self.form_guid,
            "HUBSPOT_PRIVATE_APP_TOKEN": self.token,
        }
        return [k for k, v in names.items() if not v]

    def require(self) -> "HubSpotCredentials":
        missing = self.missing
        if missing:
            raise ConfigurationError(missing)
        return self


settings = Settings()


def get_settings() -> Settings:
    # Re-read on each call: configuration is looked up at invocation time.
    return Settings()
