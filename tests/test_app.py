from app.config import HubSpotCredentials, Settings
from app.utils import is_valid_email, maybe_redact_pii


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == "ok"


def test_metrics_count_submissions(client):
    client.post("/capture-email", json={"email": "user@example.com"})
    r = client.get("/metrics/")
    assert r.status_code == 200
    assert 'form_submissions_total{endpoint="capture-email",outcome="accepted"}' in r.text


def test_credentials_from_settings():
    s = Settings(HUBSPOT_PORTAL_ID="1", HUBSPOT_FORM_GUID="g", HUBSPOT_PRIVATE_APP_TOKEN="t")
    creds = HubSpotCredentials.from_settings(s)
    assert creds == HubSpotCredentials("1", "g", "t")
    assert creds.missing == []


def test_allowed_origins_parsing():
    s = Settings(ALLOWED_ORIGINS="https://a.com, https://b.com,,")
    assert s.allowed_origins == ["https://a.com", "https://b.com"]


def test_email_check():
    assert is_valid_email("user@example.com")
    assert not is_valid_email("user@example")
    assert not is_valid_email("us er@example.com")


def test_redaction():
    out = maybe_redact_pii('{"message": "Contact user@example.com already exists"}')
    assert "user@example.com" not in out
    assert "[REDACTED_EMAIL]" in out


def test_unknown_path_keeps_default_404(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json() == {"detail": "Not Found"}


def test_timeout_setting_is_lenient():
    assert Settings(HUBSPOT_TIMEOUT_S="abc").HUBSPOT_TIMEOUT_S is None
    assert Settings(HUBSPOT_TIMEOUT_S="").HUBSPOT_TIMEOUT_S is None
    assert Settings(HUBSPOT_TIMEOUT_S=" 12.5 ").HUBSPOT_TIMEOUT_S == 12.5
