"""HTTP-level tests for POST /submit-form (fail-closed endpoint)."""

import httpx
import pytest

VALID = {"firstname": "Ann", "lastname": "Lee", "email": "ann@x.com", "phone": "555-0100"}


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "TRACE", "PROPFIND"])
def test_non_post_is_405(client, hubspot, method):
    r = client.request(method, "/submit-form")
    assert r.status_code == 405
    assert r.json() == {"ok": False, "error": "Method not allowed"}
    assert hubspot.calls == []


def test_all_required_missing_gives_four_errors_in_order(client, hubspot):
    r = client.post("/submit-form", json={"firstname": "", "lastname": " ", "email": "", "phone": ""})
    assert r.status_code == 400
    assert r.json() == {
        "ok": False,
        "errors": [
            "First name is required",
            "Last name is required",
            "Email is required",
            "Phone is required",
        ],
    }
    assert hubspot.calls == []


def test_malformed_email_only_gives_format_error(client, hubspot):
    r = client.post("/submit-form", json={**VALID, "email": "not-an-email"})
    assert r.status_code == 400
    assert r.json() == {"ok": False, "errors": ["Invalid email format"]}


def test_blank_email_is_only_reported_as_missing(client, hubspot):
    r = client.post("/submit-form", json={**VALID, "email": "   "})
    assert r.status_code == 400
    assert r.json() == {"ok": False, "errors": ["Email is required"]}
    assert hubspot.calls == []


def test_format_error_comes_after_required_errors(client):
    r = client.post("/submit-form", json={"email": "nope", "phone": "1"})
    assert r.json()["errors"] == [
        "First name is required",
        "Last name is required",
        "Invalid email format",
    ]


def test_success_without_company(client, hubspot):
    r = client.post("/submit-form", json={**VALID, "pageUri": "https://go.yepzy.com/call"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "message": "Form submitted successfully"}

    payload = hubspot.payload()
    assert payload["fields"] == [
        {"objectTypeId": "0-1", "name": "firstname", "value": "Ann"},
        {"objectTypeId": "0-1", "name": "lastname", "value": "Lee"},
        {"objectTypeId": "0-1", "name": "email", "value": "ann@x.com"},
        {"objectTypeId": "0-1", "name": "phone", "value": "555-0100"},
    ]
    assert payload["context"] == {"pageUri": "https://go.yepzy.com/call", "pageName": "go.yepzy.com Callback Request"}


@pytest.mark.parametrize("company", ["", "   ", None])
def test_blank_company_is_left_out(client, hubspot, company):
    client.post("/submit-form", json={**VALID, "company": company})
    names = [f["name"] for f in hubspot.payload()["fields"]]
    assert "company" not in names


def test_company_is_appended(client, hubspot):
    r = client.post("/submit-form", json={**VALID, "company": " Acme ", "hutk": "tok"})
    assert r.status_code == 200
    payload = hubspot.payload()
    assert payload["fields"][-1] == {"objectTypeId": "0-1", "name": "company", "value": "Acme"}
    assert len(payload["fields"]) == 5
    assert payload["context"]["hutk"] == "tok"


def test_gateway_rejection_is_mirrored(client, hubspot):
    hubspot.status = 400
    hubspot.body = {"message": "dup"}
    r = client.post("/submit-form", json=VALID)
    assert r.status_code == 400
    assert r.json() == {"ok": False, "error": "Failed to submit form to HubSpot", "details": "dup"}


def test_gateway_rejection_without_message(client, hubspot):
    hubspot.status = 403
    hubspot.raw = b"<html>Forbidden</html>"
    r = client.post("/submit-form", json=VALID)
    assert r.status_code == 403
    assert r.json() == {"ok": False, "error": "Failed to submit form to HubSpot", "details": "Unknown error"}


def test_network_error_is_internal_error(client, hubspot):
    hubspot.exc = httpx.ReadError("connection reset")
    r = client.post("/submit-form", json=VALID)
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": "Internal server error"}


def test_missing_config_is_500_and_no_call(unconfigured_client, hubspot):
    r = unconfigured_client.post("/submit-form", json=VALID)
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": "Server configuration error"}
    assert hubspot.calls == []


def test_validation_runs_before_config_check(unconfigured_client):
    r = unconfigured_client.post("/submit-form", json={})
    assert r.status_code == 400
    assert len(r.json()["errors"]) == 4


def test_repeated_submissions_are_each_forwarded(client, hubspot):
    client.post("/submit-form", json=VALID)
    client.post("/submit-form", json=VALID)
    assert len(hubspot.calls) == 2
