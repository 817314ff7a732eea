import pytest
from fastapi.testclient import TestClient

from api.main import app, get_credentials, get_transport
from app.config import HubSpotCredentials

from tests.fakes import CREDS, FakeHubSpot


@pytest.fixture
def hubspot():
    return FakeHubSpot()


@pytest.fixture
def client(hubspot):
    app.dependency_overrides[get_credentials] = lambda: CREDS
    app.dependency_overrides[get_transport] = lambda: hubspot.transport
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(params=[
    HubSpotCredentials(form_guid="abc-guid", token="pat-secret"),
    HubSpotCredentials(portal_id="123", token="pat-secret"),
    HubSpotCredentials(portal_id="123", form_guid="abc-guid"),
])
def unconfigured_client(request, hubspot):
    app.dependency_overrides[get_credentials] = lambda: request.param
    app.dependency_overrides[get_transport] = lambda: hubspot.transport
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
