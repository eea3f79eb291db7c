import os
import tempfile

os.environ.setdefault("DATABASE_URI", "sqlite://")
os.environ["MAX_DEVICES_COUNT"] = "2"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="gateway-api-logs-"))

import pytest

from gateway_api.gatewayservice import app as flask_app
from gateway_api.registry_api import db


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_gateway(client):
    """Create a gateway through the API and return its JSON."""
    def _make(name="gw1", ipv4="10.0.0.1"):
        response = client.post("/gateways", json={"name": name, "ipv4": ipv4})
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make


@pytest.fixture
def make_device(client):
    """Create a device through the API and return its JSON."""
    def _make(gateway, vendor="Acme", status="online"):
        response = client.post(
            "/devices", json={"gateway": gateway, "vendor": vendor, "status": status})
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make
