import pytest

from gateway_api.registry_api import db, Error
from gateway_api.registry_api.models import Device
from gateway_api.registry_api.repository import DeviceRepository


def device_count():
    return db.session.query(Device).count()


def test_create_device(client, make_gateway):
    gateway = make_gateway(ipv4="10.0.0.1")

    response = client.post(
        "/devices", json={"gateway": gateway["_id"], "vendor": "Acme", "status": "online"})

    assert response.status_code == 201
    device = response.get_json()
    assert device["gateway"] == gateway["_id"]
    assert device["vendor"] == "Acme"
    assert device["status"] == "online"
    assert isinstance(device["uid"], int)
    assert len(str(device["uid"])) == 10


def test_create_duplicate_device(client, make_gateway, make_device):
    gateway = make_gateway()
    make_device(gateway["_id"], vendor="Acme")

    response = client.post(
        "/devices", json={"gateway": gateway["_id"], "vendor": "Acme", "status": "offline"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Duplicate device"}
    assert device_count() == 1


def test_same_vendor_on_different_gateways(make_gateway, make_device):
    first = make_gateway(ipv4="10.0.0.1")
    second = make_gateway(ipv4="10.0.0.2")

    make_device(first["_id"], vendor="Acme")
    make_device(second["_id"], vendor="Acme")

    assert device_count() == 2


def test_create_device_over_gateway_capacity(client, make_gateway, make_device):
    # the test configuration allows two devices per gateway
    gateway = make_gateway()
    existing = [
        make_device(gateway["_id"], vendor="Acme"),
        make_device(gateway["_id"], vendor="Globex"),
    ]

    response = client.post(
        "/devices", json={"gateway": gateway["_id"], "vendor": "Initech", "status": "online"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Gateway devices count is exceeded"}
    assert device_count() == 2
    listed = client.get(f"/gateways/{gateway['_id']}").get_json()["devices"]
    assert [device["uid"] for device in listed] == [device["uid"] for device in existing]


def test_capacity_is_taken_from_the_given_maximum(app, make_gateway, make_device):
    gateway = make_gateway()
    make_device(gateway["_id"], vendor="Acme")

    with pytest.raises(Error.BadRequest):
        DeviceRepository.create(gateway["_id"], "Globex", "online", max_devices_count=1)
    assert device_count() == 1


def test_create_device_on_unknown_gateway(client):
    response = client.post("/devices", json={"gateway": 999, "vendor": "Acme", "status": "online"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Gateway not found"}
    assert device_count() == 0


@pytest.mark.parametrize("body", [
    {"vendor": "Acme", "status": "online"},
    {"gateway": 1, "status": "online"},
    {"gateway": 1, "vendor": "", "status": "online"},
    {"gateway": 1, "vendor": "Acme"},
    {"gateway": 1, "vendor": "Acme", "status": "broken"},
])
def test_create_device_requires_all_fields(client, make_gateway, body):
    make_gateway()

    response = client.post("/devices", json=body)

    assert response.status_code == 400
    assert response.get_json() == {"message": "All fields are required"}
    assert device_count() == 0


def test_unique_constraint_backs_duplicate_check(app, make_gateway, make_device):
    gateway = make_gateway()
    device = make_device(gateway["_id"], vendor="Acme")

    db.session.add(Device(gateway_id=gateway["_id"], uid=device["uid"] + 1, vendor="Acme", status="online"))
    with pytest.raises(Error.Conflict):
        DeviceRepository._commit()
    assert device_count() == 1


def test_list_devices(client, make_gateway, make_device):
    gateway = make_gateway()
    first = make_device(gateway["_id"], vendor="Acme")
    second = make_device(gateway["_id"], vendor="Globex", status="offline")

    response = client.get("/devices")

    assert response.status_code == 200
    devices = response.get_json()
    assert [device["uid"] for device in devices] == [first["uid"], second["uid"]]
    assert all(device["gateway"] == gateway["_id"] for device in devices)


def test_list_devices_when_empty(client):
    response = client.get("/devices")

    assert response.status_code == 200
    assert response.get_json() == []


def test_get_device_embeds_gateway(client, make_gateway, make_device):
    gateway = make_gateway(name="gw1", ipv4="10.0.0.1")
    created = make_device(gateway["_id"])

    response = client.get(f"/devices/{created['_id']}")

    assert response.status_code == 200
    device = response.get_json()
    assert device["uid"] == created["uid"]
    assert device["gateway"]["_id"] == gateway["_id"]
    assert device["gateway"]["ipv4"] == "10.0.0.1"
    assert device["gateway"]["serialNumber"] == gateway["serialNumber"]


@pytest.mark.parametrize("device_id", ["999", "abc"])
def test_get_unknown_device(client, device_id):
    response = client.get(f"/devices/{device_id}")

    assert response.status_code == 400
    assert response.get_json() == {"message": "Device not found"}


def test_update_device(client, make_gateway, make_device):
    first = make_gateway(ipv4="10.0.0.1")
    second = make_gateway(ipv4="10.0.0.2")
    created = make_device(first["_id"], vendor="Acme")

    response = client.patch("/devices", json={
        "_id": created["_id"], "gateway": second["_id"], "vendor": "Globex", "status": "offline"})

    assert response.status_code == 200
    device = response.get_json()
    assert device["gateway"] == second["_id"]
    assert device["vendor"] == "Globex"
    assert device["status"] == "offline"
    assert device["uid"] == created["uid"]


def test_update_device_keeping_its_vendor(client, make_gateway, make_device):
    gateway = make_gateway()
    created = make_device(gateway["_id"], vendor="Acme", status="online")

    response = client.patch("/devices", json={
        "_id": created["_id"], "gateway": gateway["_id"], "vendor": "Acme", "status": "offline"})

    assert response.status_code == 200
    assert response.get_json()["status"] == "offline"


def test_update_device_to_duplicate(client, make_gateway, make_device):
    gateway = make_gateway()
    make_device(gateway["_id"], vendor="Acme")
    other = make_device(gateway["_id"], vendor="Globex")

    response = client.patch("/devices", json={
        "_id": other["_id"], "gateway": gateway["_id"], "vendor": "Acme", "status": "online"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Duplicate device"}


def test_update_device_onto_full_gateway(client, make_gateway, make_device):
    full = make_gateway(ipv4="10.0.0.1")
    make_device(full["_id"], vendor="Acme")
    make_device(full["_id"], vendor="Globex")
    other = make_gateway(ipv4="10.0.0.2")
    moving = make_device(other["_id"], vendor="Initech")

    response = client.patch("/devices", json={
        "_id": moving["_id"], "gateway": full["_id"], "vendor": "Initech", "status": "online"})

    assert response.status_code == 200
    assert len(client.get(f"/gateways/{full['_id']}").get_json()["devices"]) == 3


def test_update_unknown_device(client, make_gateway):
    gateway = make_gateway()

    response = client.patch("/devices", json={
        "_id": 999, "gateway": gateway["_id"], "vendor": "Acme", "status": "online"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Device not found"}


def test_update_device_onto_unknown_gateway(client, make_gateway, make_device):
    gateway = make_gateway()
    created = make_device(gateway["_id"])

    response = client.patch("/devices", json={
        "_id": created["_id"], "gateway": 999, "vendor": "Acme", "status": "online"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Gateway not found"}


def test_delete_device(client, make_gateway, make_device):
    gateway = make_gateway()
    created = make_device(gateway["_id"])

    response = client.delete("/devices", json={"_id": created["_id"]})

    assert response.status_code == 200
    assert response.get_json() == f"Device {created['uid']} is deleted"
    assert device_count() == 0


def test_delete_device_requires_id(client):
    response = client.delete("/devices", json={})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Device id is required"}


def test_delete_unknown_device(client):
    response = client.delete("/devices", json={"_id": 999})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Device not found"}


@pytest.mark.parametrize("changes, dropped", [
    ({}, "gateway"),
    ({"gateway": None}, None),
    ({}, "vendor"),
    ({"vendor": ""}, None),
    ({}, "status"),
    ({"status": "broken"}, None),
])
def test_update_device_requires_all_fields(client, make_gateway, make_device, changes, dropped):
    gateway = make_gateway()
    created = make_device(gateway["_id"], vendor="Acme", status="online")
    body = {"_id": created["_id"], "gateway": gateway["_id"], "vendor": "Globex", "status": "offline"}
    body.update(changes)
    body.pop(dropped, None)

    response = client.patch("/devices", json=body)

    assert response.status_code == 400
    assert response.get_json() == {"message": "All fields are required"}
    device = client.get(f"/devices/{created['_id']}").get_json()
    assert device["vendor"] == "Acme"
    assert device["status"] == "online"


def test_update_device_requires_id(client, make_gateway, make_device):
    gateway = make_gateway()
    make_device(gateway["_id"])

    response = client.patch(
        "/devices", json={"gateway": gateway["_id"], "vendor": "Acme", "status": "offline"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "All fields are required"}


def test_delete_device_with_fractional_id(client, make_gateway, make_device):
    gateway = make_gateway()
    created = make_device(gateway["_id"])

    response = client.delete("/devices", json={"_id": created["_id"] + 0.5})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Device not found"}
    assert device_count() == 1


def test_update_device_with_fractional_id(client, make_gateway, make_device):
    gateway = make_gateway()
    created = make_device(gateway["_id"], vendor="Acme", status="online")

    response = client.patch("/devices", json={
        "_id": created["_id"] + 0.5, "gateway": gateway["_id"], "vendor": "Globex", "status": "offline"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Device not found"}
    assert client.get(f"/devices/{created['_id']}").get_json()["vendor"] == "Acme"


def test_create_device_with_fractional_gateway(client, make_gateway):
    gateway = make_gateway()

    response = client.post(
        "/devices", json={"gateway": gateway["_id"] + 0.5, "vendor": "Acme", "status": "online"})

    assert response.status_code == 400
    assert response.get_json() == {"message": "Gateway not found"}
    assert device_count() == 0


def test_get_device_with_id_beyond_64_bits(client):
    response = client.get(f"/devices/{'9' * 30}")

    assert response.status_code == 400
    assert response.get_json() == {"message": "Device not found"}
