from gateway_api.gateway_logging import getLogger
log = getLogger(__name__)

from sqlalchemy.exc import IntegrityError

from gateway_api.registry_api import db
from gateway_api.registry_api.models import Device, Gateway
from gateway_api.registry_api.Utils import generate_uid, parse_id
from gateway_api.registry_api import Error


def list_all():
    """
    List every device as (device, gateway_id) pairs, the gateway id being
    resolved from the gateway table.
    """
    devices = db.session.query(Device).order_by(Device.id).all()
    gateway_ids = {
        row.id for row in db.session.query(Gateway.id).filter(
            Gateway.id.in_([device.gateway_id for device in devices]))
    } if devices else set()
    return [
        (device, device.gateway_id if device.gateway_id in gateway_ids else None)
        for device in devices
    ]

def find_by_id(device_id):
    device_id = parse_id(device_id)
    if device_id is None:
        return None
    return db.session.get(Device, device_id)

def get_with(device_id):
    """
    Get the device with the given id and its gateway. If the device does not
    exist raise an exception.
    """
    device = find_by_id(device_id)
    if not device:
        raise Error.NotFound("Device not found")
    return device, db.session.get(Gateway, device.gateway_id)

def count_with(gateway_id):
    """ Count the devices assigned to a gateway """
    return db.session.query(Device).filter(Device.gateway_id == gateway_id).count()

def find_duplicate(gateway_id, vendor, device=None):
    """
    First device other than `device` with the same gateway and vendor, or None.
    """
    query = db.session.query(Device).filter(
        Device.gateway_id == gateway_id,
        Device.vendor == vendor)
    if device is not None:
        query = query.filter(Device.uid != device.uid, Device.id != device.id)
    return query.first()

def create(gateway_id, vendor, status, max_devices_count):
    """
    Create a new device on the gateway. The gateway row is locked while its
    devices are counted, so creations on the same gateway are serialized.
    """
    gateway = db.session.query(Gateway).filter(Gateway.id == gateway_id).with_for_update().first()
    if not gateway:
        raise Error.NotFound("Gateway not found")

    if count_with(gateway_id) >= max_devices_count:
        raise Error.BadRequest("Gateway devices count is exceeded")

    if find_duplicate(gateway_id, vendor):
        raise Error.Conflict("Duplicate device")

    device = Device(gateway_id=gateway_id, uid=generate_uid(), vendor=vendor, status=status)
    db.session.add(device)
    _commit()
    log.info(f"Device {device.uid} created on gateway {gateway_id}")
    return device

def update(device_id, gateway_id, vendor, status):
    """
    Overwrite gateway, vendor and status of the device. The device count of
    the target gateway is not checked here.
    """
    device = find_by_id(device_id)
    if not device:
        raise Error.NotFound("Device not found")

    if not db.session.get(Gateway, gateway_id):
        raise Error.NotFound("Gateway not found")

    if find_duplicate(gateway_id, vendor, device=device):
        raise Error.Conflict("Duplicate device")

    device.gateway_id = gateway_id
    device.vendor = vendor
    device.status = status
    _commit()
    return device

def delete(device_id):
    """ Delete the device with the given id, returns the confirmation message. """
    device = find_by_id(device_id)
    if not device:
        raise Error.NotFound("Device not found")

    uid = device.uid
    db.session.delete(device)
    db.session.commit()
    log.info(f"Device {uid} deleted")
    return f"Device {uid} is deleted"

def _commit():
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        log.warning(f"Integrity error on device: {exc.orig}")
        raise Error.Conflict("Duplicate device")
