from gateway_api.gateway_logging import getLogger
log = getLogger(__name__)

from sqlalchemy.exc import IntegrityError

from gateway_api.registry_api import db
from gateway_api.registry_api.models import Gateway, Device
from gateway_api.registry_api.Utils import generate_serial_number, parse_id
from gateway_api.registry_api import Error


def list_all():
    """
    List every gateway together with the devices assigned to it, as
    (gateway, devices) pairs.
    """
    gateways = db.session.query(Gateway).order_by(Gateway.id).all()
    return [(gateway, list_devices(gateway.id)) for gateway in gateways]

def list_devices(gateway_id):
    """ Devices assigned to the gateway with the given id. """
    return db.session.query(Device).filter(Device.gateway_id == gateway_id).order_by(Device.id).all()

def find_by_id(gateway_id):
    """ Gateway with the given id or None. Ids that can't be parsed find nothing. """
    gateway_id = parse_id(gateway_id)
    if gateway_id is None:
        return None
    return db.session.get(Gateway, gateway_id)

def get_with(gateway_id):
    """
    Get the gateway with the given id and its devices. If not exists raise an
    exception.
    """
    gateway = find_by_id(gateway_id)
    if not gateway:
        raise Error.NotFound("Gateway not found")
    return gateway, list_devices(gateway.id)

def exists_with_ipv4(ipv4, distinct_id=None):
    """ Return a boolean indicating if a gateway other than distinct_id uses this ipv4. """
    query = Gateway.query.filter(Gateway.ipv4 == ipv4)
    if distinct_id is not None:
        query = query.filter(Gateway.id != distinct_id)
    return db.session.query(query.exists()).scalar()

def create(name, ipv4):
    """
    Create a new gateway with the given name and ipv4. The serial number is
    taken from the current timestamp.
    """
    if exists_with_ipv4(ipv4):
        raise Error.Conflict("Duplicate IPv4 address")

    gateway = Gateway(serial_number=generate_serial_number(), name=name, ipv4=ipv4)
    db.session.add(gateway)
    _commit("Duplicate IPv4 address")
    log.info(f"Gateway {gateway.id} created with ipv4 {ipv4}")
    return gateway

def update(gateway_id, name, ipv4):
    """
    Overwrite name and ipv4 of the gateway. The ipv4 can't belong to another
    gateway.
    """
    if exists_with_ipv4(ipv4, distinct_id=gateway_id):
        raise Error.Conflict("Gateway is already exists")

    gateway = find_by_id(gateway_id)
    if not gateway:
        raise Error.NotFound("Gateway not found")

    gateway.name = name
    gateway.ipv4 = ipv4
    _commit("Gateway is already exists")
    return gateway

def delete(gateway_id):
    """
    Delete the gateway with the given id. Gateways with assigned devices
    can't be deleted. Returns the confirmation message.
    """
    has_devices = db.session.query(
        Device.query.filter(Device.gateway_id == gateway_id).exists()
    ).scalar()
    if has_devices:
        raise Error.Conflict("Gateway has assigned devices")

    gateway = find_by_id(gateway_id)
    if not gateway:
        raise Error.NotFound("Gateway not found")

    ipv4, serial_number = gateway.ipv4, gateway.serial_number
    db.session.delete(gateway)
    _commit("Gateway has assigned devices")
    log.info(f"Gateway {gateway_id} deleted")
    return f"Gateway {ipv4} with serial number {serial_number} is deleted"

def _commit(conflict_message):
    # store constraints catch what the pre-checks race past
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        log.warning(f"Integrity error on gateway: {exc.orig}")
        raise Error.Conflict(conflict_message)
