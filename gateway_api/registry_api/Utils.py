import random
import time
from validators.ip_address import ipv4

REQUIRED_FIELDS_MESSAGE = 'All fields are required'
UID_DIGITS = 10
MAX_ID = 2 ** 63 - 1


def is_valid_ipv4(value):
    """ verify that value is a dotted-quad IPv4 address, without a CIDR suffix """
    if not isinstance(value, str):
        return False
    return bool(ipv4(value, cidr=False))


def generate_serial_number():
    """ serial numbers are the milliseconds elapsed since the epoch """
    return str(int(time.time() * 1000))


def generate_uid(digits=UID_DIGITS):
    """ random number with exactly `digits` digits """
    return random.randint(10 ** (digits - 1), 10 ** digits - 1)


def parse_id(value):
    """ Return value as an integer id, or None when it can't be one. """
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if 0 < parsed <= MAX_ID else None


def _flatten(messages):
    if isinstance(messages, str):
        yield messages
    elif isinstance(messages, dict):
        for value in messages.values():
            yield from _flatten(value)
    elif isinstance(messages, (list, tuple)):
        for value in messages:
            yield from _flatten(value)


def validation_message(error):
    """
    Reduce a marshmallow ValidationError to a single message. A missing
    field takes precedence over any other problem with the body.
    """
    messages = list(_flatten(error.messages))
    if REQUIRED_FIELDS_MESSAGE in messages:
        return REQUIRED_FIELDS_MESSAGE
    return messages[0] if messages else REQUIRED_FIELDS_MESSAGE
