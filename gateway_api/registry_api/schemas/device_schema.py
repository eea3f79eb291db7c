from marshmallow import Schema, fields, EXCLUDE
from marshmallow.validate import Length, OneOf, Range
from gateway_api.registry_api.Utils import REQUIRED_FIELDS_MESSAGE, MAX_ID
from gateway_api.registry_api.models import DeviceStatus

REQUIRED = {'required': REQUIRED_FIELDS_MESSAGE, 'null': REQUIRED_FIELDS_MESSAGE}
GATEWAY_NOT_FOUND = 'Gateway not found'
NOT_FOUND = 'Device not found'


class DeviceSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    gateway = fields.Int(
        required=True, strict=True,
        validate=Range(min=1, max=MAX_ID, error=GATEWAY_NOT_FOUND),
        error_messages={**REQUIRED, 'invalid': GATEWAY_NOT_FOUND})
    vendor = fields.Str(required=True, validate=Length(min=1, error=REQUIRED_FIELDS_MESSAGE), error_messages=REQUIRED)
    status = fields.Str(
        required=True,
        validate=OneOf([status.value for status in DeviceStatus], error=REQUIRED_FIELDS_MESSAGE),
        error_messages=REQUIRED)


class UpdatedDeviceSchema(DeviceSchema):
    id = fields.Int(
        required=True, strict=True, data_key='_id',
        validate=Range(min=1, max=MAX_ID, error=NOT_FOUND),
        error_messages={**REQUIRED, 'invalid': NOT_FOUND})


class DeviceIdSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Int(
        required=True, strict=True, data_key='_id',
        validate=Range(min=1, max=MAX_ID, error=NOT_FOUND),
        error_messages={
            'required': 'Device id is required',
            'null': 'Device id is required',
            'invalid': NOT_FOUND})
