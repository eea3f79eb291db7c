from marshmallow import Schema, fields, validates, ValidationError, EXCLUDE
from marshmallow.validate import Length, Range
from gateway_api.registry_api.Utils import REQUIRED_FIELDS_MESSAGE, MAX_ID, is_valid_ipv4

REQUIRED = {'required': REQUIRED_FIELDS_MESSAGE, 'null': REQUIRED_FIELDS_MESSAGE}
NOT_FOUND = 'Gateway not found'


class GatewaySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=Length(min=1, error=REQUIRED_FIELDS_MESSAGE), error_messages=REQUIRED)
    ipv4 = fields.Str(required=True, validate=Length(min=1, error=REQUIRED_FIELDS_MESSAGE), error_messages=REQUIRED)

    @validates('ipv4')
    def validate_ipv4(self, value, **kwargs):
        if value and not is_valid_ipv4(value):
            raise ValidationError('IPv4 address is not valid')


class UpdatedGatewaySchema(GatewaySchema):
    id = fields.Int(
        required=True, strict=True, data_key='_id',
        validate=Range(min=1, max=MAX_ID, error=NOT_FOUND),
        error_messages={**REQUIRED, 'invalid': NOT_FOUND})


class GatewayIdSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Int(
        required=True, strict=True, data_key='_id',
        validate=Range(min=1, max=MAX_ID, error=NOT_FOUND),
        error_messages={
            'required': 'Gateway id is required',
            'null': 'Gateway id is required',
            'invalid': NOT_FOUND})
