from flask import request
from flask_restful import Resource

from gateway_api.registry_api.repository import GatewayRepository
from gateway_api.registry_api.schemas.gateway_schema import GatewaySchema, UpdatedGatewaySchema, GatewayIdSchema


class GatewayListAPI(Resource):
    """
    Resource to list all gateways (GET), create new ones (POST), update (PATCH)
    and delete (DELETE) an existing one. PATCH and DELETE receive the gateway
    id as `_id` in the body.
    """
    def get(self):
        return [
            gateway.to_json(devices=devices)
            for gateway, devices in GatewayRepository.list_all()
        ], 200

    def post(self):
        body = GatewaySchema().load(request.get_json(force=True, silent=True) or {})
        gateway = GatewayRepository.create(
            name=body['name'],
            ipv4=body['ipv4']
            )
        return gateway.to_json(), 201

    def patch(self):
        body = UpdatedGatewaySchema().load(request.get_json(force=True, silent=True) or {})
        gateway = GatewayRepository.update(
            gateway_id=body['id'],
            name=body['name'],
            ipv4=body['ipv4']
            )
        return gateway.to_json(), 200

    def delete(self):
        body = GatewayIdSchema().load(request.get_json(force=True, silent=True) or {})
        return GatewayRepository.delete(gateway_id=body['id']), 200


class GatewayAPI(Resource):
    """
    Resource to get (GET) the gateway with the gateway_id given in the url,
    with its devices.
    """
    def get(self, gateway_id):
        gateway, devices = GatewayRepository.get_with(gateway_id)
        return gateway.to_json(devices=devices), 200
