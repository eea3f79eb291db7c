from flask import request
from flask_restful import Resource

from gateway_api.registry_api.repository import DeviceRepository
from gateway_api.registry_api.schemas.device_schema import DeviceSchema, UpdatedDeviceSchema, DeviceIdSchema


class DeviceListAPI(Resource):
    """
    Resource to list all devices (GET), create new ones (POST), update (PATCH)
    and delete (DELETE) an existing one. New devices are only accepted while
    the gateway holds less than `max_devices_count` devices.
    """
    def __init__(self, max_devices_count):
        self.max_devices_count = max_devices_count

    def get(self):
        return [
            device.to_json(gateway=gateway_id)
            for device, gateway_id in DeviceRepository.list_all()
        ], 200

    def post(self):
        body = DeviceSchema().load(request.get_json(force=True, silent=True) or {})
        device = DeviceRepository.create(
            gateway_id=body['gateway'],
            vendor=body['vendor'],
            status=body['status'],
            max_devices_count=self.max_devices_count
            )
        return device.to_json(), 201

    def patch(self):
        body = UpdatedDeviceSchema().load(request.get_json(force=True, silent=True) or {})
        device = DeviceRepository.update(
            device_id=body['id'],
            gateway_id=body['gateway'],
            vendor=body['vendor'],
            status=body['status']
            )
        return device.to_json(), 200

    def delete(self):
        body = DeviceIdSchema().load(request.get_json(force=True, silent=True) or {})
        return DeviceRepository.delete(device_id=body['id']), 200


class DeviceAPI(Resource):
    """
    Resource to get (GET) the device with the device_id given in the url, with
    its gateway embedded.
    """
    def get(self, device_id):
        device, gateway = DeviceRepository.get_with(device_id)
        return device.to_json(gateway=gateway.to_json() if gateway else None), 200
