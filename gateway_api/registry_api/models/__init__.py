from .Gateway import Gateway
from .Device import Device, DeviceStatus
