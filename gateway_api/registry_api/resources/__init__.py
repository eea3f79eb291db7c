from .Gateway import (
    GatewayAPI,
    GatewayListAPI
    )
from .Device import (
    DeviceAPI,
    DeviceListAPI
    )
