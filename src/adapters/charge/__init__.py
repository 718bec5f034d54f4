"""Backend Lightning Charge.

`ChargeClient` implementa `core.interfaces.lightning.LightningClient` sobre la
API REST/WebSocket de Lightning Charge.
"""

from adapters.charge.authentication import (
    ChargeAuthentication,
    CookieFileAuthentication,
    UserPasswordAuthentication,
)
from adapters.charge.client import ChargeClient
from adapters.charge.endpoint import ChargeEndpoint
from adapters.charge.factory import build_charge_client
from adapters.charge.session import ChargeSession

__all__ = [
    "ChargeAuthentication",
    "ChargeClient",
    "ChargeEndpoint",
    "ChargeSession",
    "CookieFileAuthentication",
    "UserPasswordAuthentication",
    "build_charge_client",
]
