"""ecobee cloud API adapter implementing ThermostatSourcePort."""

from ecobee_exporter.adapters.ecobee.client import EcobeeClient
from ecobee_exporter.adapters.ecobee.errors import (
    EcobeeAPIError,
    EcobeeAuthError,
    EcobeeError,
)
from ecobee_exporter.adapters.ecobee.tokens import Tokens, TokenStore

__all__ = [
    "EcobeeAPIError",
    "EcobeeAuthError",
    "EcobeeClient",
    "EcobeeError",
    "TokenStore",
    "Tokens",
]
