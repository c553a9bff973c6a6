"""Phone number and network validation for inbound claims"""

import re
from typing import Optional

from airtime_gateway.domain.exceptions import (
    BadPhoneFormatError,
    MissingFieldError,
    UnknownNetworkError,
)
from airtime_gateway.domain.models import Network, ValidatedRequest

# 0 + operator prefix + 8 digits, e.g. 08012345678
PHONE_PATTERN = re.compile(r"0(70|80|81|90|91)[0-9]{8}")

_NETWORKS_BY_NAME = {network.value.lower(): network for network in Network}


def parse_network(name: str) -> Network:
    """Map a network name to its enum member (case-insensitive)"""
    try:
        return _NETWORKS_BY_NAME[name.strip().lower()]
    except KeyError:
        raise UnknownNetworkError(
            f"Unsupported network '{name}'. Choose one of: "
            + ", ".join(n.value for n in Network)
            + "."
        ) from None


def validate(network: Optional[str], phone_number: Optional[str]) -> ValidatedRequest:
    """
    Validate a claim's network and mobile number.

    Raises:
        MissingFieldError: either field is absent or empty
        BadPhoneFormatError: number is not an 11-digit Nigerian mobile number
        UnknownNetworkError: network is not supported by the provider
    """
    if not network or not phone_number:
        raise MissingFieldError("Missing required fields: network and mobile_number.")

    if not PHONE_PATTERN.fullmatch(phone_number):
        raise BadPhoneFormatError(
            "Invalid phone number format. Please provide an 11-digit Nigerian number."
        )

    return ValidatedRequest(network=parse_network(network), phone_number=phone_number)
