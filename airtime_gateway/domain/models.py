"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

# Every claim tops up the same fixed amount (naira)
AIRTIME_AMOUNT = 100


class Network(str, Enum):
    """Mobile networks the provider can top up"""

    MTN = "MTN"
    GLO = "Glo"
    NINE_MOBILE = "9mobile"
    AIRTEL = "Airtel"

    @property
    def provider_id(self) -> int:
        return _PROVIDER_NETWORK_IDS[self]


_PROVIDER_NETWORK_IDS = {
    Network.MTN: 1,
    Network.GLO: 2,
    Network.NINE_MOBILE: 3,
    Network.AIRTEL: 4,
}


class ClaimStatus(str, Enum):
    SUCCESS = "Success"
    SUCCESS_ADMIN = "SuccessAdmin"
    FAILED = "Failed"

    @property
    def is_success(self) -> bool:
        return self in (ClaimStatus.SUCCESS, ClaimStatus.SUCCESS_ADMIN)


class AdmissionReason(str, Enum):
    SITE_OFFLINE = "SiteOffline"
    QUOTA_EXCEEDED = "QuotaExceeded"
    ADMITTED = "Admitted"
    ADMIN_BYPASS = "AdminBypass"


@dataclass(frozen=True)
class SiteState:
    """Point-in-time copy of the admission policy state"""

    is_online: bool
    claim_limit: int
    claims_today: int
    claims_pending: int = 0  # admitted, provider call still in flight


@dataclass(frozen=True)
class TransactionRecord:
    """Successful top-up, appended to the ledger newest first"""

    timestamp: datetime
    network: Network
    phone_number: str
    status: ClaimStatus
    amount: int = AIRTIME_AMOUNT


@dataclass(frozen=True)
class ValidatedRequest:
    network: Network
    phone_number: str


@dataclass(frozen=True)
class AdmissionDecision:
    allowed: bool
    reason: AdmissionReason


# Provider outcomes: exactly one is produced per provider call


@dataclass(frozen=True)
class Succeeded:
    provider_message: str
    provider_payload: Any = None  # raw body: parsed JSON, or text when not JSON


@dataclass(frozen=True)
class ProviderRejected:
    status_code: int
    message: str


@dataclass(frozen=True)
class Unreachable:
    pass


@dataclass(frozen=True)
class RequestSetupFailed:
    message: str


ClaimOutcome = Union[Succeeded, ProviderRejected, Unreachable, RequestSetupFailed]


@dataclass
class ClaimResult:
    """Transport-agnostic result of a claim or admin operation"""

    status_code: int
    success: bool
    message: str
    data: Optional[Any] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            body["data"] = self.data
        return body
