"""Pydantic schemas for API request/response validation"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictInt

# Request fields are optional so missing values reach the domain validator
# and come back as {success: false, message} rather than a framework error.


class ClaimRequest(BaseModel):
    """Request body for POST /send-airtime"""

    network: Optional[str] = Field(None, description="MTN, Glo, 9mobile or Airtel")
    mobile_number: Optional[str] = Field(None, description="11-digit Nigerian mobile number")


class AdminRequest(BaseModel):
    """Request body carrying only the admin PIN"""

    pin: Optional[str] = None


class SetLimitRequest(AdminRequest):
    """Request body for POST /admin/set-limit"""

    limit: Optional[StrictInt] = Field(None, description="New daily claim limit")


class AdminSendRequest(AdminRequest):
    """Request body for POST /admin/send-airtime"""

    network: Optional[str] = None
    mobile_number: Optional[str] = None


class ApiResponse(BaseModel):
    """Envelope returned by every endpoint"""

    success: bool
    message: str
    data: Optional[Any] = None


class SiteStateSchema(BaseModel):
    """data of POST /admin/state"""

    isOnline: bool
    claimLimit: int
    claimsToday: int
    totalAmountToday: int


class HistoryItem(BaseModel):
    """Single transaction in history"""

    timestamp: str
    network: str
    phoneNumber: str
    amount: int
    status: str


class StateResponse(ApiResponse):
    data: SiteStateSchema


class HistoryResponse(ApiResponse):
    data: List[HistoryItem]
