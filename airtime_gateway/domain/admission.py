"""Admission policy - decides whether a claim may reach the provider"""

from typing import Optional

from airtime_gateway.domain.models import AdmissionDecision, AdmissionReason, SiteState


def is_admin_phone(phone_number: str, admin_phone: Optional[str]) -> bool:
    return bool(admin_phone) and phone_number == admin_phone


def evaluate(snapshot: SiteState, phone_number: str, admin_phone: Optional[str]) -> AdmissionDecision:
    """
    Evaluate a claim against the current site state.

    Order matters:
    1. Admin bypass phone skips both the online and the quota check
    2. Site offline
    3. Quota: committed claims plus claims still in flight
    """
    if is_admin_phone(phone_number, admin_phone):
        return AdmissionDecision(allowed=True, reason=AdmissionReason.ADMIN_BYPASS)

    if not snapshot.is_online:
        return AdmissionDecision(allowed=False, reason=AdmissionReason.SITE_OFFLINE)

    if snapshot.claims_today + snapshot.claims_pending >= snapshot.claim_limit:
        return AdmissionDecision(allowed=False, reason=AdmissionReason.QUOTA_EXCEEDED)

    return AdmissionDecision(allowed=True, reason=AdmissionReason.ADMITTED)
