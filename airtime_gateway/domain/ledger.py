"""In-memory claim ledger: site policy state and transaction history"""

import threading
from datetime import date
from typing import List, Optional, Tuple

from airtime_gateway.domain.admission import evaluate
from airtime_gateway.domain.exceptions import ValidationError
from airtime_gateway.domain.models import (
    AdmissionDecision,
    AdmissionReason,
    SiteState,
    TransactionRecord,
)
from airtime_gateway.utils.date_utils import is_on_day, utc_today


class ClaimLedger:
    """
    Sole owner of the shared admission state.

    Every operation runs under one lock and never awaits, so claim
    reservations and admin mutations share a single serialization point.
    State lives for the process lifetime only.
    """

    def __init__(self, is_online: bool = True, claim_limit: int = 0):
        if claim_limit < 0:
            raise ValidationError("Claim limit must be a non-negative integer.")
        self._lock = threading.Lock()
        self._is_online = is_online
        self._claim_limit = claim_limit
        self._claims_today = 0
        self._claims_pending = 0
        self._records: List[TransactionRecord] = []

    def snapshot(self) -> SiteState:
        with self._lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> SiteState:
        return SiteState(
            is_online=self._is_online,
            claim_limit=self._claim_limit,
            claims_today=self._claims_today,
            claims_pending=self._claims_pending,
        )

    def admit(self, phone_number: str, admin_phone: Optional[str]) -> AdmissionDecision:
        """
        Run the admission policy and reserve a quota slot in one step.

        An admitted claim holds its slot until record_success() or release(),
        so concurrent claims can never overshoot the limit.
        """
        with self._lock:
            decision = evaluate(self._snapshot_locked(), phone_number, admin_phone)
            if decision.reason is AdmissionReason.ADMITTED:
                self._claims_pending += 1
            return decision

    def release(self) -> None:
        """Return a reserved slot after the provider call failed"""
        with self._lock:
            self._claims_pending = max(0, self._claims_pending - 1)

    def record_success(self, record: TransactionRecord, counts_toward_quota: bool) -> None:
        with self._lock:
            self._records.insert(0, record)
            if counts_toward_quota:
                self._claims_today += 1
                self._claims_pending = max(0, self._claims_pending - 1)

    def set_online(self, value: bool) -> None:
        with self._lock:
            self._is_online = value

    def toggle_online(self) -> bool:
        with self._lock:
            self._is_online = not self._is_online
            return self._is_online

    def set_limit(self, limit: int) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValidationError("Claim limit must be a non-negative integer.")
        with self._lock:
            self._claim_limit = limit

    def reset_count(self) -> None:
        with self._lock:
            self._claims_today = 0

    def history(self) -> List[TransactionRecord]:
        """Transaction records, newest first"""
        with self._lock:
            return list(self._records)

    def total_amount_for_today(self, today: Optional[date] = None) -> int:
        """Sum of successful top-ups dated on the current UTC day"""
        with self._lock:
            return self._total_locked(today or utc_today())

    def state_with_total(self, today: Optional[date] = None) -> Tuple[SiteState, int]:
        """Snapshot and today's total taken under one lock, so they always agree"""
        with self._lock:
            return self._snapshot_locked(), self._total_locked(today or utc_today())

    def _total_locked(self, day: date) -> int:
        return sum(
            r.amount
            for r in self._records
            if r.status.is_success and is_on_day(r.timestamp, day)
        )
