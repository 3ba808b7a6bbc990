"""
Store abstractions the verification orchestrator writes through.

The orchestrator only depends on the abstract bases; the in-memory implementations
back the demo service and the tests. Stores hold no scoring logic.
"""

import hashlib
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from greenscore.models import AuditEvent, AuditRecord, LoanAttributes, VerificationRecord

logger = logging.getLogger(__name__)

GENESIS_HASH = '0' * 64

EVENT_VERIFIERS = {
    'loan_application': 'TerraLend Core',
    'loan_disbursement': 'TerraLend Core',
    'verification_complete': 'Green Scoring Agent',
    'greenwashing_check': 'Greenwashing Prevention Agent',
    'climate_risk_assessment': 'Climate Risk Agent',
    'impact_update': 'Impact Analytics Agent',
    'payment_received': 'Payment Gateway',
    'loan_completed': 'TerraLend Core',
}
DEFAULT_VERIFIER = 'TerraLend System'


class LoanStore(ABC):
    @abstractmethod
    def get(self, loan_id: str) -> Optional[LoanAttributes]:
        pass

    @abstractmethod
    def save(self, loan: LoanAttributes) -> None:
        pass


class VerificationStore(ABC):
    @abstractmethod
    def get(self, loan_id: str) -> Optional[VerificationRecord]:
        pass

    @abstractmethod
    def save(self, record: VerificationRecord) -> None:
        pass


class AuditLogSink(ABC):
    @abstractmethod
    def append(self, event: AuditEvent) -> AuditRecord:
        """Persist one event and return it as stored."""


class InMemoryLoanStore(LoanStore):
    def __init__(self, loans=None):
        self._loans = {}
        for loan in loans or []:
            self.save(loan)

    def get(self, loan_id: str) -> Optional[LoanAttributes]:
        return self._loans.get(loan_id)

    def save(self, loan: LoanAttributes) -> None:
        if not loan.loan_id:
            raise ValueError("loan_id is required to store a loan")
        self._loans[loan.loan_id] = loan

    def all(self) -> list:
        return list(self._loans.values())


class InMemoryVerificationStore(VerificationStore):
    """Keyed by loan id; saving again replaces the previous record."""

    def __init__(self):
        self._records = {}

    def get(self, loan_id: str) -> Optional[VerificationRecord]:
        return self._records.get(loan_id)

    def save(self, record: VerificationRecord) -> None:
        self._records[record.loan_id] = record


def _event_hash(previous_hash: str, sequence: int, event: AuditEvent) -> str:
    payload = previous_hash + str(sequence) + event.model_dump_json()
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()


class HashChainedAuditLog(AuditLogSink):
    """
    Append-only audit log where each record carries the SHA-256 of its
    predecessor, so any edit to a stored event breaks ``verify_chain``.
    """

    def __init__(self):
        self._records = []
        self._lock = threading.Lock()

    def append(self, event: AuditEvent) -> AuditRecord:
        with self._lock:
            previous_hash = self._records[-1].hash if self._records else GENESIS_HASH
            sequence = len(self._records)
            record = AuditRecord(
                **event.model_dump(),
                id=f"log-{uuid.uuid4().hex[:12]}",
                sequence=sequence,
                previous_hash=previous_hash,
                hash=_event_hash(previous_hash, sequence, event),
                verified_by=EVENT_VERIFIERS.get(event.event_type, DEFAULT_VERIFIER),
            )
            self._records.append(record)

        logger.info("Audit recorded: %s for %s", event.event_type, event.loan_id)
        return record

    def list(self, loan_id: Optional[str] = None, event_type: Optional[str] = None,
             limit: int = 50) -> list:
        """Records newest first, optionally filtered."""
        records = list(reversed(self._records))
        if loan_id:
            records = [r for r in records if r.loan_id == loan_id]
        if event_type:
            records = [r for r in records if r.event_type == event_type]
        return records[:limit]

    def find(self, record_hash: str) -> Optional[AuditRecord]:
        return next((r for r in self._records if r.hash == record_hash), None)

    def verify_chain(self) -> bool:
        previous_hash = GENESIS_HASH
        for record in self._records:
            event = AuditEvent(**record.model_dump(include=set(AuditEvent.model_fields)))
            if record.previous_hash != previous_hash:
                return False
            if record.hash != _event_hash(previous_hash, record.sequence, event):
                return False
            previous_hash = record.hash
        return True

    def __len__(self) -> int:
        return len(self._records)
