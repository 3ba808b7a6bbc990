"""
Verification orchestrator: turns a stored loan into an approve/reject decision.

    pending_verification -> approved | rejected

Decision order:
1. Greenwashing check failed  -> rejected, whatever the green score.
2. Green score below threshold -> rejected.
3. Otherwise                   -> approved.

Re-verifying a loan recomputes and replaces the previous record
(last-write-wins). Concurrent verifications of the same loan are not
serialized; whichever write lands last is kept.
"""

import logging
from typing import Optional

from greenscore.checks import (
    DEFAULT_GREENWASHING_CHECKS,
    assess_climate_risk,
    climate_location_from_project,
    run_greenwashing_check,
)
from greenscore.constants import APPROVAL_THRESHOLD, SUSTAINABILITY_CLASS_DISPLAY
from greenscore.exceptions import LoanAlreadyDecidedError, LoanNotFoundError
from greenscore.models import AuditEvent, GreenScoreResult, GreenwashingResult, VerificationRecord
from greenscore.scoring import calculate_green_score
from greenscore.stores import AuditLogSink, LoanStore, VerificationStore

logger = logging.getLogger(__name__)

DECIDED_STATUSES = ('approved', 'rejected')

GREENWASHING_REJECTION = 'Sustainability claims could not be verified (greenwashing check failed)'


def decide(score: GreenScoreResult, greenwashing: GreenwashingResult,
           threshold: int = APPROVAL_THRESHOLD) -> tuple:
    """Return (final_status, rejection_reason)."""
    if not greenwashing.passed:
        return 'rejected', GREENWASHING_REJECTION
    if score.green_score < threshold:
        return 'rejected', f"Green score {score.green_score} is below the approval threshold of {threshold}"
    return 'approved', None


def verify_loan(loan_id: str, loans: LoanStore, verifications: VerificationStore,
                audit_log: AuditLogSink, threshold: int = APPROVAL_THRESHOLD,
                allow_reverify: bool = True,
                greenwashing_checks=DEFAULT_GREENWASHING_CHECKS) -> VerificationRecord:
    """
    Score, check and decide one loan, then persist the outcome.

    Raises LoanNotFoundError when the loan id does not resolve, and
    LoanAlreadyDecidedError when allow_reverify is False and the loan has
    already been approved or rejected.
    """
    loan = loans.get(loan_id)
    if loan is None:
        raise LoanNotFoundError(loan_id)

    if not allow_reverify and loan.status in DECIDED_STATUSES:
        raise LoanAlreadyDecidedError(loan_id, loan.status)

    score = calculate_green_score(loan)
    greenwashing = run_greenwashing_check(loan, greenwashing_checks)
    climate_risk = assess_climate_risk(climate_location_from_project(loan.project_location))

    final_status, rejection_reason = decide(score, greenwashing, threshold)

    record = VerificationRecord(
        loan_id=loan_id,
        green_score=score,
        greenwashing_check=greenwashing,
        climate_risk=climate_risk,
        final_status=final_status,
        rejection_reason=rejection_reason,
    )

    verifications.save(record)
    loans.save(loan.model_copy(update={'status': final_status}))

    impact = SUSTAINABILITY_CLASS_DISPLAY[score.sustainability_class]['name']
    description = f"AI Verification completed: Green Score {score.green_score} ({impact}), loan {final_status}"
    if rejection_reason:
        description += f": {rejection_reason}"
    audit_log.append(AuditEvent(
        event_type='verification_complete',
        loan_id=loan_id,
        description=description,
        metadata={'green_score': score.green_score, 'final_status': final_status},
    ))
    audit_log.append(AuditEvent(
        event_type='greenwashing_check',
        loan_id=loan_id,
        description=(
            f"Greenwashing check {'passed' if greenwashing.passed else 'flagged'}: "
            f"Authenticity Score {greenwashing.confidence_score}%"
        ),
    ))

    logger.info("Loan %s %s with green score %d", loan_id, final_status, score.green_score)
    return record


def get_verification_status(loan_id: str, verifications: VerificationStore) -> dict:
    """Stored verification as a dict, or a pending placeholder."""
    record: Optional[VerificationRecord] = verifications.get(loan_id)
    if record is None:
        return {'loan_id': loan_id, 'completed': False, 'status': 'pending'}
    return {**record.model_dump(mode='json'), 'completed': True, 'status': record.final_status}
