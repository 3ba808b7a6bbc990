"""Tests for the loan verification orchestrator."""
import pytest

from greenscore.exceptions import LoanAlreadyDecidedError, LoanNotFoundError
from greenscore.models import GreenScoreResult, GreenwashingCheck, GreenwashingResult
from greenscore.stores import HashChainedAuditLog, InMemoryLoanStore, InMemoryVerificationStore
from greenscore.verification import decide, get_verification_status, verify_loan

FAILING_CHECKS = (
    ('MNRE Registration', 'verified', 95),
    ('Project Documentation', 'flagged', 40),
)


def _score(value):
    return GreenScoreResult(
        green_score=value,
        sustainability_class='high' if value >= 80 else 'medium' if value >= 50 else 'low',
        reasoning={},
        breakdown={},
        state='Unknown',
        methodology='test',
    )


def _greenwashing(passed):
    return GreenwashingResult(
        passed=passed,
        confidence_score=90 if passed else 40,
        checks=[GreenwashingCheck(name='MNRE Registration', status='verified' if passed else 'flagged',
                                  confidence=90 if passed else 40)],
    )


@pytest.fixture
def stores(strong_solar_loan, weak_loan):
    return (
        InMemoryLoanStore([strong_solar_loan, weak_loan]),
        InMemoryVerificationStore(),
        HashChainedAuditLog(),
    )


class TestDecide:
    def test_approve(self):
        assert decide(_score(80), _greenwashing(True)) == ('approved', None)

    def test_threshold_is_inclusive(self):
        assert decide(_score(50), _greenwashing(True))[0] == 'approved'

    def test_low_score_rejected(self):
        status, reason = decide(_score(49), _greenwashing(True))
        assert status == 'rejected'
        assert '49' in reason
        assert '50' in reason

    def test_greenwashing_failure_overrides_high_score(self):
        status, reason = decide(_score(95), _greenwashing(False))
        assert status == 'rejected'
        assert 'could not be verified' in reason

    def test_custom_threshold(self):
        assert decide(_score(60), _greenwashing(True), threshold=70)[0] == 'rejected'


class TestVerifyLoan:
    def test_strong_loan_approved(self, stores):
        loans, verifications, audit = stores
        record = verify_loan('TL-2025-001', loans, verifications, audit)

        assert record.final_status == 'approved'
        assert record.rejection_reason is None
        assert record.green_score.sustainability_class == 'high'
        assert verifications.get('TL-2025-001') == record
        assert loans.get('TL-2025-001').status == 'approved'

    def test_weak_loan_rejected_for_score(self, stores):
        loans, verifications, audit = stores
        record = verify_loan('TL-2025-002', loans, verifications, audit)

        assert record.greenwashing_check.passed is True
        assert record.final_status == 'rejected'
        assert str(record.green_score.green_score) in record.rejection_reason
        assert loans.get('TL-2025-002').status == 'rejected'

    def test_failing_greenwashing_rejects_strong_loan(self, stores):
        loans, verifications, audit = stores
        record = verify_loan('TL-2025-001', loans, verifications, audit, greenwashing_checks=FAILING_CHECKS)

        assert record.green_score.green_score >= 80
        assert record.final_status == 'rejected'
        assert 'greenwashing' in record.rejection_reason

    def test_unknown_loan(self, stores):
        loans, verifications, audit = stores
        with pytest.raises(LoanNotFoundError):
            verify_loan('TL-0000-000', loans, verifications, audit)
        assert len(audit) == 0

    def test_audit_events_recorded(self, stores):
        loans, verifications, audit = stores
        verify_loan('TL-2025-001', loans, verifications, audit)

        events = audit.list(loan_id='TL-2025-001')
        assert [e.event_type for e in events] == ['greenwashing_check', 'verification_complete']
        assert 'Green Score 90' in events[1].description
        assert 'approved' in events[1].description
        assert audit.verify_chain()

    def test_climate_risk_uses_project_location(self, stores):
        loans, verifications, audit = stores
        record = verify_loan('TL-2025-001', loans, verifications, audit)
        assert record.climate_risk.level == 'medium'

    def test_reverify_replaces_record(self, stores):
        loans, verifications, audit = stores
        first = verify_loan('TL-2025-001', loans, verifications, audit)
        second = verify_loan('TL-2025-001', loans, verifications, audit, greenwashing_checks=FAILING_CHECKS)

        assert first.final_status == 'approved'
        assert verifications.get('TL-2025-001') == second
        assert loans.get('TL-2025-001').status == 'rejected'

    def test_reverify_disabled(self, stores):
        loans, verifications, audit = stores
        verify_loan('TL-2025-001', loans, verifications, audit)
        with pytest.raises(LoanAlreadyDecidedError):
            verify_loan('TL-2025-001', loans, verifications, audit, allow_reverify=False)

    def test_record_is_immutable(self, stores):
        loans, verifications, audit = stores
        record = verify_loan('TL-2025-001', loans, verifications, audit)
        with pytest.raises(Exception):
            record.final_status = 'rejected'


class TestGetVerificationStatus:
    def test_pending(self):
        status = get_verification_status('TL-9', InMemoryVerificationStore())
        assert status == {'loan_id': 'TL-9', 'completed': False, 'status': 'pending'}

    def test_completed(self, stores):
        loans, verifications, audit = stores
        verify_loan('TL-2025-001', loans, verifications, audit)
        status = get_verification_status('TL-2025-001', verifications)
        assert status['completed'] is True
        assert status['status'] == 'approved'
        assert status['green_score']['green_score'] == 90
