"""
Green Loan Scoring Package

Sustainability claim extraction, extraction confidence, green score rules,
greenwashing/climate checks and the loan verification decision.
"""

from greenscore.constants import (
    APPROVAL_THRESHOLD, METHODOLOGY, PROJECT_TYPES,
    SUSTAINABILITY_CLASS_DISPLAY, CONFIDENCE_DISPLAY,
)
from greenscore.models import (
    ExtractedClaim, ConfidenceResult, LoanAttributes, GreenScoreResult,
    GreenwashingResult, ClimateRiskResult, VerificationRecord, AuditEvent, AuditRecord,
)
from greenscore.extraction import extract_claim, ClaimExtractor, ExtractionRules, DEFAULT_RULES
from greenscore.confidence import calculate_extraction_confidence, get_confidence_level
from greenscore.scoring import calculate_green_score, classify_score, get_state_from_coordinates, parse_number
from greenscore.checks import run_greenwashing_check, assess_climate_risk, climate_location_from_project
from greenscore.verification import verify_loan, get_verification_status
from greenscore.stores import InMemoryLoanStore, InMemoryVerificationStore, HashChainedAuditLog
from greenscore.exceptions import GreenScoreError, LoanNotFoundError, LoanAlreadyDecidedError
