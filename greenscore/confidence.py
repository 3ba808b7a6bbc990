"""
Extraction confidence scoring.

Confidence starts at 1.0 and is reduced by a fixed penalty for every critical
field the extractor left unknown, then nudged up for certifications.
"""

from greenscore.constants import (
    CERTIFICATION_BONUS,
    CERTIFICATION_BONUS_CAP,
    CONFIDENCE_PENALTIES,
    CONFIDENCE_THRESHOLD_HIGH,
    CONFIDENCE_THRESHOLD_LOW,
    CONFIDENCE_THRESHOLD_MEDIUM,
)
from greenscore.models import Completeness, ConfidenceResult, ConfidenceSignal, ExtractedClaim

SIGNAL_MESSAGES = {
    'project_type': 'Project type could not be determined',
    'capacity_kw': 'Capacity/size not specified',
    'vendor': 'Vendor/manufacturer not identified',
    'claimed_impact': 'No impact metrics found',
}


def calculate_extraction_confidence(claim: ExtractedClaim) -> ConfidenceResult:
    impact = claim.claimed_impact
    has_co2 = impact.co2_saved_tonnes_per_year is not None
    has_energy = impact.energy_generated_kwh_per_year is not None

    present = {
        'project_type': bool(claim.project_type),
        'capacity_kw': bool(claim.capacity_kw),
        'vendor': bool(claim.vendor),
        'claimed_impact': has_co2 or has_energy,
    }

    score = 1.0
    signals = []
    for field, is_present in present.items():
        if is_present:
            continue
        penalty = CONFIDENCE_PENALTIES[field]
        score -= penalty
        signals.append(ConfidenceSignal(field=field, message=SIGNAL_MESSAGES[field], penalty=penalty))

    # Certifications are a positive indicator only, no signal
    if claim.certifications:
        score += min(len(claim.certifications) * CERTIFICATION_BONUS, CERTIFICATION_BONUS_CAP)

    score = max(0.0, min(1.0, score))

    return ConfidenceResult(
        confidence=round(score, 2),
        signals=signals,
        completeness=Completeness(
            has_project_type=present['project_type'],
            has_capacity=present['capacity_kw'],
            has_vendor=present['vendor'],
            has_certifications=len(claim.certifications) > 0,
            has_impact_metrics=present['claimed_impact'],
        ),
    )


def get_confidence_level(confidence: float) -> str:
    """Human-readable band for an extraction confidence."""
    if confidence >= CONFIDENCE_THRESHOLD_HIGH:
        return 'high'
    elif confidence >= CONFIDENCE_THRESHOLD_MEDIUM:
        return 'medium'
    elif confidence >= CONFIDENCE_THRESHOLD_LOW:
        return 'low'
    return 'very_low'
