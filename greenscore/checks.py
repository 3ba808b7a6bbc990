"""
Greenwashing and climate risk checks run alongside the green score.
"""

from greenscore.constants import GREENWASHING_MIN_CONFIDENCE
from greenscore.models import ClimateRisk, ClimateRiskResult, GreenwashingCheck, GreenwashingResult
from greenscore.regions import CLIMATE_RISK_REGIONS, RISK_SEVERITY

# Simulated cross-references against registries and standards bodies
DEFAULT_GREENWASHING_CHECKS = (
    ('MNRE Registration', 'verified', 95),
    ('BEE Compliance', 'verified', 92),
    ('GRI Standards', 'verified', 88),
    ('Project Documentation', 'verified', 90),
)


def run_greenwashing_check(loan=None, checks=DEFAULT_GREENWASHING_CHECKS) -> GreenwashingResult:
    """
    Cross-verify sustainability claims.

    Passes only when every check is verified and the mean confidence is at
    least GREENWASHING_MIN_CONFIDENCE. The loan is accepted for interface
    parity; the simulated table does not depend on it.
    """
    results = [GreenwashingCheck(name=name, status=status, confidence=conf) for name, status, conf in checks]

    if results:
        avg_confidence = sum(c.confidence for c in results) / len(results)
    else:
        avg_confidence = 0.0

    all_verified = bool(results) and all(c.status == 'verified' for c in results)
    flags = [f"{c.name}: {c.status}" for c in results if c.status != 'verified']

    return GreenwashingResult(
        passed=all_verified and avg_confidence >= GREENWASHING_MIN_CONFIDENCE,
        confidence_score=round(avg_confidence),
        checks=results,
        flags=flags,
    )


def climate_location_from_project(project_location) -> dict:
    """Split "City, State" free text into the location record used by assess_climate_risk."""
    parts = [p.strip() for p in (project_location or '').split(',')]
    return {
        'city': parts[0] if parts else '',
        'state': parts[1] if len(parts) > 1 else '',
    }


def _location_text(location) -> str:
    if isinstance(location, dict):
        return ' '.join(str(location.get(k) or '') for k in ('city', 'state')).lower()
    return str(location or '').lower()


def assess_climate_risk(location) -> ClimateRiskResult:
    """
    Assess regional climate risk for a location string or {'city', 'state'} record.

    Each risk category is evaluated independently; the overall level is the
    most severe triggered level, low when nothing triggers.
    """
    location_str = _location_text(location)

    risks = []
    for risk_type, level, regions, description, recommendation in CLIMATE_RISK_REGIONS:
        if any(region in location_str for region in regions):
            risks.append(ClimateRisk(
                type=risk_type,
                level=level,
                description=description,
                recommendation=recommendation,
            ))

    overall = max((r.level for r in risks), key=RISK_SEVERITY.get, default='low')

    if risks:
        notes = f"{len(risks)} climate risk(s) identified for this location."
    else:
        notes = 'No significant climate risks identified.'

    return ClimateRiskResult(level=overall, risks=risks, notes=notes)
