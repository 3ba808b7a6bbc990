"""
Green score rule engine.

The score is the sum of four independently capped factors:

    category/impact       max 30
    financial viability   max 30
    geographic fit        max 30
    data integrity        max 10

Each factor is a pure function returning a SubScore so rules can be tested in
isolation. Missing or malformed inputs fall through to the lowest-scoring
path; nothing here raises on bad loan data.
"""

import math
import re
from typing import Optional, Union

from greenscore.checks import assess_climate_risk
from greenscore.constants import (
    CATEGORY_ALIASES,
    CATEGORY_CAP,
    CATEGORY_IMPACT_POINTS,
    DATA_INTEGRITY_CAP,
    DEFAULT_CATEGORY_POINTS,
    DEFAULT_LOAN_AMOUNT,
    FINANCIAL_CAP,
    GEOGRAPHIC_CAP,
    METHODOLOGY,
    SCORE_THRESHOLD_HIGH,
    SCORE_THRESHOLD_MEDIUM,
    TRANSFORMATIVE_BONUS,
    TURNOVER_HIGH,
    TURNOVER_MEDIUM,
)
from greenscore.models import Coordinates, GreenScoreResult, LoanAttributes, SubScore
from greenscore.regions import (
    CLIMATE_RESILIENCE_POINTS,
    GEO_DEFAULT,
    GEO_SUITABILITY_RULES,
    STATE_CENTROIDS,
)

UNKNOWN_STATE = 'Unknown'

_NON_NUMERIC_RE = re.compile(r'[^0-9.]')
_LEADING_NUMBER_RE = re.compile(r'\d+(?:\.\d*)?|\.\d+')
_NEGATIVE_PREFIX_RE = re.compile(r'^[^\d]*-\s*\.?\d')


def parse_number(value) -> float:
    """
    Parse currency/number-like input: keep digits and '.', default 0.

    Negative amounts count as missing, whether given as a number or as text
    with a minus sign before the first digit ("-30,000", "Rs. -5000").
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            value = float(value)
        except OverflowError:
            return 0.0
        return value if math.isfinite(value) and value > 0 else 0.0
    text = str(value)
    if _NEGATIVE_PREFIX_RE.match(text):
        return 0.0
    cleaned = _NON_NUMERIC_RE.sub('', text)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def normalize_category(objective: Optional[str]) -> str:
    key = (objective or '').strip().lower().replace(' ', '_')
    return CATEGORY_ALIASES.get(key, key)


def classify_score(score: int) -> str:
    if score >= SCORE_THRESHOLD_HIGH:
        return 'high'
    elif score >= SCORE_THRESHOLD_MEDIUM:
        return 'medium'
    return 'low'


def get_state_from_coordinates(latitude, longitude, max_distance: Optional[float] = None) -> str:
    """
    Nearest-centroid reverse geocoding over STATE_CENTROIDS.

    Distance is Euclidean in degrees. Without max_distance every coordinate
    snaps to the nearest listed state.
    """
    if latitude is None or longitude is None:
        return UNKNOWN_STATE

    nearest_state = UNKNOWN_STATE
    min_dist = math.inf
    for state, lat, lon in STATE_CENTROIDS:
        dist = math.hypot(lat - latitude, lon - longitude)
        if dist < min_dist:
            min_dist = dist
            nearest_state = state

    if max_distance is not None and min_dist > max_distance:
        return UNKNOWN_STATE
    return nearest_state


def resolve_state(project_location: Optional[str], coordinates: Optional[Coordinates]) -> str:
    """Free-text location, overridden by a coordinate lookup when one resolves."""
    state = project_location or UNKNOWN_STATE
    if coordinates is not None and coordinates.is_precise:
        derived = get_state_from_coordinates(coordinates.latitude, coordinates.longitude)
        if derived != UNKNOWN_STATE:
            state = derived
    return state


def score_category_impact(objective: Optional[str], turnover: float, savings: float) -> SubScore:
    category = normalize_category(objective)
    base = CATEGORY_IMPACT_POINTS.get(category, DEFAULT_CATEGORY_POINTS)
    reasons = {'category_impact': f"+{base} pts ({objective or 'Standard'} Category)"}
    points = base

    # Savings above half of turnover change the business model
    if turnover > 0 and savings > turnover * 0.5:
        points += TRANSFORMATIVE_BONUS
        reasons['transformative_bonus'] = f'+{TRANSFORMATIVE_BONUS} pts (High Savings relative to Turnover)'

    return SubScore(points=min(CATEGORY_CAP, points), reasons=reasons)


def score_financial_viability(savings: float, loan_amount: float, turnover: float, years: float) -> SubScore:
    reasons = {}
    points = 0

    roi_ratio = savings / (loan_amount or DEFAULT_LOAN_AMOUNT)
    if roi_ratio >= 0.5:
        points += 15
        reasons['roi_potential'] = '+15 pts (Excellent ROI > 50%)'
    elif roi_ratio >= 0.25:
        points += 10
        reasons['roi_potential'] = '+10 pts (Strong ROI > 25%)'
    elif roi_ratio >= 0.1:
        points += 5
        reasons['roi_potential'] = '+5 pts (Moderate ROI)'
    else:
        reasons['roi_potential'] = '0 pts (Low ROI < 10%)'

    if turnover >= TURNOVER_HIGH:
        points += 10
        reasons['turnover_stability'] = '+10 pts (Turnover > ₹50L)'
    elif turnover >= TURNOVER_MEDIUM:
        points += 5
        reasons['turnover_stability'] = '+5 pts (Turnover > ₹10L)'
    else:
        reasons['turnover_stability'] = '+0 pts (Low Turnover)'

    if years >= 3:
        points += 5
        reasons['business_age'] = '+5 pts (> 3 Years Vintage)'
    elif years >= 1:
        points += 2
        reasons['business_age'] = '+2 pts (1-3 Years Vintage)'

    return SubScore(points=min(FINANCIAL_CAP, points), reasons=reasons)


def score_geographic_suitability(objective: Optional[str], state: str) -> SubScore:
    tokens = set(normalize_category(objective).split('_'))
    state_lower = (state or '').lower()

    points, reason = GEO_DEFAULT
    for terms, tiers, fallback in GEO_SUITABILITY_RULES:
        if not tokens.intersection(terms):
            continue
        points, reason = fallback
        for states, tier_points, tier_reason in tiers:
            if any(s in state_lower for s in states):
                points, reason = tier_points, tier_reason
                break
        break
    reasons = {'geo_suitability': f'+{points} pts ({reason})'}

    risk = assess_climate_risk(state_lower)
    resilience, resilience_reason = CLIMATE_RESILIENCE_POINTS[risk.level]
    prefix = f'+{resilience}' if resilience else '0'
    reasons['climate_resilience'] = f'{prefix} pts ({resilience_reason})'

    return SubScore(points=min(GEOGRAPHIC_CAP, points + resilience), reasons=reasons)


def score_data_integrity(coordinates: Optional[Coordinates], turnover: float, savings: float) -> SubScore:
    reasons = {}
    points = 0

    if coordinates is not None and coordinates.is_precise:
        points += 5
        reasons['data_quality'] = '+5 pts (Precise Geolocation Verified)'

    if turnover > 0 and savings > 0:
        points += 5
        reasons['data_completeness'] = '+5 pts (Full Financial Disclosure)'

    return SubScore(points=min(DATA_INTEGRITY_CAP, points), reasons=reasons)


def calculate_green_score(loan: Union[LoanAttributes, dict]) -> GreenScoreResult:
    """Compute the 0-100 green score, class and per-factor reasoning for a loan."""
    if not isinstance(loan, LoanAttributes):
        loan = LoanAttributes.model_validate(loan or {})

    turnover = parse_number(loan.annual_turnover)
    savings = parse_number(loan.estimated_savings)
    loan_amount = parse_number(loan.loan_amount)
    years = parse_number(loan.years_in_business)
    state = resolve_state(loan.project_location, loan.location_coordinates)

    factors = {
        'category_impact': score_category_impact(loan.green_objective, turnover, savings),
        'financial_viability': score_financial_viability(savings, loan_amount, turnover, years),
        'geographic_suitability': score_geographic_suitability(loan.green_objective, state),
        'data_integrity': score_data_integrity(loan.location_coordinates, turnover, savings),
    }

    reasoning = {}
    for sub in factors.values():
        reasoning.update(sub.reasons)

    total = sum(sub.points for sub in factors.values())
    total = int(min(100, max(0, round(total))))

    return GreenScoreResult(
        green_score=total,
        sustainability_class=classify_score(total),
        reasoning=reasoning,
        breakdown={name: sub.points for name, sub in factors.items()},
        state=state,
        methodology=METHODOLOGY,
    )
