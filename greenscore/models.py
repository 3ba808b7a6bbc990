"""Data records produced and consumed by the scoring pipeline."""

import math
from datetime import datetime, timezone
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ProjectType = Literal["solar", "ev", "waste", "energy_efficiency", "water"]
RiskLevel = Literal["low", "medium", "high"]
SustainabilityClass = Literal["low", "medium", "high"]
FinalStatus = Literal["approved", "rejected"]

NumberLike = Optional[Union[float, str]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Extraction ───────────────────────────────────────────────────────


class ClaimedImpact(BaseModel):
    co2_saved_tonnes_per_year: Optional[float] = None
    energy_generated_kwh_per_year: Optional[float] = None


class ExtractedClaim(BaseModel):
    """Structured sustainability claim. Unknown fields stay None/empty."""

    project_type: Optional[ProjectType] = None
    capacity_kw: Optional[float] = Field(default=None, gt=0)
    vendor: Optional[str] = None
    certifications: list[str] = Field(default_factory=list)
    claimed_impact: ClaimedImpact = Field(default_factory=ClaimedImpact)


class ConfidenceSignal(BaseModel):
    field: str
    message: str
    penalty: float


class Completeness(BaseModel):
    has_project_type: bool
    has_capacity: bool
    has_vendor: bool
    has_certifications: bool
    has_impact_metrics: bool


class ConfidenceResult(BaseModel):
    confidence: float = Field(ge=0.0, le=1.0)
    signals: list[ConfidenceSignal]
    completeness: Completeness


# ── Loan attributes ──────────────────────────────────────────────────


class Coordinates(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _lenient_float(cls, v):
        if v is None or v == "":
            return None
        try:
            value = float(v)
        except (TypeError, ValueError, OverflowError):
            return None
        return value if math.isfinite(value) else None

    @property
    def is_precise(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class LoanAttributes(BaseModel):
    """Loan application fields the scoring pipeline reads.

    Number-like fields keep whatever the application store holds (numbers or
    strings such as "15,00,000"); scoring parses them leniently. Accepts both
    snake_case and the camelCase keys used by the loan application form.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    loan_id: Optional[str] = None
    green_objective: Optional[str] = None
    annual_turnover: NumberLike = None
    years_in_business: NumberLike = None
    estimated_savings: NumberLike = None
    loan_amount: NumberLike = None
    project_location: Optional[str] = None
    location_coordinates: Optional[Coordinates] = None
    project_description: Optional[str] = None
    status: str = "pending_verification"

    @field_validator("loan_id", "green_objective", "project_location", "project_description", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        if v is None:
            return None
        return str(v)

    @field_validator("annual_turnover", "years_in_business", "estimated_savings", "loan_amount", mode="before")
    @classmethod
    def _coerce_number_like(cls, v):
        if isinstance(v, bool):
            return None
        if v is None or isinstance(v, (float, str)):
            return v
        if isinstance(v, int):
            try:
                return float(v)
            except OverflowError:
                return None
        return str(v)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, v):
        if v is None or v == "":
            return "pending_verification"
        return str(v)

    @field_validator("location_coordinates", mode="before")
    @classmethod
    def _coerce_coordinates(cls, v):
        if v is None or isinstance(v, (dict, Coordinates)):
            return v
        return None


# ── Scoring ──────────────────────────────────────────────────────────


class SubScore(BaseModel):
    """Points awarded by one scoring factor, with the reasons that fired."""

    points: int
    reasons: dict[str, str] = Field(default_factory=dict)


class GreenScoreResult(BaseModel):
    green_score: int = Field(ge=0, le=100)
    sustainability_class: SustainabilityClass
    reasoning: dict[str, str]
    breakdown: dict[str, int]
    state: str
    methodology: str


class GreenwashingCheck(BaseModel):
    name: str
    status: Literal["verified", "flagged", "pending"]
    confidence: int = Field(ge=0, le=100)


class GreenwashingResult(BaseModel):
    passed: bool
    confidence_score: int = Field(ge=0, le=100)
    checks: list[GreenwashingCheck]
    flags: list[str] = Field(default_factory=list)
    verified_by: str = "Greenwashing Prevention Agent (Simulated)"


class ClimateRisk(BaseModel):
    type: str
    level: RiskLevel
    description: str
    recommendation: str


class ClimateRiskResult(BaseModel):
    level: RiskLevel
    risks: list[ClimateRisk]
    notes: str


# ── Verification & audit ─────────────────────────────────────────────


class VerificationRecord(BaseModel):
    """Final outcome of verifying one loan. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    loan_id: str
    green_score: GreenScoreResult
    greenwashing_check: GreenwashingResult
    climate_risk: ClimateRiskResult
    final_status: FinalStatus
    rejection_reason: Optional[str] = None
    completed_at: datetime = Field(default_factory=_utcnow)


class AuditEvent(BaseModel):
    event_type: str
    loan_id: str
    description: str
    timestamp: datetime = Field(default_factory=_utcnow)
    metadata: dict = Field(default_factory=dict)


class AuditRecord(AuditEvent):
    """An audit event as stored by a hash-chained sink."""

    id: str
    sequence: int
    previous_hash: str
    hash: str
    verified_by: str
