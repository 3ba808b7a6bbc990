"""
Green Loan Scoring API
TerraLend - Green Lending
"""

from fastapi import FastAPI, HTTPException, Depends, Header, Query
from fastapi.middleware.cors import CORSMiddleware
import os
import logging
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from greenscore import (
    PROJECT_TYPES, CONFIDENCE_DISPLAY, SUSTAINABILITY_CLASS_DISPLAY,
    LoanAttributes, AuditEvent,
    ClaimExtractor, calculate_extraction_confidence, get_confidence_level,
    calculate_green_score, run_greenwashing_check, assess_climate_risk,
    verify_loan, get_verification_status,
    InMemoryLoanStore, InMemoryVerificationStore, HashChainedAuditLog,
    LoanNotFoundError, LoanAlreadyDecidedError,
)
from greenscore.regions import CLIMATE_ALERTS

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION (from env vars with safe defaults)
# ============================================================================
CORS_ORIGINS = os.environ.get(
    'CORS_ORIGINS', 'http://localhost:8000,http://127.0.0.1:8000'
).split(',')
API_KEY = os.environ.get('API_KEY')  # None = auth disabled (dev mode)

LLM_MODEL = os.environ.get('GREENSCORE_LLM_MODEL')  # None = rule-based extraction only
DEMO_MODE = os.environ.get('DEMO_MODE', 'false').lower() == 'true'

GREEN_SCORE_THRESHOLD = int(os.environ.get('GREEN_SCORE_THRESHOLD', 50))
ALLOW_REVERIFY = os.environ.get('ALLOW_REVERIFY', 'true').lower() == 'true'
MIN_DESCRIPTION_LENGTH = int(os.environ.get('MIN_DESCRIPTION_LENGTH', 10))

# Extraction mode selector and stores (replace module-level maps in the core)
claim_extractor = ClaimExtractor(model=LLM_MODEL, demo_mode=DEMO_MODE)
loan_store = InMemoryLoanStore()
verification_store = InMemoryVerificationStore()
audit_log = HashChainedAuditLog()


def get_loan_store():
    return loan_store


def get_verification_store():
    return verification_store


def get_audit_log():
    return audit_log


# ============================================================================
# SECURITY HELPERS
# ============================================================================
def verify_api_key(x_api_key: Optional[str] = Header(None)):
    """Dependency that checks API key for state-changing endpoints."""
    if API_KEY is None:
        return  # auth disabled in dev mode
    if x_api_key != API_KEY:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


# ============================================================================
# APP SETUP
# ============================================================================
app = FastAPI(
    title="Green Loan Scoring API",
    description="Sustainability claim extraction, green scoring and loan verification",
    version="2.0.0",
)

# CORS - safe defaults (no wildcard + credentials)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def next_loan_id(loans) -> str:
    """First free TL-<year>-<nnn> id, skipping ids clients supplied themselves."""
    year = datetime.now().year
    n = len(loans.all()) + 1
    while loans.get(f"TL-{year}-{n:03d}") is not None:
        n += 1
    return f"TL-{year}-{n:03d}"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExtractClaimRequest(CamelModel):
    text: str


class LoanRequest(CamelModel):
    loan_id: str


class LocationRequest(CamelModel):
    city: Optional[str] = None
    state: Optional[str] = None


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "extraction_mode": claim_extractor.mode,
        "timestamp": datetime.now().isoformat()
    }

@app.post("/api/ai/extract-claim")
async def extract_claim_endpoint(request: ExtractClaimRequest):
    """
    Extract structured sustainability data from a free-text description.

    - **text**: project description, at least MIN_DESCRIPTION_LENGTH characters
    """
    text = request.text
    if len(text.strip()) < MIN_DESCRIPTION_LENGTH:
        raise HTTPException(
            status_code=400,
            detail="Text too short - please provide a more detailed sustainability description"
        )

    claim = claim_extractor.extract(text)
    confidence = calculate_extraction_confidence(claim)
    level = get_confidence_level(confidence.confidence)

    logger.info("Claim extracted (mode=%s, confidence=%.2f)", claim_extractor.mode, confidence.confidence)

    return {
        "success": True,
        "extracted_claim": claim,
        "extraction_confidence": {
            "confidence": confidence.confidence,
            "level": level,
            "color": CONFIDENCE_DISPLAY[level]['color'],
            "signals": confidence.signals,
            "completeness": confidence.completeness,
        },
        "mode": claim_extractor.mode,
        "original_text": text,
        "timestamp": datetime.now().isoformat()
    }

@app.get("/api/ai/status")
async def ai_status():
    return {
        "service": "AI Extraction Service",
        "status": "operational",
        "mode": claim_extractor.mode,
        "capabilities": [
            "extract_project_type",
            "extract_capacity",
            "extract_vendor",
            "extract_certifications",
            "extract_impact_metrics",
            "confidence_scoring",
        ],
        "supported_project_types": PROJECT_TYPES,
    }

@app.post("/api/loans", status_code=201)
async def create_loan(loan: LoanAttributes, loans=Depends(get_loan_store), audit=Depends(get_audit_log)):
    """Register a loan application for verification. Loan ids are never reused."""
    if not loan.loan_id:
        loan = loan.model_copy(update={'loan_id': next_loan_id(loans)})
    elif loans.get(loan.loan_id) is not None:
        raise HTTPException(status_code=409, detail=f"Loan {loan.loan_id} already exists")
    loan = loan.model_copy(update={'status': 'pending_verification'})
    loans.save(loan)

    audit.append(AuditEvent(
        event_type='loan_application',
        loan_id=loan.loan_id,
        description=f"Loan application submitted for {loan.green_objective or 'unspecified objective'}",
    ))
    return {"success": True, "loan_id": loan.loan_id, "loan": loan}

@app.get("/api/loans/{loan_id}")
async def get_loan(loan_id: str, loans=Depends(get_loan_store)):
    loan = loans.get(loan_id)
    if loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    return loan

@app.post("/api/score")
async def score_loan(loan: LoanAttributes):
    """Score loan attributes without storing anything."""
    result = calculate_green_score(loan)
    return {
        **result.model_dump(),
        "display": SUSTAINABILITY_CLASS_DISPLAY[result.sustainability_class],
    }

@app.post("/api/verify/green-score")
async def verify_green_score(
    request: LoanRequest,
    loans=Depends(get_loan_store),
    verifications=Depends(get_verification_store),
    audit=Depends(get_audit_log),
    _=Depends(verify_api_key),
):
    """Run scoring, greenwashing and climate checks and decide the loan."""
    try:
        record = verify_loan(
            request.loan_id, loans, verifications, audit,
            threshold=GREEN_SCORE_THRESHOLD,
            allow_reverify=ALLOW_REVERIFY,
        )
    except LoanNotFoundError:
        raise HTTPException(status_code=404, detail="Loan not found")
    except LoanAlreadyDecidedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"success": True, "verification": record}

@app.get("/api/verify/status/{loan_id}")
async def verification_status(loan_id: str, verifications=Depends(get_verification_store)):
    return get_verification_status(loan_id, verifications)

@app.post("/api/verify/greenwashing")
async def greenwashing_check(request: LoanRequest, loans=Depends(get_loan_store)):
    """Standalone greenwashing check for a stored loan."""
    loan = loans.get(request.loan_id)
    if loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    return {"success": True, "loan_id": request.loan_id, "result": run_greenwashing_check(loan)}

@app.post("/api/climate/risk")
async def climate_risk(location: LocationRequest):
    if not location.city and not location.state:
        raise HTTPException(status_code=400, detail="Location required - please provide city or state")
    return assess_climate_risk(location.model_dump())

@app.get("/api/climate/alerts")
async def climate_alerts():
    return {
        "alerts": CLIMATE_ALERTS,
        "updated_at": datetime.now().isoformat(),
        "source": "Indian Meteorological Department (Simulated)",
    }

@app.get("/api/audit")
async def audit_logs(loan_id: Optional[str] = None, event_type: Optional[str] = None,
                     limit: int = Query(50, ge=1), audit=Depends(get_audit_log)):
    records = audit.list(loan_id=loan_id, event_type=event_type, limit=limit)
    return {"logs": records, "total": len(records)}

@app.get("/api/audit/verify")
async def audit_verify(audit=Depends(get_audit_log)):
    """Check the audit log hash chain is intact."""
    return {"valid": audit.verify_chain(), "total_records": len(audit)}
