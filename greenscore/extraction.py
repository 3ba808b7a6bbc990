"""
Sustainability claim extraction from free-text project descriptions.

Two modes return the same ``ExtractedClaim`` shape:

* rule-based (default): ordered pattern probes over the text, see
  ``greenscore.keywords`` for the tables and their precedence.
* LLM: structured output from an Ollama model, used only when a model is
  configured. Any failure falls back to the rule-based extractor.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional

import ollama
from pydantic import ValidationError

from greenscore.keywords import (
    CAPACITY_PATTERNS,
    CERTIFICATION_PATTERNS,
    CO2_PATTERNS,
    ENERGY_PATTERNS,
    PROJECT_TYPE_KEYWORDS,
    VENDOR_PATTERNS,
)
from greenscore.models import ClaimedImpact, ExtractedClaim

logger = logging.getLogger(__name__)

LLM_SYSTEM_PROMPT = """You are an AI assistant helping extract structured sustainability data
from borrower-provided text.

TASK:
Extract factual project details from the input text.
Return ONLY valid JSON. Do not add explanations.

RULES:
- Do NOT invent or assume data.
- If a value is missing or unclear, return null.
- Do NOT validate claims.
- Do NOT assign scores or approvals.
- Extract only what is explicitly stated.

FIELDS TO EXTRACT:
- project_type (solar | ev | waste | energy_efficiency | water | null)
- capacity_kw (number | null)
- vendor (string | null)
- certifications (array of strings | empty array)
- claimed_impact:
    - co2_saved_tonnes_per_year (number | null)
    - energy_generated_kwh_per_year (number | null)"""


@dataclass(frozen=True)
class ExtractionRules:
    """Ordered rule tables driving the rule-based extractor."""

    project_types: tuple = tuple((ptype, tuple(kws)) for ptype, kws in PROJECT_TYPE_KEYWORDS)
    capacity: tuple = tuple(CAPACITY_PATTERNS)
    vendors: tuple = tuple(VENDOR_PATTERNS)
    certifications: tuple = tuple(CERTIFICATION_PATTERNS)
    co2: tuple = tuple(CO2_PATTERNS)
    energy: tuple = tuple(ENERGY_PATTERNS)


DEFAULT_RULES = ExtractionRules()

_WS_RE = re.compile(r'\s+')


def _normalize(text: str) -> str:
    """Lowercase and collapse whitespace."""
    return _WS_RE.sub(' ', text.lower())


def _to_number(raw: str) -> Optional[float]:
    try:
        value = float(raw.replace(",", ""))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def keyword_in_text(keyword: str, text_normalized: str) -> bool:
    """
    Check a lowercase keyword against normalized text.

    Multi-word keywords match as exact phrases, single words on word
    boundaries so 'ev' does not fire inside 'every' or 'development'.
    """
    if ' ' in keyword:
        return keyword in text_normalized
    return re.search(r'\b' + re.escape(keyword) + r'\b', text_normalized) is not None


def detect_project_type(text: str, keyword_sets=DEFAULT_RULES.project_types) -> Optional[str]:
    text_normalized = _normalize(text)
    for project_type, keywords in keyword_sets:
        if any(keyword_in_text(kw, text_normalized) for kw in keywords):
            return project_type
    return None


def first_number(text: str, patterns) -> Optional[float]:
    """Number captured by the first pattern that matches, or None."""
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            return _to_number(match.group(1))
    return None


def detect_vendor(text: str, vendor_patterns=DEFAULT_RULES.vendors) -> Optional[str]:
    for pattern, name in vendor_patterns:
        if re.search(pattern, text, re.IGNORECASE):
            return name
    return None


def detect_certifications(text: str, cert_patterns=DEFAULT_RULES.certifications) -> list:
    return [name for pattern, name in cert_patterns if re.search(pattern, text, re.IGNORECASE)]


def extract_claim(text: str, rules: ExtractionRules = DEFAULT_RULES) -> ExtractedClaim:
    """Rule-based extraction. Pure; never raises for string input."""
    text = text or ''

    capacity_kw = first_number(text, rules.capacity)
    if capacity_kw is not None and capacity_kw <= 0:
        capacity_kw = None

    return ExtractedClaim(
        project_type=detect_project_type(text, rules.project_types),
        capacity_kw=capacity_kw,
        vendor=detect_vendor(text, rules.vendors),
        certifications=detect_certifications(text, rules.certifications),
        claimed_impact=ClaimedImpact(
            co2_saved_tonnes_per_year=first_number(text, rules.co2),
            energy_generated_kwh_per_year=first_number(text, rules.energy),
        ),
    )


def extract_claim_llm(text: str, model: str) -> ExtractedClaim:
    """Ask an Ollama model for a structured claim. Raises on any failure."""
    response = ollama.chat(
        model=model,
        messages=[
            {"role": "system", "content": LLM_SYSTEM_PROMPT},
            {"role": "user", "content": f"INPUT TEXT:\n{text}"},
        ],
        format=ExtractedClaim.model_json_schema(),
        options={"temperature": 0},
    )
    raw = response.message.content or ""
    return ExtractedClaim.model_validate_json(raw)


class ClaimExtractor:
    """Selects LLM or rule-based extraction, replacing env checks at call sites."""

    def __init__(self, model: Optional[str] = None, demo_mode: bool = False,
                 rules: ExtractionRules = DEFAULT_RULES):
        self.model = model
        self.demo_mode = demo_mode
        self.rules = rules

    @property
    def llm_enabled(self) -> bool:
        return bool(self.model) and not self.demo_mode

    @property
    def mode(self) -> str:
        return 'llm' if self.llm_enabled else 'rule'

    def extract(self, text: str) -> ExtractedClaim:
        if self.llm_enabled:
            try:
                return extract_claim_llm(text, self.model)
            except (ollama.ResponseError, ConnectionError, ValidationError) as e:
                logger.warning("LLM extraction failed, falling back to rules: %s", e)
        return extract_claim(text, self.rules)
