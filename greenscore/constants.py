"""
Constants for Green Loan Scoring.
"""

PROJECT_TYPES = ['solar', 'ev', 'waste', 'energy_efficiency', 'water']

SUSTAINABILITY_CLASS_DISPLAY = {
    'high': {'name': 'High Impact', 'color': '#22c55e'},
    'medium': {'name': 'Medium Impact', 'color': '#eab308'},
    'low': {'name': 'Low Impact', 'color': '#ef4444'},
}

CONFIDENCE_DISPLAY = {
    'high': {'name': 'High', 'color': '#22c55e'},
    'medium': {'name': 'Medium', 'color': '#eab308'},
    'low': {'name': 'Low', 'color': '#f97316'},
    'very_low': {'name': 'Very Low', 'color': '#ef4444'},
}

METHODOLOGY = 'TerraLend Enhanced AI v2.0'

# Green score bands
SCORE_THRESHOLD_HIGH = 80
SCORE_THRESHOLD_MEDIUM = 50

# Loans scoring below this are rejected
APPROVAL_THRESHOLD = 50

# Extraction confidence bands
CONFIDENCE_THRESHOLD_HIGH = 0.85
CONFIDENCE_THRESHOLD_MEDIUM = 0.60
CONFIDENCE_THRESHOLD_LOW = 0.40

# Per-field penalties applied when extraction leaves a field unknown
CONFIDENCE_PENALTIES = {
    'project_type': 0.20,
    'capacity_kw': 0.25,
    'vendor': 0.20,
    'claimed_impact': 0.15,
}
CERTIFICATION_BONUS = 0.05
CERTIFICATION_BONUS_CAP = 0.10

# Sub-score caps
CATEGORY_CAP = 30
FINANCIAL_CAP = 30
GEOGRAPHIC_CAP = 30
DATA_INTEGRITY_CAP = 10

# Turnover bands in rupees (50 lakh, 10 lakh)
TURNOVER_HIGH = 5_000_000
TURNOVER_MEDIUM = 1_000_000

# Used as ROI denominator when no loan amount is given (1 lakh)
DEFAULT_LOAN_AMOUNT = 100_000

GREENWASHING_MIN_CONFIDENCE = 80

# Base impact points per green objective
CATEGORY_IMPACT_POINTS = {
    'solar': 30,              # Direct renewable generation
    'waste': 30,              # Circular economy
    'wind': 30,
    'energy_efficiency': 25,  # Demand reduction
    'ev': 25,                 # Emission displacement
    'water': 25,              # Resource conservation
    'agriculture': 20,        # Sustainable practice
}
DEFAULT_CATEGORY_POINTS = 20
TRANSFORMATIVE_BONUS = 5

# Objective keys used by the loan application form that differ from ours
CATEGORY_ALIASES = {
    'efficiency': 'energy_efficiency',
}
