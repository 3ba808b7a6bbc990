"""Shared test fixtures."""
import sys
import os
import pytest

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from greenscore.models import LoanAttributes


@pytest.fixture
def solar_text():
    """Description with every critical field present."""
    return (
        "Installing 50kW solar panels from Tata Power Solar to generate "
        "75,000 kWh annually and save 40 tonnes of CO2 per year"
    )


@pytest.fixture
def efficiency_text():
    """Energy efficiency retrofit with certifications and no vendor."""
    return (
        "Replacing legacy HVAC with a VRF system and LED lighting in our ISO 14001 "
        "and ISO 9001 certified plant, saving approximately 30,000 kWh/year."
    )


@pytest.fixture
def vague_text():
    """Text that names nothing extractable."""
    return "We want to make our business greener and more responsible over time."


@pytest.fixture
def strong_solar_loan():
    """Established business, solar in a high-irradiance state."""
    return LoanAttributes(
        loan_id='TL-2025-001',
        green_objective='solar',
        annual_turnover=10_000_000,
        years_in_business=6,
        estimated_savings=3_000_000,
        loan_amount=1_500_000,
        project_location='Rajasthan',
    )


@pytest.fixture
def weak_loan():
    """Unrecognized objective, no financials, unknown location."""
    return LoanAttributes(
        loan_id='TL-2025-002',
        green_objective='reforestation',
        annual_turnover=0,
        estimated_savings=0,
        loan_amount=500_000,
        project_location='Atlantis',
    )
