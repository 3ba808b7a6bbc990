"""Tests for sustainability claim extraction."""
from unittest.mock import MagicMock, patch

import ollama
import pytest

from greenscore.extraction import (
    DEFAULT_RULES,
    ClaimExtractor,
    ExtractionRules,
    detect_certifications,
    detect_project_type,
    detect_vendor,
    extract_claim,
    first_number,
    keyword_in_text,
)
from greenscore.keywords import CAPACITY_PATTERNS, CO2_PATTERNS, ENERGY_PATTERNS
from greenscore.models import ExtractedClaim


class TestKeywordInText:
    def test_single_word_uses_word_boundaries(self):
        assert keyword_in_text('ev', 'install ev chargers')
        assert not keyword_in_text('ev', 'every development')

    def test_multi_word_phrase(self):
        assert keyword_in_text('electric vehicle', 'fleet of electric vehicles')
        assert not keyword_in_text('electric vehicle', 'electric and vehicle')


class TestDetectProjectType:
    def test_solar(self):
        assert detect_project_type("Rooftop photovoltaic array") == 'solar'

    def test_ev(self):
        assert detect_project_type("Two EV charging points for delivery vans") == 'ev'

    def test_waste(self):
        assert detect_project_type("Composting unit for food scraps") == 'waste'

    def test_energy_efficiency(self):
        assert detect_project_type("Upgrade to LED lighting and insulation") == 'energy_efficiency'

    def test_water(self):
        assert detect_project_type("Rainwater harvesting tank") == 'water'

    def test_priority_solar_over_water(self):
        assert detect_project_type("Solar powered drip irrigation pumps") == 'solar'

    def test_priority_ev_over_waste(self):
        assert detect_project_type("Electric vehicle fleet to collect waste") == 'ev'

    def test_ev_not_matched_inside_words(self):
        assert detect_project_type("Every development plan needs recycling") == 'waste'

    def test_unknown(self):
        assert detect_project_type("A general business expansion") is None

    def test_custom_keyword_sets(self):
        sets = (('wind', ('turbine',)),)
        assert detect_project_type("Two turbine installation", sets) == 'wind'


class TestFirstNumber:
    def test_capacity_kw(self):
        assert first_number("a 50kW plant", CAPACITY_PATTERNS) == 50

    def test_capacity_decimal(self):
        assert first_number("12.5 kW rooftop system", CAPACITY_PATTERNS) == 12.5

    def test_capacity_kilowatt(self):
        assert first_number("100 kilowatt array", CAPACITY_PATTERNS) == 100

    def test_capacity_of(self):
        assert first_number("with a capacity of 25 units", CAPACITY_PATTERNS) == 25

    def test_capacity_kwp(self):
        assert first_number("a 40 kWp system", CAPACITY_PATTERNS) == 40

    def test_kwh_is_not_capacity(self):
        assert first_number("saves 75,000 kWh", CAPACITY_PATTERNS) is None

    def test_energy_strips_separators(self):
        assert first_number("generate 1,250,000 kWh annually", ENERGY_PATTERNS) == 1250000

    def test_energy_per_year_slash(self):
        assert first_number("about 30,000 kWh/year", ENERGY_PATTERNS) == 30000

    def test_co2_tonnes(self):
        assert first_number("cuts 12.5 tons of CO2", CO2_PATTERNS) == 12.5

    def test_co2_reduction_phrase(self):
        assert first_number("CO2 reduction of 18 tonnes", CO2_PATTERNS) == 18

    def test_first_pattern_wins(self):
        patterns = [r'(\d+) apples', r'(\d+) pears']
        assert first_number("3 pears and 7 apples", patterns) == 7

    def test_no_match(self):
        assert first_number("nothing numeric here", CO2_PATTERNS) is None


class TestDetectVendor:
    def test_canonical_name(self):
        assert detect_vendor("modules from TATA power solar") == 'Tata Power Solar'

    def test_alias(self):
        assert detect_vendor("Adani Green panels") == 'Adani Solar'

    def test_first_vendor_wins(self):
        assert detect_vendor("Waaree modules with a Luminous inverter") == 'Waaree Energies'

    def test_ather_not_matched_inside_weather(self):
        assert detect_vendor("weather resistant mounts") is None

    def test_ev_vendor(self):
        assert detect_vendor("Ola Electric scooters") == 'Ola Electric'


class TestDetectCertifications:
    def test_multiple_in_table_order(self):
        text = "LEED gold building, ISO 9001 and ISO14001 certified"
        assert detect_certifications(text) == ['ISO 14001', 'ISO 9001', 'LEED']

    def test_mnre_and_bee(self):
        text = "MNRE approved panels and BEE 5-star rated pumps"
        assert detect_certifications(text) == ['MNRE Approved', 'BEE Star Rated']

    def test_none(self):
        assert detect_certifications("no standards mentioned") == []


class TestExtractClaim:
    def test_full_solar_claim(self, solar_text):
        claim = extract_claim(solar_text)
        assert claim.project_type == 'solar'
        assert claim.capacity_kw == 50
        assert claim.vendor == 'Tata Power Solar'
        assert claim.certifications == []
        assert claim.claimed_impact.co2_saved_tonnes_per_year == 40
        assert claim.claimed_impact.energy_generated_kwh_per_year == 75000

    def test_efficiency_claim(self, efficiency_text):
        claim = extract_claim(efficiency_text)
        assert claim.project_type == 'energy_efficiency'
        assert claim.capacity_kw is None
        assert claim.vendor is None
        assert claim.certifications == ['ISO 14001', 'ISO 9001']
        assert claim.claimed_impact.energy_generated_kwh_per_year == 30000

    def test_empty_text(self):
        claim = extract_claim("")
        assert claim == ExtractedClaim()

    def test_none_text(self):
        assert extract_claim(None) == ExtractedClaim()

    def test_vague_text_has_no_values(self, vague_text):
        claim = extract_claim(vague_text)
        assert claim.project_type is None
        assert claim.capacity_kw is None
        assert claim.vendor is None
        assert claim.claimed_impact.co2_saved_tonnes_per_year is None
        assert claim.claimed_impact.energy_generated_kwh_per_year is None

    def test_zero_capacity_is_unknown(self):
        assert extract_claim("a 0 kW test rig").capacity_kw is None

    @pytest.mark.parametrize("text", [
        "kW kWh tonnes CO2",
        "capacity of",
        "!!!@@@###",
        "9" * 500 + " kW",
        "\n\t  ",
    ])
    def test_never_raises(self, text):
        assert isinstance(extract_claim(text), ExtractedClaim)

    def test_custom_rules(self):
        rules = ExtractionRules(vendors=((r'\bacme\b', 'Acme Renewables'),))
        assert extract_claim("Acme solar modules", rules).vendor == 'Acme Renewables'

    def test_is_deterministic(self, solar_text):
        assert extract_claim(solar_text) == extract_claim(solar_text)

    def test_serializes_to_json(self, solar_text):
        data = extract_claim(solar_text).model_dump(mode='json')
        assert data['claimed_impact']['energy_generated_kwh_per_year'] == 75000


class TestClaimExtractor:
    def test_rule_mode_by_default(self, solar_text):
        extractor = ClaimExtractor()
        assert extractor.mode == 'rule'
        assert extractor.extract(solar_text) == extract_claim(solar_text)

    def test_demo_mode_disables_llm(self):
        extractor = ClaimExtractor(model='llama3.1:8b', demo_mode=True)
        assert extractor.mode == 'rule'

    @patch("greenscore.extraction.ollama.chat")
    def test_llm_mode(self, mock_chat, solar_text):
        mock_response = MagicMock()
        mock_response.message.content = (
            '{"project_type": "solar", "capacity_kw": 50, "vendor": "Tata Power Solar", '
            '"certifications": [], "claimed_impact": {"co2_saved_tonnes_per_year": 40, '
            '"energy_generated_kwh_per_year": 75000}}'
        )
        mock_chat.return_value = mock_response

        extractor = ClaimExtractor(model='llama3.1:8b')
        assert extractor.mode == 'llm'
        claim = extractor.extract(solar_text)

        assert claim.vendor == 'Tata Power Solar'
        mock_chat.assert_called_once()
        assert mock_chat.call_args.kwargs['model'] == 'llama3.1:8b'

    @patch("greenscore.extraction.ollama.chat")
    def test_llm_invalid_json_falls_back(self, mock_chat, solar_text):
        mock_response = MagicMock()
        mock_response.message.content = "not json"
        mock_chat.return_value = mock_response

        claim = ClaimExtractor(model='llama3.1:8b').extract(solar_text)
        assert claim == extract_claim(solar_text)

    @patch("greenscore.extraction.ollama.chat")
    def test_llm_connection_error_falls_back(self, mock_chat, solar_text):
        mock_chat.side_effect = ConnectionError("ollama not running")
        claim = ClaimExtractor(model='llama3.1:8b').extract(solar_text)
        assert claim == extract_claim(solar_text)

    @patch("greenscore.extraction.ollama.chat")
    def test_llm_response_error_falls_back(self, mock_chat, solar_text):
        mock_chat.side_effect = ollama.ResponseError("model not found")
        claim = ClaimExtractor(model='missing').extract(solar_text)
        assert claim == extract_claim(solar_text)

    def test_default_rules_exposed(self):
        assert DEFAULT_RULES.project_types[0][0] == 'solar'
