"""
Ordered rule tables for sustainability claim extraction.

Every table is plain data consumed by ``greenscore.extraction``. Order matters:
for project type, capacity, vendor and impact figures the FIRST entry that
matches wins, so more specific entries must come before generic ones.
Certifications are the exception - every matching entry is reported.

Keywords are lowercase. Single-word keywords are matched on word boundaries,
multi-word keywords as exact phrases.
"""

# Number with optional thousands separators and decimals: 50, 75,000, 12.5
NUMBER = r'(\d+(?:,\d+)*(?:\.\d+)?)'

# Priority order: solar -> ev -> waste -> energy_efficiency -> water
PROJECT_TYPE_KEYWORDS = [
    ('solar', ['solar', 'photovoltaic', 'pv panel', 'pv module', 'rooftop pv']),
    ('ev', ['ev', 'evs', 'electric vehicle', 'electric vehicles', 'charging station', 'e-rickshaw']),
    ('waste', ['waste', 'recycling', 'composting', 'biogas']),
    ('energy_efficiency', [
        'energy efficiency', 'energy efficient', 'led', 'insulation', 'hvac', 'vrf',
        'variable refrigerant', 'lighting system',
    ]),
    ('water', ['water', 'rainwater', 'sewage', 'irrigation', 'drip irrigation']),
]

# Installed capacity in kW. kWh is energy, never capacity.
CAPACITY_PATTERNS = [
    NUMBER + r'\s*kw(?![a-oq-z])',
    NUMBER + r'\s*kilowatts?(?!\s*-?\s*hours?)',
    r'capacity\s*(?:of\s*)?' + NUMBER,
    NUMBER + r'\s*kwp\b',
]

# (pattern, canonical display name)
VENDOR_PATTERNS = [
    # Solar
    (r'\btata\s*(?:power\s*)?solar\b', 'Tata Power Solar'),
    (r'\badani\s*(?:green|solar)?\b', 'Adani Solar'),
    (r'\bwaaree\b', 'Waaree Energies'),
    (r'\bvikram\s*solar\b', 'Vikram Solar'),
    (r'\bluminous\b', 'Luminous'),
    (r'\bhavells\b', 'Havells'),
    # Wind / utility scale
    (r'\bsuzlon\b', 'Suzlon Energy'),
    (r'\brenew\s*power\b', 'ReNew Power'),
    # EV
    (r'\bhero\s*(?:electric|future)\b', 'Hero Electric'),
    (r'\bather\b', 'Ather Energy'),
    (r'\bola\s*electric\b', 'Ola Electric'),
]

# (pattern, label) - all matches are reported, in table order
CERTIFICATION_PATTERNS = [
    (r'\biso\s*14001\b', 'ISO 14001'),
    (r'\biso\s*9001\b', 'ISO 9001'),
    (r'\bleed\b', 'LEED'),
    (r'\bgriha\b', 'GRIHA'),
    (r'\bigbc\b', 'IGBC'),
    (r'\bbis\b', 'BIS Certified'),
    (r'\bmnre[\s-]*(?:approved|certified)\b', 'MNRE Approved'),
    (r'\bbee\s*(?:\d\s*-?\s*)?(?:star|rated|certified)', 'BEE Star Rated'),
]

# Annual CO2 savings in tonnes
CO2_PATTERNS = [
    NUMBER + r'\s*(?:tonnes?|tons?)\s*(?:of\s*)?co2',
    r'co2\s*(?:savings?|reduction|saved?)\s*(?:of\s*)?' + NUMBER,
    r'save\s*' + NUMBER + r'\s*(?:tonnes?|tons?)',
    r'reduce\s*' + NUMBER + r'\s*(?:tonnes?|tons?)',
    NUMBER + r'\s*(?:tonnes?|tons?)\s*(?:carbon|co2)\s*(?:per\s*year|annually)?',
]

# Annual energy generated or saved in kWh
ENERGY_PATTERNS = [
    NUMBER + r'\s*kwh\s*(?:per\s*year|annually|/\s*year)',
    r'generate\s*' + NUMBER + r'\s*kwh',
    NUMBER + r'\s*kwh\s*(?:of\s*)?(?:electricity|energy|power)',
    r'annual\s*(?:generation|output)\s*(?:of\s*)?' + NUMBER + r'\s*kwh',
    r'(?:approx\.?|approximately)?\s*' + NUMBER + r'\s*kwh\s*/\s*year',
    r'reduce.*?' + NUMBER + r'\s*kwh',
    NUMBER + r'\s*kwh[\s/]*(?:per\s*)?(?:year|yr|annually)',
]
