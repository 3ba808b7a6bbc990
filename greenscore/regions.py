"""
Regional lookup tables for geographic suitability and climate risk.

State names are lowercase and matched as substrings of the (lowercased)
project location, so "Jaipur, Rajasthan" matches 'rajasthan'.
"""

# Approximate state centroids (lat, lon) for nearest-neighbour reverse geocoding
STATE_CENTROIDS = [
    ('Maharashtra', 19.75, 75.71),
    ('Karnataka', 15.31, 75.71),
    ('Rajasthan', 27.02, 74.21),
    ('Tamil Nadu', 11.12, 78.65),
    ('Gujarat', 22.25, 71.19),
    ('Assam', 26.20, 92.93),
    ('Delhi', 28.70, 77.10),
    ('Telangana', 18.11, 79.01),
]

# Category suitability rules, checked in order. Each rule:
#   (category terms, [(states, points, reason), ...], (fallback points, fallback reason))
# A rule applies when any term is one of the underscore-separated words of the
# normalized category key (energy_efficiency -> {energy, efficiency}).
# Tiers within a rule are also checked in order; first state hit wins.
GEO_SUITABILITY_RULES = [
    (['solar'], [
        (['rajasthan', 'gujarat', 'maharashtra', 'karnataka', 'tamil nadu', 'telangana', 'andhra pradesh'],
         20, 'High Solar Irradiance Zone'),
        (['kerala', 'west bengal', 'odisha'], 10, 'Moderate Solar Potential'),
    ], (5, 'Standard Solar Potential')),
    (['wind'], [
        (['tamil nadu', 'gujarat', 'maharashtra', 'karnataka'], 20, 'High Wind Corridor'),
    ], (5, 'Low Wind Potential')),
    (['ev', 'efficiency'], [
        (['delhi', 'maharashtra', 'karnataka', 'telangana', 'tamil nadu'], 20, 'High Urban Adoption Rate'),
    ], (10, 'Growing Adoption Zone')),
    (['agriculture', 'water'], [
        (['punjab', 'haryana', 'uttar pradesh', 'madhya pradesh'], 20, 'Process Optimization Zone'),
        (['rajasthan', 'maharashtra', 'gujarat'], 20, 'Critical Resource Impact Zone'),
    ], (10, 'Standard Impact Zone')),
    (['waste'], [], (20, 'Universal Need')),
]

GEO_DEFAULT = (10, 'General Applicability')

# Climate risk categories, each evaluated independently:
#   (type, level, regions, description, recommendation)
CLIMATE_RISK_REGIONS = [
    ('drought', 'medium', ['maharashtra', 'karnataka', 'rajasthan', 'telangana'],
     'Moderate drought risk during summer months. May affect water-dependent operations.',
     'Consider water storage and backup systems.'),
    ('flood', 'high', ['mumbai', 'chennai', 'kolkata', 'assam', 'kerala'],
     'Higher flood risk during monsoon season.',
     'Ensure adequate flood insurance and elevated installations.'),
    ('heatwave', 'medium', ['delhi', 'uttar pradesh', 'bihar', 'punjab'],
     'Extreme heat events may impact equipment efficiency.',
     'Plan for cooling systems and shade structures.'),
]

RISK_SEVERITY = {'low': 0, 'medium': 1, 'high': 2}

# Climate resilience points, inverse to assessed risk
CLIMATE_RESILIENCE_POINTS = {
    'low': (10, 'Low Climate Risk'),
    'medium': (5, 'Moderate Climate Risk'),
    'high': (0, 'High Climate Risk detected'),
}

# Simulated regional alert feed
CLIMATE_ALERTS = [
    {
        'id': 'alert-001',
        'type': 'drought',
        'region': 'Central Maharashtra',
        'level': 'medium',
        'description': 'Below normal rainfall expected. Agricultural and water projects may need contingency planning.',
        'valid_until': '2025-06-30',
    },
    {
        'id': 'alert-002',
        'type': 'heatwave',
        'region': 'Northern Plains',
        'level': 'high',
        'description': 'Extreme heat conditions expected from April to June. Solar installations require additional cooling considerations.',
        'valid_until': '2025-07-15',
    },
]
