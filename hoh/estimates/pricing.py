"""
Hardcoded pricing tables used by the cost calculators.

All money values are rupees, all areas square feet.
"""
from decimal import Decimal

# ==================== PACKAGE ESTIMATES (BHK x PACKAGE) ====================

PACKAGE_PRICES = {
    '2BHK': {
        'Basic': Decimal('249886'),
        'Standard': Decimal('354328.26'),
        'Premium': Decimal('486541'),
        'Luxury': Decimal('502518.14'),
    },
    '3BHK': {
        'Basic': Decimal('314690'),
        'Standard': Decimal('452087'),
        'Premium': Decimal('577530'),
        'Luxury': Decimal('564531'),
    },
    '4BHK': {
        'Basic': Decimal('471585'),
        'Premium': Decimal('597027'),
        'Luxury': Decimal('649833'),
    },
}

PACKAGE_DESCRIPTIONS = {
    'Basic': 'Essential interiors with quality materials',
    'Standard': 'Enhanced design with premium finishes',
    'Premium': 'Luxury design with high-end materials',
    'Luxury': 'Ultra-premium with bespoke customization',
}

# ==================== CITY ESTIMATE ====================

BASE_COST_PER_SQ_FT = 1500

CITY_MULTIPLIERS = {
    'mumbai': Decimal('1.5'),
    'delhi': Decimal('1.4'),
    'bangalore': Decimal('1.45'),
    'bengaluru': Decimal('1.45'),
    'hyderabad': Decimal('1.3'),
    'chennai': Decimal('1.3'),
    'kolkata': Decimal('1.25'),
    'pune': Decimal('1.35'),
    'ahmedabad': Decimal('1.2'),
    'jaipur': Decimal('1.15'),
    'lucknow': Decimal('1.1'),
    'kochi': Decimal('1.2'),
    'chandigarh': Decimal('1.15'),
    'indore': Decimal('1.1'),
}
DEFAULT_CITY_MULTIPLIER = Decimal('1.0')

# ==================== INTERIOR CALCULATOR ====================

WORK_TYPES = ['full', 'specific']

INTERIOR_BHK_OPTIONS = ['1BHK', '2BHK', '3BHK', '4BHK', '5BHK+']

INTERIOR_RATES = {
    'affordable': 1700,
    'premium': 2000,
    'luxury': 2350,
    'superLuxury': 3000,
}

SIZE_MAPPING = {
    '1BHK': {'small': 550, 'large': 700},
    '2BHK': {'small': 850, 'large': 1100},
    '3BHK': {'small': 1300, 'large': 1600},
    '4BHK': {'small': 1800, 'large': 2300},
    '5BHK+': {'small': 2400, 'large': 3000},
}
CUSTOM_SIZE = 'custom'
SIZE_OPTIONS = ['small', 'large', CUSTOM_SIZE]

# Percentage of the carpet area each space accounts for (bedroom is per bedroom)
SPACE_ALLOCATION = {
    'bedroom': 20,
    'kitchen': 12,
    'livingRoom': 20,
    'dining': 10,
    'foyer': 5,
    'puja': 5,
    'furniture': 7,
}

SPACE_LABELS = {
    'bedroom': 'Bedroom',
    'kitchen': 'Kitchen',
    'livingRoom': 'Living Room',
    'dining': 'Dining',
    'foyer': 'Foyer',
    'puja': 'Puja Room',
    'furniture': 'Furniture Only',
}

# Spaces missing from a BHK's limits (foyer, puja, furniture) are unlimited
ROOM_LIMITS = {
    '1BHK': {'bedroom': 1, 'kitchen': 1, 'livingRoom': 1, 'dining': 1},
    '2BHK': {'bedroom': 2, 'kitchen': 1, 'livingRoom': 1, 'dining': 1},
    '3BHK': {'bedroom': 3, 'kitchen': 1, 'livingRoom': 1, 'dining': 1},
    '4BHK': {'bedroom': 4, 'kitchen': 2, 'livingRoom': 2, 'dining': 2},
    '5BHK+': {'bedroom': 6, 'kitchen': 2, 'livingRoom': 2, 'dining': 2},
}

INTERIOR_RANGE_LOW = Decimal('0.9')
INTERIOR_RANGE_HIGH = Decimal('1.1')

# ==================== CONSTRUCTION CALCULATOR ====================

PROJECT_TYPES = ['residential', 'commercial']

MIN_PLOT_AREA = 400
MAX_PLOT_AREA = 20000

FLOOR_MULTIPLIERS = {
    'G': Decimal('1.0'),
    'G+1': Decimal('1.8'),
    'G+2': Decimal('2.6'),
    'G+3': Decimal('3.4'),
    'G+4': Decimal('4.2'),
}

FLOOR_LABELS = {
    'G': {'main': '1 Floor', 'sub': 'Ground Only'},
    'G+1': {'main': '2 Floors', 'sub': 'Ground + 1'},
    'G+2': {'main': '3 Floors', 'sub': 'Ground + 2'},
    'G+3': {'main': '4 Floors', 'sub': 'Ground + 3'},
    'G+4': {'main': '5 Floors', 'sub': 'Ground + 4'},
}

CONSTRUCTION_RATES = {
    'residential': {
        'affordable': {'min': 1650, 'max': 1800},
        'premium': {'min': 1850, 'max': 2150},
        'luxury': {'min': 2150, 'max': 2750},
    },
    'commercial': {
        'affordable': {'min': 1350, 'max': 1550},
        'premium': {'min': 1550, 'max': 1850},
        'luxury': {'min': 1850, 'max': 2400},
    },
}

LAKH = Decimal('100000')
