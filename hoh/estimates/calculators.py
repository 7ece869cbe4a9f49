"""
Cost calculators for the public estimate forms and wizards.

Every function validates its inputs and raises ``EstimateError`` with a
message suitable for showing to the visitor. Money and areas are rounded
half-up to whole rupees and square feet.
"""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from hoh.core.exceptions import DomainError
from .pricing import (
    PACKAGE_PRICES, PACKAGE_DESCRIPTIONS,
    BASE_COST_PER_SQ_FT, CITY_MULTIPLIERS, DEFAULT_CITY_MULTIPLIER,
    WORK_TYPES, INTERIOR_RATES, SIZE_MAPPING, CUSTOM_SIZE, SPACE_ALLOCATION, ROOM_LIMITS,
    INTERIOR_RANGE_LOW, INTERIOR_RANGE_HIGH,
    MIN_PLOT_AREA, MAX_PLOT_AREA, FLOOR_MULTIPLIERS, FLOOR_LABELS, CONSTRUCTION_RATES, LAKH,
)


class EstimateError(DomainError):
    pass


def to_decimal(value):
    """Parse a number from user input, returning None when it isn't one"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def round_whole(value):
    return int(Decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def to_lakhs(amount):
    return (Decimal(amount) / LAKH).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)


# ==================== PACKAGE ESTIMATE ====================

def package_price(bhk, package):
    prices = PACKAGE_PRICES.get(bhk)
    if prices is None:
        raise EstimateError(f'Unsupported BHK configuration: {bhk}')
    if package not in prices:
        raise EstimateError(f'{package} package is not available for {bhk}')
    return prices[package]


def package_estimate(bhk, package):
    return {
        'bhk': bhk,
        'package': package,
        'price': package_price(bhk, package),
        'description': PACKAGE_DESCRIPTIONS.get(package, ''),
    }


# ==================== CITY ESTIMATE ====================

def city_multiplier(city):
    return CITY_MULTIPLIERS.get((city or '').strip().lower(), DEFAULT_CITY_MULTIPLIER)


def city_estimate(carpet_area, city):
    """Base rate x carpet area x city multiplier"""
    if carpet_area in (None, '') or not (city or '').strip():
        raise EstimateError('Carpet area and city are required')
    area = to_decimal(carpet_area)
    if area is None or area <= 0:
        raise EstimateError('Carpet area must be a positive number')

    multiplier = city_multiplier(city)
    return {
        'carpet_area': area,
        'city': city.strip(),
        'city_multiplier': multiplier,
        'base_cost_per_sq_ft': BASE_COST_PER_SQ_FT,
        'estimated_cost': round_whole(BASE_COST_PER_SQ_FT * area * multiplier),
    }


# ==================== INTERIOR ESTIMATE ====================

def space_display_name(space):
    """``livingRoom`` -> ``living room``"""
    return re.sub(r'([A-Z])', r' \1', space).strip().lower()


def space_limit(bhk, space):
    """Maximum number of ``space`` allowed for a BHK, or None when unlimited"""
    return ROOM_LIMITS.get(bhk, {}).get(space)


def check_space_limit(bhk, selected_spaces, space):
    """True when one more ``space`` still fits within the BHK's room limits"""
    if bhk not in ROOM_LIMITS:
        return True
    limit = space_limit(bhk, space)
    if limit is None:
        return True
    return list(selected_spaces).count(space) + 1 <= limit


def space_limit_message(bhk, space):
    limit = space_limit(bhk, space)
    plural = 's' if limit > 1 else ''
    return f'Maximum {limit} {space_display_name(space)}{plural} allowed for {bhk}'


def validate_spaces(bhk, selected_spaces):
    unknown = sorted({space for space in selected_spaces if space not in SPACE_ALLOCATION})
    if unknown:
        raise EstimateError(f"Unknown spaces: {', '.join(unknown)}")
    for space in dict.fromkeys(selected_spaces):
        limit = space_limit(bhk, space)
        if limit is not None and selected_spaces.count(space) > limit:
            raise EstimateError(space_limit_message(bhk, space))


def resolve_interior_area(bhk, size, custom_carpet_area=None):
    if bhk not in SIZE_MAPPING:
        raise EstimateError('Please select BHK configuration')
    if size == CUSTOM_SIZE:
        area = to_decimal(custom_carpet_area)
        if area is None or area <= 0:
            raise EstimateError('Please enter a valid carpet area')
        return area
    if size not in SIZE_MAPPING[bhk]:
        raise EstimateError('Please select your home size')
    return Decimal(SIZE_MAPPING[bhk][size])


def interior_estimate(bhk, size, category, work_type='full', selected_spaces=None, custom_carpet_area=None):
    """
    Interior cost for a home or for selected spaces of it.

    For ``specific`` work the billable area is the sum of each selected
    space's share of the carpet area; the quoted range is 90%-110% of
    the total.
    """
    if work_type not in WORK_TYPES:
        raise EstimateError('Please select the type of work')
    carpet_area = resolve_interior_area(bhk, size, custom_carpet_area)
    if category not in INTERIOR_RATES:
        raise EstimateError('Please select a design category')

    spaces = list(selected_spaces or [])
    validate_spaces(bhk, spaces)

    area = carpet_area
    if work_type == 'specific' and spaces:
        area = sum((carpet_area * SPACE_ALLOCATION[space] / 100 for space in spaces), Decimal('0'))

    rate = INTERIOR_RATES[category]
    total_cost = area * rate
    return {
        'bhk': bhk,
        'size': size,
        'category': category,
        'work_type': work_type,
        'selected_spaces': spaces,
        'carpet_area': round_whole(carpet_area),
        'rate_per_sq_ft': rate,
        'total_sq_ft': round_whole(area),
        'total_cost': round_whole(total_cost),
        'min_cost': round_whole(total_cost * INTERIOR_RANGE_LOW),
        'max_cost': round_whole(total_cost * INTERIOR_RANGE_HIGH),
    }


# ==================== CONSTRUCTION ESTIMATE ====================

def validate_plot_area(plot_area):
    area = to_decimal(plot_area)
    if area is None or area < MIN_PLOT_AREA or area > MAX_PLOT_AREA:
        raise EstimateError(f'Plot area must be between {MIN_PLOT_AREA} and {MAX_PLOT_AREA} sq.ft')
    return area


def built_up_area(plot_area, floors):
    if floors not in FLOOR_MULTIPLIERS:
        raise EstimateError('Please select the number of floors')
    return round_whole(validate_plot_area(plot_area) * FLOOR_MULTIPLIERS[floors])


def construction_estimate(project_type, plot_area, floors, category):
    """Built-up area (plot x floor multiplier) priced at the category's min/max rate"""
    if project_type not in CONSTRUCTION_RATES:
        raise EstimateError('Please select a project type')
    area = built_up_area(plot_area, floors)
    rates = CONSTRUCTION_RATES[project_type].get(category)
    if rates is None:
        raise EstimateError('Please select a construction category')

    min_cost = area * rates['min']
    max_cost = area * rates['max']
    return {
        'project_type': project_type,
        'plot_area': round_whole(to_decimal(plot_area)),
        'floors': floors,
        'floor_label': FLOOR_LABELS[floors],
        'category': category,
        'built_up_area': area,
        'rate_min_per_sq_ft': rates['min'],
        'rate_max_per_sq_ft': rates['max'],
        'min_cost': min_cost,
        'max_cost': max_cost,
        'min_cost_lakhs': to_lakhs(min_cost),
        'max_cost_lakhs': to_lakhs(max_cost),
        'average_cost': round_whole(Decimal(min_cost + max_cost) / 2),
    }


def estimate_options():
    """Every choice the calculators accept, for building the forms"""
    return {
        'packages': {
            bhk: [
                {'package': name, 'price': price, 'description': PACKAGE_DESCRIPTIONS[name]}
                for name, price in prices.items()
            ]
            for bhk, prices in PACKAGE_PRICES.items()
        },
        'cities': {city: multiplier for city, multiplier in CITY_MULTIPLIERS.items()},
        'base_cost_per_sq_ft': BASE_COST_PER_SQ_FT,
        'interior': {
            'work_types': WORK_TYPES,
            'rates': INTERIOR_RATES,
            'sizes': SIZE_MAPPING,
            'space_allocation': SPACE_ALLOCATION,
            'room_limits': ROOM_LIMITS,
        },
        'construction': {
            'plot_area': {'min': MIN_PLOT_AREA, 'max': MAX_PLOT_AREA},
            'floors': {
                floors: {'multiplier': multiplier, **FLOOR_LABELS[floors]}
                for floors, multiplier in FLOOR_MULTIPLIERS.items()
            },
            'rates': CONSTRUCTION_RATES,
        },
    }
