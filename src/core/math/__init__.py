"""
Core math modules для fair-price оценки

Математические примитивы и численные алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_CALC,
    EPS_WEIGHT,
    # Input checks
    is_valid_float,
    is_valid_price,
    valid_prices,
    # Safe division
    safe_divide,
    # Utilities
    clamp,
    round_half_up,
    # Validation
    validate_positive,
)

# Moments
from src.core.math.moments import (
    coefficient_of_variation,
    mean,
    pstdev,
    weighted_mean,
    weighted_pstdev,
)

# Decay
from src.core.math.decay import (
    DAYS_PER_MONTH,
    DECAY_ALPHA,
    HALF_LIFE_MONTHS,
    age_in_months,
    decay_weight,
    relative_decay_weights,
    to_datetime,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_CALC",
    "EPS_WEIGHT",
    # Numerical Safeguards — Input checks
    "is_valid_float",
    "is_valid_price",
    "valid_prices",
    # Numerical Safeguards — Safe division
    "safe_divide",
    # Numerical Safeguards — Utilities
    "clamp",
    "round_half_up",
    # Numerical Safeguards — Validation
    "validate_positive",
    # Moments
    "coefficient_of_variation",
    "mean",
    "pstdev",
    "weighted_mean",
    "weighted_pstdev",
    # Decay — Constants
    "DAYS_PER_MONTH",
    "DECAY_ALPHA",
    "HALF_LIFE_MONTHS",
    # Decay — Functions
    "age_in_months",
    "decay_weight",
    "relative_decay_weights",
    "to_datetime",
]
