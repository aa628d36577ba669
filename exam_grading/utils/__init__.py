# Utils package
from .helpers import (
    round_half_up,
    clamp,
    calculate_percentage,
    percent,
)

__all__ = [
    "round_half_up",
    "clamp",
    "calculate_percentage",
    "percent",
]
