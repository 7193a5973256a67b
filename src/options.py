"""Reading and clamping of chart request options."""

import math
import sys
from typing import Any, Mapping

from models import ChartOptions

MIN_GENERATIONS = 2
MAX_GENERATIONS = 10

MIN_FAN_DEGREE = 180
MAX_FAN_DEGREE = 360
DEFAULT_FAN_DEGREE = 210

MIN_FONT_SCALE = 0
MAX_FONT_SCALE = 200
DEFAULT_FONT_SCALE = 100

FALSE_VALUES = {"", "0", "false", "off", "no"}


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def as_int(value: Any, default: int) -> int:
    """Interpret a request value as an integer, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    # Accept "12.0" style values; infinities saturate so clamping applies
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(number):
        return default
    if math.isinf(number):
        return sys.maxsize if number > 0 else -sys.maxsize
    return int(number)


def as_bool(value: Any) -> bool:
    """Interpret a request value as a flag; absent means False."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_VALUES
    return bool(value)


def read_options(raw: Mapping[str, Any], default_generations: int) -> ChartOptions:
    """Build chart options from request parameters, clamping out-of-range numbers."""
    generations = as_int(raw.get("generations"), default_generations)
    fan_degree = as_int(raw.get("fanDegree"), DEFAULT_FAN_DEGREE)
    font_scale = as_int(raw.get("fontScale"), DEFAULT_FONT_SCALE)

    return ChartOptions(
        generations=clamp(generations, MIN_GENERATIONS, MAX_GENERATIONS),
        fan_degree=clamp(fan_degree, MIN_FAN_DEGREE, MAX_FAN_DEGREE),
        font_scale=clamp(font_scale, MIN_FONT_SCALE, MAX_FONT_SCALE),
        hide_empty_segments=as_bool(raw.get("hideEmptySegments")),
        show_color_gradients=as_bool(raw.get("showColorGradients")),
    )
