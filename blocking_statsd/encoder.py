from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Context, Decimal
from enum import Enum
from typing import Optional, Tuple, Union

from .tags import Tags, tag_suffix

Number = Union[int, float]

FLOAT_PLACES = Decimal("0.000001")
# Wide enough for any finite double at 6 decimals.
FLOAT_CONTEXT = Context(prec=400)


class MetricType(str, Enum):
    COUNTER = "c"
    GAUGE = "g"
    TIMER = "ms"
    HISTOGRAM = "h"


def format_prefix(prefix: Optional[str]) -> str:
    return f"{prefix}." if prefix else ""


def format_value(value: Number) -> str:
    if isinstance(value, int):
        return str(int(value))

    value = float(value)
    if not math.isfinite(value):
        # nan / inf / -inf
        return f"{value:f}"
    rounded = Decimal(repr(value)).quantize(FLOAT_PLACES, rounding=ROUND_HALF_EVEN, context=FLOAT_CONTEXT)
    return f"{rounded:f}"


def format_sample_rate(sample_rate: float) -> str:
    if sample_rate == 1.0:
        return ""
    return f"|@{sample_rate:f}"


def encode(
    prefix: Optional[str],
    aspect: str,
    value: Number,
    metric_type: MetricType,
    sample_rate: float = 1.0,
    constant_tags: Tags = None,
    tags: Tags = None,
) -> str:
    """Format one metric as a statsd line.

    <prefix.><aspect>:<value>|<type>[|@<rate>][|#<tags>]

    Integer values are written as-is, floats with 6 fixed decimals after
    half-even rounding. No trailing newline.
    """

    return (
        f"{format_prefix(prefix)}{aspect}:{format_value(value)}|{MetricType(metric_type).value}"
        f"{format_sample_rate(sample_rate)}{tag_suffix(constant_tags, tags)}"
    )


@dataclass(frozen=True)
class MetricPoint:
    name: str
    type: MetricType
    value: Number
    sample_rate: float = 1.0
    tags: Tuple[str, ...] = ()

    def encode(self, prefix: Optional[str] = None, constant_tags: Tags = None) -> str:
        return encode(prefix, self.name, self.value, self.type, self.sample_rate, constant_tags, self.tags)
