"""
Time and rounding helpers shared by the metrics services
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP, localcontext
import math
from typing import Union

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def to_epoch_ms(value: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _ONE_MS


def iso_from_ms(ms: int) -> str:
    """Format epoch milliseconds as a UTC ISO-8601 string with millisecond precision"""
    moment = EPOCH + timedelta(milliseconds=ms)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds"""
    return to_epoch_ms(datetime.now(timezone.utc))


def round_half_away(value: Union[int, float], ndigits: int = 0) -> Union[int, float]:
    """
    Round with ties going away from zero (2.345 -> 2.35, -0.5 -> -1)

    Returns an int when ndigits is 0. Non-finite values come back unchanged.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return value
    exponent = Decimal(1).scaleb(-ndigits)
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # room for every integer digit plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + ndigits + 2)
        rounded = exact.quantize(exponent, rounding=ROUND_HALF_UP)
    if ndigits == 0:
        return int(rounded)
    return float(rounded)
