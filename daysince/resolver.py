from __future__ import annotations

"""
Day-count resolver: path segment -> OverlayRequest -> ResolvedLabel.

Dates are parsed strictly as `YYYY-MM-DD` at UTC midnight. A date that matches
the route pattern but is not a real calendar day (e.g. 2020-13-45) falls back
to the zero-value date 0001-01-01; elapsed time saturates at the largest span
a signed 64-bit nanosecond counter holds (~292 years), so that fallback always
resolves to FALLBACK_DAYS.
"""

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from common.logging_setup import get_logger
from common.types import OverlayRequest, ResolvedLabel
from common.utils import utc_now


log = get_logger(__name__)

DATE_FORMAT = "%Y-%m-%d"
ZERO_DATE = datetime(1, 1, 1, tzinfo=timezone.utc)
MAX_ELAPSED = timedelta(microseconds=(2**63 - 1) // 1000)

_DAYS_RE = re.compile(r"(?P<days>[0-9]{1,4})(?:\.png)?")
_DATE_RE = re.compile(r"(?P<date>\d{4}-\d{2}-\d{2})(?:\.png)?", re.ASCII)


def match_target(segment: str) -> Optional[OverlayRequest]:
    """
    Map one URL path segment onto an OverlayRequest.

    Accepts `1234`, `1234.png`, `2020-01-01`, `2020-01-01.png`; None otherwise.
    """
    m = _DAYS_RE.fullmatch(segment)
    if m:
        return OverlayRequest(days=m.group("days"))
    m = _DATE_RE.fullmatch(segment)
    if m:
        return OverlayRequest(date=m.group("date"))
    return None


def parse_date(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def elapsed_days(since: datetime, now: datetime) -> int:
    """Whole days between `since` and `now`, rounded half-up."""
    delta = now - since
    if delta > MAX_ELAPSED:
        delta = MAX_ELAPSED
    elif delta < -MAX_ELAPSED:
        delta = -MAX_ELAPSED
    hours = delta / timedelta(hours=1)
    return int(math.floor(hours / 24 + 0.5))


FALLBACK_DAYS = int(math.floor(MAX_ELAPSED / timedelta(hours=1) / 24 + 0.5))


def resolve_label(req: OverlayRequest, now: Optional[datetime] = None) -> ResolvedLabel:
    if req.date is None:
        return ResolvedLabel(text=str(req.days))

    now = now or utc_now()
    since = parse_date(req.date)
    fallback = since is None
    if fallback:
        log.warning(
            "unparseable date, using zero-value date",
            extra={"extra": {"date": req.date, "zero_date": ZERO_DATE.date().isoformat()}},
        )
        since = ZERO_DATE

    days = elapsed_days(since, now)
    return ResolvedLabel(text=str(days), days=days, fallback=fallback)
