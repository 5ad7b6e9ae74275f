"""Time and time-zone state reported by the time-date service."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

_MAX_OFFSET = timedelta(hours=18)


def _parse_offset(text: str) -> Optional[timezone]:
    """Parse ``Z``, ``±hh``, ``±hhmm`` or ``±hh:mm`` into a fixed offset."""
    if text == "Z":
        return timezone.utc
    if not text or text[0] not in "+-":
        return None
    sign = 1 if text[0] == "+" else -1
    body = text[1:]
    if len(body) == 2:
        hours, minutes = body, "00"
    elif len(body) == 4:
        hours, minutes = body[:2], body[2:]
    elif len(body) == 5 and body[2] == ":":
        hours, minutes = body[:2], body[3:]
    else:
        return None
    if not (hours.isascii() and hours.isdigit() and minutes.isascii() and minutes.isdigit()):
        return None
    if int(minutes) >= 60:
        return None
    offset = timedelta(hours=int(hours), minutes=int(minutes))
    if offset > _MAX_OFFSET:
        return None
    return timezone(sign * offset)


@dataclass
class TimeInfo:
    """Whether NTP is available, the configured time zone and the current time."""

    can_ntp: bool
    timezone: timezone
    local_time: datetime

    @classmethod
    async def load(cls, proxy: Any) -> Optional[TimeInfo]:
        """Query the service proxy; None if its time zone cannot be parsed."""
        try:
            can_ntp = bool(await proxy.can_ntp())
        except Exception:
            can_ntp = False

        try:
            zone_name = await proxy.timezone()
        except Exception:
            zone_name = ""

        zone = _parse_offset(zone_name or "")
        if zone is None:
            return None

        seconds = int(time.time())
        if seconds < 0:
            return None
        local_time = datetime(1970, 1, 1) + timedelta(seconds=seconds)
        return cls(can_ntp=can_ntp, timezone=zone, local_time=local_time)