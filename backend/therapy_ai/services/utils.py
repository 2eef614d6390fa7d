# backend/therapy_ai/services/utils.py
from __future__ import annotations
import random
import string
import time
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

_BASE36 = string.digits + string.ascii_lowercase
_PASSWORD_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def gen_id() -> str:
    """Millisecond timestamp plus a random suffix, both base 36. Not cryptographically unique."""
    return _to_base36(int(time.time() * 1000)) + _to_base36(random.getrandbits(52))


def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return _iso(datetime.now(timezone.utc))


def iso_ago(*, days: int = 0, seconds: int = 0) -> str:
    """ISO timestamp ``days`` back from now, optionally nudged forward by ``seconds``."""
    return _iso(datetime.now(timezone.utc) - timedelta(days=days) + timedelta(seconds=seconds))


def calc_age_years(dob: Union[date, str], today: Optional[date] = None) -> int:
    if isinstance(dob, str):
        dob = date.fromisoformat(dob)
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def generate_random_password(length: int = 10) -> str:
    return "".join(random.choice(_PASSWORD_CHARS) for _ in range(length))
