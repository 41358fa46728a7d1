"""时间工具：ISO 时间串、毫秒时间戳、今天的日期。"""
import time
from datetime import date, datetime, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def today() -> date:
    return date.today()
