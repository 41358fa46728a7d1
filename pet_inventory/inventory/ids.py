"""宠物编号与条形码生成，生成时与已有记录比对，冲突则重试。"""
import random
from typing import Callable, Iterable, Optional, Tuple

from pet_inventory.config import PET_ID_MAX, PET_ID_MIN, PET_ID_RANDOM_ATTEMPTS
from pet_inventory.errors import IdSpaceExhaustedError
from pet_inventory.inventory.models import Pet

PET_ID_PREFIX = "PET-"
BARCODE_PREFIX = "BC-"
BARCODE_DIGITS = 8


def format_pet_id(number: int) -> str:
    return f"{PET_ID_PREFIX}{number:04d}"


def format_barcode(timestamp_ms: int) -> str:
    """条形码取创建时间戳的末 8 位。"""
    return f"{BARCODE_PREFIX}{str(timestamp_ms)[-BARCODE_DIGITS:].zfill(BARCODE_DIGITS)}"


def new_pet_id(taken: Iterable[str], rng: Optional[random.Random] = None) -> str:
    """先随机抽取若干次；编号较满时改为从剩余空号中挑选。"""
    rng = rng or random.Random()
    taken = set(taken)
    for _ in range(PET_ID_RANDOM_ATTEMPTS):
        candidate = format_pet_id(rng.randint(PET_ID_MIN, PET_ID_MAX))
        if candidate not in taken:
            return candidate
    free = [n for n in range(PET_ID_MIN, PET_ID_MAX + 1) if format_pet_id(n) not in taken]
    if not free:
        raise IdSpaceExhaustedError()
    return format_pet_id(rng.choice(free))


def new_barcode(pets: Iterable[Pet], clock: Callable[[], int]) -> Tuple[str, int]:
    """返回 (条形码, 创建时间戳)。

    时间戳严格大于已有记录的 created_at，保证单调递增；截断后的条形码
    仍可能与旧记录重复（时间戳相差 10^8 毫秒的整数倍），此时继续顺延。
    """
    pets = list(pets)
    taken = {p.barcode for p in pets}
    latest = max((p.created_at for p in pets), default=0)
    timestamp = max(clock(), latest + 1)
    barcode = format_barcode(timestamp)
    while barcode in taken:
        timestamp += 1
        barcode = format_barcode(timestamp)
    return barcode, timestamp
