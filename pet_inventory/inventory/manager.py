"""库存管理：入库、出售/死亡流转、删除、搜索与条码查询。

宠物列表按入库时间倒序保存（最新的在最前），所有查询保持这一顺序。
"""
import logging
import math
import random
from datetime import date, datetime
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Union

from pet_inventory.clock import now_ms, today
from pet_inventory.errors import (
    InvalidFieldError,
    InvalidTransitionError,
    MissingRequiredFieldError,
    NotFoundError,
)
from pet_inventory.inventory.ids import new_barcode, new_pet_id
from pet_inventory.inventory.models import Pet, PetStatus, TERMINAL_STATUSES

if TYPE_CHECKING:
    from pet_inventory.store.record_store import RecordStore

logger = logging.getLogger(__name__)


def _parse_feeding_date(value: Union[date, str, None], default: date) -> date:
    if value is None or value == "":
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidFieldError("feeding_date", f"投喂日期格式应为 YYYY-MM-DD: {value!r}")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidFieldError("feeding_date", f"投喂日期格式应为 YYYY-MM-DD: {value}") from e


class InventoryManager:
    """宠物记录的增删改查。"""

    def __init__(
        self,
        store: "RecordStore",
        clock: Callable[[], int] = now_ms,
        today_fn: Callable[[], date] = today,
        rng: Optional[random.Random] = None,
    ):
        self._store = store
        self._clock = clock
        self._today = today_fn
        self._rng = rng or random.Random()

    def intake(
        self,
        species: str,
        gene: str = "",
        weight: float = 0.0,
        feeding_date: Union[date, str, None] = None,
        cabinet_id: str = "",
    ) -> Pet:
        """入库一只宠物，状态为在库，插入列表最前面。"""
        species = (species or "").strip()
        cabinet_id = (cabinet_id or "").strip()
        if not species:
            raise MissingRequiredFieldError("species", "请填写必要信息 (物种)")
        if not cabinet_id:
            raise MissingRequiredFieldError("cabinet_id", "请填写必要信息 (柜号)")
        try:
            weight = float(weight or 0)
        except (TypeError, ValueError) as e:
            raise InvalidFieldError("weight", f"体重必须是数字: {weight}") from e
        if not math.isfinite(weight) or weight < 0:
            raise InvalidFieldError("weight", "体重不能为负数")
        feeding = _parse_feeding_date(feeding_date, self._today())

        pets = self._store.load_pets()
        barcode, created_at = new_barcode(pets, self._clock)
        pet = Pet(
            id=new_pet_id((p.id for p in pets), self._rng),
            barcode=barcode,
            species=species,
            gene=(gene or "").strip(),
            weight=weight,
            feeding_date=feeding,
            cabinet_id=cabinet_id,
            status=PetStatus.IN_STOCK,
            created_at=created_at,
        )
        self._store.save_pets([pet] + pets)
        logger.info("入库 %s (%s) 柜号 %s", pet.id, pet.species, pet.cabinet_id)
        return pet

    def transition(self, pet_id: str, target_status: Union[PetStatus, str]) -> Pet:
        """在库 → 已售 / 死亡；终态不可再变。只修改 status，其余字段不变。"""
        pets = self._store.load_pets()
        index = next((i for i, p in enumerate(pets) if p.id == pet_id), None)
        if index is None:
            raise NotFoundError(f"未找到宠物: {pet_id}")
        pet = pets[index]
        try:
            target = PetStatus(target_status)
        except ValueError as e:
            raise InvalidTransitionError(f"未知状态: {target_status}") from e
        if target.value not in TERMINAL_STATUSES:
            raise InvalidTransitionError(f"只能标记为已售或死亡，不能改为 {target.value}")
        if pet.status != PetStatus.IN_STOCK:
            logger.warning("拒绝流转 %s: %s -> %s", pet_id, pet.status, target.value)
            raise InvalidTransitionError(f"{pet_id} 当前状态为 {pet.status}，不能再变更")
        updated = pet.model_copy(update={"status": target.value})
        pets[index] = updated
        self._store.save_pets(pets)
        logger.info("%s 状态 %s -> %s", pet_id, pet.status, updated.status)
        return updated

    def remove(self, pet_id: str) -> bool:
        """永久删除（无回收站）；记录不存在时什么都不做，返回 False。"""
        pets = self._store.load_pets()
        remaining = [p for p in pets if p.id != pet_id]
        if len(remaining) == len(pets):
            return False
        self._store.save_pets(remaining)
        logger.info("删除宠物记录 %s", pet_id)
        return True

    def get(self, pet_id: str) -> Optional[Pet]:
        return next((p for p in self._store.load_pets() if p.id == pet_id), None)

    def list_all(self) -> List[Pet]:
        return self._store.load_pets()

    def search(self, query: str) -> List[Pet]:
        """物种、基因、编号、条码任一字段包含关键字即命中（不区分大小写）。"""
        q = (query or "").lower()
        return [
            p for p in self._store.load_pets()
            if q in p.species.lower()
            or q in p.gene.lower()
            or q in p.id.lower()
            or q in p.barcode.lower()
        ]

    def lookup_by_code(self, code: str) -> Optional[Pet]:
        """扫码结果与条码或编号完全一致的第一条记录。"""
        return next((p for p in self._store.load_pets() if p.barcode == code or p.id == code), None)

    def _with_status(self, status: PetStatus) -> List[Pet]:
        return [p for p in self._store.load_pets() if p.status == status]

    def list_in_stock(self) -> List[Pet]:
        return self._with_status(PetStatus.IN_STOCK)

    def list_sold(self) -> List[Pet]:
        return self._with_status(PetStatus.SOLD)

    def list_deceased(self) -> List[Pet]:
        return self._with_status(PetStatus.DECEASED)

    def list_feeding_due(self, on: Optional[date] = None) -> List[Pet]:
        """在库且投喂日期为指定日（默认今天）的宠物。"""
        day = on or self._today()
        return [p for p in self.list_in_stock() if p.feeding_date == day]

    def summary(self) -> Dict[str, int]:
        pets = self._store.load_pets()
        counts = {s.value: 0 for s in PetStatus}
        for p in pets:
            counts[p.status] += 1
        counts["total"] = len(pets)
        return counts
