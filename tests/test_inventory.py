"""库存管理测试：入库、状态流转、删除、搜索与条码查询。"""
import random
import re
import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest

from pet_inventory.errors import (
    IdSpaceExhaustedError,
    InvalidFieldError,
    InvalidTransitionError,
    MissingRequiredFieldError,
    NotFoundError,
)
from pet_inventory.inventory.ids import format_barcode, format_pet_id, new_barcode, new_pet_id
from pet_inventory.inventory.manager import InventoryManager
from pet_inventory.inventory.models import PetStatus
from pet_inventory.store.record_store import RecordStore

TODAY = date(2026, 10, 17)


class FixedClock:
    """每次调用返回同一个毫秒时间戳。"""

    def __init__(self, value: int):
        self.value = value

    def __call__(self) -> int:
        return self.value


def _manager(tmp: str, clock_value: int = 1_760_000_000_000) -> InventoryManager:
    return InventoryManager(
        RecordStore(base_dir=Path(tmp)),
        clock=FixedClock(clock_value),
        today_fn=lambda: TODAY,
        rng=random.Random(7),
    )


def test_intake_corn_snake() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        pet = inventory.intake(species="Corn Snake", gene="Albino", weight=0.3, cabinet_id="A1")
        assert pet.status == PetStatus.IN_STOCK
        assert re.fullmatch(r"PET-\d{4}", pet.id)
        assert re.fullmatch(r"BC-\d{8}", pet.barcode)
        assert pet.feeding_date == TODAY
        assert pet.weight == 0.3
        assert inventory.list_all() == [pet]


def test_intake_requires_species_and_cabinet() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        with pytest.raises(MissingRequiredFieldError) as exc:
            inventory.intake(species="", cabinet_id="A1")
        assert exc.value.field == "species"
        with pytest.raises(MissingRequiredFieldError) as exc:
            inventory.intake(species="Gecko", cabinet_id="   ")
        assert exc.value.field == "cabinet_id"
        assert inventory.list_all() == []


def test_intake_rejects_negative_weight_and_bad_date() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        with pytest.raises(InvalidFieldError):
            inventory.intake(species="Gecko", weight=-1, cabinet_id="A1")
        with pytest.raises(InvalidFieldError):
            inventory.intake(species="Gecko", feeding_date="17/10/2026", cabinet_id="A1")


def test_intake_accepts_iso_feeding_date() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        pet = _manager(tmp).intake(species="Gecko", feeding_date="2026-10-20", cabinet_id="C3")
        assert pet.feeding_date == date(2026, 10, 20)


def test_intake_feeding_date_from_datetime() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        pet = _manager(tmp).intake(species="Gecko", feeding_date=datetime(2026, 10, 17, 9, 30), cabinet_id="A1")
        assert pet.feeding_date == date(2026, 10, 17)


def test_intake_rejects_non_date_feeding_date() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        for value in (20261017, 3.5, ["2026-10-17"]):
            with pytest.raises(InvalidFieldError) as exc:
                inventory.intake(species="Gecko", feeding_date=value, cabinet_id="A1")
            assert exc.value.field == "feeding_date"
        assert inventory.list_all() == []


def test_intake_newest_first_with_unique_codes() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        first = inventory.intake(species="Gecko", cabinet_id="A1")
        second = inventory.intake(species="Iguana", cabinet_id="A2")
        third = inventory.intake(species="Tortoise", cabinet_id="A3")
        pets = inventory.list_all()
        assert [p.id for p in pets] == [third.id, second.id, first.id]
        assert len({p.id for p in pets}) == 3
        assert len({p.barcode for p in pets}) == 3
        # 时钟不动时创建时间依然单调递增
        assert first.created_at < second.created_at < third.created_at


def test_sold_is_terminal() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        pet = inventory.intake(species="Corn Snake", gene="Albino", weight=0.3, cabinet_id="A1")
        sold = inventory.transition(pet.id, PetStatus.SOLD)
        assert sold.status == PetStatus.SOLD
        with pytest.raises(InvalidTransitionError):
            inventory.transition(pet.id, PetStatus.DECEASED)
        assert inventory.get(pet.id).status == PetStatus.SOLD


def test_deceased_is_terminal() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        pet = inventory.intake(species="Gecko", cabinet_id="A1")
        inventory.transition(pet.id, "DECEASED")
        for target in (PetStatus.SOLD, PetStatus.DECEASED, PetStatus.IN_STOCK):
            with pytest.raises(InvalidTransitionError):
                inventory.transition(pet.id, target)
        assert inventory.get(pet.id).status == PetStatus.DECEASED


def test_transition_keeps_other_fields() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        pet = inventory.intake(species="Gecko", gene="Tangerine", weight=0.05, cabinet_id="D4")
        sold = inventory.transition(pet.id, PetStatus.SOLD)
        assert sold.model_dump(exclude={"status"}) == pet.model_dump(exclude={"status"})


def test_transition_errors() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        with pytest.raises(NotFoundError):
            inventory.transition("PET-0000", PetStatus.SOLD)
        pet = inventory.intake(species="Gecko", cabinet_id="A1")
        with pytest.raises(InvalidTransitionError):
            inventory.transition(pet.id, PetStatus.IN_STOCK)
        with pytest.raises(InvalidTransitionError):
            inventory.transition(pet.id, "LOST")
        assert inventory.get(pet.id).status == PetStatus.IN_STOCK


def test_remove() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        keep = inventory.intake(species="Gecko", cabinet_id="A1")
        gone = inventory.intake(species="Iguana", cabinet_id="A2")
        assert inventory.remove(gone.id) is True
        assert inventory.remove(gone.id) is False
        assert inventory.remove("PET-0000") is False
        assert inventory.list_all() == [keep]


def test_search_matches_any_field_case_insensitive() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        snake = inventory.intake(species="Corn Snake", gene="Albino", cabinet_id="A1")
        gecko = inventory.intake(species="Leopard Gecko", gene="Tangerine", cabinet_id="A2")
        assert inventory.search("corn") == [snake]
        assert inventory.search("TANGER") == [gecko]
        assert inventory.search(snake.id.lower()) == [snake]
        assert inventory.search(gecko.barcode[3:]) == [gecko]
        assert inventory.search("") == [gecko, snake]
        assert inventory.search("python") == []
        # 柜号不参与搜索
        assert inventory.search("A1") == []


def test_search_finds_every_substring() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        pet = inventory.intake(species="Ball Python", gene="Pastel", cabinet_id="B1")
        for text in (pet.species, pet.gene, pet.id, pet.barcode):
            for start in range(len(text)):
                for end in range(start + 1, len(text) + 1):
                    assert pet in inventory.search(text[start:end].swapcase())


def test_lookup_by_code() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        pet = inventory.intake(species="Gecko", cabinet_id="A1")
        assert inventory.lookup_by_code(pet.barcode) == pet
        assert inventory.lookup_by_code(pet.id) == pet
        assert inventory.lookup_by_code("UNKNOWN") is None
        assert inventory.lookup_by_code(pet.barcode.lower()) is None


def test_filtered_lists_and_summary() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp)
        a = inventory.intake(species="A", cabinet_id="1")
        b = inventory.intake(species="B", cabinet_id="2", feeding_date=date(2026, 10, 18))
        c = inventory.intake(species="C", cabinet_id="3")
        d = inventory.intake(species="D", cabinet_id="4")
        inventory.transition(b.id, PetStatus.SOLD)
        inventory.transition(d.id, PetStatus.DECEASED)
        assert [p.id for p in inventory.list_in_stock()] == [c.id, a.id]
        assert [p.id for p in inventory.list_sold()] == [b.id]
        assert [p.id for p in inventory.list_deceased()] == [d.id]
        assert [p.id for p in inventory.list_feeding_due()] == [c.id, a.id]
        assert inventory.list_feeding_due(date(2026, 10, 18)) == []
        assert inventory.summary() == {"IN_STOCK": 2, "SOLD": 1, "DECEASED": 1, "total": 4}


def test_new_pet_id_avoids_taken_ids() -> None:
    taken = {format_pet_id(n) for n in range(1000, 10000) if n != 4321}
    assert new_pet_id(taken, random.Random(1)) == "PET-4321"


def test_new_pet_id_exhausted() -> None:
    taken = {format_pet_id(n) for n in range(1000, 10000)}
    with pytest.raises(IdSpaceExhaustedError):
        new_pet_id(taken)


def test_new_barcode_skips_truncation_collision() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        inventory = _manager(tmp, clock_value=1_700_012_345_678)
        old = inventory.intake(species="Gecko", cabinet_id="A1")
        # 时间戳相差 10^8 毫秒时末 8 位相同
        stale = old.model_copy(update={"created_at": 1})
        barcode, created_at = new_barcode([stale], FixedClock(old.created_at + 100_000_000))
        assert format_barcode(old.created_at + 100_000_000) == old.barcode
        assert barcode != old.barcode
        assert created_at == old.created_at + 100_000_001
