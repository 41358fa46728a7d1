"""宠物记录数据模型。"""
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PetStatus(str, Enum):
    """宠物状态：在库可流转为已售或死亡，后两者为终态。"""
    IN_STOCK = "IN_STOCK"   # 在库
    SOLD = "SOLD"           # 已售
    DECEASED = "DECEASED"   # 死亡


TERMINAL_STATUSES = frozenset({PetStatus.SOLD.value, PetStatus.DECEASED.value})


class Pet(BaseModel):
    """一只在册宠物。"""
    id: str = Field(..., description="产品编号 PET-####")
    barcode: str = Field(..., description="条形码 BC-########")
    species: str = Field(..., description="物种")
    gene: str = Field("", description="基因/品种")
    weight: float = Field(0.0, ge=0, description="体重 kg")
    feeding_date: date = Field(..., description="投喂日期")
    cabinet_id: str = Field(..., description="宠物柜号")
    status: PetStatus = Field(PetStatus.IN_STOCK, description="状态")
    created_at: int = Field(..., description="创建时间（毫秒时间戳）")

    model_config = ConfigDict(use_enum_values=True)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
