"""宠物记录与库存管理。"""
from pet_inventory.inventory.models import Pet, PetStatus
from pet_inventory.inventory.manager import InventoryManager

__all__ = ["Pet", "PetStatus", "InventoryManager"]
