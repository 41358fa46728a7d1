"""本地持久化：账号、宠物、当前会话。"""
from pet_inventory.store.record_store import RecordStore

__all__ = ["RecordStore"]
