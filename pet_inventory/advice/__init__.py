"""喂养建议（外部生成式文本服务）。"""
from pet_inventory.advice.client import AdviceClient
from pet_inventory.advice.prompt import ADVICE_EMPTY_TEXT, ADVICE_FAILED_TEXT

__all__ = ["AdviceClient", "ADVICE_EMPTY_TEXT", "ADVICE_FAILED_TEXT"]
