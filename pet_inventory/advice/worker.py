"""喂养建议与关键词联想的后台 Worker（QThread），避免网络请求阻塞界面。"""
from typing import List

from PyQt6.QtCore import QThread, pyqtSignal

from pet_inventory.advice.client import AdviceClient
from pet_inventory.inventory.models import Pet


class AdviceWorker(QThread):
    """对一只宠物请求喂养建议；结果（含失败占位文字）通过 finished_text 发出。"""
    finished_text = pyqtSignal(str, str)  # pet_id, 建议文字

    def __init__(self, client: AdviceClient, pet: Pet):
        super().__init__()
        self._client = client
        self._pet = pet

    def run(self) -> None:
        self.finished_text.emit(self._pet.id, self._client.feeding_advice(self._pet))


class KeywordWorker(QThread):
    """按搜索词联想热门物种/基因名称；失败时发出空列表。"""
    finished_keywords = pyqtSignal(str, list)  # 搜索词, 名称列表

    def __init__(self, client: AdviceClient, query: str):
        super().__init__()
        self._client = client
        self._query = query

    def run(self) -> None:
        names: List[str] = self._client.suggest_keywords(self._query)
        self.finished_keywords.emit(self._query, names)
