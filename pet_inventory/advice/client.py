"""喂养建议客户端：调用 Gemini generateContent 接口生成文字。

接口：POST {endpoint}/{model}:generateContent，请求头 x-goog-api-key；
Body 为 contents + generationConfig；文字在 candidates[0].content.parts[*].text。
失败不抛异常，返回 (None, 错误信息)，由调用方降级为占位文字。
"""
import logging
import re
from typing import List, Optional, Tuple

import requests

from pet_inventory.advice.prompt import (
    ADVICE_EMPTY_TEXT,
    ADVICE_FAILED_TEXT,
    feeding_advice_prompt,
    keyword_prompt,
)
from pet_inventory.config import ADVICE_TIMEOUT_SECONDS, GEMINI_API_KEY, GEMINI_ENDPOINT, GEMINI_MODEL
from pet_inventory.inventory.models import Pet

logger = logging.getLogger(__name__)

MAX_KEYWORDS = 5


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()


class AdviceClient:
    """宠物喂养建议（生成式文本）。"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        endpoint: str = GEMINI_ENDPOINT,
        timeout: float = ADVICE_TIMEOUT_SECONDS,
    ):
        self.api_key = (api_key if api_key is not None else GEMINI_API_KEY).strip()
        self.model = model or GEMINI_MODEL
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(
        self,
        prompt: str,
        max_output_tokens: int,
        temperature: float,
    ) -> Tuple[Optional[str], Optional[str]]:
        """返回 (文本, None) 成功；(None, 错误信息) 失败。文本可能为空串。"""
        if not self.configured:
            return None, "未配置 GEMINI_API_KEY"
        url = f"{self.endpoint}/{self.model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": max_output_tokens,
                "temperature": temperature,
            },
        }
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        try:
            r = requests.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            err = f"请求失败: {e}"
            logger.warning("Gemini %s", err)
            return None, err
        try:
            data = r.json()
        except ValueError:
            err = f"响应非 JSON: {r.text[:200]}"
            logger.warning("Gemini %s", err)
            return None, err
        if r.status_code != 200:
            msg = (data.get("error") or {}).get("message") if isinstance(data, dict) else None
            err = f"HTTP {r.status_code}: {msg or r.text[:200]}"
            logger.warning("Gemini %s", err)
            return None, err
        if not isinstance(data, dict):
            return None, f"响应格式异常: {str(data)[:200]}"
        return _extract_text(data), None

    def get_advice(self, pet: Pet) -> Tuple[Optional[str], Optional[str]]:
        return self.generate(feeding_advice_prompt(pet), max_output_tokens=200, temperature=0.7)

    def feeding_advice(self, pet: Pet) -> str:
        """总是返回可直接展示的文字：失败时为占位提示。"""
        text, err = self.get_advice(pet)
        if err:
            logger.warning("获取 %s 喂养建议失败: %s", pet.id, err)
            return ADVICE_FAILED_TEXT
        return text or ADVICE_EMPTY_TEXT

    def suggest_keywords(self, query: str) -> List[str]:
        """按关键词联想最多 5 个热门物种/基因名称，失败返回空列表。"""
        query = (query or "").strip()
        if not query:
            return []
        text, err = self.generate(keyword_prompt(query), max_output_tokens=50, temperature=0.5)
        if err or not text:
            return []
        names = [s.strip() for s in re.split(r"[,，、\n]", text)]
        return [n for n in names if n][:MAX_KEYWORDS]
