"""喂养建议与关键词联想的提示词。"""
from pet_inventory.inventory.models import Pet

FEEDING_ADVICE_PROMPT = """作为宠物专家，请针对以下宠物信息提供简短的中文喂养建议。
物种: {species}
基因/品种: {gene}
体重: {weight}kg
当前柜号: {cabinet_id}"""

KEYWORD_PROMPT = '基于关键词 "{query}"，返回5个相关的热门宠物物种或基因名称，仅返回名称，用逗号隔开。'

# 调用失败、返回为空时展示给用户的占位文字
ADVICE_FAILED_TEXT = "获取喂养建议失败。"
ADVICE_EMPTY_TEXT = "暂无建议"


def feeding_advice_prompt(pet: Pet) -> str:
    return FEEDING_ADVICE_PROMPT.format(
        species=pet.species,
        gene=pet.gene,
        weight=pet.weight,
        cabinet_id=pet.cabinet_id,
    )


def keyword_prompt(query: str) -> str:
    return KEYWORD_PROMPT.format(query=query)
