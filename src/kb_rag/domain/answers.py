"""Fixed user-facing messages and the shared "no result" phrase set.

Both the synchronous answer path and the stream normalizer classify model output with
`is_no_result_like`; keep the phrase list here only.
"""

from __future__ import annotations

NO_RESULT_RESPONSE = (
    "抱歉，在选定的知识库中未检索到相关信息。请换一个更具体的关键词或补充上下文后再试。"
)

NO_RESULT_PHRASES: tuple[str, ...] = (
    "没有找到相关信息",
    "未检索到相关信息",
    "信息不足",
    "超出知识库范围",
    "无法根据提供内容回答",
)

QUERY_FAILED_PREFIX = "知识库查询失败："
STREAM_ERROR_PREFIX = "【错误】" + QUERY_FAILED_PREFIX
STREAM_FAILURE_RESPONSE = STREAM_ERROR_PREFIX + "AI服务暂时不可用，请稍后重试。"


def is_no_result_like(text: str) -> bool:
    return any(p in (text or "") for p in NO_RESULT_PHRASES)


def normalize_answer(answer: str | None) -> str:
    if answer is None or not answer.strip():
        return NO_RESULT_RESPONSE
    normalized = answer.strip()
    if is_no_result_like(normalized):
        return NO_RESULT_RESPONSE
    return normalized
