from __future__ import annotations

SYSTEM_TEMPLATE = """\
你是一个知识库问答助手。只能依据用户提供的参考资料回答问题，不要使用资料以外的知识。

回答规则：
- 先给出直接结论，再分点补充必要细节。
- 资料中存在多个相关片段时，综合后再回答，不要逐段复述。
- 不要编造资料中不存在的事实、数字或出处。
- 如果参考资料不足以回答问题，只回复一句：“未检索到相关信息”，不要展开解释。
"""

USER_QA_TEMPLATE = """\
参考资料：
{context}

用户问题：
{question}

请基于以上参考资料，用中文简洁地回答。
"""

REWRITE_TEMPLATE = """\
请把下面的用户问题改写成更适合向量检索的查询语句：
- 补全缩写和省略的主语，保留原问题中的专有名词和技术术语。
- 不要回答问题，不要添加解释。
- 只输出一行改写后的查询。

用户问题：{question}
"""
