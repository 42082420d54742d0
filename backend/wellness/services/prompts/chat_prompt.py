"""
Health assistant prompts for the chat relay.

The system prompt scopes the assistant to six advice domains; the domain list
inside the prompt is rendered from ``ADVICE_DOMAINS`` so the admin overview and
the prompt never drift apart.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AdviceDomain:
    key: str
    title: str
    summary: str


ADVICE_DOMAINS = (
    AdviceDomain("nutrition", "营养饮食", "健康饮食搭配、营养素知识、食疗养生"),
    AdviceDomain("exercise", "运动健身", "适合不同人群的运动方案、运动注意事项"),
    AdviceDomain("mental_health", "心理健康", "压力管理、情绪调节、睡眠改善"),
    AdviceDomain("chronic_disease", "慢病管理", "高血压、糖尿病等慢性病的日常管理建议"),
    AdviceDomain("tcm", "中医养生", "中医养生理念、穴位保健、四季养生"),
    AdviceDomain("elder_care", "老年健康", "老年人的健康保健、常见问题应对"),
)

_DOMAIN_LINES = "\n".join(f"- {d.title}：{d.summary}" for d in ADVICE_DOMAINS)

CHAT_SYSTEM_PROMPT = f"""你是一个专业的健康养生AI助手，专注于为用户提供健康相关的咨询和建议。

你的专业领域包括：
{_DOMAIN_LINES}

回答要求：
1. 用通俗易懂的语言解释专业知识
2. 给出具体可行的建议
3. 必要时提醒用户咨询专业医生
4. 回答简洁明了，条理清晰
5. 保持友好、耐心的态度

重要提醒：你提供的是健康建议，不能替代专业医疗诊断。如遇严重健康问题，请建议用户及时就医。"""

PERSONALIZATION_TEMPLATE = """

当前用户信息：
- 用户名：{username}
- 邮箱：{email}

请在对话中适当称呼用户的名字，让对话更加亲切。"""

EMAIL_NOT_PROVIDED = "未提供"


def build_system_prompt(
    username: Optional[str] = None, email: Optional[str] = None
) -> str:
    """
    Build the system prompt sent ahead of the conversation.

    A personalization clause is appended only when a username is given.
    """
    if not username:
        return CHAT_SYSTEM_PROMPT
    return CHAT_SYSTEM_PROMPT + PERSONALIZATION_TEMPLATE.format(
        username=username, email=email or EMAIL_NOT_PROVIDED
    )
