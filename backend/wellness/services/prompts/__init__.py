from .chat_prompt import (
    ADVICE_DOMAINS,
    CHAT_SYSTEM_PROMPT,
    AdviceDomain,
    build_system_prompt,
)

__all__ = [
    "ADVICE_DOMAINS",
    "CHAT_SYSTEM_PROMPT",
    "AdviceDomain",
    "build_system_prompt",
]
