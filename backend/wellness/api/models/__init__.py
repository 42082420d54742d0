from .chat import (
    AdviceDomainResponse,
    AdviceDomainsResponse,
    AssistantOverviewResponse,
    ChatMessage,
    ChatRequest,
    UserInfo,
)
from .error import ErrorResponse, RelayErrorResponse

__all__ = [
    "ErrorResponse",
    "RelayErrorResponse",
    "AdviceDomainResponse",
    "AdviceDomainsResponse",
    "AssistantOverviewResponse",
    "ChatMessage",
    "ChatRequest",
    "UserInfo",
]
