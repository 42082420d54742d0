"""
Request and response models for the chat relay and assistant info endpoints.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One conversation turn. Unknown keys are kept and forwarded upstream."""

    model_config = ConfigDict(extra="allow")

    role: Literal["system", "user", "assistant"]
    content: str


class UserInfo(BaseModel):
    """Optional identity hint used to personalize the system prompt."""

    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    email: Optional[str] = None


class ChatRequest(BaseModel):
    """Payload for the chat relay.

    - messages: conversation history, oldest first
    - userInfo: optional caller identity hint
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage] = Field(..., min_length=1)
    user_info: Optional[UserInfo] = Field(default=None, alias="userInfo")


class AdviceDomainResponse(BaseModel):
    key: str
    title: str
    summary: str


class AdviceDomainsResponse(BaseModel):
    domains: List[AdviceDomainResponse]


class AssistantOverviewResponse(BaseModel):
    """Admin view of the AI assistant configuration."""

    status: Literal["ok", "not_configured"]
    model: str
    gateway_url: str
    domains: List[AdviceDomainResponse]
