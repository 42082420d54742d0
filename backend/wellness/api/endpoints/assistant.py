"""
AI assistant information endpoints.
Public listing of the advice domains and the admin overview of the assistant.
"""
from typing import List

from fastapi import APIRouter, Depends

from wellness.api.dependencies.auth import require_admin
from wellness.api.models import (
    AdviceDomainResponse,
    AdviceDomainsResponse,
    AssistantOverviewResponse,
    ErrorResponse,
)
from wellness.config.settings import Settings, get_settings
from wellness.services.prompts import ADVICE_DOMAINS

router = APIRouter()


def _domains() -> List[AdviceDomainResponse]:
    return [
        AdviceDomainResponse(key=d.key, title=d.title, summary=d.summary)
        for d in ADVICE_DOMAINS
    ]


@router.get("/ai-chat/domains", response_model=AdviceDomainsResponse)
async def list_advice_domains():
    """Advice domains the assistant is allowed to cover."""
    return AdviceDomainsResponse(domains=_domains())


@router.get(
    "/admin/ai-assistant",
    response_model=AssistantOverviewResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        403: {"model": ErrorResponse, "description": "Admin role required"},
    },
)
def assistant_overview(
    _admin_id: str = Depends(require_admin),
    settings: Settings = Depends(get_settings),
):
    """Service status and model in use, for the admin back office."""
    return AssistantOverviewResponse(
        status="ok" if settings.ai_gateway_configured else "not_configured",
        model=settings.ai_gateway_model,
        gateway_url=settings.ai_gateway_url,
        domains=_domains(),
    )
