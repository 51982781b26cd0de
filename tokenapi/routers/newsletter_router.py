from fastapi import APIRouter, Depends, status
import logging

from tokenapi.core.auth_middleware import require_admin
from tokenapi.deps import get_newsletter_service
from tokenapi.schemas.auth import BaseResponse
from tokenapi.schemas.news import SubscribeRequest
from tokenapi.schemas.user import User as UserSchema
from tokenapi.services.newsletter_service import NewsletterService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["newsletter"])


@router.post("/subscribe", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(
    payload: SubscribeRequest,
    newsletter_service: NewsletterService = Depends(get_newsletter_service),
) -> BaseResponse:
    subscriber = newsletter_service.subscribe(payload.email)
    return BaseResponse(
        success=True,
        data={
            "message": "Successfully subscribed",
            "subscriber": {"id": subscriber.id, "email": subscriber.email},
        },
    )


@router.post("/unsubscribe", response_model=BaseResponse)
async def unsubscribe(
    payload: SubscribeRequest,
    newsletter_service: NewsletterService = Depends(get_newsletter_service),
) -> BaseResponse:
    newsletter_service.unsubscribe(payload.email)
    return BaseResponse(success=True, data={"message": "Successfully unsubscribed"})


@router.get("/subscribers", response_model=BaseResponse)
async def get_subscribers(
    admin: UserSchema = Depends(require_admin),
    newsletter_service: NewsletterService = Depends(get_newsletter_service),
) -> BaseResponse:
    """활성 구독자 목록 (관리자)"""
    subscribers = newsletter_service.list_active()
    return BaseResponse(success=True, data={"subscribers": subscribers})
