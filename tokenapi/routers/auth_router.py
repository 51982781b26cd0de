from fastapi import APIRouter, Depends, status
import logging

from tokenapi.core.auth_middleware import get_current_user
from tokenapi.deps import get_auth_service
from tokenapi.services.auth_service import AuthService
from tokenapi.schemas.auth import (
    BaseResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
    ResetRequest,
    VerifyRequest,
)
from tokenapi.schemas.user import User as UserSchema, UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If your email is registered, you will receive a password reset link"
)


@router.post(
    "/register", response_model=BaseResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> BaseResponse:
    """회원가입 - 데모용으로 이메일 검증 토큰을 응답에 포함"""
    user = auth_service.register(payload)
    return BaseResponse(
        success=True,
        data={
            "message": "User registered successfully",
            "user": UserPublic.model_validate(user),
            "verification_token": user.verification_token,
        },
    )


@router.post("/login", response_model=BaseResponse)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> BaseResponse:
    user = auth_service.login(payload.username, payload.password)
    return BaseResponse(
        success=True,
        data={
            "message": "Login successful",
            "user": UserPublic.model_validate(user),
            "auth": LoginResponse(token=str(user.id), user_id=user.id),
        },
    )


@router.post("/request-reset", response_model=BaseResponse)
async def request_password_reset(
    payload: ResetRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> BaseResponse:
    """가입 여부와 관계없이 같은 메시지 - 토큰은 가입된 경우에만 포함 (데모)"""
    token = auth_service.request_password_reset(payload.email)
    data = {"message": RESET_REQUESTED_MESSAGE}
    if token:
        data["token"] = token
    return BaseResponse(success=True, data=data)


@router.post("/reset-password", response_model=BaseResponse)
async def reset_password(
    payload: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> BaseResponse:
    auth_service.reset_password(payload)
    return BaseResponse(success=True, data={"message": "Password reset successful"})


@router.post("/verify", response_model=BaseResponse)
async def verify_email(
    payload: VerifyRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> BaseResponse:
    user = auth_service.verify_email(payload.token)
    return BaseResponse(
        success=True,
        data={"message": "Email verified", "user": UserPublic.model_validate(user)},
    )


@router.get("/profile", response_model=BaseResponse)
async def get_profile(
    current_user: UserSchema = Depends(get_current_user),
) -> BaseResponse:
    """현재 사용자 프로필 조회"""
    return BaseResponse(
        success=True, data={"user": UserPublic.model_validate(current_user)}
    )
