from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from tokenapi.config import Settings
from tokenapi.deps import get_auth_service, get_settings
from tokenapi.services.auth_service import AuthService
from tokenapi.schemas.user import User as UserSchema
from tokenapi.core.exceptions import AuthenticationError, AuthorizationError

# 목업 인증: 토큰 == 사용자 id
USER_ID_HEADER = "user-id"

security = HTTPBearer(auto_error=False)


def _extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """`user-id` 헤더 우선, 없으면 `Authorization: Bearer <id>`"""
    raw = request.headers.get(USER_ID_HEADER)
    if raw and raw.strip():
        return raw.strip()
    if credentials and credentials.credentials:
        return credentials.credentials
    return None


async def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[UserSchema]:
    """선택적 사용자 인증 - 토큰이 없거나 유효하지 않아도 None 반환"""
    token = _extract_token(request, credentials)
    if token is None:
        return None
    return auth_service.get_current_user(token)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserSchema:
    """필수 사용자 인증 - 존재하는 사용자 id 가 필요함"""
    token = _extract_token(request, credentials)
    if token is None:
        raise AuthenticationError("Authentication required")

    user = auth_service.get_current_user(token)
    if user is None:
        raise AuthenticationError("Invalid authentication")
    return user


async def require_admin(
    current_user: UserSchema = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> UserSchema:
    """관리자 권한이 필요한 엔드포인트용 의존성"""
    if current_user.id != settings.ADMIN_USER_ID:
        raise AuthorizationError("Admin access required")
    return current_user
