"""认证路由 -- 注册与登录

POST /api/auth/register: 注册新用户（角色 USER），返回 201 + token。
POST /api/auth/login: 校验口令，返回 token。
"""

import re
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from ..deps import get_access_config, get_store_group, get_token_codec
from ..services.user_service import UserService

router = APIRouter(prefix="/api/auth")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_STRONG_PASSWORD_RE = re.compile(
    r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z])(?=.*[@#$%^&+=])(?=\S+$).{8,32}$"
)


class CredentialsRequest(BaseModel):
    """登录请求体"""

    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("Invalid email address")
        return value


class RegisterRequest(CredentialsRequest):
    """注册请求体 -- 口令必须满足强度规则"""

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        if not _STRONG_PASSWORD_RE.match(value):
            raise ValueError("Password must be strong")
        return value


class TokenResponse(BaseModel):
    """token 响应"""

    token: str
    token_type: str = "Bearer"
    expires_at: datetime


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    body: RegisterRequest,
    store_group=Depends(get_store_group),
    codec=Depends(get_token_codec),
    access_config=Depends(get_access_config),
):
    """注册新用户并签发 token"""
    service = UserService(store_group, codec, access_config)
    issued = await service.register(body.email, body.password)
    return TokenResponse(token=issued.token, expires_at=issued.expires_at)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: CredentialsRequest,
    store_group=Depends(get_store_group),
    codec=Depends(get_token_codec),
    access_config=Depends(get_access_config),
):
    """登录"""
    service = UserService(store_group, codec, access_config)
    issued = await service.login(body.email, body.password)
    return TokenResponse(token=issued.token, expires_at=issued.expires_at)
