"""Auth endpoints: sign-up, log-in, current user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.application.use_cases.auth import AuthResult, LoginUseCase, SignUpUseCase
from territory_hub.domain.entities.user import User
from territory_hub.infrastructure.api.dependencies import (
    get_current_user,
    get_login_uc,
    get_signup_uc,
)
from territory_hub.infrastructure.api.schemas import LoginIn, SignUpIn, TokenOut, UserOut

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_out(result: AuthResult) -> TokenOut:
    return TokenOut(
        access_token=result.access_token,
        user=UserOut.model_validate(result.user),
    )


@router.post("/signup", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignUpIn,
    uc: SignUpUseCase = Depends(get_signup_uc),
    session: AsyncSession = Depends(get_session),
):
    """Create an account. The first account becomes administrator."""
    result = await uc.execute(body.name, body.email, body.password)
    await session.commit()
    return _token_out(result)


@router.post("/login", response_model=TokenOut)
async def login(body: LoginIn, uc: LoginUseCase = Depends(get_login_uc)):
    return _token_out(await uc.execute(body.email, body.password))


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return UserOut.model_validate(user)
