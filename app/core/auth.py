# app/core/auth.py
from uuid import UUID

import jwt
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database.db import get_session
from app.core.security import decode_token
from users.models.user import User
from users.repositories.user_repository import UserRepository


def _extract_bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None

async def optional_current_user(
    request: Request,
    db: AsyncSession = Depends(get_session),
) -> User | None:
    """
    Returns the current user if a valid Bearer token is provided.
    Returns None if no/invalid token is provided (does NOT raise).

    Authorization decisions (403 vs 404) are made by the access validator,
    so an anonymous caller is passed along as ``None``.
    """
    token = _extract_bearer_token(request)
    if not token:
        return None
    try:
        payload = decode_token(token)
        user_id = UUID(str(payload.get("sub") or ""))
    except (jwt.PyJWTError, ValueError):
        return None

    repo = UserRepository(db)
    user = await repo.get(user_id)
    if not user or not user.is_active:
        return None
    return user
