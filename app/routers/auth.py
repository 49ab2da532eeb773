from fastapi import APIRouter, Depends, HTTPException

from app.backend import BackendClient, get_backend
from app.schemas.auth import LoginIn, MeOut, TokenOut
from app.utils.auth import read_claims, require_admin

import logging
logger = logging.getLogger("app.auth")


router = APIRouter(prefix="/auth", tags=["Auth"])


# 登入
@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, backend: BackendClient = Depends(get_backend)):
    data = backend.login(body.username.strip(), body.password)

    token = (data or {}).get("token")
    if not token:
        raise HTTPException(status_code=502, detail="Login failed")

    logger.info("Admin login: %s", data.get("username") or body.username)
    return TokenOut(access_token=token, username=data.get("username") or body.username)


@router.get("/me", response_model=MeOut)
def get_me(token: str = Depends(require_admin)):
    claims = read_claims(token)
    return MeOut(
        username=claims.get("username") or claims.get("sub"),
        expires_at=claims.get("exp"),
        claims=claims,
    )
