from typing import Any, Optional
from pydantic import BaseModel


class LoginIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: Optional[str] = None


class MeOut(BaseModel):
    username: Optional[str] = None
    expires_at: Optional[int] = None
    claims: dict[str, Any]
