from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from edvora.auth import jwt_handler

security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    token = credentials.credentials if credentials else None
    return jwt_handler.verify_token(token)


def get_current_user_id(claims: dict = Depends(get_current_claims)) -> str:
    return str(claims.get("userId") or claims["sub"])
