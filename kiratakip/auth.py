import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, Request, Response
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .models import User

JWT_ALG = "HS256"

logger = logging.getLogger(__name__)

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)


def verify_password(p: str, hashed: str) -> bool:
    return pwd_ctx.verify(p, hashed)


def create_access_token(sub: str, role: str) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=JWT_ALG)


def set_session_cookie(response: Response, user: User) -> None:
    settings = get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        create_access_token(str(user.id), user.role),
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(get_settings().session_cookie_name)


def get_session(request: Request) -> dict:
    """Decoded session token from the cookie; 401 when absent or invalid."""
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        decoded = jwt.decode(token, settings.secret_key, algorithms=[JWT_ALG])
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")
    return decoded  # dict with sub, role


def authenticate(session: dict = Depends(get_session), db: Session = Depends(get_db)) -> User:
    try:
        user_id = int(session["sub"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid session")
    user = db.get(User, user_id)
    if user is None:
        logger.warning("Session for unknown user %s", session["sub"])
        raise HTTPException(status_code=401, detail="Invalid session")
    return user


def require_role(*roles: str):
    def dep(session: dict = Depends(get_session)):
        if roles and session.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Insufficient role")
        return session
    return dep
