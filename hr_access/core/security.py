from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from hr_access.core.config import Settings, settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(ValueError):
    """Bearer token is malformed, expired, or names no subject."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    config: Optional[Settings] = None,
) -> tuple[str, datetime]:
    """Sign a token for ``subject``.

    No role claim is issued: the role is resolved from storage on every
    request. Lifetime defaults to ``access_token_expire_minutes``.
    """
    config = config or settings
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=config.access_token_expire_minutes))
    claims: dict[str, Any] = {"sub": subject, "iat": issued_at, "exp": expire}
    return jwt.encode(claims, config.secret_key, algorithm=config.algorithm), expire


def subject_from_token(token: str, config: Optional[Settings] = None) -> str:
    config = config or settings
    try:
        claims = jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expired") from exc
    except JWTError as exc:
        raise InvalidTokenError("Invalid token") from exc

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise InvalidTokenError("Token has no subject")
    return subject
