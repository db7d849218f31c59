# tracker/core/security.py
import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from .config import settings

# Fixed work factor, never lowered per deployment
BCRYPT_ROUNDS = 12
# bcrypt ignores everything past the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

RESERVED_CLAIMS = frozenset({"sub", "exp", "iat"})


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    if len(plain_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class TokenStatus(str, enum.Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of checking an access token.

    ``claims`` is only populated when ``status`` is ``TokenStatus.VALID``.
    """

    status: TokenStatus
    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is TokenStatus.VALID

    @property
    def subject(self) -> Optional[str]:
        return self.claims.get("sub")

    @classmethod
    def valid(cls, claims: Dict[str, Any]) -> "TokenVerification":
        return cls(TokenStatus.VALID, dict(claims))

    @classmethod
    def expired(cls) -> "TokenVerification":
        return cls(TokenStatus.EXPIRED)

    @classmethod
    def invalid(cls) -> "TokenVerification":
        return cls(TokenStatus.INVALID)


def create_access_token(
    subject: str,
    extra_claims: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token for the given subject (user ID).
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload: Dict[str, Any] = {
        k: v for k, v in (extra_claims or {}).items() if k not in RESERVED_CLAIMS
    }
    payload.update({
        "sub": str(subject),
        "iat": now,
        "exp": now + expires_delta,
    })
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str) -> TokenVerification:
    """Check signature, then expiry. Never raises."""
    if not token:
        return TokenVerification.invalid()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        return TokenVerification.expired()
    except jwt.InvalidTokenError:
        return TokenVerification.invalid()

    if not isinstance(payload.get("sub"), str) or not payload["sub"]:
        return TokenVerification.invalid()
    return TokenVerification.valid(payload)
