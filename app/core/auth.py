"""
Authentication Utility - password handling.

Provides:
- Password hashing with bcrypt (cost 10)
- Constant-time verification against a stored digest

Login endpoints return identity only; no tokens are issued here.
"""

from typing import Optional

from passlib.context import CryptContext

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against hash. A missing or unreadable hash never matches."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False
