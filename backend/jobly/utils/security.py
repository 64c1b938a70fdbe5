import time

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError
from jose import jwt

from jobly.config import settings

ph = PasswordHasher(time_cost=3, memory_cost=65536, parallelism=4)


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(stored_hash: str, password: str) -> bool:
    try:
        return ph.verify(stored_hash, password)
    except VerifyMismatchError:
        return False


def create_token(user: dict) -> str:
    """Sign a bearer token carrying the user's name and admin flag."""
    now = int(time.time())
    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "iat": now,
        "exp": now + settings.token_ttl_seconds,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.token_algorithm)


def decode_token(token: str) -> dict:
    """Return the verified payload. Raises ``jose.JWTError`` on any failure."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
