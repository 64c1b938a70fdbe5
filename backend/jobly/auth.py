"""Authorization policies applied to each request.

``authenticate_token`` turns the ``Authorization`` header into an
:class:`Identity`, or ``None`` when there is no usable token. A bad token is
treated exactly like a missing one so public routes keep working; it is up to
the policy functions below to reject anonymous callers where a route needs an
identity.
"""
import logging
import re

from jose import JWTError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jobly.errors import ForbiddenError, UnauthorizedError
from jobly.utils.security import decode_token

logger = logging.getLogger("jobly.auth")

_BEARER_RE = re.compile(r"^[Bb]earer ")


class Identity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    is_admin: bool = Field(False, alias="isAdmin")


def authenticate_token(authorization: str | None) -> Identity | None:
    if not authorization:
        return None
    token = _BEARER_RE.sub("", authorization).strip()
    try:
        return Identity.model_validate(decode_token(token))
    except (JWTError, ValidationError) as exc:
        logger.debug("Ignoring unusable bearer token: %s", exc)
        return None


def ensure_public(identity: Identity | None) -> Identity | None:
    return identity


def ensure_logged_in(identity: Identity | None) -> Identity:
    if identity is None:
        raise UnauthorizedError()
    return identity


def ensure_admin(identity: Identity | None) -> Identity:
    if identity is None:
        raise ForbiddenError("You must be logged in to perform this action.")
    if not identity.is_admin:
        raise ForbiddenError("You do not have permission to perform this action.")
    return identity


def ensure_admin_or_owner(identity: Identity | None, owner: str | None) -> Identity:
    """Allow admins, and users acting on a resource that belongs to them."""
    if identity is None:
        raise ForbiddenError("You must be logged in to perform this action.")
    if identity.is_admin or identity.username == owner:
        return identity
    raise ForbiddenError("You do not have permission to perform this action.")
