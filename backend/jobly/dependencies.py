from fastapi import Depends, Header, Request

from jobly.auth import (
    Identity,
    authenticate_token,
    ensure_admin,
    ensure_admin_or_owner,
    ensure_logged_in,
    ensure_public,
)


async def current_identity(authorization: str | None = Header(None)) -> Identity | None:
    return authenticate_token(authorization)


async def allow_anyone(identity: Identity | None = Depends(current_identity)):
    return ensure_public(identity)


async def require_logged_in(identity: Identity | None = Depends(current_identity)):
    return ensure_logged_in(identity)


async def require_admin(identity: Identity | None = Depends(current_identity)):
    return ensure_admin(identity)


async def require_admin_or_owner(
    request: Request, identity: Identity | None = Depends(current_identity)
):
    # The owner comes from the path when the route has one, else the query string.
    owner = request.path_params.get("username") or request.query_params.get("username")
    return ensure_admin_or_owner(identity, owner)
