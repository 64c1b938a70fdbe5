from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import require_admin, require_admin_or_owner, require_logged_in
from jobly.schemas.user import (
    UserCreate,
    UserCreatedResponse,
    UserDeletedResponse,
    UserEnvelope,
)
from jobly.services.user_service import user_service
from jobly.utils.security import create_token

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=201,
    dependencies=[Depends(require_logged_in), Depends(require_admin)],
)
async def create_user(req: UserCreate, db: Session = Depends(get_db)):
    user = user_service.register(db, req, is_admin=req.is_admin)
    return {"user": user, "token": create_token(user)}


@router.get(
    "/{username}",
    response_model=UserEnvelope,
    dependencies=[Depends(require_admin_or_owner)],
)
async def get_user(username: str, db: Session = Depends(get_db)):
    return {"user": user_service.get(db, username)}


@router.delete(
    "/{username}",
    response_model=UserDeletedResponse,
    dependencies=[Depends(require_admin_or_owner)],
)
async def delete_user(username: str, db: Session = Depends(get_db)):
    user_service.remove(db, username)
    return {"deleted": username}
