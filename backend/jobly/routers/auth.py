from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import allow_anyone
from jobly.schemas.user import TokenRequest, TokenResponse, UserRegister
from jobly.services.user_service import user_service
from jobly.utils.security import create_token

router = APIRouter(prefix="/auth", tags=["auth"], dependencies=[Depends(allow_anyone)])


@router.post("/token", response_model=TokenResponse)
async def issue_token(req: TokenRequest, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, req.username, req.password)
    return TokenResponse(token=create_token(user))


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(req: UserRegister, db: Session = Depends(get_db)):
    # Self-registration never grants admin rights.
    user = user_service.register(db, req, is_admin=False)
    return TokenResponse(token=create_token(user))
