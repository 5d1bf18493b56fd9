from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..schemas.auth import LoginIn, LoginOut
from ..services.auth_service import authenticate
from ..db import get_session

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, session: Session = Depends(get_session)):
    user, token = authenticate(session, payload.nik, payload.password, payload.fcm_token)
    return LoginOut(user=user, token=token)
