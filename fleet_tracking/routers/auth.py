"""
Authentication endpoints
"""

import hmac
import logging

from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordRequestForm

from fleet_tracking.auth import create_access_token, get_current_user
from fleet_tracking.schemas import LoginResponse
from fleet_tracking.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Issue a bearer token for the configured dashboard credentials

    There is no user store; AUTH_USERNAME / AUTH_PASSWORD guard the demo.
    """
    username_ok = hmac.compare_digest(form_data.username.encode(), settings.AUTH_USERNAME.encode())
    password_ok = hmac.compare_digest(form_data.password.encode(), settings.AUTH_PASSWORD.encode())
    if not (username_ok and password_ok):
        logger.info(f"Rejected login for {form_data.username!r}")
        raise HTTPException(status_code=401, detail="Incorrect username or password")

    access_token = create_access_token(data={"sub": form_data.username})
    return LoginResponse(access_token=access_token)


@router.get("/me")
async def me(current_user: str = Depends(get_current_user)):
    """Return the subject of the presented token"""
    return {"username": current_user}
