"""
Authentication Routes

POST /auth/register - Register new student account (empty profile included)
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from portal.db.postgres import get_db
from portal.db.tables import User
from portal.core.auth import hash_password, verify_password, create_access_token, get_current_user
from portal.services.record_service import ProfileService
from portal.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new student account.

    An empty profile is created with the account; fill it in with
    PUT /students/profile before applying. Admin accounts are created
    with scripts/create_admin.py.
    """
    email = request.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(email=email, password_hash=hash_password(request.password), role="student")
    db.add(user)
    db.flush()
    ProfileService(db).create_empty(user.user_id, email=email)

    logger.info(f"Registered student account {user.user_id}")
    return MessageResponse(message="Registered successfully. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = db.query(User).filter(User.email == request.email.lower()).first()

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    if not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": str(user.user_id), "role": user.role})

    return TokenResponse(access_token=token, user_id=user.user_id, role=user.role)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get current authenticated user's info."""
    row = db.get(User, user["user_id"])
    return UserResponse(
        user_id=row.user_id, email=row.email, role=row.role,
        is_active=row.is_active, created_at=row.created_at
    )
