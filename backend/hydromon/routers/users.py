"""User management: identity-service account plus the matching profiles row."""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hydromon.database import get_db
from hydromon.dependencies import get_identity_client
from hydromon.models import UserProfile
from hydromon.schemas import SuccessResponse, UserCreate, UserResponse, UserUpdate
from hydromon.services.identity import IdentityClient
from hydromon.services.saga import Saga

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _identity_user_id(body: dict) -> UUID:
    user = body.get("user", body)
    return UUID(str(user["id"]))


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def get_profile_or_404(db: Session, user_id: UUID) -> UserProfile:
    profile = db.query(UserProfile).filter(UserProfile.id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return db.query(UserProfile).order_by(UserProfile.created_at.desc()).all()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    return get_profile_or_404(db, user_id)


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
):
    """Create the identity account, then its profile.

    If the profile insert fails the identity account is deleted again.
    """
    email = data.email.lower()
    if db.query(UserProfile).filter(UserProfile.email == email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    async with Saga("create_user") as saga:
        created = await saga.step(
            "identity.create",
            lambda: identity.create_user(email, data.password),
            compensate=lambda: identity.delete_user(str(_identity_user_id(created))),
        )
        profile = UserProfile(id=_identity_user_id(created), email=email, role=data.role)
        db.add(profile)
        await saga.step("profile.insert", lambda: _commit(db))

    db.refresh(profile)
    logger.info("User created: %s", profile.id)
    return profile


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
):
    """Update identity account and profile.

    The profile change is staged first and only committed once the identity
    service accepted the update. If the commit still fails, the previous
    email is restored on the identity side.
    """
    profile = get_profile_or_404(db, user_id)
    previous_email = profile.email
    email = data.email.lower()

    async with Saga("update_user") as saga:
        profile.email = email
        profile.role = data.role
        await saga.step("profile.stage", db.flush, compensate=db.rollback)
        await saga.step(
            "identity.update",
            lambda: identity.update_user(str(user_id), email, data.password),
            compensate=lambda: identity.update_user(str(user_id), previous_email),
        )
        await saga.step("profile.commit", lambda: _commit(db))

    db.refresh(profile)
    logger.info("User updated: %s", user_id)
    return profile


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
):
    """Delete the identity account and the profile row together."""
    profile = db.query(UserProfile).filter(UserProfile.id == user_id).first()

    async with Saga("delete_user") as saga:
        if profile is not None:
            db.delete(profile)
            await saga.step("profile.stage", db.flush, compensate=db.rollback)
        await saga.step("identity.delete", lambda: identity.delete_user(str(user_id)))
        await saga.step("profile.commit", lambda: _commit(db))

    logger.info("User deleted: %s", user_id)
    return SuccessResponse()
