"""
API endpoints for user profile, preferences and stats.
"""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.db.repositories import UserRepository
from app.models.user import User
from app.schemas.user import PreferencesUpdate, User as UserSchema, UserPreferences, UserStats

logger = logging.getLogger(__name__)

router = APIRouter()


class UserResponse(BaseModel):
    success: bool = True
    user: UserSchema


def _to_schema(user: User) -> UserSchema:
    return UserSchema(
        user_id=user.id,
        name=user.name,
        email=user.email,
        preferences=UserPreferences.model_validate(user),
        stats=UserStats.model_validate(user),
        created_at=user.created_at,
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """
    Get a user's preferences and stats.

    A user seen for the first time is created with default preferences.
    """
    user = UserRepository(db).get_or_create(user_id)
    return UserResponse(user=_to_schema(user))


@router.put("/{user_id}/preferences", response_model=UserResponse)
def update_preferences(
    user_id: str,
    payload: PreferencesUpdate,
    db: Session = Depends(get_db),
):
    """Update the supplied preference fields only."""
    users = UserRepository(db)
    user = users.get_or_create(user_id)
    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, field, value)
    users.save(user)
    logger.info(f"Updated preferences for user {user_id}")
    return UserResponse(user=_to_schema(user))
