"""User profile API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.errors import handler_errors
from database import get_db
from schemas.profile import ProfileResponse, ProfileUpdate, ProfileUpdateResponse
from services.profile_service import ProfileService

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/{auth_id}", response_model=ProfileResponse)
def get_profile(auth_id: str, db: Session = Depends(get_db)):
    """Get the profile of an authenticated user."""
    return ProfileService.get_profile(db, auth_id)


@router.put("/{auth_id}", response_model=ProfileUpdateResponse)
def update_profile(auth_id: str, body: ProfileUpdate, db: Session = Depends(get_db)):
    """Update contact details; ``warnings`` lists missing profile fields."""
    with handler_errors("Failed to update profile"):
        profile, warnings = ProfileService().update_profile(db, auth_id, **body.model_dump())
        db.commit()
        db.refresh(profile)
    return ProfileUpdateResponse(
        profile=ProfileResponse.model_validate(profile),
        warnings=warnings,
    )
