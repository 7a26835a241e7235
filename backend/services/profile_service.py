"""User profile service."""

import logging

from sqlalchemy.orm import Session

from models import UserProfile
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

MISSING_PHONE_WARNING = "Please add your phone number to complete your profile"


class ProfileService:
    """Service for reading and updating the user profile row."""

    @staticmethod
    def get_profile(db: Session, auth_id: str) -> UserProfile:
        """Get the profile for an authenticated user, or raise NotFoundError."""
        profile = db.query(UserProfile).filter(UserProfile.auth_id == auth_id).first()
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def update_profile(
        self,
        db: Session,
        auth_id: str,
        *,
        full_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> tuple[UserProfile, list[str]]:
        """Update contact fields; returns the profile and any completeness warnings."""
        profile = self.get_profile(db, auth_id)

        if full_name is not None:
            profile.full_name = full_name
        if email is not None:
            profile.email = email
        if phone is not None:
            profile.phone = phone
        if address is not None:
            profile.address = address
        db.flush()
        logger.info("Profile updated for %s", auth_id)

        warnings = []
        if not (profile.phone or "").strip():
            warnings.append(MISSING_PHONE_WARNING)
        return profile, warnings
