"""UserProfile model - public profile row for an authenticated user."""

from sqlalchemy import Column, String

from database import Base
from models.utils import generate_uuid


class UserProfile(Base):
    """Contact details shown on the profile page.

    ``auth_id`` is the identifier issued by the authentication provider.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    auth_id = Column(String, nullable=False, unique=True, index=True)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
