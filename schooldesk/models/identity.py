from sqlalchemy import Column, Integer, String, Boolean
from .base import Base, TimestampMixin


class Identity(TimestampMixin, Base):
    """
    Login credentials, kept apart from the profile row in ``users``.
    The profile shares this row's id.
    """
    __tablename__ = "auth_identities"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    email_confirmed = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Identity(id={self.id}, email={self.email})>"
