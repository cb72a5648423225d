from sqlalchemy import Column, Integer, String, Enum
from sqlalchemy.orm import relationship
from .base import TenantModel
from schooldesk.schemas.user.role import UserRoleEnum


class User(TenantModel):
    """Staff profile. ``id`` matches the owning Identity."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=False)
    email = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(
        Enum(
            UserRoleEnum,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles]
        ),
        nullable=False
    )

    school = relationship("School", back_populates="users")
    # teacher_id is nulled in bulk before a teacher is deleted
    classes = relationship("Class", back_populates="teacher", order_by="Class.name", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
