# base.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import declarative_base, declared_attr
from sqlalchemy.sql import func

Base = declarative_base()


class TimestampMixin:
    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @declared_attr
    def updated_at(cls):
        return Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class TenantModel(TimestampMixin, Base):
    """
    A base mixin for multi-tenant rows.
    school_id is nullable: deleting a school detaches its rows instead of removing them.
    """
    __abstract__ = True

    @declared_attr
    def school_id(cls):
        return Column(Integer, ForeignKey("schools.id", ondelete="SET NULL"), nullable=True, index=True)
