"""SQLAlchemy declarative base for videoform_db models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
