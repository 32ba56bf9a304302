from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, Enum as SAEnum, Integer, String
from sqlalchemy.orm import relationship

from mealflow.core import security
from mealflow.models.rwmodel import RWModel as Base


class RoleEnum(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    hashed_password = Column(String(256), nullable=False)
    role = Column(SAEnum(RoleEnum, name="roleenum"), default=RoleEnum.USER, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    recipes = relationship(
        "Recipe", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    weekly_plans = relationship(
        "WeeklyPlan", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    favorites = relationship(
        "Favorite", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def check_password(self, password: str) -> bool:
        return security.verify_password(password, self.hashed_password)

    def change_password(self, password: str) -> None:
        self.hashed_password = security.get_password_hash(password)
