from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, DateTime, Float, ForeignKey, Text, Table, JSON,
)
from sqlalchemy.orm import relationship

from mealflow.models.rwmodel import RWModel as Base

DEFAULT_INGREDIENT_CATEGORY = "Other"
DEFAULT_INGREDIENT_UNIT = "units"

recipe_tags = Table(
    "recipe_tags",
    Base.metadata,
    Column("recipe_id", Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    # ordered list of instruction steps
    instructions = Column(JSON, nullable=False, default=list)
    rating = Column(Float, nullable=True)
    image_url = Column(String, nullable=True)
    prep_time = Column(Integer, nullable=True)
    cook_time = Column(Integer, nullable=True)
    servings = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    user = relationship("User", back_populates="recipes")
    recipe_ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RecipeIngredient.id",
    )
    tags = relationship(
        "Tag", secondary=recipe_tags, back_populates="recipes", order_by="Tag.name", passive_deletes=True
    )
    favorites = relationship("Favorite", back_populates="recipe", cascade="all, delete-orphan", passive_deletes=True)
    planner_entries = relationship(
        "PlannerEntry", back_populates="recipe", cascade="all, delete-orphan", passive_deletes=True
    )



class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    category = Column(String(100), nullable=False, default=DEFAULT_INGREDIENT_CATEGORY)
    unit = Column(String(50), nullable=False, default=DEFAULT_INGREDIENT_UNIT)

    recipe_ingredients = relationship("RecipeIngredient", back_populates="ingredient")


class RecipeIngredient(Base):
    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    quantity = Column(Float, nullable=False, default=0.0)

    recipe = relationship("Recipe", back_populates="recipe_ingredients")
    ingredient = relationship("Ingredient", back_populates="recipe_ingredients")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)

    recipes = relationship("Recipe", secondary=recipe_tags, back_populates="tags", passive_deletes=True)
