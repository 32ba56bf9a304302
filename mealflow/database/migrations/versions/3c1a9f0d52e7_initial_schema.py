"""Initial schema

Revision ID: 3c1a9f0d52e7
Revises:
Create Date: 2025-01-20 10:12:44.318905

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1a9f0d52e7'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('users',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('email', sa.String(length=255), nullable=False),
                    sa.Column('name', sa.String(length=255), nullable=False),
                    sa.Column('hashed_password', sa.String(length=256), nullable=False),
                    sa.Column('role', sa.Enum('USER', 'ADMIN', name='roleenum'), nullable=False),
                    sa.Column('created_at', sa.DateTime(), nullable=False),
                    sa.Column('updated_at', sa.DateTime(), nullable=False),
                    sa.PrimaryKeyConstraint('id')
                    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('ingredients',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('name', sa.String(length=255), nullable=False),
                    sa.Column('category', sa.String(length=100), nullable=False),
                    sa.Column('unit', sa.String(length=50), nullable=False),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('name')
                    )
    op.create_index('ix_ingredients_id', 'ingredients', ['id'], unique=False)

    op.create_table('tags',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('name', sa.String(length=255), nullable=False),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('name')
                    )
    op.create_index('ix_tags_id', 'tags', ['id'], unique=False)

    op.create_table('recipes',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=False),
                    sa.Column('title', sa.String(length=255), nullable=False),
                    sa.Column('description', sa.Text(), nullable=True),
                    sa.Column('instructions', sa.JSON(), nullable=False),
                    sa.Column('rating', sa.Float(), nullable=True),
                    sa.Column('image_url', sa.String(), nullable=True),
                    sa.Column('prep_time', sa.Integer(), nullable=True),
                    sa.Column('cook_time', sa.Integer(), nullable=True),
                    sa.Column('servings', sa.Integer(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=False),
                    sa.Column('updated_at', sa.DateTime(), nullable=False),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
                    sa.PrimaryKeyConstraint('id')
                    )
    op.create_index('ix_recipes_id', 'recipes', ['id'], unique=False)
    op.create_index('ix_recipes_user_id', 'recipes', ['user_id'], unique=False)
    op.create_index('ix_recipes_title', 'recipes', ['title'], unique=False)

    op.create_table('recipe_tags',
                    sa.Column('recipe_id', sa.Integer(), nullable=False),
                    sa.Column('tag_id', sa.Integer(), nullable=False),
                    sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
                    sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
                    sa.PrimaryKeyConstraint('recipe_id', 'tag_id')
                    )

    op.create_table('recipe_ingredients',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('recipe_id', sa.Integer(), nullable=False),
                    sa.Column('ingredient_id', sa.Integer(), nullable=False),
                    sa.Column('quantity', sa.Float(), nullable=False),
                    sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
                    sa.ForeignKeyConstraint(['ingredient_id'], ['ingredients.id']),
                    sa.PrimaryKeyConstraint('id')
                    )
    op.create_index('ix_recipe_ingredients_id', 'recipe_ingredients', ['id'], unique=False)
    op.create_index('ix_recipe_ingredients_recipe_id', 'recipe_ingredients', ['recipe_id'], unique=False)

    op.create_table('weekly_plans',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=False),
                    sa.Column('week_start', sa.DateTime(), nullable=False),
                    sa.Column('week_end', sa.DateTime(), nullable=False),
                    sa.Column('created_at', sa.DateTime(), nullable=False),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('user_id', 'week_start', name='uq_weekly_plan_user_week')
                    )
    op.create_index('ix_weekly_plans_id', 'weekly_plans', ['id'], unique=False)
    op.create_index('ix_weekly_plans_user_id', 'weekly_plans', ['user_id'], unique=False)
    op.create_index('ix_weekly_plans_week_start', 'weekly_plans', ['week_start'], unique=False)

    op.create_table('planner_entries',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('weekly_plan_id', sa.Integer(), nullable=False),
                    sa.Column('recipe_id', sa.Integer(), nullable=False),
                    sa.Column('day_of_week', sa.Integer(), nullable=False),
                    sa.Column('meal_type', sa.Enum('Breakfast', 'Lunch', 'Dinner', 'Snack', name='mealtypeenum'),
                              nullable=False),
                    sa.Column('created_at', sa.DateTime(), nullable=False),
                    sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_planner_entry_day_of_week'),
                    sa.ForeignKeyConstraint(['weekly_plan_id'], ['weekly_plans.id'], ondelete='CASCADE'),
                    sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
                    sa.PrimaryKeyConstraint('id')
                    )
    op.create_index('ix_planner_entries_id', 'planner_entries', ['id'], unique=False)
    op.create_index('ix_planner_entries_weekly_plan_id', 'planner_entries', ['weekly_plan_id'], unique=False)

    op.create_table('favorites',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=False),
                    sa.Column('recipe_id', sa.Integer(), nullable=False),
                    sa.Column('created_at', sa.DateTime(), nullable=False),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
                    sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], ondelete='CASCADE'),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('user_id', 'recipe_id', name='unique_user_recipe_favorite')
                    )
    op.create_index('ix_favorites_id', 'favorites', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_favorites_id', table_name='favorites')
    op.drop_table('favorites')
    op.drop_index('ix_planner_entries_weekly_plan_id', table_name='planner_entries')
    op.drop_index('ix_planner_entries_id', table_name='planner_entries')
    op.drop_table('planner_entries')
    op.drop_index('ix_weekly_plans_week_start', table_name='weekly_plans')
    op.drop_index('ix_weekly_plans_user_id', table_name='weekly_plans')
    op.drop_index('ix_weekly_plans_id', table_name='weekly_plans')
    op.drop_table('weekly_plans')
    op.drop_index('ix_recipe_ingredients_recipe_id', table_name='recipe_ingredients')
    op.drop_index('ix_recipe_ingredients_id', table_name='recipe_ingredients')
    op.drop_table('recipe_ingredients')
    op.drop_table('recipe_tags')
    op.drop_index('ix_recipes_title', table_name='recipes')
    op.drop_index('ix_recipes_user_id', table_name='recipes')
    op.drop_index('ix_recipes_id', table_name='recipes')
    op.drop_table('recipes')
    op.drop_index('ix_tags_id', table_name='tags')
    op.drop_table('tags')
    op.drop_index('ix_ingredients_id', table_name='ingredients')
    op.drop_table('ingredients')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')

    sa.Enum(name='mealtypeenum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='roleenum').drop(op.get_bind(), checkfirst=True)
