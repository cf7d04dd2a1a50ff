"""initial schema

Revision ID: 20261017_01
Revises: 
Create Date: 2026-10-17 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261017_01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "recipes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=140), nullable=False),
        sa.Column("recipe_type", sa.String(length=30), nullable=False),
        sa.Column("document_json", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_recipes_name"), "recipes", ["name"], unique=False)

    op.create_table(
        "library_ingredients",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("ingredient_type", sa.String(length=30), nullable=False),
        sa.Column("color", sa.Float(), nullable=True),
        sa.Column("yield_pct", sa.Float(), nullable=True),
        sa.Column("alpha", sa.Float(), nullable=True),
        sa.Column("attenuation", sa.Float(), nullable=True),
        sa.Column("form", sa.String(length=30), nullable=True),
        sa.Column("category", sa.String(length=80), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_library_ingredients_name"), "library_ingredients", ["name"], unique=False)
    op.create_index(
        op.f("ix_library_ingredients_ingredient_type"), "library_ingredients", ["ingredient_type"], unique=False
    )

    op.create_table(
        "brew_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.String(length=36), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("started_on", sa.Date(), nullable=False),
        sa.Column("brew_date", sa.Date(), nullable=True),
        sa.Column("fermentation_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("actual_og", sa.Float(), nullable=True),
        sa.Column("actual_fg", sa.Float(), nullable=True),
        sa.Column("actual_volume", sa.Float(), nullable=True),
        sa.Column("mash_temp", sa.Float(), nullable=True),
        sa.Column("boil_gravity", sa.Float(), nullable=True),
        sa.Column("fermentation_temp", sa.Float(), nullable=True),
        sa.Column("measured_alpha_json", sa.Text(), nullable=True),
        sa.Column("bottling_date", sa.Date(), nullable=True),
        sa.Column("target_co2", sa.Float(), nullable=False),
        sa.Column("sugar_type", sa.String(length=20), nullable=False),
        sa.Column("sugar_amount", sa.Float(), nullable=True),
        sa.Column("bottling_volume", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_brew_logs_id"), "brew_logs", ["id"], unique=False)
    op.create_index(op.f("ix_brew_logs_recipe_id"), "brew_logs", ["recipe_id"], unique=False)

    op.create_table(
        "tasting_notes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.String(length=36), nullable=False),
        sa.Column("brew_log_id", sa.Integer(), nullable=True),
        sa.Column("tasted_on", sa.Date(), nullable=False),
        sa.Column("appearance", sa.Integer(), nullable=False),
        sa.Column("aroma", sa.Integer(), nullable=False),
        sa.Column("flavor", sa.Integer(), nullable=False),
        sa.Column("mouthfeel", sa.Integer(), nullable=False),
        sa.Column("overall", sa.Integer(), nullable=False),
        sa.Column("comments", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["brew_log_id"], ["brew_logs.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tasting_notes_id"), "tasting_notes", ["id"], unique=False)
    op.create_index(op.f("ix_tasting_notes_recipe_id"), "tasting_notes", ["recipe_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_tasting_notes_recipe_id"), table_name="tasting_notes")
    op.drop_index(op.f("ix_tasting_notes_id"), table_name="tasting_notes")
    op.drop_table("tasting_notes")

    op.drop_index(op.f("ix_brew_logs_recipe_id"), table_name="brew_logs")
    op.drop_index(op.f("ix_brew_logs_id"), table_name="brew_logs")
    op.drop_table("brew_logs")

    op.drop_index(op.f("ix_library_ingredients_ingredient_type"), table_name="library_ingredients")
    op.drop_index(op.f("ix_library_ingredients_name"), table_name="library_ingredients")
    op.drop_table("library_ingredients")

    op.drop_index(op.f("ix_recipes_name"), table_name="recipes")
    op.drop_table("recipes")
