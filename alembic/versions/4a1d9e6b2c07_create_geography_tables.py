"""create geography tables

Revision ID: 4a1d9e6b2c07
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a1d9e6b2c07"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
            server_onupdate=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "countries",
        sa.Column("country_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(length=2), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("continent", sa.String(length=2), nullable=True),
        sa.Column("wikipedia", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("code", name="uq_countries_code"),
    )
    op.create_index("ix_countries_name", "countries", ["name"])

    op.create_table(
        "regions",
        sa.Column("region_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "country_id",
            sa.BigInteger(),
            sa.ForeignKey("countries.country_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("code", sa.String(length=16), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("wikipedia", sa.String(length=255), nullable=True),
        sa.UniqueConstraint("code", name="uq_regions_code"),
    )
    op.create_index("ix_regions_country_id", "regions", ["country_id"])

    op.create_table(
        "airports",
        sa.Column("airport_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(length=4), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("type", sa.String(length=32), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("elevation", sa.Integer(), nullable=True),
        sa.Column(
            "country_id",
            sa.BigInteger(),
            sa.ForeignKey("countries.country_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "region_id",
            sa.BigInteger(),
            sa.ForeignKey("regions.region_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("municipality", sa.String(length=120), nullable=True),
        sa.Column("iata_code", sa.String(length=3), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("wikipedia", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("code", name="uq_airports_code"),
    )
    op.create_index("ix_airports_iata_code", "airports", ["iata_code"])
    op.create_index("ix_airports_country_id", "airports", ["country_id"])
    op.create_index("ix_airports_region_id", "airports", ["region_id"])

    runway_end_columns = []
    for prefix in ("le", "he"):
        runway_end_columns.extend(
            [
                sa.Column(f"{prefix}_code", sa.String(length=16), nullable=prefix == "he"),
                sa.Column(f"{prefix}_latitude", sa.Float(), nullable=True),
                sa.Column(f"{prefix}_longitude", sa.Float(), nullable=True),
                sa.Column(f"{prefix}_elevation", sa.Integer(), nullable=True),
                sa.Column(f"{prefix}_heading", sa.Integer(), nullable=True),
                sa.Column(f"{prefix}_threshold", sa.Integer(), nullable=True),
            ]
        )

    op.create_table(
        "runways",
        sa.Column("runway_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "airport_id",
            sa.BigInteger(),
            sa.ForeignKey("airports.airport_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("length", sa.Integer(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("surface", sa.String(length=64), nullable=True),
        sa.Column("lighted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("closed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *runway_end_columns,
    )
    op.create_index("ix_runways_airport_id", "runways", ["airport_id"])

    op.create_table(
        "frequencies",
        sa.Column("frequency_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "airport_id",
            sa.BigInteger(),
            sa.ForeignKey("airports.airport_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=True),
        sa.Column("mhz", sa.Float(), nullable=False),
    )
    op.create_index("ix_frequencies_airport_id", "frequencies", ["airport_id"])


def downgrade() -> None:
    op.drop_index("ix_frequencies_airport_id", table_name="frequencies")
    op.drop_table("frequencies")
    op.drop_index("ix_runways_airport_id", table_name="runways")
    op.drop_table("runways")
    op.drop_index("ix_airports_region_id", table_name="airports")
    op.drop_index("ix_airports_country_id", table_name="airports")
    op.drop_index("ix_airports_iata_code", table_name="airports")
    op.drop_table("airports")
    op.drop_index("ix_regions_country_id", table_name="regions")
    op.drop_table("regions")
    op.drop_index("ix_countries_name", table_name="countries")
    op.drop_table("countries")
