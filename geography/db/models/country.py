from __future__ import annotations

from datetime import datetime
from typing import ClassVar

import sqlalchemy as sa
from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from geography.db.base import BIGINT, Base


class Country(Base):
    __tablename__ = "countries"

    country_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(2), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(120))
    continent: Mapped[str | None] = mapped_column(String(2))
    wikipedia: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(
        sa.TIMESTAMP(timezone=False), server_default=sa.func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), onupdate=sa.func.now()
    )

    regions: Mapped[list["Region"]] = relationship(
        "Region",
        back_populates="country",
        cascade="all, delete-orphan",
        order_by="Region.position",
        collection_class=ordering_list("position"),
    )
    airports: Mapped[list["Airport"]] = relationship("Airport", back_populates="country")

    # Columns rewritten when the same country code is imported again
    content_fields: ClassVar[tuple[str, ...]] = ("name", "continent", "wikipedia")

    __table_args__ = (sa.Index("ix_countries_name", "name"),)


class Region(Base):
    __tablename__ = "regions"

    region_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    country_id: Mapped[int] = mapped_column(
        BIGINT, ForeignKey("countries.country_id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(120))
    wikipedia: Mapped[str | None] = mapped_column(String(255))

    country: Mapped["Country"] = relationship("Country", back_populates="regions")
    airports: Mapped[list["Airport"]] = relationship("Airport", back_populates="region")

    content_fields: ClassVar[tuple[str, ...]] = ("code", "name", "wikipedia")

    __table_args__ = (sa.Index("ix_regions_country_id", "country_id"),)

    @property
    def country_code(self) -> str:
        return self.country.code
