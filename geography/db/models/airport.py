from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

import sqlalchemy as sa
from sqlalchemy import Boolean, Float, ForeignKey, Integer, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from geography.db.base import BIGINT, Base


@dataclass(slots=True)
class RunwaySide:
    """One physical end of a runway (e.g. "09" or "27")."""

    code: str
    latitude: float | None = None
    longitude: float | None = None
    elevation: int | None = None
    heading: int | None = None
    threshold: int | None = None


class Airport(Base):
    __tablename__ = "airports"

    airport_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(4), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(200))
    type: Mapped[str | None] = mapped_column(String(32))
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    elevation: Mapped[int | None] = mapped_column(Integer)
    country_id: Mapped[int] = mapped_column(
        BIGINT, ForeignKey("countries.country_id", ondelete="CASCADE"), nullable=False
    )
    region_id: Mapped[int] = mapped_column(
        BIGINT, ForeignKey("regions.region_id", ondelete="CASCADE"), nullable=False
    )
    municipality: Mapped[str | None] = mapped_column(String(120))
    iata_code: Mapped[str | None] = mapped_column(String(3))
    website: Mapped[str | None] = mapped_column(String(255))
    wikipedia: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(
        sa.TIMESTAMP(timezone=False), server_default=sa.func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), onupdate=sa.func.now()
    )

    country: Mapped["Country"] = relationship("Country", back_populates="airports")
    region: Mapped["Region"] = relationship("Region", back_populates="airports")
    runways: Mapped[list["Runway"]] = relationship(
        "Runway",
        back_populates="airport",
        cascade="all, delete-orphan",
        order_by="Runway.position",
        collection_class=ordering_list("position"),
    )
    frequencies: Mapped[list["Frequency"]] = relationship(
        "Frequency",
        back_populates="airport",
        cascade="all, delete-orphan",
        order_by="Frequency.position",
        collection_class=ordering_list("position"),
    )

    content_fields: ClassVar[tuple[str, ...]] = (
        "name",
        "type",
        "latitude",
        "longitude",
        "elevation",
        "country",
        "region",
        "municipality",
        "iata_code",
        "website",
        "wikipedia",
    )

    __table_args__ = (
        sa.Index("ix_airports_iata_code", "iata_code"),
        sa.Index("ix_airports_country_id", "country_id"),
        sa.Index("ix_airports_region_id", "region_id"),
    )

    @property
    def country_code(self) -> str:
        return self.country.code

    @property
    def region_code(self) -> str:
        return self.region.code


class Runway(Base):
    __tablename__ = "runways"

    runway_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    airport_id: Mapped[int] = mapped_column(
        BIGINT, ForeignKey("airports.airport_id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    length: Mapped[int] = mapped_column(Integer, nullable=False)
    width: Mapped[int | None] = mapped_column(Integer)
    surface: Mapped[str | None] = mapped_column(String(64))
    lighted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    le_code: Mapped[str] = mapped_column(String(16), nullable=False)
    le_latitude: Mapped[float | None] = mapped_column(Float)
    le_longitude: Mapped[float | None] = mapped_column(Float)
    le_elevation: Mapped[int | None] = mapped_column(Integer)
    le_heading: Mapped[int | None] = mapped_column(Integer)
    le_threshold: Mapped[int | None] = mapped_column(Integer)

    he_code: Mapped[str | None] = mapped_column(String(16))
    he_latitude: Mapped[float | None] = mapped_column(Float)
    he_longitude: Mapped[float | None] = mapped_column(Float)
    he_elevation: Mapped[int | None] = mapped_column(Integer)
    he_heading: Mapped[int | None] = mapped_column(Integer)
    he_threshold: Mapped[int | None] = mapped_column(Integer)

    airport: Mapped["Airport"] = relationship("Airport", back_populates="runways")

    content_fields: ClassVar[tuple[str, ...]] = (
        "length",
        "width",
        "surface",
        "lighted",
        "closed",
        "le_code",
        "le_latitude",
        "le_longitude",
        "le_elevation",
        "le_heading",
        "le_threshold",
        "he_code",
        "he_latitude",
        "he_longitude",
        "he_elevation",
        "he_heading",
        "he_threshold",
    )

    __table_args__ = (sa.Index("ix_runways_airport_id", "airport_id"),)

    @property
    def low_end(self) -> RunwaySide:
        return RunwaySide(
            code=self.le_code,
            latitude=self.le_latitude,
            longitude=self.le_longitude,
            elevation=self.le_elevation,
            heading=self.le_heading,
            threshold=self.le_threshold,
        )

    @property
    def high_end(self) -> RunwaySide | None:
        if self.he_code is None:
            return None
        return RunwaySide(
            code=self.he_code,
            latitude=self.he_latitude,
            longitude=self.he_longitude,
            elevation=self.he_elevation,
            heading=self.he_heading,
            threshold=self.he_threshold,
        )


class Frequency(Base):
    __tablename__ = "frequencies"

    frequency_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    airport_id: Mapped[int] = mapped_column(
        BIGINT, ForeignKey("airports.airport_id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200))
    mhz: Mapped[float] = mapped_column(Float, nullable=False)

    airport: Mapped["Airport"] = relationship("Airport", back_populates="frequencies")

    content_fields: ClassVar[tuple[str, ...]] = ("type", "description", "mhz")

    __table_args__ = (sa.Index("ix_frequencies_airport_id", "airport_id"),)
