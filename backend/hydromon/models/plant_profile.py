"""Plant tolerance profiles and the derived Multiplant profile."""
import uuid

from sqlalchemy import CheckConstraint, Column, Float, String, Text, Uuid

from hydromon.database import Base

MULTIPLANT_NAME = "Multiplant"


class PlantProfile(Base):
    """Acceptable pH/EC ranges for one plant, maintained by an administrator."""

    __tablename__ = "plant_profiles"
    __table_args__ = (
        CheckConstraint("ph_min <= ph_max", name="ck_plant_profiles_ph_range"),
        CheckConstraint("ec_min <= ec_max", name="ck_plant_profiles_ec_range"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, index=True)
    ph_min = Column(Float, nullable=False)
    ph_max = Column(Float, nullable=False)
    ec_min = Column(Float, nullable=False)
    ec_max = Column(Float, nullable=False)
    image_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<PlantProfile(id={self.id}, name='{self.name}')>"


class MultiplantProfile(Base):
    """Resolved overlap of several plant profiles.

    A single row named "Multiplant", upserted by name whenever the selection
    changes. Never edited by hand.
    """

    __tablename__ = "multiplant_profile"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True, default=MULTIPLANT_NAME)
    ph_min = Column(Float, nullable=False)
    ph_max = Column(Float, nullable=False)
    ec_min = Column(Float, nullable=False)
    ec_max = Column(Float, nullable=False)
    image_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<MultiplantProfile(id={self.id})>"
