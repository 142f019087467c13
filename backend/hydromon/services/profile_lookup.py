"""Resolve a selected profile id against the plant and Multiplant tables."""
from dataclasses import dataclass
from typing import Optional, Sequence, Type, Union
from uuid import UUID

from sqlalchemy.orm import Session

from hydromon.models import MultiplantProfile, PlantProfile, SystemConfig


@dataclass(frozen=True)
class ProfileFound:
    profile: Union[PlantProfile, MultiplantProfile]
    source: str

    @property
    def name(self) -> str:
        return self.profile.name


@dataclass(frozen=True)
class ProfileNotFound:
    profile_id: Optional[UUID]


LookupResult = Union[ProfileFound, ProfileNotFound]


class ProfileSource:
    """One table that can hold a selectable profile."""

    def __init__(self, model: Type, label: str):
        self.model = model
        self.label = label

    def get(self, db: Session, profile_id: UUID):
        return db.query(self.model).filter(self.model.id == profile_id).first()


class ChainedProfileLookup:
    """Try each source in order and return the first hit."""

    def __init__(self, sources: Sequence[ProfileSource]):
        self.sources = list(sources)

    def find(self, db: Session, profile_id: Optional[UUID]) -> LookupResult:
        if profile_id is None:
            return ProfileNotFound(profile_id=None)
        for source in self.sources:
            profile = source.get(db, profile_id)
            if profile is not None:
                return ProfileFound(profile=profile, source=source.label)
        return ProfileNotFound(profile_id=profile_id)

    def find_selected(self, db: Session) -> LookupResult:
        """Look up whichever profile system_config currently points at."""
        config = db.query(SystemConfig).order_by(SystemConfig.id).first()
        return self.find(db, config.selected_plant_id if config else None)


def default_profile_lookup() -> ChainedProfileLookup:
    return ChainedProfileLookup([
        ProfileSource(PlantProfile, "plant_profiles"),
        ProfileSource(MultiplantProfile, "multiplant_profile"),
    ])
