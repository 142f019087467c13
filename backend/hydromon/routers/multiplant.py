"""Multiplant range endpoints: resolve a plant selection and persist the result."""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hydromon.database import get_db
from hydromon.models import MULTIPLANT_NAME, MultiplantProfile, PlantProfile
from hydromon.schemas import (
    IntervalResponse,
    MultiplantProfileResponse,
    MultiplantRequest,
    MultiplantResolution,
    PlantProfileResponse,
)
from hydromon.services.ranges import MultiplantRange, SelectionTooSmall, resolve_ranges

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/multiplant", tags=["multiplant"])


def load_selection(db: Session, plant_ids: List[UUID]) -> List[PlantProfile]:
    """Fetch the selected plants, excluding any stored Multiplant row."""
    wanted = list(dict.fromkeys(plant_ids))
    plants = (
        db.query(PlantProfile)
        .filter(PlantProfile.id.in_(wanted), PlantProfile.name != MULTIPLANT_NAME)
        .order_by(PlantProfile.name)
        .all()
    )
    missing = set(wanted) - {p.id for p in plants}
    if missing:
        raise HTTPException(
            status_code=404,
            detail=f"Plant profiles not found: {', '.join(sorted(str(m) for m in missing))}",
        )
    return plants


def resolve_selection(plants: List[PlantProfile]) -> Optional[MultiplantRange]:
    try:
        return resolve_ranges(plants)
    except SelectionTooSmall as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def to_resolution(plants: List[PlantProfile], result: Optional[MultiplantRange]) -> MultiplantResolution:
    return MultiplantResolution(
        compatible=result is not None,
        plants=[PlantProfileResponse.model_validate(p) for p in plants],
        ph=IntervalResponse(min=result.ph.low, max=result.ph.high) if result else None,
        ec=IntervalResponse(min=result.ec.low, max=result.ec.high) if result else None,
    )


def upsert_multiplant(db: Session, result: MultiplantRange) -> MultiplantProfile:
    """Insert or overwrite the single Multiplant row, keyed by name."""
    profile = db.query(MultiplantProfile).filter(MultiplantProfile.name == MULTIPLANT_NAME).first()
    if profile is None:
        profile = MultiplantProfile(name=MULTIPLANT_NAME)
        db.add(profile)
    for field, value in result.as_profile_values().items():
        setattr(profile, field, value)
    profile.image_url = None
    try:
        db.commit()
        db.refresh(profile)
    except Exception:
        db.rollback()
        raise
    return profile


@router.get("", response_model=MultiplantProfileResponse)
def get_multiplant(db: Session = Depends(get_db)):
    profile = db.query(MultiplantProfile).filter(MultiplantProfile.name == MULTIPLANT_NAME).first()
    if not profile:
        raise HTTPException(status_code=404, detail="No Multiplant profile saved")
    return profile


@router.post("/preview", response_model=MultiplantResolution)
def preview_multiplant(data: MultiplantRequest, db: Session = Depends(get_db)):
    """Resolve the selection without saving anything."""
    plants = load_selection(db, data.plant_ids)
    return to_resolution(plants, resolve_selection(plants))


@router.post("", response_model=MultiplantProfileResponse)
def save_multiplant(data: MultiplantRequest, db: Session = Depends(get_db)):
    """Resolve the selection and upsert it as the Multiplant profile.

    Incompatible selections are rejected with 409 and leave any previously
    saved Multiplant profile as it was.
    """
    plants = load_selection(db, data.plant_ids)
    result = resolve_selection(plants)
    if result is None:
        raise HTTPException(status_code=409, detail="No overlapping range, these plants are not compatible")

    profile = upsert_multiplant(db, result)
    logger.info(
        "Multiplant saved from %s: pH %.2f-%.2f, EC %.2f-%.2f",
        [p.name for p in plants], result.ph.low, result.ph.high, result.ec.low, result.ec.high,
    )
    return profile
