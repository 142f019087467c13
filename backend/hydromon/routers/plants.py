"""Plant profile API endpoints."""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hydromon.database import get_db
from hydromon.models import MULTIPLANT_NAME, PlantProfile
from hydromon.schemas import (
    OptimalLevelResponse,
    PlantProfileCreate,
    PlantProfileResponse,
    PlantProfileUpdate,
    SuccessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plants", tags=["plants"])


def get_plant_or_404(db: Session, plant_id: UUID) -> PlantProfile:
    plant = db.query(PlantProfile).filter(PlantProfile.id == plant_id).first()
    if not plant:
        raise HTTPException(status_code=404, detail="Plant profile not found")
    return plant


@router.get("", response_model=List[PlantProfileResponse])
def list_plants(db: Session = Depends(get_db)):
    """List all plant profiles by name."""
    return db.query(PlantProfile).order_by(PlantProfile.name).all()


@router.post("", response_model=PlantProfileResponse, status_code=201)
def create_plant(data: PlantProfileCreate, db: Session = Depends(get_db)):
    if data.name == MULTIPLANT_NAME:
        raise HTTPException(status_code=400, detail=f"'{MULTIPLANT_NAME}' is reserved")

    plant = PlantProfile(**data.model_dump())
    try:
        db.add(plant)
        db.commit()
        db.refresh(plant)
    except Exception:
        db.rollback()
        raise

    logger.info("Plant profile created: %s (%s)", plant.name, plant.id)
    return plant


@router.get("/optimal-levels", response_model=List[OptimalLevelResponse])
def list_optimal_levels(db: Session = Depends(get_db)):
    """Midpoint of each plant's pH and EC range."""
    plants = db.query(PlantProfile).order_by(PlantProfile.name).all()
    return [
        OptimalLevelResponse(
            id=p.id,
            name=p.name,
            ph=round((p.ph_min + p.ph_max) / 2, 2),
            ec=round((p.ec_min + p.ec_max) / 2, 2),
        )
        for p in plants
    ]


@router.get("/{plant_id}", response_model=PlantProfileResponse)
def get_plant(plant_id: UUID, db: Session = Depends(get_db)):
    return get_plant_or_404(db, plant_id)


@router.put("/{plant_id}", response_model=PlantProfileResponse)
def update_plant(plant_id: UUID, data: PlantProfileUpdate, db: Session = Depends(get_db)):
    plant = get_plant_or_404(db, plant_id)

    changes = data.model_dump(exclude_unset=True)
    if "name" in changes:
        changes["name"] = (changes["name"] or "").strip()
        if not changes["name"]:
            raise HTTPException(status_code=400, detail="name must not be empty")
        if changes["name"] == MULTIPLANT_NAME:
            raise HTTPException(status_code=400, detail=f"'{MULTIPLANT_NAME}' is reserved")
    for field in ("ph_min", "ph_max", "ec_min", "ec_max"):
        if field in changes and changes[field] is None:
            raise HTTPException(status_code=400, detail=f"{field} must not be null")

    for field, value in changes.items():
        setattr(plant, field, value)

    # Validate final ranges
    if plant.ph_max < plant.ph_min:
        db.rollback()
        raise HTTPException(status_code=400, detail="ph_max must be >= ph_min")
    if plant.ec_max < plant.ec_min:
        db.rollback()
        raise HTTPException(status_code=400, detail="ec_max must be >= ec_min")

    try:
        db.commit()
        db.refresh(plant)
    except Exception:
        db.rollback()
        raise

    return plant


@router.delete("/{plant_id}", response_model=SuccessResponse)
def delete_plant(plant_id: UUID, db: Session = Depends(get_db)):
    plant = get_plant_or_404(db, plant_id)
    try:
        db.delete(plant)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Plant profile deleted: %s", plant_id)
    return SuccessResponse()
