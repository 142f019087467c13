"""Active plant selection stored in the system_config singleton."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hydromon.database import get_db
from hydromon.dependencies import get_profile_lookup
from hydromon.models import SystemConfig
from hydromon.schemas import SystemConfigResponse, SystemConfigUpdate
from hydromon.services.profile_lookup import ChainedProfileLookup, ProfileFound

router = APIRouter(prefix="/api/system-config", tags=["system-config"])


def _response(config: SystemConfig, db: Session, lookup: ChainedProfileLookup) -> SystemConfigResponse:
    result = lookup.find(db, config.selected_plant_id)
    found = isinstance(result, ProfileFound)
    return SystemConfigResponse(
        id=config.id,
        selected_plant_id=config.selected_plant_id,
        selected_plant_name=result.name if found else None,
        source=result.source if found else None,
    )


@router.get("", response_model=SystemConfigResponse)
def get_system_config(
    db: Session = Depends(get_db),
    lookup: ChainedProfileLookup = Depends(get_profile_lookup),
):
    config = db.query(SystemConfig).order_by(SystemConfig.id).first()
    if not config:
        raise HTTPException(status_code=404, detail="System config not initialised")
    return _response(config, db, lookup)


@router.put("", response_model=SystemConfigResponse)
def update_system_config(
    data: SystemConfigUpdate,
    db: Session = Depends(get_db),
    lookup: ChainedProfileLookup = Depends(get_profile_lookup),
):
    """Point the system at a plant or the Multiplant profile."""
    if not isinstance(lookup.find(db, data.selected_plant_id), ProfileFound):
        raise HTTPException(status_code=404, detail="Plant profile not found")

    config = db.query(SystemConfig).order_by(SystemConfig.id).first()
    if config is None:
        config = SystemConfig()
        db.add(config)
    config.selected_plant_id = data.selected_plant_id
    try:
        db.commit()
        db.refresh(config)
    except Exception:
        db.rollback()
        raise
    return _response(config, db, lookup)
