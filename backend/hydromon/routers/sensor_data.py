"""Sensor reading endpoints: listing and bulk delete."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from hydromon.database import get_db
from hydromon.models import SensorReading
from hydromon.schemas import DeleteResponse, SensorDataDelete, SensorReadingResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sensor-data", tags=["sensor-data"])


@router.get("", response_model=List[SensorReadingResponse])
def list_sensor_data(
    plant_name: Optional[str] = None,
    limit: int = Query(default=500, ge=1, le=5000),
    db: Session = Depends(get_db),
):
    """Newest readings first, optionally for one plant."""
    q = db.query(SensorReading)
    if plant_name:
        q = q.filter(SensorReading.plant_name == plant_name)
    return q.order_by(SensorReading.created_at.desc(), SensorReading.id.desc()).limit(limit).all()


@router.get("/latest", response_model=SensorReadingResponse)
def latest_sensor_reading(db: Session = Depends(get_db)):
    reading = (
        db.query(SensorReading)
        .order_by(SensorReading.created_at.desc(), SensorReading.id.desc())
        .first()
    )
    if not reading:
        raise HTTPException(status_code=404, detail="No sensor data yet")
    return reading


@router.delete("", response_model=DeleteResponse)
def delete_sensor_data(payload: SensorDataDelete, db: Session = Depends(get_db)):
    """Delete exactly the readings whose ids are listed."""
    ids = sorted(set(payload.ids))
    try:
        deleted = (
            db.query(SensorReading)
            .filter(SensorReading.id.in_(ids))
            .delete(synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Deleted %d of %d requested sensor readings", deleted, len(ids))
    return DeleteResponse(deleted=deleted)
