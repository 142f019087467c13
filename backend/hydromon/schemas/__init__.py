"""Pydantic schemas for API request/response validation."""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


# === Plant Profile Schemas ===
class PlantProfileBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    ph_min: float
    ph_max: float
    ec_min: float
    ec_max: float
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @model_validator(mode="after")
    def validate_ranges(self):
        if self.ph_max < self.ph_min:
            raise ValueError("ph_max must be >= ph_min")
        if self.ec_max < self.ec_min:
            raise ValueError("ec_max must be >= ec_min")
        return self


class PlantProfileCreate(PlantProfileBase):
    """Schema for creating a new plant profile."""
    pass


class PlantProfileUpdate(BaseModel):
    """Partial update; ranges are re-checked against the merged row."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    ph_min: Optional[float] = None
    ph_max: Optional[float] = None
    ec_min: Optional[float] = None
    ec_max: Optional[float] = None
    image_url: Optional[str] = None


class PlantProfileResponse(PlantProfileBase):
    id: UUID

    model_config = {"from_attributes": True}


class OptimalLevelResponse(BaseModel):
    id: UUID
    name: str
    ph: float
    ec: float


# === Multiplant Schemas ===
class MultiplantRequest(BaseModel):
    plant_ids: List[UUID] = Field(min_length=1)


class IntervalResponse(BaseModel):
    min: float
    max: float


class MultiplantResolution(BaseModel):
    compatible: bool
    plants: List[PlantProfileResponse]
    ph: Optional[IntervalResponse] = None
    ec: Optional[IntervalResponse] = None


class MultiplantProfileResponse(BaseModel):
    id: UUID
    name: str
    ph_min: float
    ph_max: float
    ec_min: float
    ec_max: float
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


# === User Schemas ===
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    role: Literal["admin", "user"] = "user"


class UserUpdate(BaseModel):
    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=6)
    role: Literal["admin", "user"]


class UserResponse(BaseModel):
    id: UUID
    email: str
    role: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# === Sensor Data Schemas ===
class SensorReadingResponse(BaseModel):
    id: int
    created_at: datetime
    ph: Optional[float] = None
    ec: Optional[float] = None
    water_temperature: Optional[float] = None
    pump1: bool
    pump2: bool
    pump3: bool
    pump4: bool
    plant_name: Optional[str] = None

    model_config = {"from_attributes": True}


class SensorDataDelete(BaseModel):
    ids: List[int] = Field(min_length=1)


class DeleteResponse(BaseModel):
    success: bool = True
    deleted: int


# === System Config Schemas ===
class SystemConfigUpdate(BaseModel):
    selected_plant_id: UUID


class SystemConfigResponse(BaseModel):
    id: int
    selected_plant_id: Optional[UUID] = None
    selected_plant_name: Optional[str] = None
    source: Optional[str] = None


# === Generic ===
class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
