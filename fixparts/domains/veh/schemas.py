# fixparts/domains/veh/schemas.py

"""
'veh' 도메인 (차량 계층)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


# =============================================================================
# 1. 제조사 (VehicleMake) 스키마
# =============================================================================
class VehicleMakeBase(SQLModel):
    name: str = Field(..., max_length=100)
    country: Optional[str] = Field(None, max_length=100)


class VehicleMakeCreate(VehicleMakeBase):
    pass


class VehicleMakeUpdate(SQLModel):
    name: Optional[str] = None
    country: Optional[str] = None


class VehicleMakeRead(VehicleMakeBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# =============================================================================
# 2. 모델 (VehicleModel) 스키마
# =============================================================================
class VehicleModelBase(SQLModel):
    make_id: int
    name: str = Field(..., max_length=100)


class VehicleModelCreate(VehicleModelBase):
    pass


class VehicleModelUpdate(SQLModel):
    make_id: Optional[int] = None
    name: Optional[str] = None


class VehicleModelRead(VehicleModelBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# =============================================================================
# 3. 서브모델 (VehicleSubmodel) 스키마
# =============================================================================
class VehicleSubmodelBase(SQLModel):
    model_id: int
    name: str = Field(..., max_length=100)
    year_from: int
    year_to: Optional[int] = None
    engine_type: str = Field(..., max_length=50)
    engine_displacement: float
    fuel_type: str = Field(..., max_length=30)
    transmission_type: str = Field(..., max_length=30)
    body_type: str = Field(..., max_length=30)


class VehicleSubmodelCreate(VehicleSubmodelBase):
    pass


class VehicleSubmodelUpdate(SQLModel):
    model_id: Optional[int] = None
    name: Optional[str] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    engine_type: Optional[str] = None
    engine_displacement: Optional[float] = None
    fuel_type: Optional[str] = None
    transmission_type: Optional[str] = None
    body_type: Optional[str] = None


class VehicleSubmodelRead(VehicleSubmodelBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
