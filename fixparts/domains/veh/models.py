# fixparts/domains/veh/models.py

"""
'veh' 도메인 (PostgreSQL 'veh' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

제조사(Make) -> 모델(Model) -> 서브모델(Submodel)의 3단계 계층 구조를 가집니다.
"""

from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP, REAL


# =============================================================================
# 1. veh.vehicle_makes 테이블 모델
# =============================================================================
class VehicleMakeBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="제조사명")
    country: Optional[str] = Field(default=None, max_length=100)


class VehicleMake(VehicleMakeBase, table=True):
    __tablename__ = "vehicle_makes"
    __table_args__ = {'schema': 'veh'}

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


# =============================================================================
# 2. veh.vehicle_models 테이블 모델
# =============================================================================
class VehicleModelBase(SQLModel):
    make_id: int = Field(foreign_key="veh.vehicle_makes.id", index=True)
    name: str = Field(max_length=100, description="모델명")


class VehicleModel(VehicleModelBase, table=True):
    __tablename__ = "vehicle_models"
    __table_args__ = {'schema': 'veh'}

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


# =============================================================================
# 3. veh.vehicle_submodels 테이블 모델
# =============================================================================
class VehicleSubmodelBase(SQLModel):
    model_id: int = Field(foreign_key="veh.vehicle_models.id", index=True)
    name: str = Field(max_length=100, description="서브모델명 (트림)")
    year_from: int = Field(description="생산 시작 연도")
    year_to: Optional[int] = Field(default=None, description="생산 종료 연도 (생산 중이면 없음)")
    engine_type: str = Field(max_length=50)
    engine_displacement: float = Field(sa_column=Column(REAL, nullable=False), description="배기량 (L)")
    fuel_type: str = Field(max_length=30)
    transmission_type: str = Field(max_length=30)
    body_type: str = Field(max_length=30)


class VehicleSubmodel(VehicleSubmodelBase, table=True):
    __tablename__ = "vehicle_submodels"
    __table_args__ = {'schema': 'veh'}

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )
