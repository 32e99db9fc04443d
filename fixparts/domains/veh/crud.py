# fixparts/domains/veh/crud.py

"""
'veh' 도메인 (PostgreSQL 'veh' 스키마)의 CRUD 작업을 담당하는 모듈입니다.

제조사/모델/서브모델 테이블에 대한 기본 CRUD와,
상위 엔티티 기준으로 하위 엔티티를 조회하는 메서드를 제공합니다.
"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fixparts.core.crud_base import CRUDBase
from fixparts.domains.veh import models as veh_models
from fixparts.domains.veh import schemas as veh_schemas


# =============================================================================
# 1. 제조사 (VehicleMake) CRUD
# =============================================================================
class CRUDVehicleMake(
    CRUDBase[veh_models.VehicleMake, veh_schemas.VehicleMakeCreate, veh_schemas.VehicleMakeUpdate]
):
    async def get_all(self, db: AsyncSession) -> List[veh_models.VehicleMake]:
        """모든 제조사를 이름순으로 조회합니다."""
        return await self.get_multi(db, order_by="name")


# =============================================================================
# 2. 모델 (VehicleModel) CRUD
# =============================================================================
class CRUDVehicleModel(
    CRUDBase[veh_models.VehicleModel, veh_schemas.VehicleModelCreate, veh_schemas.VehicleModelUpdate]
):
    async def get_all(self, db: AsyncSession) -> List[veh_models.VehicleModel]:
        return await self.get_multi(db, order_by="name")

    async def get_models_by_make(self, db: AsyncSession, *, make_id: int) -> List[veh_models.VehicleModel]:
        """특정 제조사에 속한 모델 목록을 이름순으로 조회합니다."""
        statement = (
            select(veh_models.VehicleModel)
            .where(veh_models.VehicleModel.make_id == make_id)
            .order_by(veh_models.VehicleModel.name)
        )
        result = await db.exec(statement)
        return list(result.all())


# =============================================================================
# 3. 서브모델 (VehicleSubmodel) CRUD
# =============================================================================
class CRUDVehicleSubmodel(
    CRUDBase[veh_models.VehicleSubmodel, veh_schemas.VehicleSubmodelCreate, veh_schemas.VehicleSubmodelUpdate]
):
    async def get_all(self, db: AsyncSession) -> List[veh_models.VehicleSubmodel]:
        return await self.get_multi(db, order_by="name")

    async def get_submodels_by_model(
        self, db: AsyncSession, *, model_id: int
    ) -> List[veh_models.VehicleSubmodel]:
        """특정 모델에 속한 서브모델 목록을 이름, 시작 연도 순으로 조회합니다."""
        statement = (
            select(veh_models.VehicleSubmodel)
            .where(veh_models.VehicleSubmodel.model_id == model_id)
            .order_by(veh_models.VehicleSubmodel.name, veh_models.VehicleSubmodel.year_from)
        )
        result = await db.exec(statement)
        return list(result.all())


vehicle_make = CRUDVehicleMake(model=veh_models.VehicleMake)
vehicle_model = CRUDVehicleModel(model=veh_models.VehicleModel)
vehicle_submodel = CRUDVehicleSubmodel(model=veh_models.VehicleSubmodel)
