# fixparts/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 요청마다 세션을 주입받은 매니저(서비스) 인스턴스 제공 (get_<entity>_service).
"""

from typing import AsyncGenerator
from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from fixparts.core.database import get_session as get_main_app_session

from fixparts.domains.inv.services import CategoryService, ItemService
from fixparts.domains.rpt.services import DashboardService
from fixparts.domains.trx.services import PurchaseService, SaleService
from fixparts.domains.veh.services import VehicleMakeService, VehicleModelService, VehicleSubmodelService
from fixparts.domains.ven.services import SupplierService
from fixparts.services.compatibility_service import CompatibilityService


# --- 데이터베이스 세션 의존성 주입 ---
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    fixparts.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


# --- 매니저(서비스) 의존성 주입 ---
# 매니저는 상태가 없으므로 요청마다 새로 생성합니다.
def get_category_service(db: AsyncSession = Depends(get_db_session)) -> CategoryService:
    return CategoryService(db)


def get_item_service(db: AsyncSession = Depends(get_db_session)) -> ItemService:
    return ItemService(db)


def get_compatibility_service(db: AsyncSession = Depends(get_db_session)) -> CompatibilityService:
    return CompatibilityService(db)


def get_make_service(db: AsyncSession = Depends(get_db_session)) -> VehicleMakeService:
    return VehicleMakeService(db)


def get_model_service(db: AsyncSession = Depends(get_db_session)) -> VehicleModelService:
    return VehicleModelService(db)


def get_submodel_service(db: AsyncSession = Depends(get_db_session)) -> VehicleSubmodelService:
    return VehicleSubmodelService(db)


def get_supplier_service(db: AsyncSession = Depends(get_db_session)) -> SupplierService:
    return SupplierService(db)


def get_sale_service(db: AsyncSession = Depends(get_db_session)) -> SaleService:
    return SaleService(db)


def get_purchase_service(db: AsyncSession = Depends(get_db_session)) -> PurchaseService:
    return PurchaseService(db)


def get_dashboard_service(db: AsyncSession = Depends(get_db_session)) -> DashboardService:
    return DashboardService(db)
