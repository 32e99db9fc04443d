# fixparts/domains/ven/crud.py

"""
'ven' 도메인 (PostgreSQL 'ven' 스키마)의 CRUD(Create, Read, Update, Delete)
작업을 담당하는 모듈입니다.

공통 작업은 `CRUDBase`에서 상속받고, 공급업체 고유의 조회(이름/검색)만 추가합니다.
"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fixparts.core.crud_base import CRUDBase
from fixparts.domains.ven import models as ven_models
from fixparts.domains.ven import schemas as ven_schemas


# =============================================================================
# 1. 공급업체 (Supplier) CRUD
# =============================================================================
class CRUDSupplier(CRUDBase[ven_models.Supplier, ven_schemas.SupplierCreate, ven_schemas.SupplierUpdate]):
    async def get_by_name(self, db: AsyncSession, *, name: str) -> Optional[ven_models.Supplier]:
        """이름으로 공급업체를 조회합니다."""
        return await self.get_by_attribute(db, attribute="name", value=name)

    async def search(
        self,
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[ven_models.Supplier]:
        """이름에 검색어가 포함된(대소문자 무시) 공급업체 목록을 이름순으로 조회합니다."""
        query = select(ven_models.Supplier)
        if search:
            query = query.where(ven_models.Supplier.name.ilike(f"%{search}%"))
        query = query.order_by(ven_models.Supplier.name).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.exec(query)
        return list(result.all())


supplier = CRUDSupplier(model=ven_models.Supplier)
