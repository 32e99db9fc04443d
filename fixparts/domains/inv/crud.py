# fixparts/domains/inv/crud.py

"""
'inv' 도메인 (PostgreSQL 'inv' 스키마)의 CRUD(Create, Read, Update, Delete)
작업을 담당하는 모듈입니다.

이 모듈은 'inv' 스키마의 테이블들 (categories, items, compatibility)에 대한
데이터베이스 상호작용 로직을 캡슐화합니다. 업무 규칙은 services.py의 매니저가 담당하며,
여기서는 조회/쓰기 프리미티브만 제공합니다.
"""

from typing import List, Optional
from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fixparts.core.crud_base import CRUDBase
from fixparts.domains.inv import models as inv_models
from fixparts.domains.inv import schemas as inv_schemas
from fixparts.domains.veh import models as veh_models
from fixparts.domains.ven import models as ven_models


# =============================================================================
# 1. 카테고리 (Category) CRUD
# =============================================================================
class CRUDCategory(CRUDBase[inv_models.Category, inv_schemas.CategoryCreate, inv_schemas.CategoryUpdate]):
    async def get_all(self, db: AsyncSession) -> List[inv_models.Category]:
        """모든 카테고리를 이름순으로 조회합니다."""
        return await self.get_multi(db, order_by="name")

    async def get_subcategories(self, db: AsyncSession, *, parent_id: int) -> List[inv_models.Category]:
        """직속 하위 카테고리 목록을 이름순으로 조회합니다."""
        statement = (
            select(inv_models.Category)
            .where(inv_models.Category.parent_id == parent_id)
            .order_by(inv_models.Category.name)
        )
        result = await db.exec(statement)
        return list(result.all())


# =============================================================================
# 2. 품목 (Item) CRUD
# =============================================================================
def select_items_with_names():
    """품목과 카테고리 이름, 공급업체 이름을 함께 조회하는 기본 SELECT 문 (LEFT JOIN)."""
    Item = inv_models.Item
    return (
        select(Item, inv_models.Category.name, ven_models.Supplier.name)
        .outerjoin(inv_models.Category, inv_models.Category.id == Item.category_id)
        .outerjoin(ven_models.Supplier, ven_models.Supplier.id == Item.supplier_id)
    )


def to_items_with_names(rows) -> List[inv_schemas.ItemReadWithNames]:
    return [
        inv_schemas.ItemReadWithNames(
            **item.model_dump(), category_name=category_name, supplier_name=supplier_name
        )
        for item, category_name, supplier_name in rows
    ]


class CRUDItem(CRUDBase[inv_models.Item, inv_schemas.ItemCreate, inv_schemas.ItemUpdate]):
    async def get_by_part_number(self, db: AsyncSession, *, part_number: str) -> Optional[inv_models.Item]:
        return await self.get_by_attribute(db, attribute="part_number", value=part_number)

    async def get_by_barcode(self, db: AsyncSession, *, barcode: str) -> Optional[inv_models.Item]:
        return await self.get_by_attribute(db, attribute="barcode", value=barcode)

    async def get_filtered(
        self,
        db: AsyncSession,
        *,
        filters: Optional[inv_schemas.ItemFilter] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[inv_schemas.ItemReadWithNames]:
        """
        필터 조건으로 품목 목록을 부품 번호순으로 조회합니다.
        차량(make/model/submodel) 조건은 호환성 연결을 통해 적용됩니다.
        """
        Item = inv_models.Item
        query = select_items_with_names()

        if filters is not None:
            if filters.category_id is not None:
                query = query.where(Item.category_id == filters.category_id)
            if filters.supplier_id is not None:
                query = query.where(Item.supplier_id == filters.supplier_id)
            if filters.part_number:
                query = query.where(Item.part_number == filters.part_number)
            if filters.search:
                pattern = f"%{filters.search}%"
                query = query.where(
                    or_(
                        Item.part_number.ilike(pattern),
                        Item.item_name.ilike(pattern),
                        Item.description.ilike(pattern),
                    )
                )
            if filters.low_stock:
                query = query.where(Item.current_stock <= Item.minimum_stock)
            if filters.is_active is not None:
                query = query.where(Item.is_active == filters.is_active)

            vehicle_ids = self._compatible_item_ids(filters)
            if vehicle_ids is not None:
                query = query.where(Item.id.in_(vehicle_ids))

        query = query.order_by(Item.part_number).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await db.exec(query)
        return to_items_with_names(result.all())

    @staticmethod
    def _compatible_item_ids(filters: inv_schemas.ItemFilter):
        if filters.submodel_id is None and filters.model_id is None and filters.make_id is None:
            return None

        Compat = inv_models.Compatibility
        Submodel = veh_models.VehicleSubmodel
        Model = veh_models.VehicleModel
        subquery = (
            select(Compat.item_id)
            .join(Submodel, Submodel.id == Compat.submodel_id)
            .join(Model, Model.id == Submodel.model_id)
        )
        if filters.submodel_id is not None:
            subquery = subquery.where(Compat.submodel_id == filters.submodel_id)
        if filters.model_id is not None:
            subquery = subquery.where(Submodel.model_id == filters.model_id)
        if filters.make_id is not None:
            subquery = subquery.where(Model.make_id == filters.make_id)
        return subquery

    async def get_low_stock(self, db: AsyncSession) -> List[inv_schemas.ItemReadWithNames]:
        """현재 재고가 최소 재고 이하인 활성 품목을 재고가 적은 순으로 조회합니다."""
        Item = inv_models.Item
        statement = (
            select_items_with_names()
            .where(Item.is_active == True)  # noqa: E712
            .where(Item.current_stock <= Item.minimum_stock)
            .order_by(Item.current_stock, Item.part_number)
        )
        result = await db.exec(statement)
        return to_items_with_names(result.all())


# =============================================================================
# 3. 차량 호환성 (Compatibility) CRUD
# =============================================================================
class CRUDCompatibility(
    CRUDBase[inv_models.Compatibility, inv_schemas.CompatibilityCreate, inv_schemas.CompatibilityCreate]
):
    async def get_for_item(self, db: AsyncSession, *, item_id: int) -> List[inv_schemas.CompatibilityRead]:
        """
        품목의 호환성 연결 목록을 차량 이름(제조사/모델/서브모델)과 함께
        제조사, 모델, 서브모델 이름순으로 조회합니다.
        """
        Compat = inv_models.Compatibility
        Submodel = veh_models.VehicleSubmodel
        Model = veh_models.VehicleModel
        Make = veh_models.VehicleMake
        statement = (
            select(Compat, Make.name, Model.name, Submodel.name)
            .join(Submodel, Submodel.id == Compat.submodel_id)
            .join(Model, Model.id == Submodel.model_id)
            .join(Make, Make.id == Model.make_id)
            .where(Compat.item_id == item_id)
            .order_by(Make.name, Model.name, Submodel.name)
        )
        result = await db.exec(statement)
        return [
            inv_schemas.CompatibilityRead(
                **compat.model_dump(),
                make_name=make_name,
                model_name=model_name,
                submodel_name=submodel_name,
            )
            for compat, make_name, model_name, submodel_name in result.all()
        ]

    async def get_by_link(
        self, db: AsyncSession, *, item_id: int, submodel_id: int
    ) -> Optional[inv_models.Compatibility]:
        statement = select(inv_models.Compatibility).where(
            inv_models.Compatibility.item_id == item_id,
            inv_models.Compatibility.submodel_id == submodel_id,
        )
        result = await db.exec(statement)
        return result.first()

    async def delete_link(self, db: AsyncSession, *, item_id: int, submodel_id: int) -> bool:
        """연결을 삭제합니다. 삭제된 행이 없으면 False를 반환합니다."""
        link = await self.get_by_link(db, item_id=item_id, submodel_id=submodel_id)
        if link is None:
            return False
        await db.delete(link)
        await self._commit(db)
        return True

    async def get_items_for_submodel(
        self, db: AsyncSession, *, submodel_id: int
    ) -> List[inv_schemas.ItemReadWithNames]:
        """서브모델과 호환되는 활성 품목을 부품 번호순으로 조회합니다."""
        Item = inv_models.Item
        statement = (
            select_items_with_names()
            .join(inv_models.Compatibility, inv_models.Compatibility.item_id == Item.id)
            .where(inv_models.Compatibility.submodel_id == submodel_id)
            .where(Item.is_active == True)  # noqa: E712
            .order_by(Item.part_number)
        )
        result = await db.exec(statement)
        return to_items_with_names(result.all())


category = CRUDCategory(model=inv_models.Category)
item = CRUDItem(model=inv_models.Item)
compatibility = CRUDCompatibility(model=inv_models.Compatibility)
