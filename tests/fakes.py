# tests/fakes.py

"""
매니저 단위 테스트용 인메모리 저장소입니다.

각 가짜 저장소는 crud 싱글톤과 같은 메서드 시그니처를 가지며, 실제 테이블 모델 클래스로
레코드를 만들고 id와 타임스탬프를 부여합니다. 세션 핸들(db)은 무시합니다.
고유 필드가 충돌하면 데이터베이스와 마찬가지로 IntegrityError를 발생시킵니다.
"""

import re
from datetime import datetime, UTC
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from fixparts.domains.inv import models as inv_models
from fixparts.domains.inv import schemas as inv_schemas
from fixparts.domains.rpt import schemas as rpt_schemas
from fixparts.domains.trx import models as trx_models
from fixparts.domains.veh import models as veh_models
from fixparts.domains.ven import models as ven_models

# C{카테고리 3자리}-S{공급업체 3자리}-{YYMMDDhhmmss}-{Base32 8자}
GENERATED_BARCODE = re.compile(r"^C\d{3,}-S\d{3,}-\d{12}-[A-Z2-7]{8}$")


def is_generated_barcode(value: str) -> bool:
    return bool(GENERATED_BARCODE.match(value))


class FakeStore:
    model: Any = None
    unique_fields: Tuple[str, ...] = ()
    order_field: str = "id"

    def __init__(self):
        self.rows: Dict[int, Any] = {}
        self._next_id = 1
        # 0보다 크면 그 횟수만큼 자연 키 조회가 None을 반환합니다 (동시 삽입 경쟁 재현용).
        self.blind_lookups = 0
        self.lookup_calls = 0

    # --- 공통 프리미티브 -----------------------------------------------------
    async def get(self, db: Any, id: Any) -> Optional[Any]:
        return self.rows.get(id)

    async def get_all(self, db: Any) -> List[Any]:
        return self._sorted(self.rows.values())

    async def exists(self, db: Any, **kwargs: Any) -> bool:
        return any(all(getattr(row, k) == v for k, v in kwargs.items()) for row in self.rows.values())

    async def create(self, db: Any, *, obj_in: Any) -> Any:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        obj = self.model.model_validate(data)
        self._check_unique(obj)
        obj.id = self._next_id
        self._next_id += 1
        now = datetime.now(UTC)
        obj.created_at = now
        if hasattr(obj, "updated_at"):
            obj.updated_at = now
        self.rows[obj.id] = obj
        return obj

    async def update(self, db: Any, *, db_obj: Any, obj_in: Any) -> Any:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        self._check_unique({**db_obj.model_dump(), **data}, exclude_id=db_obj.id)
        for key, value in data.items():
            if hasattr(db_obj, key):
                setattr(db_obj, key, value)
        db_obj.updated_at = datetime.now(UTC)
        return db_obj

    async def delete(self, db: Any, *, id: Any) -> Optional[Any]:
        return self.rows.pop(id, None)

    # --- 내부 도우미 -----------------------------------------------------------
    def _find(self, field: str, value: Any) -> Optional[Any]:
        self.lookup_calls += 1
        if self.blind_lookups > 0:
            self.blind_lookups -= 1
            return None
        for row in self.rows.values():
            if getattr(row, field) == value:
                return row
        return None

    def _check_unique(self, obj: Any, exclude_id: Optional[int] = None) -> None:
        values = obj if isinstance(obj, dict) else obj.model_dump()
        for field in self.unique_fields:
            value = values.get(field)
            if value is None:
                continue
            for row in self.rows.values():
                if row.id != exclude_id and getattr(row, field) == value:
                    raise IntegrityError(
                        "INSERT", {field: value}, Exception(f"UNIQUE constraint failed: {field}")
                    )

    def _sorted(self, rows) -> List[Any]:
        return sorted(rows, key=lambda row: (getattr(row, self.order_field), row.id))


# =============================================================================
# ven
# =============================================================================
class FakeSupplierStore(FakeStore):
    model = ven_models.Supplier
    unique_fields = ("name",)
    order_field = "name"

    async def get_by_name(self, db: Any, *, name: str) -> Optional[ven_models.Supplier]:
        return self._find("name", name)

    async def search(
        self, db: Any, *, search: Optional[str] = None, skip: int = 0, limit: Optional[int] = None
    ) -> List[ven_models.Supplier]:
        rows = self._sorted(self.rows.values())
        if search:
            term = search.lower()
            rows = [row for row in rows if term in row.name.lower()]
        rows = rows[skip:]
        return rows if limit is None else rows[:limit]


# =============================================================================
# veh
# =============================================================================
class FakeMakeStore(FakeStore):
    model = veh_models.VehicleMake
    order_field = "name"


class FakeModelStore(FakeStore):
    model = veh_models.VehicleModel
    order_field = "name"

    async def get_models_by_make(self, db: Any, *, make_id: int) -> List[veh_models.VehicleModel]:
        return self._sorted(row for row in self.rows.values() if row.make_id == make_id)


class FakeSubmodelStore(FakeStore):
    model = veh_models.VehicleSubmodel
    order_field = "name"

    async def get_submodels_by_model(self, db: Any, *, model_id: int) -> List[veh_models.VehicleSubmodel]:
        return self._sorted(row for row in self.rows.values() if row.model_id == model_id)


# =============================================================================
# inv
# =============================================================================
class FakeCategoryStore(FakeStore):
    model = inv_models.Category
    order_field = "name"

    async def get_subcategories(self, db: Any, *, parent_id: int) -> List[inv_models.Category]:
        return self._sorted(row for row in self.rows.values() if row.parent_id == parent_id)


class FakeItemStore(FakeStore):
    model = inv_models.Item
    unique_fields = ("part_number", "barcode")
    order_field = "part_number"

    def __init__(self, categories: Optional[FakeStore] = None, suppliers: Optional[FakeStore] = None):
        super().__init__()
        self.categories = categories
        self.suppliers = suppliers

    def with_names(self, rows) -> List[inv_schemas.ItemReadWithNames]:
        result = []
        for row in rows:
            category = self.categories.rows.get(row.category_id) if self.categories else None
            supplier = self.suppliers.rows.get(row.supplier_id) if self.suppliers else None
            result.append(
                inv_schemas.ItemReadWithNames(
                    **row.model_dump(),
                    category_name=category.name if category else None,
                    supplier_name=supplier.name if supplier else None,
                )
            )
        return result

    async def get_by_part_number(self, db: Any, *, part_number: str) -> Optional[inv_models.Item]:
        return self._find("part_number", part_number)

    async def get_by_barcode(self, db: Any, *, barcode: str) -> Optional[inv_models.Item]:
        return self._find("barcode", barcode)

    async def get_filtered(
        self,
        db: Any,
        *,
        filters: Optional[inv_schemas.ItemFilter] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[inv_schemas.ItemReadWithNames]:
        rows = self._sorted(self.rows.values())
        if filters is not None:
            if filters.category_id is not None:
                rows = [row for row in rows if row.category_id == filters.category_id]
            if filters.supplier_id is not None:
                rows = [row for row in rows if row.supplier_id == filters.supplier_id]
            if filters.part_number:
                rows = [row for row in rows if row.part_number == filters.part_number]
            if filters.search:
                term = filters.search.lower()
                rows = [
                    row for row in rows
                    if term in row.part_number.lower()
                    or term in (row.item_name or "").lower()
                    or term in row.description.lower()
                ]
            if filters.low_stock:
                rows = [row for row in rows if row.current_stock <= row.minimum_stock]
            if filters.is_active is not None:
                rows = [row for row in rows if row.is_active == filters.is_active]
        rows = rows[skip:]
        return self.with_names(rows if limit is None else rows[:limit])

    async def get_low_stock(self, db: Any) -> List[inv_schemas.ItemReadWithNames]:
        rows = [row for row in self.rows.values() if row.is_active and row.current_stock <= row.minimum_stock]
        return self.with_names(sorted(rows, key=lambda row: (row.current_stock, row.part_number)))


class FakeCompatibilityStore(FakeStore):
    model = inv_models.Compatibility

    def __init__(self, items: FakeItemStore, submodels: FakeSubmodelStore):
        super().__init__()
        self.items = items
        self.submodels = submodels

    async def create(self, db: Any, *, obj_in: Any) -> inv_models.Compatibility:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        if await self.get_by_link(db, item_id=data["item_id"], submodel_id=data["submodel_id"]) is not None:
            raise IntegrityError("INSERT", data, Exception("UNIQUE constraint failed: item_id, submodel_id"))
        return await super().create(db, obj_in=data)

    async def get_for_item(self, db: Any, *, item_id: int) -> List[inv_schemas.CompatibilityRead]:
        links = []
        for link in self.rows.values():
            if link.item_id != item_id:
                continue
            submodel = self.submodels.rows.get(link.submodel_id)
            links.append(
                inv_schemas.CompatibilityRead(
                    **link.model_dump(),
                    submodel_name=submodel.name if submodel else None,
                )
            )
        return sorted(links, key=lambda link: (link.submodel_name or "", link.id))

    async def get_by_link(
        self, db: Any, *, item_id: int, submodel_id: int
    ) -> Optional[inv_models.Compatibility]:
        for link in self.rows.values():
            if link.item_id == item_id and link.submodel_id == submodel_id:
                return link
        return None

    async def delete_link(self, db: Any, *, item_id: int, submodel_id: int) -> bool:
        link = await self.get_by_link(db, item_id=item_id, submodel_id=submodel_id)
        if link is None:
            return False
        del self.rows[link.id]
        return True

    async def get_items_for_submodel(self, db: Any, *, submodel_id: int) -> List[inv_schemas.ItemReadWithNames]:
        item_ids = {link.item_id for link in self.rows.values() if link.submodel_id == submodel_id}
        rows = [
            item for item in self.items.rows.values()
            if item.id in item_ids and item.is_active
        ]
        return self.items.with_names(sorted(rows, key=lambda item: item.part_number))


# =============================================================================
# trx
# =============================================================================
class FakeTransactionStore(FakeStore):
    reference_field: str = ""
    date_field: str = ""

    async def get_by_reference(self, db: Any, *, reference: str) -> Optional[Any]:
        return self._find(self.reference_field, reference)

    async def get_filtered(
        self, db: Any, *, filters: Optional[Any] = None, skip: int = 0, limit: Optional[int] = None
    ) -> List[Any]:
        rows = sorted(self.rows.values(), key=lambda row: (getattr(row, self.date_field), row.id), reverse=True)
        if filters is not None:
            for field, value in filters.model_dump(exclude_none=True).items():
                if field in ("start_date", "end_date"):
                    continue
                rows = [row for row in rows if getattr(row, field) == value]
        rows = rows[skip:]
        return rows if limit is None else rows[:limit]


class FakeSaleStore(FakeTransactionStore):
    model = trx_models.Sale
    unique_fields = ("transaction_number",)
    reference_field = "transaction_number"
    date_field = "sale_date"


class FakePurchaseStore(FakeTransactionStore):
    model = trx_models.Purchase
    unique_fields = ("invoice_number",)
    reference_field = "invoice_number"
    date_field = "purchase_date"


# =============================================================================
# rpt
# =============================================================================
class FakeDashboardStore:
    """다른 가짜 저장소의 레코드 위에서 대시보드 집계를 계산합니다."""

    def __init__(
        self,
        items: FakeItemStore,
        sales: FakeSaleStore,
        purchases: FakePurchaseStore,
        suppliers: FakeSupplierStore,
        compatibility: FakeCompatibilityStore,
    ):
        self.items = items
        self.sales = sales
        self.purchases = purchases
        self.suppliers = suppliers
        self.compatibility = compatibility
        self.last_since: Optional[datetime] = None

    def _low_stock(self) -> List[inv_models.Item]:
        rows = [row for row in self.items.rows.values() if row.is_active and row.current_stock <= row.minimum_stock]
        return sorted(rows, key=lambda row: (row.current_stock, row.part_number))

    async def count_low_stock(self, db: Any) -> int:
        return len(self._low_stock())

    async def count_active_items(self, db: Any) -> int:
        return sum(1 for row in self.items.rows.values() if row.is_active)

    async def count_compatible_vehicles(self, db: Any) -> int:
        return len({link.submodel_id for link in self.compatibility.rows.values()})

    async def sum_sales_between(self, db: Any, *, start: datetime, end: datetime) -> Decimal:
        return sum(
            (sale.total_price for sale in self.sales.rows.values() if start <= sale.sale_date < end),
            Decimal("0"),
        )

    async def get_low_stock_items(self, db: Any, *, limit: int) -> List[rpt_schemas.LowStockItem]:
        return [
            rpt_schemas.LowStockItem(
                item_id=row.id,
                part_number=row.part_number,
                item_name=row.item_name,
                current_stock=row.current_stock,
                minimum_stock=row.minimum_stock,
            )
            for row in self._low_stock()[:limit]
        ]

    async def get_recent_sales(self, db: Any, *, limit: int) -> List[rpt_schemas.RecentSale]:
        rows = sorted(self.sales.rows.values(), key=lambda sale: (sale.sale_date, sale.id), reverse=True)
        result = []
        for sale in rows[:limit]:
            item = self.items.rows[sale.item_id]
            result.append(
                rpt_schemas.RecentSale(
                    sale_id=sale.id,
                    sale_date=sale.sale_date,
                    part_number=item.part_number,
                    item_name=item.item_name,
                    customer_name=sale.customer_name,
                    quantity=sale.quantity,
                    total_price=sale.total_price,
                )
            )
        return result

    async def get_top_sellers(self, db: Any, *, since: datetime, limit: int) -> List[rpt_schemas.TopSeller]:
        self.last_since = since
        totals: Dict[int, List[Any]] = {}
        for sale in self.sales.rows.values():
            if sale.sale_date < since:
                continue
            units, revenue = totals.get(sale.item_id, (0, Decimal("0")))
            totals[sale.item_id] = [units + sale.quantity, revenue + sale.total_price]
        sellers = [
            rpt_schemas.TopSeller(
                item_id=item_id,
                part_number=self.items.rows[item_id].part_number,
                item_name=self.items.rows[item_id].item_name,
                units_sold=units,
                revenue=revenue,
            )
            for item_id, (units, revenue) in totals.items()
        ]
        sellers.sort(key=lambda row: (-row.units_sold, -row.revenue, row.part_number))
        return sellers[:limit]

    async def get_recent_purchases(self, db: Any, *, limit: int) -> List[rpt_schemas.RecentPurchase]:
        rows = sorted(self.purchases.rows.values(), key=lambda p: (p.purchase_date, p.id), reverse=True)
        result = []
        for purchase in rows[:limit]:
            supplier = self.suppliers.rows.get(purchase.supplier_id)
            result.append(
                rpt_schemas.RecentPurchase(
                    purchase_id=purchase.id,
                    purchase_date=purchase.purchase_date,
                    part_number=self.items.rows[purchase.item_id].part_number,
                    supplier_name=supplier.name if supplier else None,
                    quantity=purchase.quantity,
                    total_cost=purchase.total_cost,
                )
            )
        return result
