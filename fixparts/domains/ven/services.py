# fixparts/domains/ven/services.py

"""
공급업체 매니저 모듈입니다.

- 공급업체 이름은 비어 있을 수 없고 고유해야 합니다.
- 품목이 참조하고 있는 공급업체는 삭제할 수 없습니다.
"""

from typing import Any, List, Optional, Protocol

from sqlalchemy.exc import IntegrityError

from fixparts.core.exceptions import SupplierError, SupplierErrorCode
from fixparts.core.service_base import BaseService, is_blank
from fixparts.domains.inv import crud as inv_crud
from fixparts.domains.ven import crud as ven_crud
from fixparts.domains.ven import models as ven_models
from fixparts.domains.ven import schemas as ven_schemas


class SupplierStore(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[ven_models.Supplier]: ...
    async def get_by_name(self, db: Any, *, name: str) -> Optional[ven_models.Supplier]: ...
    async def search(
        self, db: Any, *, search: Optional[str] = None, skip: int = 0, limit: Optional[int] = None
    ) -> List[ven_models.Supplier]: ...
    async def create(self, db: Any, *, obj_in: Any) -> ven_models.Supplier: ...
    async def update(self, db: Any, *, db_obj: ven_models.Supplier, obj_in: Any) -> ven_models.Supplier: ...
    async def delete(self, db: Any, *, id: Any) -> Optional[ven_models.Supplier]: ...


class ItemReferenceStore(Protocol):
    async def exists(self, db: Any, **kwargs: Any) -> bool: ...


class SupplierService(BaseService):
    error_class = SupplierError

    def __init__(
        self,
        db: Any,
        repo: SupplierStore = ven_crud.supplier,
        items: ItemReferenceStore = inv_crud.item,
    ):
        super().__init__(db)
        self.repo = repo
        self.items = items

    async def get(self, supplier_id: int) -> ven_models.Supplier:
        self._require_id(supplier_id, SupplierErrorCode.INVALID_SUPPLIER_ID, "supplier_id")
        supplier = await self.repo.get(self.db, supplier_id)
        if supplier is None:
            raise self._fail(SupplierErrorCode.SUPPLIER_NOT_FOUND, field="supplier_id", value=supplier_id)
        return supplier

    async def list(
        self, *, search: Optional[str] = None, skip: int = 0, limit: Optional[int] = None
    ) -> List[ven_models.Supplier]:
        return await self.repo.search(self.db, search=search or None, skip=skip, limit=limit)

    async def create(self, obj_in: ven_schemas.SupplierCreate) -> ven_models.Supplier:
        """
        새 공급업체를 생성합니다.

        Raises:
            SupplierError: 이름이 비어 있거나(NAME_REQUIRED) 이미 사용 중인 경우(DUPLICATE_SUPPLIER_NAME).
        """
        data = obj_in.model_dump()
        await self._check_name(data.get("name"))
        data["name"] = data["name"].strip()

        try:
            supplier = await self.repo.create(self.db, obj_in=data)
        except IntegrityError as exc:
            await self._classify_conflict(exc, data["name"])
            raise
        self.logger.info("공급업체 생성: id=%s name=%s", supplier.id, supplier.name)
        return supplier

    async def update(self, supplier_id: int, obj_in: ven_schemas.SupplierUpdate) -> ven_models.Supplier:
        supplier = await self.get(supplier_id)
        changes = obj_in.model_dump(exclude_unset=True)
        if "name" in changes:
            await self._check_name(changes["name"], exclude_id=supplier.id)
            changes["name"] = changes["name"].strip()

        try:
            supplier = await self.repo.update(self.db, db_obj=supplier, obj_in=changes)
        except IntegrityError as exc:
            await self._classify_conflict(exc, changes.get("name"), exclude_id=supplier_id)
            raise
        self.logger.info("공급업체 수정: id=%s", supplier_id)
        return supplier

    async def delete(self, supplier_id: int) -> ven_models.Supplier:
        """
        공급업체를 삭제합니다. 이 공급업체를 참조하는 품목이 있으면 거부합니다.
        """
        await self.get(supplier_id)
        if await self.items.exists(self.db, supplier_id=supplier_id):
            raise self._fail(SupplierErrorCode.SUPPLIER_HAS_ITEMS, field="supplier_id", value=supplier_id)

        deleted = await self.repo.delete(self.db, id=supplier_id)
        if deleted is None:
            raise self._fail(SupplierErrorCode.SUPPLIER_NOT_FOUND, field="supplier_id", value=supplier_id)
        self.logger.info("공급업체 삭제: id=%s", supplier_id)
        return deleted

    async def _check_name(self, name: Optional[str], exclude_id: Optional[int] = None) -> None:
        if is_blank(name):
            raise self._fail(SupplierErrorCode.NAME_REQUIRED, field="name")
        existing = await self.repo.get_by_name(self.db, name=name.strip())
        if existing is not None and existing.id != exclude_id:
            raise self._fail(SupplierErrorCode.DUPLICATE_SUPPLIER_NAME, field="name", value=name)

    async def _classify_conflict(
        self, exc: IntegrityError, name: Optional[str], exclude_id: Optional[int] = None
    ) -> None:
        if name is None:
            return
        existing = await self.repo.get_by_name(self.db, name=name)
        if existing is not None and existing.id != exclude_id:
            raise self._fail(SupplierErrorCode.DUPLICATE_SUPPLIER_NAME, field="name", value=name) from exc
