# fixparts/domains/trx/services.py

"""
거래 기록 매니저 모듈입니다 (판매 / 구매).

두 거래 종류는 같은 규칙을 공유하며 `TransactionRecorder`가 이를 구현합니다.
- 참조 ID(품목, 구매의 경우 공급업체)는 양수여야 합니다.
- 수량과 단가는 0보다 커야 합니다.
- 거래 일시는 미래일 수 없으며, 생략하면 저장 시점의 현재 시각이 사용됩니다.
  시간대 정보가 없는 일시는 UTC로 간주합니다.
- 외부 참조 번호(거래 번호 / 송장 번호)는 지정된 경우 같은 종류 안에서 고유해야 합니다.
- 합계 = 수량 x 단가 는 생성과 수정 시마다 항상 다시 계산됩니다.
"""

from datetime import datetime, UTC
from typing import Any, Dict, List, Optional, Protocol, Type

from sqlalchemy.exc import IntegrityError

from fixparts.core.exceptions import (
    DomainError,
    ErrorCode,
    PurchaseError,
    PurchaseErrorCode,
    SaleError,
    SaleErrorCode,
)
from fixparts.core.service_base import BaseService, clean_reference, is_blank
from fixparts.domains.trx import crud as trx_crud
from fixparts.domains.trx import models as trx_models
from fixparts.domains.trx import schemas as trx_schemas


class TransactionStore(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[Any]: ...
    async def get_by_reference(self, db: Any, *, reference: str) -> Optional[Any]: ...
    async def get_filtered(
        self, db: Any, *, filters: Optional[Any] = None, skip: int = 0, limit: Optional[int] = None
    ) -> List[Any]: ...
    async def create(self, db: Any, *, obj_in: Any) -> Any: ...
    async def update(self, db: Any, *, db_obj: Any, obj_in: Any) -> Any: ...
    async def delete(self, db: Any, *, id: Any) -> Optional[Any]: ...


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class TransactionRecorder(BaseService):
    """
    판매/구매 매니저의 공통 기반 클래스.

    하위 클래스는 오류 코드 Enum과 필드 이름(일시, 단가, 합계, 참조 번호)을 지정합니다.
    """

    error_class: Type[DomainError] = DomainError
    codes: Type[ErrorCode] = ErrorCode
    label: str = "transaction"
    date_field: str = ""
    price_field: str = ""
    total_field: str = ""
    reference_field: str = ""
    filter_class: Type[Any] = dict
    invalid_id_code: Optional[ErrorCode] = None
    not_found_code: Optional[ErrorCode] = None

    def __init__(self, db: Any, repo: TransactionStore):
        super().__init__(db)
        self.repo = repo

    # --- 조회 -----------------------------------------------------------------
    async def get(self, record_id: int) -> Any:
        self._require_id(record_id, self.invalid_id_code, "id")
        record = await self.repo.get(self.db, record_id)
        if record is None:
            raise self._fail(self.not_found_code, field="id", value=record_id)
        return record

    async def get_by_reference(self, reference: str) -> Any:
        if is_blank(reference):
            raise self._fail(self.codes.REFERENCE_REQUIRED, field=self.reference_field)
        record = await self.repo.get_by_reference(self.db, reference=reference.strip())
        if record is None:
            raise self._fail(self.not_found_code, field=self.reference_field, value=reference)
        return record

    async def list(self, filters: Optional[Any] = None, *, skip: int = 0, limit: Optional[int] = None) -> List[Any]:
        return await self.repo.get_filtered(self.db, filters=filters, skip=skip, limit=limit)

    async def list_for_item(self, item_id: int) -> List[Any]:
        self._require_id(item_id, self.codes.INVALID_ITEM_ID, "item_id")
        return await self.repo.get_filtered(self.db, filters=self.filter_class(item_id=item_id))

    # --- 쓰기 -----------------------------------------------------------------
    async def create(self, obj_in: Any) -> Any:
        data = obj_in.model_dump()
        data[self.reference_field] = clean_reference(data.get(self.reference_field))
        self._validate(data)

        reference = data[self.reference_field]
        if reference is not None and await self.repo.get_by_reference(self.db, reference=reference) is not None:
            raise self._fail(self.codes.DUPLICATE_REFERENCE, field=self.reference_field, value=reference)

        data[self.date_field] = as_utc(data[self.date_field]) if data.get(self.date_field) else datetime.now(UTC)
        data[self.total_field] = self._total(data)

        try:
            record = await self.repo.create(self.db, obj_in=data)
        except IntegrityError as exc:
            await self._classify_conflict(exc, reference)
            raise
        self.logger.info(
            "%s 기록: id=%s item_id=%s quantity=%s %s=%s",
            self.label, record.id, record.item_id, record.quantity, self.total_field, data[self.total_field],
        )
        return record

    async def update(self, record_id: int, obj_in: Any) -> Any:
        """
        거래 기록을 수정합니다. 합계는 병합된 수량과 단가로 항상 다시 계산됩니다.
        """
        record = await self.get(record_id)
        changes = obj_in.model_dump(exclude_unset=True)
        if self.reference_field in changes:
            changes[self.reference_field] = clean_reference(changes[self.reference_field])
        merged = {**record.model_dump(), **changes}
        self._validate(merged)

        reference = merged[self.reference_field]
        if reference is not None and reference != getattr(record, self.reference_field):
            existing = await self.repo.get_by_reference(self.db, reference=reference)
            if existing is not None and existing.id != record.id:
                raise self._fail(self.codes.DUPLICATE_REFERENCE, field=self.reference_field, value=reference)

        if self.date_field in changes:
            date_value = changes[self.date_field]
            changes[self.date_field] = as_utc(date_value) if date_value else datetime.now(UTC)
        changes[self.total_field] = self._total(merged)

        try:
            record = await self.repo.update(self.db, db_obj=record, obj_in=changes)
        except IntegrityError as exc:
            await self._classify_conflict(exc, reference, exclude_id=record_id)
            raise
        self.logger.info("%s 수정: id=%s %s=%s", self.label, record_id, self.total_field, changes[self.total_field])
        return record

    async def delete(self, record_id: int) -> Any:
        await self.get(record_id)
        deleted = await self.repo.delete(self.db, id=record_id)
        if deleted is None:
            raise self._fail(self.not_found_code, field="id", value=record_id)
        self.logger.info("%s 삭제: id=%s", self.label, record_id)
        return deleted

    # --- 검증 -----------------------------------------------------------------
    def _validate(self, data: Dict[str, Any]) -> None:
        self._validate_references(data)
        quantity = data.get("quantity")
        if quantity is None or quantity <= 0:
            raise self._fail(self.codes.INVALID_QUANTITY, field="quantity", value=quantity)
        price = data.get(self.price_field)
        if price is None or price <= 0:
            raise self._fail(self.codes.INVALID_PRICE_PER_UNIT, field=self.price_field, value=price)
        date_value = data.get(self.date_field)
        if date_value and as_utc(date_value) > datetime.now(UTC):
            raise self._fail(self.codes.INVALID_DATE, field=self.date_field, value=date_value)

    def _validate_references(self, data: Dict[str, Any]) -> None:
        self._require_id(data.get("item_id"), self.codes.INVALID_ITEM_ID, "item_id")

    def _total(self, data: Dict[str, Any]) -> Any:
        return data["quantity"] * data[self.price_field]

    async def _classify_conflict(
        self, exc: IntegrityError, reference: Optional[str], exclude_id: Optional[int] = None
    ) -> None:
        if reference is None:
            return
        existing = await self.repo.get_by_reference(self.db, reference=reference)
        if existing is not None and existing.id != exclude_id:
            raise self._fail(self.codes.DUPLICATE_REFERENCE, field=self.reference_field, value=reference) from exc


# =============================================================================
# 1. 판매 (Sale) 매니저
# =============================================================================
class SaleService(TransactionRecorder):
    error_class = SaleError
    codes = SaleErrorCode
    label = "판매"
    date_field = "sale_date"
    price_field = "price_per_unit"
    total_field = "total_price"
    reference_field = "transaction_number"
    filter_class = trx_schemas.SaleFilter
    invalid_id_code = SaleErrorCode.INVALID_SALE_ID
    not_found_code = SaleErrorCode.SALE_NOT_FOUND

    def __init__(self, db: Any, repo: TransactionStore = trx_crud.sale):
        super().__init__(db, repo)

    async def create(self, obj_in: trx_schemas.SaleCreate) -> trx_models.Sale:
        return await super().create(obj_in)

    async def update(self, record_id: int, obj_in: trx_schemas.SaleUpdate) -> trx_models.Sale:
        return await super().update(record_id, obj_in)

    async def list_for_customer(self, customer_email: str) -> List[trx_models.Sale]:
        if is_blank(customer_email):
            raise self._fail(SaleErrorCode.CUSTOMER_EMAIL_REQUIRED, field="customer_email")
        return await self.repo.get_filtered(
            self.db, filters=trx_schemas.SaleFilter(customer_email=customer_email.strip())
        )


# =============================================================================
# 2. 구매 (Purchase) 매니저
# =============================================================================
class PurchaseService(TransactionRecorder):
    error_class = PurchaseError
    codes = PurchaseErrorCode
    label = "구매"
    date_field = "purchase_date"
    price_field = "cost_per_unit"
    total_field = "total_cost"
    reference_field = "invoice_number"
    filter_class = trx_schemas.PurchaseFilter
    invalid_id_code = PurchaseErrorCode.INVALID_PURCHASE_ID
    not_found_code = PurchaseErrorCode.PURCHASE_NOT_FOUND

    def __init__(self, db: Any, repo: TransactionStore = trx_crud.purchase):
        super().__init__(db, repo)

    async def create(self, obj_in: trx_schemas.PurchaseCreate) -> trx_models.Purchase:
        return await super().create(obj_in)

    async def update(self, record_id: int, obj_in: trx_schemas.PurchaseUpdate) -> trx_models.Purchase:
        return await super().update(record_id, obj_in)

    async def list_for_supplier(self, supplier_id: int) -> List[trx_models.Purchase]:
        self._require_id(supplier_id, PurchaseErrorCode.INVALID_SUPPLIER_ID, "supplier_id")
        return await self.repo.get_filtered(self.db, filters=trx_schemas.PurchaseFilter(supplier_id=supplier_id))

    def _validate_references(self, data: Dict[str, Any]) -> None:
        self._require_id(data.get("supplier_id"), PurchaseErrorCode.INVALID_SUPPLIER_ID, "supplier_id")
        super()._validate_references(data)
