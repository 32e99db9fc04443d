# fixparts/core/exceptions.py

"""
서비스(매니저) 계층의 실패를 표현하는 도메인 예외 모듈입니다.

각 매니저는 닫힌 오류 코드 집합(Enum)을 가지며, 모든 코드는 실패 종류(ErrorKind)와
기본 메시지를 함께 가집니다. 호출자는 메시지 문자열이 아니라 `kind` 또는 `code`로
실패를 구분합니다.

- `ErrorKind`: 실패 분류 (not_found, invalid_id, validation_failed, ...)
- `DomainError`: 모든 매니저 예외의 기반 클래스
- `<Manager>ErrorCode` / `<Manager>Error`: 매니저별 오류 코드와 예외
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_ID = "invalid_id"
    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_CONFLICT = "duplicate_conflict"
    DEPENDENCY_BLOCKED = "dependency_blocked"
    INTERNAL = "internal"


class ErrorCode(Enum):
    """
    매니저별 오류 코드의 기반 Enum입니다.
    각 멤버의 값은 (코드 문자열, ErrorKind, 기본 메시지) 튜플입니다.
    """

    def __init__(self, code: str, kind: ErrorKind, message: str):
        self.code = code
        self.kind = kind
        self.default_message = message


class DomainError(Exception):
    """
    매니저 계층에서 발생하는 모든 예외의 기반 클래스입니다.
    하위 클래스는 `codes`에 자신이 사용할 수 있는 ErrorCode Enum을 지정합니다.
    """

    codes: type[ErrorCode] = ErrorCode

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        *,
        field: Optional[str] = None,
        value: Any = None,
    ):
        if not isinstance(code, self.codes):
            raise TypeError(f"{type(self).__name__} does not accept error code {code!r}")
        self.code = code
        self.kind = code.kind
        self.message = message or code.default_message
        self.field = field
        self.value = value
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "code": self.code.code,
            "kind": self.kind.value,
            "field": self.field,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.code!r}, {self.message!r})"


# =============================================================================
# 1. 카테고리 (inv.categories)
# =============================================================================
class CategoryErrorCode(ErrorCode):
    INVALID_CATEGORY_ID = ("invalid_category_id", ErrorKind.INVALID_ID, "invalid category ID")
    CATEGORY_NOT_FOUND = ("category_not_found", ErrorKind.NOT_FOUND, "category not found")
    PARENT_NOT_FOUND = ("parent_category_not_found", ErrorKind.NOT_FOUND, "parent category not found")
    NAME_REQUIRED = ("category_name_required", ErrorKind.VALIDATION_FAILED, "category name is required")
    CIRCULAR_REFERENCE = (
        "circular_reference", ErrorKind.DUPLICATE_CONFLICT, "category cannot be its own ancestor"
    )
    HAS_SUBCATEGORIES = (
        "category_has_subcategories", ErrorKind.DEPENDENCY_BLOCKED, "cannot delete category with subcategories"
    )


class CategoryError(DomainError):
    codes = CategoryErrorCode


# =============================================================================
# 2. 품목 (inv.items)
# =============================================================================
class ItemErrorCode(ErrorCode):
    INVALID_ITEM_ID = ("invalid_item_id", ErrorKind.INVALID_ID, "invalid item ID")
    ITEM_NOT_FOUND = ("item_not_found", ErrorKind.NOT_FOUND, "item not found")
    PART_NUMBER_REQUIRED = ("part_number_required", ErrorKind.VALIDATION_FAILED, "part number is required")
    DESCRIPTION_REQUIRED = ("description_required", ErrorKind.VALIDATION_FAILED, "description is required")
    BARCODE_REQUIRED = ("barcode_required", ErrorKind.VALIDATION_FAILED, "barcode is required")
    INVALID_PRICE = ("invalid_price", ErrorKind.VALIDATION_FAILED, "price must be greater than 0")
    INVALID_STOCK = ("invalid_stock", ErrorKind.VALIDATION_FAILED, "stock cannot be negative")
    DUPLICATE_PART_NUMBER = ("duplicate_part_number", ErrorKind.DUPLICATE_CONFLICT, "part number already exists")
    DUPLICATE_BARCODE = ("duplicate_barcode", ErrorKind.DUPLICATE_CONFLICT, "barcode already exists")
    BARCODE_GENERATION_EXHAUSTED = (
        "barcode_generation_exhausted", ErrorKind.INTERNAL, "could not generate a unique barcode"
    )


class ItemError(DomainError):
    codes = ItemErrorCode


# =============================================================================
# 3. 차량 호환성 (inv.compatibility)
# =============================================================================
class CompatibilityErrorCode(ErrorCode):
    INVALID_ITEM_ID = ("invalid_item_id", ErrorKind.INVALID_ID, "invalid item ID")
    INVALID_SUBMODEL_ID = ("invalid_submodel_id", ErrorKind.INVALID_ID, "invalid submodel ID")
    ITEM_NOT_FOUND = ("item_not_found", ErrorKind.NOT_FOUND, "item not found")
    SUBMODEL_NOT_FOUND = ("submodel_not_found", ErrorKind.NOT_FOUND, "submodel not found")
    COMPATIBILITY_NOT_FOUND = ("compatibility_not_found", ErrorKind.NOT_FOUND, "compatibility not found")
    COMPATIBILITY_EXISTS = ("compatibility_exists", ErrorKind.DUPLICATE_CONFLICT, "compatibility already exists")


class CompatibilityError(DomainError):
    codes = CompatibilityErrorCode


# =============================================================================
# 4. 차량 계층 (veh.vehicle_makes / vehicle_models / vehicle_submodels)
# =============================================================================
class VehicleErrorCode(ErrorCode):
    INVALID_MAKE_ID = ("invalid_make_id", ErrorKind.INVALID_ID, "invalid make ID")
    INVALID_MODEL_ID = ("invalid_model_id", ErrorKind.INVALID_ID, "invalid model ID")
    INVALID_SUBMODEL_ID = ("invalid_submodel_id", ErrorKind.INVALID_ID, "invalid submodel ID")
    MAKE_NOT_FOUND = ("make_not_found", ErrorKind.NOT_FOUND, "make not found")
    MODEL_NOT_FOUND = ("model_not_found", ErrorKind.NOT_FOUND, "model not found")
    SUBMODEL_NOT_FOUND = ("submodel_not_found", ErrorKind.NOT_FOUND, "submodel not found")
    FIELD_REQUIRED = ("field_required", ErrorKind.VALIDATION_FAILED, "required field is missing")
    INVALID_YEAR_RANGE = (
        "invalid_year_range", ErrorKind.VALIDATION_FAILED, "end year cannot be earlier than start year"
    )
    MAKE_HAS_MODELS = ("make_has_models", ErrorKind.DEPENDENCY_BLOCKED, "cannot delete make with existing models")
    MODEL_HAS_SUBMODELS = (
        "model_has_submodels", ErrorKind.DEPENDENCY_BLOCKED, "cannot delete model with existing submodels"
    )


class VehicleError(DomainError):
    codes = VehicleErrorCode


# =============================================================================
# 5. 공급업체 (ven.suppliers)
# =============================================================================
class SupplierErrorCode(ErrorCode):
    INVALID_SUPPLIER_ID = ("invalid_supplier_id", ErrorKind.INVALID_ID, "invalid supplier ID")
    SUPPLIER_NOT_FOUND = ("supplier_not_found", ErrorKind.NOT_FOUND, "supplier not found")
    NAME_REQUIRED = ("supplier_name_required", ErrorKind.VALIDATION_FAILED, "supplier name is required")
    DUPLICATE_SUPPLIER_NAME = (
        "duplicate_supplier_name", ErrorKind.DUPLICATE_CONFLICT, "supplier name already exists"
    )
    SUPPLIER_HAS_ITEMS = (
        "supplier_has_items", ErrorKind.DEPENDENCY_BLOCKED, "cannot delete supplier with associated items"
    )


class SupplierError(DomainError):
    codes = SupplierErrorCode


# =============================================================================
# 6. 판매 / 구매 (trx.sales / trx.purchases)
# =============================================================================
class SaleErrorCode(ErrorCode):
    INVALID_SALE_ID = ("invalid_sale_id", ErrorKind.INVALID_ID, "invalid sale ID")
    INVALID_ITEM_ID = ("invalid_item_id", ErrorKind.INVALID_ID, "invalid item ID")
    SALE_NOT_FOUND = ("sale_not_found", ErrorKind.NOT_FOUND, "sale not found")
    INVALID_QUANTITY = ("invalid_quantity", ErrorKind.VALIDATION_FAILED, "quantity must be greater than 0")
    INVALID_PRICE_PER_UNIT = (
        "invalid_price_per_unit", ErrorKind.VALIDATION_FAILED, "price per unit must be greater than 0"
    )
    INVALID_DATE = ("invalid_date", ErrorKind.VALIDATION_FAILED, "sale date cannot be in the future")
    REFERENCE_REQUIRED = ("transaction_number_required", ErrorKind.VALIDATION_FAILED, "transaction number is required")
    CUSTOMER_EMAIL_REQUIRED = ("customer_email_required", ErrorKind.VALIDATION_FAILED, "customer email is required")
    DUPLICATE_REFERENCE = (
        "duplicate_transaction_number", ErrorKind.DUPLICATE_CONFLICT, "transaction number already exists"
    )


class SaleError(DomainError):
    codes = SaleErrorCode


class PurchaseErrorCode(ErrorCode):
    INVALID_PURCHASE_ID = ("invalid_purchase_id", ErrorKind.INVALID_ID, "invalid purchase ID")
    INVALID_ITEM_ID = ("invalid_item_id", ErrorKind.INVALID_ID, "invalid item ID")
    INVALID_SUPPLIER_ID = ("invalid_supplier_id", ErrorKind.INVALID_ID, "invalid supplier ID")
    PURCHASE_NOT_FOUND = ("purchase_not_found", ErrorKind.NOT_FOUND, "purchase not found")
    INVALID_QUANTITY = ("invalid_quantity", ErrorKind.VALIDATION_FAILED, "quantity must be greater than 0")
    INVALID_PRICE_PER_UNIT = (
        "invalid_cost_per_unit", ErrorKind.VALIDATION_FAILED, "cost per unit must be greater than 0"
    )
    INVALID_DATE = ("invalid_date", ErrorKind.VALIDATION_FAILED, "purchase date cannot be in the future")
    REFERENCE_REQUIRED = ("invoice_number_required", ErrorKind.VALIDATION_FAILED, "invoice number is required")
    DUPLICATE_REFERENCE = (
        "duplicate_invoice_number", ErrorKind.DUPLICATE_CONFLICT, "invoice number already exists"
    )


class PurchaseError(DomainError):
    codes = PurchaseErrorCode


# =============================================================================
# 7. 대시보드 보고서 (rpt.dashboard)
# =============================================================================
class ReportErrorCode(ErrorCode):
    INVALID_LIMIT = ("invalid_limit", ErrorKind.VALIDATION_FAILED, "limit must be greater than 0")
    INVALID_PERIOD = ("invalid_period", ErrorKind.VALIDATION_FAILED, "period must be at least 1 day")


class ReportError(DomainError):
    codes = ReportErrorCode
