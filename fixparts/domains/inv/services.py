# fixparts/domains/inv/services.py

"""
'inv' 도메인의 매니저(서비스) 모듈입니다.

- CategoryService: 카테고리 트리 구성, 자기 참조/순환 방지, 하위 카테고리가 있는 노드의 삭제 차단.
- ItemService: 부품 번호/바코드 고유성 보장과 충돌 시 재시도하는 바코드 자동 생성.

저장소 수준의 고유 제약 조건이 최종 판정 기준이며, 매니저의 사전 조회는
사용자에게 명확한 오류를 돌려주기 위한 빠른 경로입니다. 쓰기 중 IntegrityError가 발생하면
자연 키를 다시 조회하여 동일한 중복 오류 코드로 변환합니다.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol

from sqlalchemy.exc import IntegrityError

from fixparts.core.config import settings
from fixparts.core.exceptions import CategoryError, CategoryErrorCode, ItemError, ItemErrorCode
from fixparts.core.service_base import BaseService, clean_reference, is_blank
from fixparts.domains.inv import crud as inv_crud
from fixparts.domains.inv import models as inv_models
from fixparts.domains.inv import schemas as inv_schemas
from fixparts.utils.barcode import generate_barcode


class CategoryStore(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[inv_models.Category]: ...
    async def get_all(self, db: Any) -> List[inv_models.Category]: ...
    async def get_subcategories(self, db: Any, *, parent_id: int) -> List[inv_models.Category]: ...
    async def create(self, db: Any, *, obj_in: Any) -> inv_models.Category: ...
    async def update(self, db: Any, *, db_obj: inv_models.Category, obj_in: Any) -> inv_models.Category: ...
    async def delete(self, db: Any, *, id: Any) -> Optional[inv_models.Category]: ...


class ItemStore(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[inv_models.Item]: ...
    async def get_by_part_number(self, db: Any, *, part_number: str) -> Optional[inv_models.Item]: ...
    async def get_by_barcode(self, db: Any, *, barcode: str) -> Optional[inv_models.Item]: ...
    async def get_filtered(
        self,
        db: Any,
        *,
        filters: Optional[inv_schemas.ItemFilter] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[inv_schemas.ItemReadWithNames]: ...
    async def get_low_stock(self, db: Any) -> List[inv_schemas.ItemReadWithNames]: ...
    async def create(self, db: Any, *, obj_in: Any) -> inv_models.Item: ...
    async def update(self, db: Any, *, db_obj: inv_models.Item, obj_in: Any) -> inv_models.Item: ...
    async def delete(self, db: Any, *, id: Any) -> Optional[inv_models.Item]: ...


# =============================================================================
# 1. 카테고리 계층 매니저
# =============================================================================
class CategoryService(BaseService):
    error_class = CategoryError

    def __init__(self, db: Any, repo: CategoryStore = inv_crud.category):
        super().__init__(db)
        self.repo = repo

    async def get(self, category_id: int) -> inv_schemas.CategoryDetail:
        """카테고리와 직속 하위 카테고리를 함께 반환합니다."""
        category = await self._get(category_id)
        subcategories = await self.repo.get_subcategories(self.db, parent_id=category.id)
        return inv_schemas.CategoryDetail(
            **category.model_dump(),
            subcategories=[inv_schemas.CategoryRead.model_validate(sub) for sub in subcategories],
        )

    async def list(self) -> List[inv_models.Category]:
        return await self.repo.get_all(self.db)

    async def list_subcategories(self, parent_id: int) -> List[inv_models.Category]:
        await self._get(parent_id)
        return await self.repo.get_subcategories(self.db, parent_id=parent_id)

    async def get_tree(self) -> List[inv_schemas.CategoryTreeNode]:
        """
        전체 카테고리를 한 번에 조회하여 트리(숲)를 구성합니다.

        id 기준 색인을 만든 뒤 parent_id로 한 번 묶는 O(n) 방식입니다.
        형제 노드의 순서는 저장소가 반환한 순서(이름순)를 따릅니다.
        부모를 찾을 수 없는 카테고리는 루트로 취급합니다.
        """
        categories = await self.repo.get_all(self.db)
        nodes: Dict[int, inv_schemas.CategoryTreeNode] = {
            category.id: inv_schemas.CategoryTreeNode(**category.model_dump(), children=[])
            for category in categories
        }

        roots: List[inv_schemas.CategoryTreeNode] = []
        for category in categories:
            node = nodes[category.id]
            parent = nodes.get(category.parent_id) if category.parent_id is not None else None
            if parent is None:
                if category.parent_id is not None:
                    self.logger.warning("부모 카테고리가 없는 카테고리: id=%s parent_id=%s", category.id, category.parent_id)
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    async def create(self, obj_in: inv_schemas.CategoryCreate) -> inv_models.Category:
        """
        새 카테고리를 생성합니다.

        Raises:
            CategoryError: 이름이 비어 있거나(NAME_REQUIRED) 상위 카테고리가 없는 경우(PARENT_NOT_FOUND).
        """
        data = obj_in.model_dump()
        if is_blank(data.get("name")):
            raise self._fail(CategoryErrorCode.NAME_REQUIRED, field="name")
        if data.get("parent_id") is not None:
            await self._require_parent(data["parent_id"])

        category = await self.repo.create(self.db, obj_in=data)
        self.logger.info("카테고리 생성: id=%s name=%s parent_id=%s", category.id, category.name, category.parent_id)
        return category

    async def update(self, category_id: int, obj_in: inv_schemas.CategoryUpdate) -> inv_models.Category:
        """
        카테고리를 수정합니다.

        상위 카테고리가 지정되면 존재해야 하고, 자기 자신이거나
        자기 자신의 하위 카테고리(조상 체인에 자신이 포함된 카테고리)일 수 없습니다.

        Raises:
            CategoryError: CATEGORY_NOT_FOUND, NAME_REQUIRED, PARENT_NOT_FOUND, CIRCULAR_REFERENCE.
        """
        category = await self._get(category_id)
        changes = obj_in.model_dump(exclude_unset=True)
        if "name" in changes and is_blank(changes["name"]):
            raise self._fail(CategoryErrorCode.NAME_REQUIRED, field="name")

        parent_id = changes.get("parent_id")
        if parent_id is not None:
            parent = await self._require_parent(parent_id)
            if parent.id == category.id:
                raise self._fail(CategoryErrorCode.CIRCULAR_REFERENCE, field="parent_id", value=parent_id)
            await self._check_ancestors(category.id, parent)

        category = await self.repo.update(self.db, db_obj=category, obj_in=changes)
        self.logger.info("카테고리 수정: id=%s", category_id)
        return category

    async def delete(self, category_id: int) -> inv_models.Category:
        await self._get(category_id)
        if await self.repo.get_subcategories(self.db, parent_id=category_id):
            raise self._fail(CategoryErrorCode.HAS_SUBCATEGORIES, field="id", value=category_id)

        deleted = await self.repo.delete(self.db, id=category_id)
        if deleted is None:
            raise self._fail(CategoryErrorCode.CATEGORY_NOT_FOUND, field="id", value=category_id)
        self.logger.info("카테고리 삭제: id=%s", category_id)
        return deleted

    async def _get(self, category_id: int) -> inv_models.Category:
        self._require_id(category_id, CategoryErrorCode.INVALID_CATEGORY_ID)
        category = await self.repo.get(self.db, category_id)
        if category is None:
            raise self._fail(CategoryErrorCode.CATEGORY_NOT_FOUND, field="id", value=category_id)
        return category

    async def _require_parent(self, parent_id: int) -> inv_models.Category:
        self._require_id(parent_id, CategoryErrorCode.INVALID_CATEGORY_ID, "parent_id")
        parent = await self.repo.get(self.db, parent_id)
        if parent is None:
            raise self._fail(CategoryErrorCode.PARENT_NOT_FOUND, field="parent_id", value=parent_id)
        return parent

    async def _check_ancestors(self, category_id: int, parent: inv_models.Category) -> None:
        # 새 부모의 조상 체인을 루트까지 따라가며 자기 자신이 나오는지 확인합니다.
        seen = {parent.id}
        current = parent
        while current.parent_id is not None:
            if current.parent_id == category_id:
                raise self._fail(CategoryErrorCode.CIRCULAR_REFERENCE, field="parent_id", value=parent.id)
            if current.parent_id in seen:
                break
            seen.add(current.parent_id)
            current = await self.repo.get(self.db, current.parent_id)
            if current is None:
                break


# =============================================================================
# 2. 품목 식별자 매니저
# =============================================================================
class ItemService(BaseService):
    error_class = ItemError

    def __init__(
        self,
        db: Any,
        repo: ItemStore = inv_crud.item,
        barcode_generator: Callable[..., str] = generate_barcode,
        barcode_attempts: Optional[int] = None,
    ):
        super().__init__(db)
        self.repo = repo
        self.barcode_generator = barcode_generator
        self.barcode_attempts = barcode_attempts or settings.BARCODE_MAX_ATTEMPTS

    async def get(self, item_id: int) -> inv_models.Item:
        self._require_id(item_id, ItemErrorCode.INVALID_ITEM_ID, "item_id")
        item = await self.repo.get(self.db, item_id)
        if item is None:
            raise self._fail(ItemErrorCode.ITEM_NOT_FOUND, field="item_id", value=item_id)
        return item

    async def get_by_part_number(self, part_number: str) -> inv_models.Item:
        if is_blank(part_number):
            raise self._fail(ItemErrorCode.PART_NUMBER_REQUIRED, field="part_number")
        item = await self.repo.get_by_part_number(self.db, part_number=part_number)
        if item is None:
            raise self._fail(ItemErrorCode.ITEM_NOT_FOUND, field="part_number", value=part_number)
        return item

    async def get_by_barcode(self, barcode: str) -> inv_models.Item:
        if is_blank(barcode):
            raise self._fail(ItemErrorCode.BARCODE_REQUIRED, field="barcode")
        item = await self.repo.get_by_barcode(self.db, barcode=barcode)
        if item is None:
            raise self._fail(ItemErrorCode.ITEM_NOT_FOUND, field="barcode", value=barcode)
        return item

    async def list(
        self,
        filters: Optional[inv_schemas.ItemFilter] = None,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[inv_schemas.ItemReadWithNames]:
        return await self.repo.get_filtered(self.db, filters=filters, skip=skip, limit=limit)

    async def list_low_stock(self) -> List[inv_schemas.ItemReadWithNames]:
        return await self.repo.get_low_stock(self.db)

    async def create(self, obj_in: inv_schemas.ItemCreate) -> inv_models.Item:
        """
        새 품목을 생성합니다.

        바코드가 주어지지 않으면 자동 생성하며, 생성된 바코드가 기존 바코드와 충돌하면
        최대 BARCODE_MAX_ATTEMPTS 회까지 다시 생성합니다. 호출자가 지정한 바코드의
        충돌은 재생성하지 않고 DUPLICATE_BARCODE로 거부합니다.

        Raises:
            ItemError: 검증 실패, DUPLICATE_PART_NUMBER, DUPLICATE_BARCODE,
                BARCODE_GENERATION_EXHAUSTED.
        """
        data = obj_in.model_dump()
        data["barcode"] = clean_reference(data.get("barcode"))
        self._validate(data)

        if await self.repo.get_by_part_number(self.db, part_number=data["part_number"]) is not None:
            raise self._fail(ItemErrorCode.DUPLICATE_PART_NUMBER, field="part_number", value=data["part_number"])

        if data["barcode"] is None:
            data["barcode"] = await self._generate_unique_barcode(data.get("category_id"), data.get("supplier_id"))
        elif await self.repo.get_by_barcode(self.db, barcode=data["barcode"]) is not None:
            raise self._fail(ItemErrorCode.DUPLICATE_BARCODE, field="barcode", value=data["barcode"])

        try:
            item = await self.repo.create(self.db, obj_in=data)
        except IntegrityError as exc:
            await self._classify_conflict(exc, data)
            raise
        self.logger.info("품목 생성: id=%s part_number=%s barcode=%s", item.id, item.part_number, item.barcode)
        return item

    async def update(self, item_id: int, obj_in: inv_schemas.ItemUpdate) -> inv_models.Item:
        """
        품목을 수정합니다. 변경 사항을 기존 레코드에 병합한 뒤 전체를 다시 검증하고,
        부품 번호나 바코드가 바뀌는 경우 자신을 제외하고 고유성을 확인합니다.
        """
        item = await self.get(item_id)
        changes = obj_in.model_dump(exclude_unset=True)
        if "barcode" in changes:
            changes["barcode"] = clean_reference(changes["barcode"])
        merged = {**item.model_dump(), **changes}
        self._validate(merged)

        if merged["part_number"] != item.part_number:
            existing = await self.repo.get_by_part_number(self.db, part_number=merged["part_number"])
            if existing is not None and existing.id != item.id:
                raise self._fail(ItemErrorCode.DUPLICATE_PART_NUMBER, field="part_number", value=merged["part_number"])

        if merged["barcode"] is not None and merged["barcode"] != item.barcode:
            existing = await self.repo.get_by_barcode(self.db, barcode=merged["barcode"])
            if existing is not None and existing.id != item.id:
                raise self._fail(ItemErrorCode.DUPLICATE_BARCODE, field="barcode", value=merged["barcode"])

        try:
            item = await self.repo.update(self.db, db_obj=item, obj_in=changes)
        except IntegrityError as exc:
            await self._classify_conflict(exc, merged, exclude_id=item_id)
            raise
        self.logger.info("품목 수정: id=%s", item_id)
        return item

    async def delete(self, item_id: int) -> inv_models.Item:
        await self.get(item_id)
        deleted = await self.repo.delete(self.db, id=item_id)
        if deleted is None:
            raise self._fail(ItemErrorCode.ITEM_NOT_FOUND, field="item_id", value=item_id)
        self.logger.info("품목 삭제: id=%s", item_id)
        return deleted

    def _validate(self, data: Dict[str, Any]) -> None:
        if is_blank(data.get("part_number")):
            raise self._fail(ItemErrorCode.PART_NUMBER_REQUIRED, field="part_number")
        if is_blank(data.get("description")):
            raise self._fail(ItemErrorCode.DESCRIPTION_REQUIRED, field="description")
        for field in ("buy_price", "sell_price"):
            value = data.get(field)
            if value is None or value <= 0:
                raise self._fail(
                    ItemErrorCode.INVALID_PRICE, f"{field.replace('_', ' ')} must be greater than 0",
                    field=field, value=value,
                )
        for field in ("current_stock", "minimum_stock"):
            value = data.get(field)
            if value is None or value < 0:
                raise self._fail(
                    ItemErrorCode.INVALID_STOCK, f"{field.replace('_', ' ')} cannot be negative",
                    field=field, value=value,
                )

    async def _generate_unique_barcode(self, category_id: Optional[int], supplier_id: Optional[int]) -> str:
        for attempt in range(1, self.barcode_attempts + 1):
            barcode = self.barcode_generator(category_id, supplier_id)
            if await self.repo.get_by_barcode(self.db, barcode=barcode) is None:
                return barcode
            self.logger.warning("생성된 바코드 충돌, 재생성합니다: barcode=%s attempt=%s", barcode, attempt)
        raise self._fail(ItemErrorCode.BARCODE_GENERATION_EXHAUSTED, field="barcode")

    async def _classify_conflict(
        self, exc: IntegrityError, data: Dict[str, Any], exclude_id: Optional[int] = None
    ) -> None:
        existing = await self.repo.get_by_part_number(self.db, part_number=data["part_number"])
        if existing is not None and existing.id != exclude_id:
            raise self._fail(
                ItemErrorCode.DUPLICATE_PART_NUMBER, field="part_number", value=data["part_number"]
            ) from exc
        if data.get("barcode"):
            existing = await self.repo.get_by_barcode(self.db, barcode=data["barcode"])
            if existing is not None and existing.id != exclude_id:
                raise self._fail(ItemErrorCode.DUPLICATE_BARCODE, field="barcode", value=data["barcode"]) from exc
