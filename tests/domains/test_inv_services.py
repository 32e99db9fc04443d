# tests/domains/test_inv_services.py

"""
'inv' 도메인 매니저(CategoryService, ItemService)와 CompatibilityService에 대한 단위 테스트입니다.

데이터베이스 대신 tests/fakes.py의 인메모리 저장소를 주입하여 업무 규칙만 검증합니다.
"""

from datetime import datetime, UTC
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from fixparts.core.exceptions import (
    CategoryError,
    CategoryErrorCode,
    CompatibilityError,
    CompatibilityErrorCode,
    ErrorKind,
    ItemError,
    ItemErrorCode,
)
from fixparts.domains.inv import schemas as inv_schemas
from fixparts.domains.inv.services import CategoryService, ItemService
from fixparts.domains.veh import models as veh_models
from fixparts.services.compatibility_service import CompatibilityService
from fixparts.utils.barcode import generate_barcode

from tests.fakes import (
    FakeCategoryStore,
    FakeCompatibilityStore,
    FakeItemStore,
    FakeSubmodelStore,
    FakeSupplierStore,
    is_generated_barcode,
)


def make_item(**overrides) -> inv_schemas.ItemCreate:
    data = {
        "part_number": "BR-100",
        "item_name": "Front brake pad set",
        "description": "Ceramic front brake pads",
        "buy_price": Decimal("25.00"),
        "sell_price": Decimal("49.99"),
        "current_stock": 10,
        "minimum_stock": 2,
    }
    data.update(overrides)
    return inv_schemas.ItemCreate(**data)


@pytest.fixture
def category_service() -> CategoryService:
    return CategoryService(db=None, repo=FakeCategoryStore())


@pytest.fixture
def item_store() -> FakeItemStore:
    return FakeItemStore()


@pytest.fixture
def item_service(item_store: FakeItemStore) -> ItemService:
    return ItemService(db=None, repo=item_store)


# =============================================================================
# 1. 카테고리
# =============================================================================
@pytest.mark.asyncio
async def test_category_tree_groups_children_under_parents(category_service: CategoryService):
    """
    루트 카테고리 아래에 하위 카테고리가 이름순으로 묶여 트리가 구성되는지 테스트합니다.
    """
    brakes = await category_service.create(inv_schemas.CategoryCreate(name="Brakes"))
    await category_service.create(inv_schemas.CategoryCreate(name="Rotors", parent_id=brakes.id))
    await category_service.create(inv_schemas.CategoryCreate(name="Pads", parent_id=brakes.id))
    await category_service.create(inv_schemas.CategoryCreate(name="Engine"))

    tree = await category_service.get_tree()

    assert [node.name for node in tree] == ["Brakes", "Engine"]
    assert [child.name for child in tree[0].children] == ["Pads", "Rotors"]
    assert tree[1].children == []


@pytest.mark.asyncio
async def test_category_tree_treats_orphans_as_roots(category_service: CategoryService):
    root = await category_service.create(inv_schemas.CategoryCreate(name="Lighting"))
    orphan = await category_service.create(inv_schemas.CategoryCreate(name="Bulbs", parent_id=root.id))
    # 부모 행이 사라진 상황을 재현합니다.
    del category_service.repo.rows[root.id]

    tree = await category_service.get_tree()

    assert [node.id for node in tree] == [orphan.id]


@pytest.mark.asyncio
async def test_category_get_includes_direct_subcategories(category_service: CategoryService):
    brakes = await category_service.create(inv_schemas.CategoryCreate(name="Brakes"))
    pads = await category_service.create(inv_schemas.CategoryCreate(name="Pads", parent_id=brakes.id))
    await category_service.create(inv_schemas.CategoryCreate(name="Ceramic", parent_id=pads.id))

    detail = await category_service.get(brakes.id)

    assert detail.name == "Brakes"
    assert [sub.name for sub in detail.subcategories] == ["Pads"]


@pytest.mark.asyncio
async def test_category_create_validation(category_service: CategoryService):
    with pytest.raises(CategoryError) as exc_info:
        await category_service.create(inv_schemas.CategoryCreate(name="   "))
    assert exc_info.value.code is CategoryErrorCode.NAME_REQUIRED
    assert exc_info.value.kind is ErrorKind.VALIDATION_FAILED

    with pytest.raises(CategoryError) as exc_info:
        await category_service.create(inv_schemas.CategoryCreate(name="Filters", parent_id=999))
    assert exc_info.value.code is CategoryErrorCode.PARENT_NOT_FOUND
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_category_cannot_be_its_own_parent(category_service: CategoryService):
    category = await category_service.create(inv_schemas.CategoryCreate(name="Suspension"))

    with pytest.raises(CategoryError) as exc_info:
        await category_service.update(category.id, inv_schemas.CategoryUpdate(parent_id=category.id))

    assert exc_info.value.code is CategoryErrorCode.CIRCULAR_REFERENCE
    assert exc_info.value.kind is ErrorKind.DUPLICATE_CONFLICT
    assert (await category_service.get(category.id)).parent_id is None


@pytest.mark.asyncio
async def test_category_cannot_move_under_its_descendant(category_service: CategoryService):
    top = await category_service.create(inv_schemas.CategoryCreate(name="Top"))
    middle = await category_service.create(inv_schemas.CategoryCreate(name="Middle", parent_id=top.id))
    bottom = await category_service.create(inv_schemas.CategoryCreate(name="Bottom", parent_id=middle.id))

    with pytest.raises(CategoryError) as exc_info:
        await category_service.update(top.id, inv_schemas.CategoryUpdate(parent_id=bottom.id))
    assert exc_info.value.code is CategoryErrorCode.CIRCULAR_REFERENCE

    # 형제 트리로의 이동은 허용됩니다.
    other = await category_service.create(inv_schemas.CategoryCreate(name="Other"))
    moved = await category_service.update(bottom.id, inv_schemas.CategoryUpdate(parent_id=other.id))
    assert moved.parent_id == other.id


@pytest.mark.asyncio
async def test_category_delete_blocked_by_subcategories(category_service: CategoryService):
    parent = await category_service.create(inv_schemas.CategoryCreate(name="Exhaust"))
    child = await category_service.create(inv_schemas.CategoryCreate(name="Mufflers", parent_id=parent.id))

    with pytest.raises(CategoryError) as exc_info:
        await category_service.delete(parent.id)
    assert exc_info.value.code is CategoryErrorCode.HAS_SUBCATEGORIES
    assert exc_info.value.kind is ErrorKind.DEPENDENCY_BLOCKED

    await category_service.delete(child.id)
    await category_service.delete(parent.id)
    assert await category_service.list() == []


@pytest.mark.asyncio
async def test_category_invalid_id(category_service: CategoryService):
    with pytest.raises(CategoryError) as exc_info:
        await category_service.get(0)
    assert exc_info.value.code is CategoryErrorCode.INVALID_CATEGORY_ID
    assert exc_info.value.kind is ErrorKind.INVALID_ID


# =============================================================================
# 2. 품목
# =============================================================================
@pytest.mark.asyncio
async def test_item_create_generates_barcode(item_service: ItemService):
    item = await item_service.create(make_item(category_id=3, supplier_id=12))

    assert item.id is not None
    assert is_generated_barcode(item.barcode)
    assert item.barcode.startswith("C003-S012-")


@pytest.mark.asyncio
async def test_item_create_blank_barcode_is_generated(item_service: ItemService):
    item = await item_service.create(make_item(barcode="   "))

    assert item.barcode.startswith("C000-S000-")
    assert is_generated_barcode(item.barcode)


@pytest.mark.asyncio
async def test_item_create_duplicate_part_number(item_service: ItemService):
    await item_service.create(make_item())

    with pytest.raises(ItemError) as exc_info:
        await item_service.create(make_item(item_name="Another pad set"))

    assert exc_info.value.code is ItemErrorCode.DUPLICATE_PART_NUMBER
    assert exc_info.value.kind is ErrorKind.DUPLICATE_CONFLICT
    assert exc_info.value.field == "part_number"


@pytest.mark.asyncio
async def test_item_create_duplicate_supplied_barcode(item_service: ItemService):
    await item_service.create(make_item(barcode="4006381333931"))

    with pytest.raises(ItemError) as exc_info:
        await item_service.create(make_item(part_number="BR-200", barcode="4006381333931"))

    assert exc_info.value.code is ItemErrorCode.DUPLICATE_BARCODE


@pytest.mark.asyncio
async def test_item_barcode_generation_retries_on_collision(item_store: FakeItemStore):
    taken = "C000-S000-250101000000-AAAAAAAA"
    fresh = "C000-S000-250101000000-BBBBBBBB"
    await ItemService(None, repo=item_store).create(make_item(part_number="OLD-1", barcode=taken))

    generated = iter([taken, taken, fresh])
    service = ItemService(None, repo=item_store, barcode_generator=lambda *args: next(generated))

    item = await service.create(make_item(part_number="NEW-1"))

    assert item.barcode == fresh


@pytest.mark.asyncio
async def test_item_barcode_generation_exhausted(item_store: FakeItemStore):
    taken = "C000-S000-250101000000-AAAAAAAA"
    await ItemService(None, repo=item_store).create(make_item(part_number="OLD-1", barcode=taken))

    calls = []

    def generator(*args):
        calls.append(args)
        return taken

    service = ItemService(None, repo=item_store, barcode_generator=generator, barcode_attempts=3)

    with pytest.raises(ItemError) as exc_info:
        await service.create(make_item(part_number="NEW-1"))

    assert exc_info.value.code is ItemErrorCode.BARCODE_GENERATION_EXHAUSTED
    assert exc_info.value.kind is ErrorKind.INTERNAL
    assert len(calls) == 3
    assert len(item_store.rows) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, code, field",
    [
        ({"part_number": " "}, ItemErrorCode.PART_NUMBER_REQUIRED, "part_number"),
        ({"description": ""}, ItemErrorCode.DESCRIPTION_REQUIRED, "description"),
        ({"buy_price": Decimal("0")}, ItemErrorCode.INVALID_PRICE, "buy_price"),
        ({"sell_price": Decimal("-1.00")}, ItemErrorCode.INVALID_PRICE, "sell_price"),
        ({"current_stock": -1}, ItemErrorCode.INVALID_STOCK, "current_stock"),
        ({"minimum_stock": -5}, ItemErrorCode.INVALID_STOCK, "minimum_stock"),
    ],
)
async def test_item_create_validation(item_service: ItemService, overrides, code, field):
    with pytest.raises(ItemError) as exc_info:
        await item_service.create(make_item(**overrides))

    assert exc_info.value.code is code
    assert exc_info.value.field == field
    assert exc_info.value.kind is ErrorKind.VALIDATION_FAILED


@pytest.mark.asyncio
async def test_item_update_merges_and_revalidates(item_service: ItemService):
    item = await item_service.create(make_item())
    other = await item_service.create(make_item(part_number="BR-200"))

    updated = await item_service.update(item.id, inv_schemas.ItemUpdate(sell_price=Decimal("59.99")))
    assert updated.sell_price == Decimal("59.99")
    assert updated.part_number == "BR-100"

    with pytest.raises(ItemError) as exc_info:
        await item_service.update(item.id, inv_schemas.ItemUpdate(buy_price=Decimal("0")))
    assert exc_info.value.code is ItemErrorCode.INVALID_PRICE

    with pytest.raises(ItemError) as exc_info:
        await item_service.update(item.id, inv_schemas.ItemUpdate(part_number=other.part_number))
    assert exc_info.value.code is ItemErrorCode.DUPLICATE_PART_NUMBER

    with pytest.raises(ItemError) as exc_info:
        await item_service.update(item.id, inv_schemas.ItemUpdate(barcode=other.barcode))
    assert exc_info.value.code is ItemErrorCode.DUPLICATE_BARCODE

    # 자기 자신의 값으로 수정하는 것은 충돌이 아닙니다.
    same = await item_service.update(item.id, inv_schemas.ItemUpdate(part_number="BR-100", barcode=item.barcode))
    assert same.id == item.id


@pytest.mark.asyncio
async def test_item_lookup_by_part_number_and_barcode(item_service: ItemService):
    item = await item_service.create(make_item())

    assert (await item_service.get_by_part_number("BR-100")).id == item.id
    assert (await item_service.get_by_barcode(item.barcode)).id == item.id

    with pytest.raises(ItemError) as exc_info:
        await item_service.get_by_part_number("NOPE")
    assert exc_info.value.code is ItemErrorCode.ITEM_NOT_FOUND

    with pytest.raises(ItemError) as exc_info:
        await item_service.get_by_part_number("")
    assert exc_info.value.code is ItemErrorCode.PART_NUMBER_REQUIRED

    with pytest.raises(ItemError) as exc_info:
        await item_service.get_by_barcode("  ")
    assert exc_info.value.code is ItemErrorCode.BARCODE_REQUIRED


@pytest.mark.asyncio
async def test_item_low_stock_ordering(item_service: ItemService):
    await item_service.create(make_item(part_number="A-1", current_stock=2, minimum_stock=2))
    await item_service.create(make_item(part_number="B-1", current_stock=0, minimum_stock=1))
    await item_service.create(make_item(part_number="C-1", current_stock=9, minimum_stock=1))
    await item_service.create(make_item(part_number="D-1", current_stock=0, minimum_stock=3, is_active=False))

    low = await item_service.list_low_stock()

    assert [item.part_number for item in low] == ["B-1", "A-1"]


@pytest.mark.asyncio
async def test_item_lists_carry_category_and_supplier_names():
    """
    목록 조회 결과에 카테고리 이름과 공급업체 이름이 함께 담기는지 테스트합니다.
    카테고리/공급업체가 없는 품목은 이름이 None입니다.
    """
    categories = FakeCategoryStore()
    suppliers = FakeSupplierStore()
    brakes = await categories.create(None, obj_in={"name": "Brakes"})
    bosch = await suppliers.create(None, obj_in={"name": "Bosch"})
    service = ItemService(None, repo=FakeItemStore(categories=categories, suppliers=suppliers))

    await service.create(
        make_item(part_number="BR-1", category_id=brakes.id, supplier_id=bosch.id, current_stock=0)
    )
    await service.create(make_item(part_number="MISC-1", current_stock=0))

    items = await service.list()
    assert [(i.part_number, i.category_name, i.supplier_name) for i in items] == [
        ("BR-1", "Brakes", "Bosch"),
        ("MISC-1", None, None),
    ]

    low = await service.list_low_stock()
    assert [i.category_name for i in low] == ["Brakes", None]


def test_generate_barcode_pads_missing_ids():
    now = datetime(2025, 1, 14, 9, 30, 15, tzinfo=UTC)

    barcode = generate_barcode(None, 7, now=now)

    assert barcode.startswith("C000-S007-250114093015-")
    assert is_generated_barcode(barcode)
    assert generate_barcode(1, 1, now=now) != generate_barcode(1, 1, now=now)


@pytest.mark.asyncio
async def test_item_delete_then_get(item_service: ItemService):
    item = await item_service.create(make_item())
    await item_service.delete(item.id)

    with pytest.raises(ItemError) as exc_info:
        await item_service.get(item.id)
    assert exc_info.value.code is ItemErrorCode.ITEM_NOT_FOUND


@pytest.mark.asyncio
async def test_item_concurrent_insert_is_reported_as_duplicate(item_store: FakeItemStore):
    """
    사전 조회를 통과했지만 저장 시 고유 제약에 걸린 경우 DUPLICATE 코드로 변환되는지 테스트합니다.
    """
    service = ItemService(None, repo=item_store)
    await service.create(make_item(barcode="4006381333931"))

    # 부품 번호 사전 조회와 바코드 사전 조회를 모두 통과시킵니다.
    item_store.blind_lookups = 2
    with pytest.raises(ItemError) as exc_info:
        await service.create(make_item(barcode="0000000000017"))

    assert exc_info.value.code is ItemErrorCode.DUPLICATE_PART_NUMBER
    assert isinstance(exc_info.value.__cause__, IntegrityError)


# =============================================================================
# 3. 차량 호환성
# =============================================================================
@pytest.fixture
def submodel_store() -> FakeSubmodelStore:
    store = FakeSubmodelStore()
    for name in ("1.6 LE", "2.0 XSE"):
        submodel = veh_models.VehicleSubmodel(
            model_id=1, name=name, year_from=2014, year_to=2019, engine_type="I4",
            engine_displacement=1.6, fuel_type="Gasoline", transmission_type="CVT", body_type="Sedan",
        )
        submodel.id = store._next_id
        store._next_id += 1
        store.rows[submodel.id] = submodel
    return store


@pytest.fixture
def compatibility_service(item_store: FakeItemStore, submodel_store: FakeSubmodelStore) -> CompatibilityService:
    return CompatibilityService(
        db=None,
        repo=FakeCompatibilityStore(item_store, submodel_store),
        item_service=ItemService(None, repo=item_store),
        submodels=submodel_store,
    )


@pytest.mark.asyncio
async def test_compatibility_add_remove_cycle(item_service: ItemService, compatibility_service: CompatibilityService):
    item = await item_service.create(make_item())
    link_in = inv_schemas.CompatibilityCreate(item_id=item.id, submodel_id=1)

    link = await compatibility_service.add(link_in)
    assert (link.item_id, link.submodel_id) == (item.id, 1)

    with pytest.raises(CompatibilityError) as exc_info:
        await compatibility_service.add(link_in)
    assert exc_info.value.code is CompatibilityErrorCode.COMPATIBILITY_EXISTS
    assert exc_info.value.kind is ErrorKind.DUPLICATE_CONFLICT

    await compatibility_service.remove(item.id, 1)
    assert await compatibility_service.list_for_item(item.id) == []

    with pytest.raises(CompatibilityError) as exc_info:
        await compatibility_service.remove(item.id, 1)
    assert exc_info.value.code is CompatibilityErrorCode.COMPATIBILITY_NOT_FOUND
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_compatibility_requires_existing_item_and_submodel(
    item_service: ItemService, compatibility_service: CompatibilityService
):
    item = await item_service.create(make_item())

    with pytest.raises(CompatibilityError) as exc_info:
        await compatibility_service.add(inv_schemas.CompatibilityCreate(item_id=999, submodel_id=1))
    assert exc_info.value.code is CompatibilityErrorCode.ITEM_NOT_FOUND

    with pytest.raises(CompatibilityError) as exc_info:
        await compatibility_service.add(inv_schemas.CompatibilityCreate(item_id=item.id, submodel_id=999))
    assert exc_info.value.code is CompatibilityErrorCode.SUBMODEL_NOT_FOUND

    with pytest.raises(CompatibilityError) as exc_info:
        await compatibility_service.add(inv_schemas.CompatibilityCreate(item_id=0, submodel_id=1))
    assert exc_info.value.code is CompatibilityErrorCode.INVALID_ITEM_ID
    assert exc_info.value.kind is ErrorKind.INVALID_ID


@pytest.mark.asyncio
async def test_compatibility_items_for_submodel_skips_inactive(
    item_service: ItemService, compatibility_service: CompatibilityService
):
    active = await item_service.create(make_item(part_number="Z-1"))
    second = await item_service.create(make_item(part_number="A-1"))
    inactive = await item_service.create(make_item(part_number="M-1", is_active=False))
    for item in (active, second, inactive):
        await compatibility_service.add(inv_schemas.CompatibilityCreate(item_id=item.id, submodel_id=2))

    items = await compatibility_service.list_items_for_submodel(2)

    assert [item.part_number for item in items] == ["A-1", "Z-1"]
    assert await compatibility_service.list_items_for_submodel(1) == []
