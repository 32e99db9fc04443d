# fixparts/domains/inv/routers.py

"""
'inv' 도메인 (재고 관리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- 카테고리 (트리 조회 포함)
- 품목 (부품 번호/바코드 조회, 필터 목록, 재고 부족 목록)
- 품목 <-> 차량 서브모델 호환성
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status

from fixparts.core import dependencies as deps
from fixparts.domains.inv import schemas as inv_schemas
from fixparts.domains.inv.services import CategoryService, ItemService
from fixparts.services.compatibility_service import CompatibilityService

router = APIRouter(
    tags=["Inventory Management (재고 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 카테고리 (Category) API
# =============================================================================
@router.post(
    "/categories",
    response_model=inv_schemas.CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="새 카테고리 생성",
)
async def create_category(
    category_in: inv_schemas.CategoryCreate,
    service: CategoryService = Depends(deps.get_category_service),
):
    """
    새로운 카테고리를 생성합니다.
    - **parent_id**: 상위 카테고리 ID (선택, 존재해야 함)
    """
    return await service.create(category_in)


@router.get("/categories", response_model=List[inv_schemas.CategoryRead], summary="모든 카테고리 조회")
async def read_categories(service: CategoryService = Depends(deps.get_category_service)):
    return await service.list()


@router.get("/categories/tree", response_model=List[inv_schemas.CategoryTreeNode], summary="카테고리 트리 조회")
async def read_category_tree(service: CategoryService = Depends(deps.get_category_service)):
    """
    루트 카테고리 목록을 반환하며, 각 노드는 하위 카테고리를 `children`에 포함합니다.
    """
    return await service.get_tree()


@router.get(
    "/categories/{category_id}",
    response_model=inv_schemas.CategoryDetail,
    summary="특정 카테고리와 하위 카테고리 조회",
)
async def read_category(category_id: int, service: CategoryService = Depends(deps.get_category_service)):
    return await service.get(category_id)


@router.get(
    "/categories/{category_id}/subcategories",
    response_model=List[inv_schemas.CategoryRead],
    summary="하위 카테고리 목록 조회",
)
async def read_subcategories(category_id: int, service: CategoryService = Depends(deps.get_category_service)):
    return await service.list_subcategories(category_id)


@router.put("/categories/{category_id}", response_model=inv_schemas.CategoryRead, summary="카테고리 수정")
async def update_category(
    category_id: int,
    category_in: inv_schemas.CategoryUpdate,
    service: CategoryService = Depends(deps.get_category_service),
):
    """
    카테고리를 수정합니다. 자기 자신이나 자신의 하위 카테고리를 상위로 지정하면 409를 반환합니다.
    """
    return await service.update(category_id, category_in)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT, summary="카테고리 삭제")
async def delete_category(category_id: int, service: CategoryService = Depends(deps.get_category_service)):
    await service.delete(category_id)


# =============================================================================
# 2. 품목 (Item) API
# =============================================================================
@router.post(
    "/items",
    response_model=inv_schemas.ItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="새 품목 생성",
)
async def create_item(
    item_in: inv_schemas.ItemCreate,
    service: ItemService = Depends(deps.get_item_service),
):
    """
    새 품목을 생성합니다.
    - **part_number**: 부품 번호 (필수, 고유)
    - **barcode**: 생략하면 `C{카테고리}-S{공급업체}-{타임스탬프}-{무작위}` 형식으로 자동 생성
    """
    return await service.create(item_in)


@router.get("/items", response_model=List[inv_schemas.ItemReadWithNames], summary="품목 목록 조회 (필터)")
async def read_items(
    category_id: Optional[int] = None,
    supplier_id: Optional[int] = None,
    part_number: Optional[str] = None,
    search: Optional[str] = None,
    low_stock: Optional[bool] = None,
    make_id: Optional[int] = None,
    model_id: Optional[int] = None,
    submodel_id: Optional[int] = None,
    is_active: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100,
    service: ItemService = Depends(deps.get_item_service),
):
    filters = inv_schemas.ItemFilter(
        category_id=category_id,
        supplier_id=supplier_id,
        part_number=part_number,
        search=search,
        low_stock=low_stock,
        make_id=make_id,
        model_id=model_id,
        submodel_id=submodel_id,
        is_active=is_active,
    )
    return await service.list(filters, skip=skip, limit=limit)


@router.get("/items/low-stock", response_model=List[inv_schemas.ItemReadWithNames], summary="재고 부족 품목 조회")
async def read_low_stock_items(service: ItemService = Depends(deps.get_item_service)):
    return await service.list_low_stock()


@router.get(
    "/items/by-part-number/{part_number}",
    response_model=inv_schemas.ItemRead,
    summary="부품 번호로 품목 조회",
)
async def read_item_by_part_number(part_number: str, service: ItemService = Depends(deps.get_item_service)):
    return await service.get_by_part_number(part_number)


@router.get(
    "/items/by-barcode/{barcode}",
    response_model=inv_schemas.ItemRead,
    summary="바코드로 품목 조회",
)
async def read_item_by_barcode(barcode: str, service: ItemService = Depends(deps.get_item_service)):
    return await service.get_by_barcode(barcode)


@router.get("/items/{item_id}", response_model=inv_schemas.ItemRead, summary="특정 품목 조회")
async def read_item(item_id: int, service: ItemService = Depends(deps.get_item_service)):
    return await service.get(item_id)


@router.put("/items/{item_id}", response_model=inv_schemas.ItemRead, summary="품목 수정")
async def update_item(
    item_id: int,
    item_in: inv_schemas.ItemUpdate,
    service: ItemService = Depends(deps.get_item_service),
):
    return await service.update(item_id, item_in)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="품목 삭제")
async def delete_item(item_id: int, service: ItemService = Depends(deps.get_item_service)):
    await service.delete(item_id)


# =============================================================================
# 3. 차량 호환성 (Compatibility) API
# =============================================================================
@router.post(
    "/compatibility",
    response_model=inv_schemas.CompatibilityRead,
    status_code=status.HTTP_201_CREATED,
    summary="품목-서브모델 호환성 추가",
)
async def add_compatibility(
    link_in: inv_schemas.CompatibilityCreate,
    service: CompatibilityService = Depends(deps.get_compatibility_service),
):
    return await service.add(link_in)


@router.get(
    "/items/{item_id}/compatibility",
    response_model=List[inv_schemas.CompatibilityRead],
    summary="품목의 호환 차량 목록 조회",
)
async def read_item_compatibility(
    item_id: int, service: CompatibilityService = Depends(deps.get_compatibility_service)
):
    return await service.list_for_item(item_id)


@router.delete(
    "/items/{item_id}/compatibility/{submodel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="품목-서브모델 호환성 삭제",
)
async def remove_compatibility(
    item_id: int,
    submodel_id: int,
    service: CompatibilityService = Depends(deps.get_compatibility_service),
):
    await service.remove(item_id, submodel_id)


@router.get(
    "/submodels/{submodel_id}/items",
    response_model=List[inv_schemas.ItemReadWithNames],
    summary="서브모델과 호환되는 품목 조회",
)
async def read_items_for_submodel(
    submodel_id: int, service: CompatibilityService = Depends(deps.get_compatibility_service)
):
    return await service.list_items_for_submodel(submodel_id)
