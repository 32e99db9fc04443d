# fixparts/domains/ven/routers.py

"""
'ven' 도메인 (공급업체 관리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
모든 규칙 검증은 SupplierService가 담당하며, 실패는 DomainError로 전파되어
main.py의 예외 처리기에서 HTTP 상태 코드로 변환됩니다.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status

from fixparts.core import dependencies as deps
from fixparts.domains.ven import schemas as ven_schemas
from fixparts.domains.ven.services import SupplierService

router = APIRouter(
    tags=["Supplier Management (공급업체 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 공급업체 (Supplier) API
# =============================================================================
@router.post(
    "/suppliers",
    response_model=ven_schemas.SupplierRead,
    status_code=status.HTTP_201_CREATED,
    summary="새 공급업체 생성",
)
async def create_supplier(
    supplier_in: ven_schemas.SupplierCreate,
    service: SupplierService = Depends(deps.get_supplier_service),
):
    """
    새로운 공급업체를 생성합니다.
    - **name**: 공급업체 이름 (필수, 고유)
    """
    return await service.create(supplier_in)


@router.get(
    "/suppliers",
    response_model=List[ven_schemas.SupplierRead],
    summary="공급업체 목록 조회",
)
async def read_suppliers(
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    service: SupplierService = Depends(deps.get_supplier_service),
):
    return await service.list(search=search, skip=skip, limit=limit)


@router.get(
    "/suppliers/{supplier_id}",
    response_model=ven_schemas.SupplierRead,
    summary="특정 공급업체 조회",
)
async def read_supplier(
    supplier_id: int,
    service: SupplierService = Depends(deps.get_supplier_service),
):
    return await service.get(supplier_id)


@router.put(
    "/suppliers/{supplier_id}",
    response_model=ven_schemas.SupplierRead,
    summary="공급업체 정보 수정",
)
async def update_supplier(
    supplier_id: int,
    supplier_in: ven_schemas.SupplierUpdate,
    service: SupplierService = Depends(deps.get_supplier_service),
):
    return await service.update(supplier_id, supplier_in)


@router.delete(
    "/suppliers/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="공급업체 삭제",
)
async def delete_supplier(
    supplier_id: int,
    service: SupplierService = Depends(deps.get_supplier_service),
):
    """
    공급업체를 삭제합니다. 이 공급업체를 참조하는 품목이 있으면 409를 반환합니다.
    """
    await service.delete(supplier_id)
