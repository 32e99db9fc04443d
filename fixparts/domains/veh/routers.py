# fixparts/domains/veh/routers.py

"""
'veh' 도메인 (차량 계층 관리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import List
from fastapi import APIRouter, Depends, status

from fixparts.core import dependencies as deps
from fixparts.domains.veh import schemas as veh_schemas
from fixparts.domains.veh.services import VehicleMakeService, VehicleModelService, VehicleSubmodelService

router = APIRouter(
    tags=["Vehicle Management (차량 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 제조사 (VehicleMake) API
# =============================================================================
@router.post(
    "/makes",
    response_model=veh_schemas.VehicleMakeRead,
    status_code=status.HTTP_201_CREATED,
    summary="새 제조사 생성",
)
async def create_make(
    make_in: veh_schemas.VehicleMakeCreate,
    service: VehicleMakeService = Depends(deps.get_make_service),
):
    return await service.create(make_in)


@router.get("/makes", response_model=List[veh_schemas.VehicleMakeRead], summary="모든 제조사 조회")
async def read_makes(service: VehicleMakeService = Depends(deps.get_make_service)):
    return await service.list()


@router.get("/makes/{make_id}", response_model=veh_schemas.VehicleMakeRead, summary="특정 제조사 조회")
async def read_make(make_id: int, service: VehicleMakeService = Depends(deps.get_make_service)):
    return await service.get(make_id)


@router.get(
    "/makes/{make_id}/models",
    response_model=List[veh_schemas.VehicleModelRead],
    summary="제조사의 모델 목록 조회",
)
async def read_models_for_make(make_id: int, service: VehicleMakeService = Depends(deps.get_make_service)):
    return await service.list_models(make_id)


@router.put("/makes/{make_id}", response_model=veh_schemas.VehicleMakeRead, summary="제조사 정보 수정")
async def update_make(
    make_id: int,
    make_in: veh_schemas.VehicleMakeUpdate,
    service: VehicleMakeService = Depends(deps.get_make_service),
):
    return await service.update(make_id, make_in)


@router.delete("/makes/{make_id}", status_code=status.HTTP_204_NO_CONTENT, summary="제조사 삭제")
async def delete_make(make_id: int, service: VehicleMakeService = Depends(deps.get_make_service)):
    """
    제조사를 삭제합니다. 소속 모델이 있으면 409를 반환합니다.
    """
    await service.delete(make_id)


# =============================================================================
# 2. 모델 (VehicleModel) API
# =============================================================================
@router.post(
    "/models",
    response_model=veh_schemas.VehicleModelRead,
    status_code=status.HTTP_201_CREATED,
    summary="새 모델 생성",
)
async def create_model(
    model_in: veh_schemas.VehicleModelCreate,
    service: VehicleModelService = Depends(deps.get_model_service),
):
    return await service.create(model_in)


@router.get("/models", response_model=List[veh_schemas.VehicleModelRead], summary="모든 모델 조회")
async def read_models(service: VehicleModelService = Depends(deps.get_model_service)):
    return await service.list()


@router.get("/models/{model_id}", response_model=veh_schemas.VehicleModelRead, summary="특정 모델 조회")
async def read_model(model_id: int, service: VehicleModelService = Depends(deps.get_model_service)):
    return await service.get(model_id)


@router.get(
    "/models/{model_id}/submodels",
    response_model=List[veh_schemas.VehicleSubmodelRead],
    summary="모델의 서브모델 목록 조회",
)
async def read_submodels_for_model(
    model_id: int, service: VehicleModelService = Depends(deps.get_model_service)
):
    return await service.list_submodels(model_id)


@router.put("/models/{model_id}", response_model=veh_schemas.VehicleModelRead, summary="모델 정보 수정")
async def update_model(
    model_id: int,
    model_in: veh_schemas.VehicleModelUpdate,
    service: VehicleModelService = Depends(deps.get_model_service),
):
    return await service.update(model_id, model_in)


@router.delete("/models/{model_id}", status_code=status.HTTP_204_NO_CONTENT, summary="모델 삭제")
async def delete_model(model_id: int, service: VehicleModelService = Depends(deps.get_model_service)):
    await service.delete(model_id)


# =============================================================================
# 3. 서브모델 (VehicleSubmodel) API
# =============================================================================
@router.post(
    "/submodels",
    response_model=veh_schemas.VehicleSubmodelRead,
    status_code=status.HTTP_201_CREATED,
    summary="새 서브모델 생성",
)
async def create_submodel(
    submodel_in: veh_schemas.VehicleSubmodelCreate,
    service: VehicleSubmodelService = Depends(deps.get_submodel_service),
):
    """
    새 서브모델(트림)을 생성합니다.
    - **year_to**: 생략 가능. 지정 시 year_from 이상이어야 합니다.
    """
    return await service.create(submodel_in)


@router.get("/submodels", response_model=List[veh_schemas.VehicleSubmodelRead], summary="모든 서브모델 조회")
async def read_submodels(service: VehicleSubmodelService = Depends(deps.get_submodel_service)):
    return await service.list()


@router.get(
    "/submodels/{submodel_id}",
    response_model=veh_schemas.VehicleSubmodelRead,
    summary="특정 서브모델 조회",
)
async def read_submodel(
    submodel_id: int, service: VehicleSubmodelService = Depends(deps.get_submodel_service)
):
    return await service.get(submodel_id)


@router.put(
    "/submodels/{submodel_id}",
    response_model=veh_schemas.VehicleSubmodelRead,
    summary="서브모델 정보 수정",
)
async def update_submodel(
    submodel_id: int,
    submodel_in: veh_schemas.VehicleSubmodelUpdate,
    service: VehicleSubmodelService = Depends(deps.get_submodel_service),
):
    return await service.update(submodel_id, submodel_in)


@router.delete("/submodels/{submodel_id}", status_code=status.HTTP_204_NO_CONTENT, summary="서브모델 삭제")
async def delete_submodel(
    submodel_id: int, service: VehicleSubmodelService = Depends(deps.get_submodel_service)
):
    await service.delete(submodel_id)
