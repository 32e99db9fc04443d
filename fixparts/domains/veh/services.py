# fixparts/domains/veh/services.py

"""
차량 계층 매니저 모듈입니다.

제조사(Make) -> 모델(Model) -> 서브모델(Submodel)의 참조 무결성을 강제합니다.
- 모델은 항상 존재하는 제조사를, 서브모델은 항상 존재하는 모델을 참조합니다.
- 하위 모델이 있는 제조사, 하위 서브모델이 있는 모델은 삭제할 수 없습니다.
- 서브모델의 연식 범위는 year_from <= year_to 를 만족해야 합니다.
"""

from typing import Any, Dict, List, Optional, Protocol

from fixparts.core.exceptions import VehicleError, VehicleErrorCode
from fixparts.core.service_base import BaseService, is_blank
from fixparts.domains.veh import crud as veh_crud
from fixparts.domains.veh import models as veh_models
from fixparts.domains.veh import schemas as veh_schemas


class VehicleMakeStore(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[veh_models.VehicleMake]: ...
    async def get_all(self, db: Any) -> List[veh_models.VehicleMake]: ...
    async def create(self, db: Any, *, obj_in: Any) -> veh_models.VehicleMake: ...
    async def update(self, db: Any, *, db_obj: veh_models.VehicleMake, obj_in: Any) -> veh_models.VehicleMake: ...
    async def delete(self, db: Any, *, id: Any) -> Optional[veh_models.VehicleMake]: ...


class VehicleModelStore(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[veh_models.VehicleModel]: ...
    async def get_all(self, db: Any) -> List[veh_models.VehicleModel]: ...
    async def get_models_by_make(self, db: Any, *, make_id: int) -> List[veh_models.VehicleModel]: ...
    async def create(self, db: Any, *, obj_in: Any) -> veh_models.VehicleModel: ...
    async def update(self, db: Any, *, db_obj: veh_models.VehicleModel, obj_in: Any) -> veh_models.VehicleModel: ...
    async def delete(self, db: Any, *, id: Any) -> Optional[veh_models.VehicleModel]: ...


class VehicleSubmodelStore(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[veh_models.VehicleSubmodel]: ...
    async def get_all(self, db: Any) -> List[veh_models.VehicleSubmodel]: ...
    async def get_submodels_by_model(self, db: Any, *, model_id: int) -> List[veh_models.VehicleSubmodel]: ...
    async def create(self, db: Any, *, obj_in: Any) -> veh_models.VehicleSubmodel: ...
    async def update(
        self, db: Any, *, db_obj: veh_models.VehicleSubmodel, obj_in: Any
    ) -> veh_models.VehicleSubmodel: ...
    async def delete(self, db: Any, *, id: Any) -> Optional[veh_models.VehicleSubmodel]: ...


# =============================================================================
# 1. 제조사 (VehicleMake) 매니저
# =============================================================================
class VehicleMakeService(BaseService):
    error_class = VehicleError

    def __init__(
        self,
        db: Any,
        repo: VehicleMakeStore = veh_crud.vehicle_make,
        models: VehicleModelStore = veh_crud.vehicle_model,
    ):
        super().__init__(db)
        self.repo = repo
        self.models = models

    async def get(self, make_id: int) -> veh_models.VehicleMake:
        self._require_id(make_id, VehicleErrorCode.INVALID_MAKE_ID, "make_id")
        make = await self.repo.get(self.db, make_id)
        if make is None:
            raise self._fail(VehicleErrorCode.MAKE_NOT_FOUND, field="make_id", value=make_id)
        return make

    async def list(self) -> List[veh_models.VehicleMake]:
        return await self.repo.get_all(self.db)

    async def list_models(self, make_id: int) -> List[veh_models.VehicleModel]:
        """제조사의 존재를 확인한 뒤 소속 모델 목록을 반환합니다."""
        await self.get(make_id)
        return await self.models.get_models_by_make(self.db, make_id=make_id)

    async def create(self, obj_in: veh_schemas.VehicleMakeCreate) -> veh_models.VehicleMake:
        data = obj_in.model_dump()
        if is_blank(data.get("name")):
            raise self._fail(VehicleErrorCode.FIELD_REQUIRED, "make name is required", field="name")

        make = await self.repo.create(self.db, obj_in=data)
        self.logger.info("제조사 생성: id=%s name=%s", make.id, make.name)
        return make

    async def update(self, make_id: int, obj_in: veh_schemas.VehicleMakeUpdate) -> veh_models.VehicleMake:
        make = await self.get(make_id)
        changes = obj_in.model_dump(exclude_unset=True)
        if "name" in changes and is_blank(changes["name"]):
            raise self._fail(VehicleErrorCode.FIELD_REQUIRED, "make name is required", field="name")

        make = await self.repo.update(self.db, db_obj=make, obj_in=changes)
        self.logger.info("제조사 수정: id=%s", make_id)
        return make

    async def delete(self, make_id: int) -> veh_models.VehicleMake:
        """
        제조사를 삭제합니다. 소속 모델이 하나라도 있으면 MAKE_HAS_MODELS로 거부합니다.
        """
        await self.get(make_id)
        if await self.models.get_models_by_make(self.db, make_id=make_id):
            raise self._fail(VehicleErrorCode.MAKE_HAS_MODELS, field="make_id", value=make_id)

        deleted = await self.repo.delete(self.db, id=make_id)
        if deleted is None:
            raise self._fail(VehicleErrorCode.MAKE_NOT_FOUND, field="make_id", value=make_id)
        self.logger.info("제조사 삭제: id=%s", make_id)
        return deleted


# =============================================================================
# 2. 모델 (VehicleModel) 매니저
# =============================================================================
class VehicleModelService(BaseService):
    error_class = VehicleError

    def __init__(
        self,
        db: Any,
        repo: VehicleModelStore = veh_crud.vehicle_model,
        makes: VehicleMakeStore = veh_crud.vehicle_make,
        submodels: VehicleSubmodelStore = veh_crud.vehicle_submodel,
    ):
        super().__init__(db)
        self.repo = repo
        self.makes = makes
        self.submodels = submodels

    async def get(self, model_id: int) -> veh_models.VehicleModel:
        self._require_id(model_id, VehicleErrorCode.INVALID_MODEL_ID, "model_id")
        model = await self.repo.get(self.db, model_id)
        if model is None:
            raise self._fail(VehicleErrorCode.MODEL_NOT_FOUND, field="model_id", value=model_id)
        return model

    async def list(self) -> List[veh_models.VehicleModel]:
        return await self.repo.get_all(self.db)

    async def list_submodels(self, model_id: int) -> List[veh_models.VehicleSubmodel]:
        await self.get(model_id)
        return await self.submodels.get_submodels_by_model(self.db, model_id=model_id)

    async def create(self, obj_in: veh_schemas.VehicleModelCreate) -> veh_models.VehicleModel:
        data = obj_in.model_dump()
        if is_blank(data.get("name")):
            raise self._fail(VehicleErrorCode.FIELD_REQUIRED, "model name is required", field="name")
        await self._require_make(data.get("make_id"))

        model = await self.repo.create(self.db, obj_in=data)
        self.logger.info("모델 생성: id=%s make_id=%s name=%s", model.id, model.make_id, model.name)
        return model

    async def update(self, model_id: int, obj_in: veh_schemas.VehicleModelUpdate) -> veh_models.VehicleModel:
        model = await self.get(model_id)
        changes = obj_in.model_dump(exclude_unset=True)
        # 제조사가 바뀌는 경우에만 새 제조사의 존재를 확인합니다.
        if "make_id" in changes and changes["make_id"] != model.make_id:
            await self._require_make(changes["make_id"])
        if "name" in changes and is_blank(changes["name"]):
            raise self._fail(VehicleErrorCode.FIELD_REQUIRED, "model name is required", field="name")

        model = await self.repo.update(self.db, db_obj=model, obj_in=changes)
        self.logger.info("모델 수정: id=%s", model_id)
        return model

    async def delete(self, model_id: int) -> veh_models.VehicleModel:
        await self.get(model_id)
        if await self.submodels.get_submodels_by_model(self.db, model_id=model_id):
            raise self._fail(VehicleErrorCode.MODEL_HAS_SUBMODELS, field="model_id", value=model_id)

        deleted = await self.repo.delete(self.db, id=model_id)
        if deleted is None:
            raise self._fail(VehicleErrorCode.MODEL_NOT_FOUND, field="model_id", value=model_id)
        self.logger.info("모델 삭제: id=%s", model_id)
        return deleted

    async def _require_make(self, make_id: Any) -> None:
        self._require_id(make_id, VehicleErrorCode.INVALID_MAKE_ID, "make_id")
        if await self.makes.get(self.db, make_id) is None:
            raise self._fail(VehicleErrorCode.MAKE_NOT_FOUND, field="make_id", value=make_id)


# =============================================================================
# 3. 서브모델 (VehicleSubmodel) 매니저
# =============================================================================
_SUBMODEL_REQUIRED_TEXT = ("name", "engine_type", "fuel_type", "transmission_type", "body_type")


class VehicleSubmodelService(BaseService):
    error_class = VehicleError

    def __init__(
        self,
        db: Any,
        repo: VehicleSubmodelStore = veh_crud.vehicle_submodel,
        models: VehicleModelStore = veh_crud.vehicle_model,
    ):
        super().__init__(db)
        self.repo = repo
        self.models = models

    async def get(self, submodel_id: int) -> veh_models.VehicleSubmodel:
        self._require_id(submodel_id, VehicleErrorCode.INVALID_SUBMODEL_ID, "submodel_id")
        submodel = await self.repo.get(self.db, submodel_id)
        if submodel is None:
            raise self._fail(VehicleErrorCode.SUBMODEL_NOT_FOUND, field="submodel_id", value=submodel_id)
        return submodel

    async def list(self) -> List[veh_models.VehicleSubmodel]:
        return await self.repo.get_all(self.db)

    async def create(self, obj_in: veh_schemas.VehicleSubmodelCreate) -> veh_models.VehicleSubmodel:
        """
        새 서브모델을 생성합니다.

        Raises:
            VehicleError: 필수 항목 누락(FIELD_REQUIRED), 모델 없음(MODEL_NOT_FOUND),
                종료 연도가 시작 연도보다 이른 경우(INVALID_YEAR_RANGE).
        """
        data = obj_in.model_dump()
        self._validate(data)
        await self._require_model(data["model_id"])
        self._validate_year_range(data)

        submodel = await self.repo.create(self.db, obj_in=data)
        self.logger.info("서브모델 생성: id=%s model_id=%s name=%s", submodel.id, submodel.model_id, submodel.name)
        return submodel

    async def update(
        self, submodel_id: int, obj_in: veh_schemas.VehicleSubmodelUpdate
    ) -> veh_models.VehicleSubmodel:
        submodel = await self.get(submodel_id)
        changes = obj_in.model_dump(exclude_unset=True)
        merged = {**submodel.model_dump(), **changes}
        self._validate(merged)
        if merged["model_id"] != submodel.model_id:
            await self._require_model(merged["model_id"])
        self._validate_year_range(merged)

        submodel = await self.repo.update(self.db, db_obj=submodel, obj_in=changes)
        self.logger.info("서브모델 수정: id=%s", submodel_id)
        return submodel

    async def delete(self, submodel_id: int) -> veh_models.VehicleSubmodel:
        await self.get(submodel_id)
        deleted = await self.repo.delete(self.db, id=submodel_id)
        if deleted is None:
            raise self._fail(VehicleErrorCode.SUBMODEL_NOT_FOUND, field="submodel_id", value=submodel_id)
        self.logger.info("서브모델 삭제: id=%s", submodel_id)
        return deleted

    def _validate(self, data: Dict[str, Any]) -> None:
        for field in _SUBMODEL_REQUIRED_TEXT:
            if is_blank(data.get(field)):
                raise self._fail(VehicleErrorCode.FIELD_REQUIRED, f"{field} is required", field=field)
        if not data.get("engine_displacement") or data["engine_displacement"] <= 0:
            raise self._fail(
                VehicleErrorCode.FIELD_REQUIRED, "valid engine displacement is required",
                field="engine_displacement", value=data.get("engine_displacement"),
            )
        if not data.get("year_from") or data["year_from"] <= 0:
            raise self._fail(
                VehicleErrorCode.FIELD_REQUIRED, "valid start year is required",
                field="year_from", value=data.get("year_from"),
            )

    def _validate_year_range(self, data: Dict[str, Any]) -> None:
        year_to = data.get("year_to")
        if year_to is not None and year_to < data["year_from"]:
            raise self._fail(VehicleErrorCode.INVALID_YEAR_RANGE, field="year_to", value=year_to)

    async def _require_model(self, model_id: Any) -> None:
        self._require_id(model_id, VehicleErrorCode.INVALID_MODEL_ID, "model_id")
        if await self.models.get(self.db, model_id) is None:
            raise self._fail(VehicleErrorCode.MODEL_NOT_FOUND, field="model_id", value=model_id)
