# fixparts/services/compatibility_service.py

"""
품목과 차량 서브모델 간의 호환성 연결을 관리하는 교차 도메인 서비스 모듈입니다.

품목의 존재는 'inv' 도메인의 ItemService 조회 경로로, 서브모델의 존재는
'veh' 도메인의 저장소로 확인합니다. (item_id, submodel_id) 쌍은 고유하며,
저장소의 고유 제약 조건이 최종 판정 기준입니다.
"""

from typing import Any, List, Optional, Protocol

from sqlalchemy.exc import IntegrityError

from fixparts.core.exceptions import CompatibilityError, CompatibilityErrorCode, ItemError, ItemErrorCode
from fixparts.core.service_base import BaseService
from fixparts.domains.inv import crud as inv_crud
from fixparts.domains.inv import models as inv_models
from fixparts.domains.inv import schemas as inv_schemas
from fixparts.domains.inv.services import ItemService
from fixparts.domains.veh import crud as veh_crud
from fixparts.domains.veh import models as veh_models


class CompatibilityStore(Protocol):
    async def get_for_item(self, db: Any, *, item_id: int) -> List[inv_schemas.CompatibilityRead]: ...
    async def get_by_link(
        self, db: Any, *, item_id: int, submodel_id: int
    ) -> Optional[inv_models.Compatibility]: ...
    async def get_items_for_submodel(
        self, db: Any, *, submodel_id: int
    ) -> List[inv_schemas.ItemReadWithNames]: ...
    async def create(self, db: Any, *, obj_in: Any) -> inv_models.Compatibility: ...
    async def delete_link(self, db: Any, *, item_id: int, submodel_id: int) -> bool: ...


class SubmodelLookup(Protocol):
    async def get(self, db: Any, id: Any) -> Optional[veh_models.VehicleSubmodel]: ...


class CompatibilityService(BaseService):
    """
    호환성 매칭 서비스.

    Args:
        db: 데이터베이스 세션 핸들.
        repo: 호환성 저장소.
        item_service: 품목 존재 확인에 사용할 ItemService (기본값: 같은 세션의 ItemService).
        submodels: 서브모델 조회 저장소.
    """

    error_class = CompatibilityError

    def __init__(
        self,
        db: Any,
        repo: CompatibilityStore = inv_crud.compatibility,
        item_service: Optional[ItemService] = None,
        submodels: SubmodelLookup = veh_crud.vehicle_submodel,
    ):
        super().__init__(db)
        self.repo = repo
        self.item_service = item_service or ItemService(db)
        self.submodels = submodels

    async def add(self, obj_in: inv_schemas.CompatibilityCreate) -> inv_models.Compatibility:
        """
        품목과 서브모델의 호환성 연결을 추가합니다.

        Raises:
            CompatibilityError: INVALID_ITEM_ID, INVALID_SUBMODEL_ID, ITEM_NOT_FOUND,
                SUBMODEL_NOT_FOUND, COMPATIBILITY_EXISTS.
        """
        item_id = self._require_id(obj_in.item_id, CompatibilityErrorCode.INVALID_ITEM_ID, "item_id")
        submodel_id = self._require_id(obj_in.submodel_id, CompatibilityErrorCode.INVALID_SUBMODEL_ID, "submodel_id")

        await self._require_item(item_id)
        if await self.submodels.get(self.db, submodel_id) is None:
            raise self._fail(CompatibilityErrorCode.SUBMODEL_NOT_FOUND, field="submodel_id", value=submodel_id)

        existing_links = await self.repo.get_for_item(self.db, item_id=item_id)
        if any(link.submodel_id == submodel_id for link in existing_links):
            raise self._fail(
                CompatibilityErrorCode.COMPATIBILITY_EXISTS, field="submodel_id", value=submodel_id
            )

        try:
            link = await self.repo.create(self.db, obj_in=obj_in.model_dump())
        except IntegrityError as exc:
            if await self.repo.get_by_link(self.db, item_id=item_id, submodel_id=submodel_id) is not None:
                raise self._fail(
                    CompatibilityErrorCode.COMPATIBILITY_EXISTS, field="submodel_id", value=submodel_id
                ) from exc
            raise
        self.logger.info("호환성 추가: item_id=%s submodel_id=%s", item_id, submodel_id)
        return link

    async def remove(self, item_id: int, submodel_id: int) -> None:
        self._require_id(item_id, CompatibilityErrorCode.INVALID_ITEM_ID, "item_id")
        self._require_id(submodel_id, CompatibilityErrorCode.INVALID_SUBMODEL_ID, "submodel_id")

        if not await self.repo.delete_link(self.db, item_id=item_id, submodel_id=submodel_id):
            raise self._fail(CompatibilityErrorCode.COMPATIBILITY_NOT_FOUND, field="submodel_id", value=submodel_id)
        self.logger.info("호환성 삭제: item_id=%s submodel_id=%s", item_id, submodel_id)

    async def list_for_item(self, item_id: int) -> List[inv_schemas.CompatibilityRead]:
        self._require_id(item_id, CompatibilityErrorCode.INVALID_ITEM_ID, "item_id")
        return await self.repo.get_for_item(self.db, item_id=item_id)

    async def list_items_for_submodel(self, submodel_id: int) -> List[inv_schemas.ItemReadWithNames]:
        self._require_id(submodel_id, CompatibilityErrorCode.INVALID_SUBMODEL_ID, "submodel_id")
        return await self.repo.get_items_for_submodel(self.db, submodel_id=submodel_id)

    async def _require_item(self, item_id: int) -> None:
        try:
            await self.item_service.get(item_id)
        except ItemError as exc:
            if exc.code is ItemErrorCode.ITEM_NOT_FOUND:
                raise self._fail(CompatibilityErrorCode.ITEM_NOT_FOUND, field="item_id", value=item_id) from exc
            raise
