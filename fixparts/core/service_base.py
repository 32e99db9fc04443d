# fixparts/core/service_base.py

"""
매니저(서비스) 클래스들이 공유하는 기반 클래스 모듈입니다.

매니저는 요청마다 생성되는 상태 없는 객체로, 데이터베이스 세션 핸들과
저장소(각 도메인 crud 모듈의 싱글톤 또는 테스트용 가짜 저장소)를 주입받습니다.
세션 핸들은 매니저에게 불투명하며 저장소 호출 시 그대로 전달됩니다.
"""

import logging
from typing import Any, Optional, Type

from fixparts.core.exceptions import DomainError, ErrorCode


class BaseService:
    """
    모든 매니저의 기반 클래스.
    하위 클래스는 `error_class`에 자신이 발생시키는 DomainError 하위 클래스를 지정합니다.
    """

    error_class: Type[DomainError] = DomainError

    def __init__(self, db: Any):
        self.db = db
        self.logger = logging.getLogger(type(self).__module__)

    def _fail(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        *,
        field: Optional[str] = None,
        value: Any = None,
    ) -> DomainError:
        """거부된 작업을 WARNING으로 기록하고, 발생시킬 예외 객체를 반환합니다."""
        error = self.error_class(code, message, field=field, value=value)
        self.logger.warning(
            "%s 작업 거부: code=%s field=%s value=%r",
            type(self).__name__, code.code, field, value,
        )
        return error

    def _require_id(self, value: Any, code: ErrorCode, field: str = "id") -> int:
        """양의 정수 ID인지 확인합니다."""
        if value is None or isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise self._fail(code, field=field, value=value)
        return value


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def clean_reference(value: Optional[str]) -> Optional[str]:
    """빈 참조 문자열은 NULL로 저장되도록 None으로 정규화합니다."""
    if value is None:
        return None
    value = value.strip()
    return value or None
