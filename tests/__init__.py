# tests/__init__.py

"""
fixparts 재고 관리 API의 테스트 스위트 패키지입니다.

- `conftest.py`: 인메모리 SQLite 엔진, 세션, 테스트 클라이언트 fixture.
- `fakes.py`: 서비스 단위 테스트에 사용하는 인메모리 저장소 구현.
- `domains/`: 도메인(inv, ven, veh, trx)별 서비스 단위 테스트와 API 통합 테스트.
"""

__title__ = "FixParts API Tests"
__version__ = "0.1.0"
__all__ = []
