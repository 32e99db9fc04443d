# fixparts/domains/rpt/__init__.py

"""
FastAPI 애플리케이션의 'rpt' (Report) 도메인 패키지입니다.

이 패키지는 자체 테이블을 갖지 않고, 'inv', 'ven', 'trx' 스키마의 데이터를 읽어
대시보드용 집계(재고 부족 건수, 오늘 매출, 최근 거래, 판매 상위 품목 등)를 제공합니다.
모든 작업은 읽기 전용입니다.

주요 서브모듈:
- `schemas.py`: 대시보드 응답 스키마.
- `crud.py`: 다른 도메인 테이블에 대한 집계 쿼리.
- `services.py`: 조회 기간과 목록 크기를 검증하는 대시보드 매니저.
- `routers.py`: FastAPI API 엔드포인트 정의.
"""

__title__ = "FixParts Report Domain"
__description__ = "Read-only dashboard aggregates over inventory and transactions."
__version__ = "0.1.0"
__all__ = []
