# fixparts/domains/trx/__init__.py

"""
FastAPI 애플리케이션의 'trx' 도메인 패키지입니다.

이 패키지는 PostgreSQL의 'trx' 스키마에 해당하는 데이터 모델과
관련된 비즈니스 규칙(매니저) 및 API 엔드포인트를 포함합니다.

'trx' 도메인은 판매와 구매 거래 기록을 검증하고 합계 금액을 계산하여 저장합니다.

주요 서브모듈:
- `models.py`: 'trx' 스키마의 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청 및 응답 스키마.
- `crud.py`: 'trx' 스키마 테이블에 대한 비동기 CRUD (저장소 게이트웨이).
- `services.py`: 저장소 위에서 무결성 규칙을 강제하는 매니저.
- `routers.py`: FastAPI API 엔드포인트 정의.
"""

__title__ = "FixParts Transaction Domain"
__description__ = "Records sales and purchases."
__version__ = "0.1.0"
__all__ = []
