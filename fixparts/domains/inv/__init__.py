# fixparts/domains/inv/__init__.py

"""
FastAPI 애플리케이션의 'inv' 도메인 패키지입니다.

이 패키지는 PostgreSQL의 'inv' 스키마에 해당하는 데이터 모델과
관련된 비즈니스 규칙(매니저) 및 API 엔드포인트를 포함합니다.

'inv' 도메인은 품목 카테고리 계층, 품목(부품)의 고유 식별자(부품 번호/바코드),
그리고 품목과 차량 서브모델 간의 호환성 연결을 관리합니다.

주요 서브모듈:
- `models.py`: 'inv' 스키마의 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청 및 응답 스키마.
- `crud.py`: 'inv' 스키마 테이블에 대한 비동기 CRUD (저장소 게이트웨이).
- `services.py`: 저장소 위에서 무결성 규칙을 강제하는 매니저.
- `routers.py`: FastAPI API 엔드포인트 정의.
"""

__title__ = "FixParts Inventory Domain"
__description__ = "Manages categories, items and vehicle compatibility."
__version__ = "0.1.0"
__all__ = []
