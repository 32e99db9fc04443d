# fixparts/domains/__init__.py

"""
비즈니스 도메인 패키지 모음입니다.

각 하위 패키지는 PostgreSQL의 동일한 이름의 스키마에 대응합니다.
- `inv`: 카테고리, 품목, 차량 호환성
- `ven`: 공급업체
- `veh`: 차량 제조사 / 모델 / 서브모델
- `trx`: 구매 / 판매 거래
- `rpt`: 대시보드 집계 (자체 스키마 없음, 다른 도메인을 읽기 전용으로 조회)
"""

__all__ = []
