# tests/domains/__init__.py

"""
도메인별 테스트 모듈 패키지입니다.

- `test_<domain>_services.py`: 가짜 저장소를 주입한 서비스 단위 테스트.
- `test_<domain>_n.py`: SQLite 위에서 실제 CRUD와 라우터를 거치는 API 통합 테스트.

대상 도메인: `inv` (카테고리/품목/호환성), `ven` (공급업체), `veh` (차량), `trx` (판매/구매),
`rpt` (대시보드 집계).
"""

__all__ = []
