# fixparts/__init__.py

"""
FixParts FastAPI 애플리케이션의 메인 패키지입니다.

자동차 부품 재고(품목, 카테고리, 공급업체, 차량 호환성, 판매/구매)를 관리합니다.
애플리케이션의 진입점 (main.py)과 공통 설정/데이터베이스/오류 정의를 담는 core 서브패키지,
그리고 각 비즈니스 도메인을 대표하는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "FixParts Inventory API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api/v1"  # API 라우트의 공통 접두사 (main.py에서 적용)

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Auto-parts inventory API backend."
__license__ = "MIT"
__all__ = []
