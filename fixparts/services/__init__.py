# fixparts/services/__init__.py

"""
FastAPI 애플리케이션의 서비스 계층 패키지입니다.

각 도메인의 매니저는 `fixparts/domains/<domain>/services.py`에 있으며,
이 패키지는 여러 도메인(스키마)에 걸쳐 상호 작용하는 매니저를 포함합니다.

- `compatibility_service.py`: 품목('inv')과 차량 서브모델('veh') 사이의 호환성 연결을
  두 도메인의 존재 확인과 중복 확인을 거쳐 관리하는 서비스.
"""

__title__ = "FixParts Services"
__description__ = "Cross-domain services for FixParts FastAPI application."
__version__ = "0.1.0"
__all__ = []
