# fixparts/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 데이터베이스 연결, 세션 관리 (SQLModel 및 AsyncSQLAlchemy).
- `crud_base.py`: 모든 도메인 CRUD 클래스가 상속하는 제네릭 비동기 CRUD 기반 클래스.
- `exceptions.py`: 매니저(서비스) 계층의 도메인 예외와 오류 코드.
- `dependencies.py`: FastAPI 의존성 주입에서 사용될 세션/서비스 제공 함수.
"""

__title__ = "FixParts Core"
__description__ = "Core components for FixParts FastAPI application."
__version__ = "0.1.0"
__all__ = []
