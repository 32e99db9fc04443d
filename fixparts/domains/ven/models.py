# fixparts/domains/ven/models.py

"""
'ven' 도메인 (PostgreSQL 'ven' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. ven.suppliers 테이블 모델
# =============================================================================
class SupplierBase(SQLModel):
    name: str = Field(max_length=100, unique=True, index=True, description="공급업체명 (고유)")
    contact_person: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=100)
    address: Optional[str] = Field(default=None)
    tax_id: Optional[str] = Field(default=None, max_length=50, description="사업자 등록 번호")
    payment_terms: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None)


class Supplier(SupplierBase, table=True):
    __tablename__ = "suppliers"
    __table_args__ = {'schema': 'ven'}

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )
