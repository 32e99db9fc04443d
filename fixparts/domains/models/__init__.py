# fixparts/domains/models/__init__.py

"""
모든 도메인의 SQLModel 모델들을 한 곳에서 중앙 관리하여,
다른 모듈에서 쉽게 임포트할 수 있도록 하는 역할을 합니다.
SQLModel.metadata가 모든 테이블을 인식하도록 보장합니다.
"""

# ven (Supplier)
from fixparts.domains.ven.models import Supplier

# veh (VehicleMake, VehicleModel, VehicleSubmodel)
from fixparts.domains.veh.models import VehicleMake, VehicleModel, VehicleSubmodel

# inv (Category, Item, Compatibility)
from fixparts.domains.inv.models import Category, Item, Compatibility

# trx (Purchase, Sale)
from fixparts.domains.trx.models import Purchase, Sale


__all__ = [
    # ven
    "Supplier",
    # veh
    "VehicleMake", "VehicleModel", "VehicleSubmodel",
    # inv
    "Category", "Item", "Compatibility",
    # trx
    "Purchase", "Sale",
]
