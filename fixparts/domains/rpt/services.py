# fixparts/domains/rpt/services.py

"""
대시보드 보고서 매니저 모듈입니다.

- 모든 작업은 읽기 전용이며 저장소의 집계 쿼리를 그대로 위임합니다.
- "오늘"은 UTC 자정부터 다음 날 UTC 자정 직전까지이며, 판매 일시(sale_date) 기준입니다.
- 목록 크기(limit)와 판매 상위 조회 기간(days)은 1 이상이어야 합니다.
  생략하면 설정값(DASHBOARD_LIST_LIMIT, TOP_SELLER_WINDOW_DAYS)을 사용합니다.
"""

from datetime import datetime, timedelta, UTC
from decimal import Decimal
from typing import Any, Callable, List, Optional, Protocol

from fixparts.core.config import settings
from fixparts.core.exceptions import ReportError, ReportErrorCode
from fixparts.core.service_base import BaseService
from fixparts.domains.rpt import crud as rpt_crud
from fixparts.domains.rpt import schemas as rpt_schemas

CENTS = Decimal("0.01")


class DashboardStore(Protocol):
    async def count_low_stock(self, db: Any) -> int: ...
    async def count_active_items(self, db: Any) -> int: ...
    async def count_compatible_vehicles(self, db: Any) -> int: ...
    async def sum_sales_between(self, db: Any, *, start: datetime, end: datetime) -> Decimal: ...
    async def get_low_stock_items(self, db: Any, *, limit: int) -> List[rpt_schemas.LowStockItem]: ...
    async def get_recent_sales(self, db: Any, *, limit: int) -> List[rpt_schemas.RecentSale]: ...
    async def get_top_sellers(self, db: Any, *, since: datetime, limit: int) -> List[rpt_schemas.TopSeller]: ...
    async def get_recent_purchases(self, db: Any, *, limit: int) -> List[rpt_schemas.RecentPurchase]: ...


def utc_day_bounds(now: datetime) -> tuple[datetime, datetime]:
    start = now.astimezone(UTC).replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


class DashboardService(BaseService):
    error_class = ReportError

    def __init__(
        self,
        db: Any,
        repo: DashboardStore = rpt_crud.dashboard,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        super().__init__(db)
        self.repo = repo
        self.clock = clock

    # --- 요약 카드 ------------------------------------------------------------
    async def low_stock_count(self) -> int:
        return await self.repo.count_low_stock(self.db)

    async def today_sales(self) -> Decimal:
        start, end = utc_day_bounds(self.clock())
        total = await self.repo.sum_sales_between(self.db, start=start, end=end)
        return Decimal(total).quantize(CENTS)

    async def inventory_count(self) -> int:
        return await self.repo.count_active_items(self.db)

    async def vehicle_count(self) -> int:
        return await self.repo.count_compatible_vehicles(self.db)

    async def summary(self) -> rpt_schemas.DashboardSummary:
        return rpt_schemas.DashboardSummary(
            low_stock_count=await self.low_stock_count(),
            today_sales=await self.today_sales(),
            inventory_count=await self.inventory_count(),
            vehicle_count=await self.vehicle_count(),
        )

    # --- 목록 ---------------------------------------------------------------------
    async def low_stock_items(self, limit: Optional[int] = None) -> List[rpt_schemas.LowStockItem]:
        return await self.repo.get_low_stock_items(self.db, limit=self._limit(limit))

    async def recent_sales(self, limit: Optional[int] = None) -> List[rpt_schemas.RecentSale]:
        return await self.repo.get_recent_sales(self.db, limit=self._limit(limit))

    async def top_sellers(
        self, limit: Optional[int] = None, days: Optional[int] = None
    ) -> List[rpt_schemas.TopSeller]:
        """최근 `days`일 동안 판매 수량이 많은 품목. 기본 기간은 TOP_SELLER_WINDOW_DAYS."""
        limit = self._limit(limit)
        days = settings.TOP_SELLER_WINDOW_DAYS if days is None else days
        if days < 1:
            raise self._fail(ReportErrorCode.INVALID_PERIOD, field="days", value=days)
        since = self.clock() - timedelta(days=days)
        return await self.repo.get_top_sellers(self.db, since=since, limit=limit)

    async def recent_purchases(self, limit: Optional[int] = None) -> List[rpt_schemas.RecentPurchase]:
        return await self.repo.get_recent_purchases(self.db, limit=self._limit(limit))

    def _limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return settings.DASHBOARD_LIST_LIMIT
        if limit < 1:
            raise self._fail(ReportErrorCode.INVALID_LIMIT, field="limit", value=limit)
        return limit
