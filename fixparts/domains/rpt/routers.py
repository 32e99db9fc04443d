# fixparts/domains/rpt/routers.py

"""
'rpt' 도메인 (대시보드 보고서)의 읽기 전용 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends

from fixparts.core import dependencies as deps
from fixparts.domains.rpt import schemas as rpt_schemas
from fixparts.domains.rpt.services import DashboardService

router = APIRouter(
    prefix="/dashboard",
    tags=["Report Management (보고서 관리)"],
)


# =============================================================================
# 1. 요약 카드
# =============================================================================
@router.get("/summary", response_model=rpt_schemas.DashboardSummary, summary="대시보드 요약")
async def read_summary(service: DashboardService = Depends(deps.get_dashboard_service)):
    """
    재고 부족 건수, 오늘 매출, 활성 품목 수, 호환 차량 수를 한 번에 조회합니다.
    """
    return await service.summary()


@router.get("/low-stock-count", response_model=rpt_schemas.CountRead, summary="재고 부족 품목 수")
async def read_low_stock_count(service: DashboardService = Depends(deps.get_dashboard_service)):
    return rpt_schemas.CountRead(count=await service.low_stock_count())


@router.get("/sales-today", response_model=rpt_schemas.AmountRead, summary="오늘 판매 합계 (UTC)")
async def read_sales_today(service: DashboardService = Depends(deps.get_dashboard_service)):
    return rpt_schemas.AmountRead(total=await service.today_sales())


@router.get("/inventory-count", response_model=rpt_schemas.CountRead, summary="활성 품목 수")
async def read_inventory_count(service: DashboardService = Depends(deps.get_dashboard_service)):
    return rpt_schemas.CountRead(count=await service.inventory_count())


@router.get("/vehicle-count", response_model=rpt_schemas.CountRead, summary="호환 차량(서브모델) 수")
async def read_vehicle_count(service: DashboardService = Depends(deps.get_dashboard_service)):
    return rpt_schemas.CountRead(count=await service.vehicle_count())


# =============================================================================
# 2. 목록
# =============================================================================
@router.get("/low-stock", response_model=List[rpt_schemas.LowStockItem], summary="재고 부족 품목")
async def read_low_stock(
    limit: Optional[int] = None,
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return await service.low_stock_items(limit)


@router.get("/recent-sales", response_model=List[rpt_schemas.RecentSale], summary="최근 판매")
async def read_recent_sales(
    limit: Optional[int] = None,
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return await service.recent_sales(limit)


@router.get("/top-sellers", response_model=List[rpt_schemas.TopSeller], summary="판매 상위 품목")
async def read_top_sellers(
    limit: Optional[int] = None,
    days: Optional[int] = None,
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    """
    최근 `days`일(기본 30일) 동안의 판매를 품목별 판매 수량 순으로 조회합니다.
    """
    return await service.top_sellers(limit, days)


@router.get("/recent-purchases", response_model=List[rpt_schemas.RecentPurchase], summary="최근 구매")
async def read_recent_purchases(
    limit: Optional[int] = None,
    service: DashboardService = Depends(deps.get_dashboard_service),
):
    return await service.recent_purchases(limit)
