# scripts/init_db.py

"""
개발용 데이터베이스 초기화 스크립트입니다.

    python -m scripts.init_db create-tables
    python -m scripts.init_db seed

운영 환경의 스키마 변경은 Alembic(migrations/)을 사용합니다.
"""

import asyncio
from decimal import Decimal

import typer

from fixparts.core.database import create_db_and_tables, engine, get_async_session_context
from fixparts.core.exceptions import DomainError
from fixparts.domains.inv import schemas as inv_schemas
from fixparts.domains.inv.services import CategoryService, ItemService
from fixparts.domains.veh import schemas as veh_schemas
from fixparts.domains.veh.services import VehicleMakeService, VehicleModelService, VehicleSubmodelService
from fixparts.domains.ven import schemas as ven_schemas
from fixparts.domains.ven.services import SupplierService
from fixparts.services.compatibility_service import CompatibilityService
from fixparts.domains.inv.schemas import CompatibilityCreate

cli = typer.Typer()


async def _create_tables() -> None:
    await create_db_and_tables()
    await engine.dispose()


async def _seed() -> None:
    """
    기본 카테고리, 공급업체, 차량, 품목 한 세트를 생성합니다.
    """
    async with get_async_session_context() as db:
        brakes = await CategoryService(db).create(inv_schemas.CategoryCreate(name="Brakes"))
        pads = await CategoryService(db).create(inv_schemas.CategoryCreate(name="Pads", parent_id=brakes.id))
        supplier = await SupplierService(db).create(ven_schemas.SupplierCreate(name="Default Supplier"))

        make = await VehicleMakeService(db).create(veh_schemas.VehicleMakeCreate(name="Toyota", country="Japan"))
        model = await VehicleModelService(db).create(veh_schemas.VehicleModelCreate(make_id=make.id, name="Corolla"))
        submodel = await VehicleSubmodelService(db).create(
            veh_schemas.VehicleSubmodelCreate(
                model_id=model.id,
                name="1.6 LE",
                year_from=2014,
                year_to=2019,
                engine_type="I4",
                engine_displacement=1.6,
                fuel_type="Gasoline",
                transmission_type="CVT",
                body_type="Sedan",
            )
        )

        item = await ItemService(db).create(
            inv_schemas.ItemCreate(
                part_number="BR-100",
                item_name="Front brake pad set",
                description="Ceramic front brake pads",
                category_id=pads.id,
                supplier_id=supplier.id,
                buy_price=Decimal("25.00"),
                sell_price=Decimal("49.99"),
                current_stock=10,
                minimum_stock=2,
            )
        )
        await CompatibilityService(db).add(CompatibilityCreate(item_id=item.id, submodel_id=submodel.id))
    await engine.dispose()
    typer.echo(f"샘플 데이터 생성 완료: item={item.part_number} barcode={item.barcode}")


@cli.command("create-tables")
def create_tables() -> None:
    """스키마와 테이블을 생성합니다 (이미 있으면 건너뜀)."""
    asyncio.run(_create_tables())
    typer.echo("스키마 및 테이블 생성 완료.")


@cli.command()
def seed() -> None:
    """샘플 데이터를 생성합니다."""
    try:
        asyncio.run(_seed())
    except DomainError as exc:
        typer.echo(f"오류: {exc.code.code} - {exc.message}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
