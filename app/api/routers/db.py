from fastapi import APIRouter, Depends
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api import deps
from app.core.config import Settings

router = APIRouter()


@router.get("")
async def db_info(
    engine: AsyncEngine = Depends(deps.get_engine),
    settings: Settings = Depends(deps.get_settings),
):
    async with engine.connect() as conn:
        version = await conn.run_sync(lambda sync_conn: sync_conn.dialect.server_version_info)
        tables = await conn.run_sync(lambda sync_conn: sorted(inspect(sync_conn).get_table_names()))

    return {
        "host": settings.db_host,
        "port": settings.db_port,
        "database": settings.db_name,
        "user": settings.db_user,
        "server_version": ".".join(str(part) for part in version or ()),
        "tables": tables,
    }
