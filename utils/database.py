# utils/database.py
import logging
from typing import Annotated, AsyncGenerator

import asyncpg
from fastapi import Depends

from config import settings

pool: asyncpg.Pool | None = None

logger = logging.getLogger(__name__)


def get_pool() -> asyncpg.Pool:
    if pool is None:
        raise RuntimeError("Database pool is not initialized")
    return pool


async def get_connection() -> AsyncGenerator[asyncpg.Connection, None]:
    """부분 수정 쿼리($n 바인딩)용 raw 커넥션"""
    async with get_pool().acquire() as conn:
        yield conn


async def init_pool() -> None:
    global pool
    pool = await asyncpg.create_pool(
        dsn=settings.asyncpg_dsn,
        min_size=5,
        max_size=20,
    )
    logger.info("Database pool initialized")


async def close_pool() -> None:
    global pool
    if pool:
        await pool.close()
        pool = None
        logger.info("Database pool closed")


DBConnection = Annotated[asyncpg.Connection, Depends(get_connection)]
