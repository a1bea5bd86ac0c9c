import asyncio

import asyncpg

from src.common.constants import TypeMsg
from src.common.logger import log_info, setup_logging
from src.config import settings
from src.infra.database import DatabaseManager, close_db, init_db


async def create_db() -> None:
    """Создаёт базу (если её нет) и применяет migrations/init.sql."""
    setup_logging()
    db_name = settings.database.DB_NAME

    # Подключаемся к служебной базе postgres, чтобы создать рабочую
    sys_conn = await asyncpg.connect(
        user=settings.database.DB_USER,
        password=settings.database.DB_PASSWORD,
        host=settings.database.DB_HOST,
        port=settings.database.DB_PORT,
        database="postgres",
    )
    try:
        exists = await sys_conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name)
        if not exists:
            await log_info(f"Создание базы {db_name}...", type_msg=TypeMsg.INFO)
            await sys_conn.execute(f'CREATE DATABASE "{db_name}"')
        else:
            await log_info(f"База {db_name} уже существует", type_msg=TypeMsg.INFO)
    finally:
        await sys_conn.close()

    db = DatabaseManager.from_settings()
    try:
        await init_db(db)
    finally:
        await close_db(db)


if __name__ == "__main__":
    asyncio.run(create_db())
