"""Tests for database helpers."""

from unittest.mock import patch

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from printshop.infra.database import column_exists
from printshop.models import Base


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


class TestColumnExists:
    @pytest.mark.asyncio
    async def test_present(self, engine):
        with patch("printshop.infra.database.get_engine", return_value=engine):
            assert await column_exists("orders", "print_priority") is True

    @pytest.mark.asyncio
    async def test_dropped(self, engine):
        async with engine.begin() as conn:
            await conn.execute(text("ALTER TABLE orders DROP COLUMN print_priority"))

        with patch("printshop.infra.database.get_engine", return_value=engine):
            assert await column_exists("orders", "print_priority") is False
