"""Settings store - flat key/value business settings."""

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.core.config_access import ConfigAccess
from printshop.infra.logging import get_logger
from printshop.models import Setting

logger = get_logger(__name__)


class SettingsStore(ABC):
    """Business settings; writes overwrite, last write wins."""

    @abstractmethod
    async def load_all(self) -> dict[str, Any]:
        ...

    @abstractmethod
    async def save(self, key: str, value: Any) -> None:
        ...

    async def load(self) -> ConfigAccess:
        """Fresh snapshot for one pricing or checkout computation."""
        return ConfigAccess(await self.load_all())


class SqlSettingsStore(SettingsStore):
    """SettingsStore over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def load_all(self) -> dict[str, Any]:
        result = await self.session.execute(select(Setting))
        return {row.key: row.value for row in result.scalars().all()}

    async def save(self, key: str, value: Any) -> None:
        await self.session.merge(Setting(key=key, value=value))
        await self.session.commit()
        logger.info("Setting saved", key=key)
