"""Business settings endpoints (back-office configuration)."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from printshop.api.deps import SettingsSource

router = APIRouter()


class SettingValue(BaseModel):
    value: Any


@router.get("")
async def list_settings(settings_store: SettingsSource) -> dict[str, Any]:
    return await settings_store.load_all()


@router.put("/{key}")
async def save_setting(key: str, request: SettingValue, settings_store: SettingsSource) -> dict[str, Any]:
    """Overwrite one setting; the next computation sees the new value."""
    await settings_store.save(key, request.value)
    return {"key": key, "value": request.value}
