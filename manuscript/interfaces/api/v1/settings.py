"""Settings API endpoints."""

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.common.utils.error_handler import handle_exception
from ....modules.setting.schemas import SettingsUpdate
from ....modules.setting.services import SettingService
from ..dependencies import get_setting_service

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", summary="Get Settings", description="Returns all settings as a key/value mapping.")
async def get_settings(
    setting_service: SettingService = Depends(get_setting_service),
    db: AsyncSession = Depends(async_session),
) -> Dict[str, str]:
    """Get all settings."""
    try:
        return await setting_service.get_settings(db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.put(
    "",
    summary="Update Settings",
    description="""
    Upserts every key/value pair of the body in one transaction and returns the full table.

    Values are stored as strings; numbers and booleans are converted.
    """,
)
async def update_settings(
    settings_data: SettingsUpdate,
    setting_service: SettingService = Depends(get_setting_service),
    db: AsyncSession = Depends(async_session),
) -> Dict[str, str]:
    """Update settings."""
    try:
        return await setting_service.update_settings(settings_data.root, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
