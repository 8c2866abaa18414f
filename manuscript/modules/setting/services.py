"""Settings service: a flat key/value table with upsert semantics."""

from typing import Dict, Mapping

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..common.constants import DEFAULT_SETTINGS
from ..common.exceptions import StoreError
from .models import Setting
from .schemas import SettingValue, stringify_value

logger = get_logger(__name__)


async def seed_default_settings(db: AsyncSession) -> int:
    """Insert the default settings that are not present yet.

    Existing values are never overwritten.

    Returns:
        Number of settings inserted
    """
    result = await db.execute(select(Setting.key))
    existing = set(result.scalars().all())

    missing = {key: value for key, value in DEFAULT_SETTINGS.items() if key not in existing}
    for key, value in missing.items():
        db.add(Setting(key=key, value=value))

    if missing:
        await db.commit()
        logger.info("Seeded default settings", extra={"keys": sorted(missing)})

    return len(missing)


class SettingService:
    """Service for reading and upserting user preferences."""

    async def get_settings(self, db: AsyncSession) -> Dict[str, str]:
        """Return every setting as a plain mapping."""
        result = await db.execute(select(Setting).order_by(Setting.key))
        return {setting.key: setting.value for setting in result.scalars().all()}

    async def update_settings(self, values: Mapping[str, SettingValue], db: AsyncSession) -> Dict[str, str]:
        """Upsert all pairs in one transaction and return the full table.

        Args:
            values: Keys and their new values; non-string values are stringified
            db: Database session

        Returns:
            All settings after the update
        """
        updates = {key: stringify_value(value) for key, value in values.items()}

        try:
            if updates:
                result = await db.execute(select(Setting).where(Setting.key.in_(updates.keys())))
                existing = {setting.key: setting for setting in result.scalars().all()}

                for key, value in updates.items():
                    if key in existing:
                        existing[key].value = value
                    else:
                        db.add(Setting(key=key, value=value))

                await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError("Failed to update settings") from e

        logger.debug("Updated settings", extra={"keys": sorted(updates)})
        return await self.get_settings(db)
