"""Pydantic schemas for settings."""

from typing import Dict, Union

from pydantic import RootModel, field_validator

SettingValue = Union[bool, int, float, str]


class SettingsUpdate(RootModel[Dict[str, SettingValue]]):
    """A mapping of setting keys to new values. Every pair is upserted."""

    @field_validator("root")
    @classmethod
    def validate_keys(cls, v: Dict[str, SettingValue]) -> Dict[str, SettingValue]:
        for key in v:
            if not key.strip():
                raise ValueError("Setting keys cannot be empty")
            if len(key) > 255:
                raise ValueError("Setting keys cannot exceed 255 characters")
        return v


def stringify_value(value: SettingValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
