"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from models.compare import DiffSettings, DiffSettingsUpdate
from services.config_manager import ConfigManager

router = APIRouter()


@router.get("", response_model=DiffSettings)
async def get_config() -> DiffSettings:
    """Get current diff settings"""
    return ConfigManager.get_instance().get_diff_settings()


@router.put("")
async def update_config(request: DiffSettingsUpdate) -> dict[str, Any]:
    """Update diff settings"""
    config_manager = ConfigManager.get_instance()
    current = config_manager.get_diff_settings()

    # Update only provided fields
    updated = current.model_copy(update=request.model_dump(exclude_none=True))

    try:
        config_manager.save_config({"diff": updated.model_dump(mode="json")})
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "status": "success",
        "message": "Configuration updated",
        "settings": updated.model_dump(mode="json"),
    }


@router.post("/reset")
async def reset_config() -> dict[str, Any]:
    """Restore default diff settings"""
    defaults = DiffSettings()
    try:
        ConfigManager.get_instance().save_config({"diff": defaults.model_dump(mode="json")})
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration reset", "settings": defaults.model_dump(mode="json")}
