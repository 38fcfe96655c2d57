"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from services.config_manager import ConfigManager

router = APIRouter()


class DiffConfigUpdateRequest(BaseModel):
    """Request to update diff settings"""

    contextLines: int | None = Field(default=None, ge=0)
    noChangesMessage: str | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    contextLines: int
    noChangesMessage: str


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current diff settings"""
    settings = ConfigManager.get_instance().get_diff_settings()
    return ConfigResponse(
        contextLines=settings["contextLines"],
        noChangesMessage=settings["noChangesMessage"],
    )


@router.put("")
async def update_config(request: DiffConfigUpdateRequest) -> dict[str, Any]:
    """Update diff settings"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    diff = dict(current_config.get("diff", {}))
    if request.contextLines is not None:
        diff["contextLines"] = request.contextLines
    if request.noChangesMessage:
        diff["noChangesMessage"] = request.noChangesMessage
    current_config["diff"] = diff

    config_manager.save_config(current_config)

    return {"status": "success", "message": "Configuration updated"}
