"""Data models for renderer documents"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ..creative_assembly.creative_models import CreativeAssembly, Platform

DEFAULT_TEMPLATE_ID = "b99d8a90-2a85-4ec7-83c4-dfe060ceeedd"

# Vertical 9:16 output
DEFAULT_WIDTH = 1080
DEFAULT_HEIGHT = 1920
DEFAULT_FRAME_RATE = 30


class OutputFormat(str, Enum):
    MP4 = "mp4"
    GIF = "gif"
    PNG = "png"


class RenderStatus(str, Enum):
    PENDING = "pending"
    RENDERING = "rendering"
    COMPLETE = "complete"
    FAILED = "failed"


class BrandColors(BaseModel):
    primary: Optional[str] = None
    secondary: Optional[str] = None
    accent: Optional[str] = None
    text: Optional[str] = None


class CreatomateTimeline(BaseModel):
    """Template render request: template id plus flat field modifications"""
    model_config = ConfigDict(use_enum_values=True)

    template_id: Optional[str] = None
    # Dotted element path -> scalar, e.g. {"Text-1.text": "...", "Video.source": "..."}
    modifications: Dict[str, Any] = {}
    output_format: Optional[OutputFormat] = None
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate: Optional[int] = None


class RenderJob(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    platform: Platform
    timeline: CreatomateTimeline
    status: RenderStatus = RenderStatus.PENDING
    id: Optional[str] = None
    output_url: Optional[str] = None


class TranslatorOptions(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    creative: CreativeAssembly
    video_url: str
    brand_colors: Optional[BrandColors] = None
    template_id: Optional[str] = None
    music_url: Optional[str] = None
    logo_url: Optional[str] = None
    platforms: Optional[List[Platform]] = None


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = []
