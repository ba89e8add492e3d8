"""Data models for the video intelligence stage"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SceneLabel(str, Enum):
    """Semantic tag for a scene"""
    HOOK_ACTION = "hook_action"
    REVEAL_SHOT = "reveal_shot"
    DETAIL = "detail"
    B_ROLL = "b-roll"
    TALKING_HEAD = "talking_head"
    BEFORE = "before"
    AFTER = "after"
    TRANSITION = "transition"


class InstallerAction(str, Enum):
    """What the installer is doing on screen"""
    APPLYING_VINYL = "applying_vinyl"
    SQUEEGEE = "squeegee"
    HEAT_GUN = "heat_gun"
    CLEANING = "cleaning"
    REVEAL = "reveal"
    COMPARISON = "comparison"


class WrapFinish(str, Enum):
    GLOSS = "gloss"
    MATTE = "matte"
    SATIN = "satin"
    METALLIC = "metallic"
    CHROME = "chrome"


class EnergyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AnalyzedScene(BaseModel):
    """One visual segment of the source video"""
    model_config = ConfigDict(use_enum_values=True)

    start: float  # Seconds
    end: float  # Seconds
    score: float = Field(default=0.7, ge=0.0, le=1.0)
    label: Optional[SceneLabel] = None
    speech: Optional[str] = None
    action: Optional[InstallerAction] = None

    @model_validator(mode='after')
    def _check_span(self) -> "AnalyzedScene":
        if self.start >= self.end:
            raise ValueError(f"scene start ({self.start}) must be before end ({self.end})")
        return self

    @property
    def duration(self) -> float:
        return self.end - self.start


class VideoAnalysis(BaseModel):
    """Structured scene model produced for one media item"""
    model_config = ConfigDict(use_enum_values=True)

    scenes: List[AnalyzedScene] = []
    transcript: Optional[str] = None
    keywords: List[str] = []
    detected_vehicle: Optional[str] = None
    wrap_color: Optional[str] = None
    wrap_finish: Optional[WrapFinish] = None
    shot_types: List[str] = []
    summary: Optional[str] = None
    suggestions: List[str] = []
    best_hook_scene: Optional[AnalyzedScene] = None
    duration_seconds: Optional[float] = None
    energy_level: Optional[EnergyLevel] = None
    content_rating: Optional[int] = Field(default=None, ge=0, le=100)

    def has_shot_type(self, *shot_types: str) -> bool:
        """True if any of ``shot_types`` was detected"""
        return any(shot_type in self.shot_types for shot_type in shot_types)


class VideoAnalyzerOptions(BaseModel):
    """Input for a single analysis run"""
    playback_url: str
    existing_transcript: Optional[str] = None
    duration: Optional[float] = None

    @field_validator('playback_url')
    @classmethod
    def _require_url(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Playback URL required for video analysis")
        return value


class AnalysisConfig(BaseModel):
    """Analysis collaborator and normalization settings"""
    backend: str = "edge_function"  # edge_function | openai
    function_url: Optional[str] = None
    action: str = "ai_enhance"
    api_key_env: str = "SUPABASE_ANON_KEY"
    timeout_seconds: Optional[float] = None
    # Synthetic slot used when an upstream cut has no timing
    scene_slot_seconds: float = Field(default=3.0, gt=0)
    default_scene_score: float = Field(default=0.7, ge=0.0, le=1.0)
    hook_window_seconds: float = Field(default=5.0, gt=0)
