"""Data models for the creative assembly stage"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..video_intelligence.analysis_models import EnergyLevel, VideoAnalysis


class ContentFormat(str, Enum):
    REEL = "reel"
    STORY = "story"
    AD = "ad"
    STATIC = "static"
    CAROUSEL = "carousel"


class EditorMode(str, Enum):
    """How much the editor decides on its own"""
    SMART_ASSIST = "smart_assist"
    AUTO_CREATE = "auto_create"
    AUTONOMOUS = "autonomous"


class Platform(str, Enum):
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    YOUTUBE_SHORTS = "youtube_shorts"
    FACEBOOK = "facebook"


class OverlayStyle(str, Enum):
    BOLD = "bold"
    MINIMAL = "minimal"
    BRANDED = "branded"
    CAPTION = "caption"
    CTA = "cta"


class OverlayPosition(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class OverlayAnimation(str, Enum):
    FADE = "fade"
    SLIDE = "slide"
    POP = "pop"
    TYPEWRITER = "typewriter"


class TransitionType(str, Enum):
    CUT = "cut"
    FADE = "fade"
    ZOOM = "zoom"
    SWIPE = "swipe"
    NONE = "none"


class CreativeOverlay(BaseModel):
    """Timed on-screen text"""
    model_config = ConfigDict(use_enum_values=True)

    text: str
    start: float
    end: float
    style: OverlayStyle
    position: Optional[OverlayPosition] = None
    animation: Optional[OverlayAnimation] = None
    # Renderer element name, e.g. "Text-1" or "Overlay-1"
    id: Optional[str] = None


class CreativeSequence(BaseModel):
    """One segment of the output cut"""
    model_config = ConfigDict(use_enum_values=True)

    start: float
    end: float
    label: Optional[str] = None
    transition: Optional[TransitionType] = None
    speed: float = 1.0  # Playback rate multiplier


class CreativeAssembly(BaseModel):
    """Complete creative plan for one piece of content"""
    model_config = ConfigDict(use_enum_values=True)

    format: ContentFormat
    hook: str
    caption: str
    cta: str
    hashtags: List[str] = []
    overlays: List[CreativeOverlay] = []
    sequence: List[CreativeSequence] = []
    template_style: str
    music_suggestion: Optional[str] = None
    music_energy: Optional[EnergyLevel] = None
    duration_target: Optional[float] = None
    creative_rationale: Optional[str] = None


class VoiceProfile(BaseModel):
    """Brand or customer voice preferences; every field is optional"""
    tone: Optional[str] = None
    vocabulary: List[str] = []
    cta_style: Optional[str] = None
    brand_name: Optional[str] = None


class AssemblerOptions(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    analysis: VideoAnalysis
    mode: EditorMode = EditorMode.SMART_ASSIST
    platform: Platform = Platform.INSTAGRAM
    voice_profile: Optional[VoiceProfile] = None
    # Unset means the default 15 second cut
    target_duration: Optional[float] = Field(default=None, gt=0)
    include_hashtags: bool = True
