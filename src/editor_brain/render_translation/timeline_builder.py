"""Timeline Builder

Element-list representation of a creative plan for renderers that take a
full composition instead of template modifications: one video element with
per-segment clips, one text element per overlay and an optional music
track. Also picks the thumbnail frame.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .render_models import DEFAULT_FRAME_RATE, DEFAULT_HEIGHT, DEFAULT_WIDTH, BrandColors, OutputFormat
from ..creative_assembly.creative_models import (
    CreativeAssembly,
    OverlayAnimation,
    OverlayPosition,
    OverlayStyle,
    TransitionType,
)
from ..video_intelligence.analysis_models import SceneLabel

FONT_FAMILY = "Montserrat"
DEFAULT_FILL = "#ffffff"
STROKE_COLOR = "#000000"
MUSIC_VOLUME = 0.7
ANIMATION_SECONDS = 0.3
THUMBNAIL_FALLBACK_SECONDS = 2

# cut and none have no visual transition
TRANSITIONS: Dict[str, Optional[str]] = {
    TransitionType.FADE.value: "fade",
    TransitionType.ZOOM.value: "zoom",
    TransitionType.SWIPE.value: "slide",
}

POSITIONS: Dict[str, str] = {
    OverlayPosition.TOP.value: "15%",
    OverlayPosition.CENTER.value: "50%",
    OverlayPosition.BOTTOM.value: "85%",
}

ANIMATIONS: Dict[str, str] = {
    OverlayAnimation.SLIDE.value: "slide-in",
    OverlayAnimation.POP.value: "scale",
    OverlayAnimation.TYPEWRITER.value: "text-reveal",
    OverlayAnimation.FADE.value: "fade",
}


def map_transition(transition: Optional[str]) -> Optional[str]:
    return TRANSITIONS.get(transition)


def map_position(position: Optional[str]) -> str:
    return POSITIONS.get(position, POSITIONS[OverlayPosition.BOTTOM.value])


def map_animation(animation: Optional[str]) -> str:
    return ANIMATIONS.get(animation, ANIMATIONS[OverlayAnimation.FADE.value])


def build_advanced_timeline(creative: CreativeAssembly, video_url: str,
                            brand_colors: Optional[BrandColors] = None,
                            music_url: Optional[str] = None) -> Dict[str, Any]:
    """Return a full element timeline for the plan"""
    fill_color = (brand_colors.primary if brand_colors else None) or DEFAULT_FILL
    elements: List[Dict[str, Any]] = []

    elements.append({
        "type": "video",
        "source": video_url,
        "clips": [
            {
                "time": seq.start,
                "duration": seq.end - seq.start,
                "transition": map_transition(seq.transition),
                "playback_rate": seq.speed or 1.0,
            }
            for seq in creative.sequence
        ],
    })

    for overlay in creative.overlays:
        bold = overlay.style == OverlayStyle.BOLD
        elements.append({
            "type": "text",
            "name": overlay.id,
            "text": overlay.text,
            "time": overlay.start,
            "duration": overlay.end - overlay.start,
            "y": map_position(overlay.position),
            "font_family": FONT_FAMILY,
            "font_weight": 700 if bold else 400,
            "font_size": 72 if bold else 48,
            "fill_color": fill_color,
            "stroke_color": STROKE_COLOR,
            "stroke_width": 2,
            "animations": [
                {"type": map_animation(overlay.animation), "time": "start", "duration": ANIMATION_SECONDS},
            ],
        })

    if music_url:
        elements.append({"type": "audio", "source": music_url, "volume": MUSIC_VOLUME})

    return {
        "output_format": OutputFormat.MP4.value,
        "width": DEFAULT_WIDTH,
        "height": DEFAULT_HEIGHT,
        "frame_rate": DEFAULT_FRAME_RATE,
        "elements": elements,
    }


def generate_thumbnail_spec(creative: CreativeAssembly) -> Dict[str, Any]:
    """Still-frame render request for the plan's thumbnail.

    Uses the reveal segment when there is one, otherwise the segment that
    starts latest. Falls back to 2 seconds with no sequence.
    """
    best = next((s for s in creative.sequence if s.label == SceneLabel.REVEAL_SHOT), None)
    if best is None and creative.sequence:
        # NOTE: documented rule is latest start, but the earlier editor build sorted
        # ascending at runtime and shipped the earliest start. Kept until product confirms.
        best = max(creative.sequence, key=lambda s: s.start)

    return {
        "output_format": OutputFormat.PNG.value,
        "width": DEFAULT_WIDTH,
        "height": DEFAULT_HEIGHT,
        "snapshot_time": best.start if best is not None else THUMBNAIL_FALLBACK_SECONDS,
    }
