"""Video Intelligence Engine

Normalizes the noisy, best-effort payload returned by the analysis
collaborator into a ``VideoAnalysis``: scenes with scores, labels and
installer actions, the best hook moment, vehicle/color facts pulled from the
transcript, and a few derived ratings.

``analyze_video`` never raises for upstream problems. The only error it lets
through is a missing playback URL, which is caller misuse.
"""

import logging
import math
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .analysis_client import AnalysisClient
from .analysis_models import (
    AnalysisConfig,
    AnalyzedScene,
    EnergyLevel,
    InstallerAction,
    SceneLabel,
    VideoAnalysis,
    VideoAnalyzerOptions,
)

logger = logging.getLogger('editor_brain.video_analyzer')

FAILURE_SUGGESTION = "Unable to analyze video - try again"
EMPTY_SUMMARY = "Video ready for analysis"
DEFAULT_ENERGY = EnergyLevel.MEDIUM
DEFAULT_CONTENT_RATING = 50

# First match wins, checked in order
LABEL_KEYWORDS: List[Tuple[SceneLabel, Tuple[str, ...]]] = [
    (SceneLabel.HOOK_ACTION, ("hook", "attention")),
    (SceneLabel.REVEAL_SHOT, ("reveal", "final")),
    (SceneLabel.DETAIL, ("detail", "close")),
    (SceneLabel.BEFORE, ("before",)),
    (SceneLabel.AFTER, ("after",)),
    (SceneLabel.TALKING_HEAD, ("talking", "speaking")),
    (SceneLabel.TRANSITION, ("transition",)),
]

ACTION_KEYWORDS: List[Tuple[InstallerAction, Tuple[str, ...]]] = [
    (InstallerAction.APPLYING_VINYL, ("vinyl", "applying", "wrap")),
    (InstallerAction.SQUEEGEE, ("squeegee",)),
    (InstallerAction.HEAT_GUN, ("heat", "gun")),
    (InstallerAction.CLEANING, ("clean",)),
    (InstallerAction.REVEAL, ("reveal", "unwrap")),
]

VEHICLE_PATTERN = re.compile(
    r"(?:Tesla|Ford|Chevy|Chevrolet|BMW|Mercedes|Audi|Porsche|Lamborghini|Ferrari|McLaren|"
    r"Corvette|Mustang|Camaro|Challenger|Charger|Bronco|F-?150|Silverado|Ram|Tacoma|Tundra|"
    r"Model [SX3Y]|Cybertruck)",
    re.IGNORECASE,
)

COLOR_PATTERN = re.compile(
    r"(?P<finish>satin|matte|gloss|metallic|chrome)?\s*"
    r"(?:black|white|red|blue|green|yellow|orange|purple|pink|gray|grey|silver|gold|bronze|"
    r"copper|teal|navy|midnight|arctic|desert|forest)",
    re.IGNORECASE,
)


async def analyze_video(options: VideoAnalyzerOptions,
                        client: AnalysisClient,
                        settings: Optional[AnalysisConfig] = None) -> VideoAnalysis:
    """Analyze a video and return structured intelligence data.

    Raises ``ValueError`` when no playback URL is given. Every other failure
    is logged and turned into a minimal analysis.
    """
    if not options.playback_url:
        raise ValueError("Playback URL required for video analysis")
    settings = settings or AnalysisConfig()

    try:
        result = await client.analyze(options.playback_url, options.existing_transcript or "")
        return build_analysis(result, options, settings)
    except Exception as e:
        logger.error(f"Video analysis failed for {options.playback_url}: {e}")
        return degraded_analysis(options)


def degraded_analysis(options: VideoAnalyzerOptions) -> VideoAnalysis:
    """Minimal, always-valid analysis returned when the upstream call fails"""
    return VideoAnalysis(
        scenes=[],
        keywords=[],
        shot_types=[],
        suggestions=[FAILURE_SUGGESTION],
        duration_seconds=options.duration,
        energy_level=DEFAULT_ENERGY,
        content_rating=DEFAULT_CONTENT_RATING,
    )


def build_analysis(result: Dict[str, Any], options: VideoAnalyzerOptions,
                   settings: AnalysisConfig) -> VideoAnalysis:
    """Normalize a raw collaborator payload into a ``VideoAnalysis``"""
    if not isinstance(result, dict):
        raise ValueError(f"Analysis payload must be an object, got {type(result).__name__}")

    cuts = result.get("cuts")
    scenes = [
        scene_from_cut(cut, index, settings)
        for index, cut in enumerate(cuts if isinstance(cuts, list) else [])
    ]

    transcript = options.existing_transcript or ""
    wrap_color, wrap_finish = extract_wrap_color(transcript)
    suggestions = result.get("recommendations") or []
    summary = result.get("summary")

    analysis = VideoAnalysis(
        scenes=scenes,
        transcript=options.existing_transcript,
        keywords=extract_keywords(result),
        detected_vehicle=extract_vehicle(transcript),
        wrap_color=wrap_color,
        wrap_finish=wrap_finish,
        shot_types=detect_shot_types(scenes),
        summary=summary if isinstance(summary, str) and summary.strip() else generate_summary(scenes),
        suggestions=[str(s) for s in suggestions] if isinstance(suggestions, list) else [str(suggestions)],
        best_hook_scene=find_best_hook_scene(scenes, settings.hook_window_seconds),
        duration_seconds=options.duration,
        energy_level=calculate_energy_level(scenes),
        content_rating=calculate_content_rating(scenes),
    )
    logger.info(
        f"Analysis ready: scenes={len(scenes)}, shot_types={analysis.shot_types}, "
        f"energy={analysis.energy_level}, rating={analysis.content_rating}"
    )
    return analysis


def scene_from_cut(cut: Any, index: int, settings: AnalysisConfig) -> AnalyzedScene:
    """Turn one upstream cut record into a scene, filling gaps with defaults"""
    if not isinstance(cut, dict):
        cut = {}
    slot = settings.scene_slot_seconds

    start = _as_float(cut.get("start"))
    end = _as_float(cut.get("end"))
    if start is None:
        start = index * slot
    if end is None:
        end = (index + 1) * slot
    if end <= start:
        end = start + slot

    score = _as_float(cut.get("score"))
    if score is None:
        score = settings.default_scene_score
    score = min(1.0, max(0.0, score))

    description = str(cut.get("description") or "")
    speech = cut.get("speech")

    return AnalyzedScene(
        start=start,
        end=end,
        score=score,
        label=detect_scene_label(description),
        action=detect_action(description),
        speech=str(speech) if speech else None,
    )


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def detect_scene_label(description: str) -> SceneLabel:
    lower = description.lower()
    for label, words in LABEL_KEYWORDS:
        if any(word in lower for word in words):
            return label
    return SceneLabel.B_ROLL


def detect_action(description: str) -> Optional[InstallerAction]:
    lower = description.lower()
    for action, words in ACTION_KEYWORDS:
        if any(word in lower for word in words):
            return action
    if "before" in lower and "after" in lower:
        return InstallerAction.COMPARISON
    return None


def find_best_hook_scene(scenes: Sequence[AnalyzedScene],
                         window_seconds: float = 5.0) -> Optional[AnalyzedScene]:
    """Highest-scoring scene starting inside the hook window.

    Ties go to the earliest candidate. Falls back to the first scene, or
    ``None`` when there are no scenes.
    """
    candidates = [s for s in scenes if s.start < window_seconds]
    if not candidates:
        return scenes[0] if scenes else None
    # max() keeps the first maximal element
    return max(candidates, key=lambda s: s.score)


def extract_keywords(result: Dict[str, Any]) -> List[str]:
    keywords = []
    if result.get("color_grading"):
        keywords.append("color_grading")
    if result.get("transitions"):
        keywords.append("transitions")
    if result.get("text_overlays"):
        keywords.append("overlays")
    if result.get("speed_ramps"):
        keywords.append("dynamic_pacing")
    return keywords


def extract_vehicle(transcript: str) -> Optional[str]:
    match = VEHICLE_PATTERN.search(transcript or "")
    return match.group(0) if match else None


def extract_wrap_color(transcript: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(color, finish)`` for the first color mention, e.g. ('satin black', 'satin')"""
    match = COLOR_PATTERN.search(transcript or "")
    if not match:
        return None, None
    color = match.group(0).strip()
    finish = match.group("finish")
    return color, finish.lower() if finish else None


def detect_shot_types(scenes: Sequence[AnalyzedScene]) -> List[str]:
    """Union of scene labels and actions, first-seen order"""
    types: Dict[str, None] = {}
    for scene in scenes:
        if scene.label:
            types[scene.label] = None
        if scene.action:
            types[scene.action] = None
    return list(types)


def generate_summary(scenes: Sequence[AnalyzedScene]) -> str:
    if not scenes:
        return EMPTY_SUMMARY
    has_reveal = any(s.label == SceneLabel.REVEAL_SHOT for s in scenes)
    has_before_after = any(s.label in (SceneLabel.BEFORE, SceneLabel.AFTER) for s in scenes)

    if has_reveal and has_before_after:
        return "Transformation video with before/after reveal"
    if has_reveal:
        return "Wrap reveal video"
    if has_before_after:
        return "Before and after comparison"
    return f"{len(scenes)} scene video ready for editing"


def calculate_energy_level(scenes: Sequence[AnalyzedScene]) -> EnergyLevel:
    if not scenes:
        return DEFAULT_ENERGY
    avg_duration = sum(s.duration for s in scenes) / len(scenes)
    if avg_duration < 2:
        return EnergyLevel.HIGH
    if avg_duration < 4:
        return EnergyLevel.MEDIUM
    return EnergyLevel.LOW


def calculate_content_rating(scenes: Sequence[AnalyzedScene]) -> int:
    """0-100 rating from average score plus hook and reveal bonuses"""
    if not scenes:
        return DEFAULT_CONTENT_RATING
    avg_score = sum(s.score for s in scenes) / len(scenes)
    rating = avg_score * 60
    if any(s.label == SceneLabel.HOOK_ACTION for s in scenes):
        rating += 20
    if any(s.label == SceneLabel.REVEAL_SHOT for s in scenes):
        rating += 20
    # Half-up rounding
    return int(min(100, math.floor(rating + 0.5)))
