"""Creative Assembly Engine

Given a ``VideoAnalysis``, decides format, hook, caption, CTA, hashtags,
sequence, overlays, template style and music for one piece of content.

Assembly is pure and never fails. Text picks that are random draw from the
``rng`` argument so callers can pin the output with a seeded generator.
"""

import random
from typing import List, Optional

from .copy_templates import BEFORE_AFTER_HOOK, REVEAL_HOOK, CopyTemplates
from .creative_models import (
    AssemblerOptions,
    ContentFormat,
    CreativeAssembly,
    CreativeOverlay,
    CreativeSequence,
    EditorMode,
    OverlayAnimation,
    OverlayPosition,
    OverlayStyle,
    Platform,
    TransitionType,
    VoiceProfile,
)
from ..utils.text_normalize import hashtag_slug, humanize_token
from ..video_intelligence.analysis_models import EnergyLevel, SceneLabel, VideoAnalysis

DEFAULT_TARGET_DURATION = 15.0

BASE_HASHTAGS = ["#wrap", "#vinylwrap", "#carwrap", "#transformation"]
REVEAL_HASHTAGS = ["#wrapreveal", "#beforeandafter"]
MAX_HASHTAGS = 15

MAX_SEQUENCE_SCENES = 6
HOOK_SPEED = 1.2

HOOK_OVERLAY_DURATION = 2.5
CTA_OVERLAY_DURATION = 3.0
CALLOUT_DURATION = 2.0

# Renderer element names carried on overlays
HOOK_ELEMENT = "Text-1"
CTA_ELEMENT = "Text-2"
OVERLAY_ELEMENT = "Overlay-{n}"

STORY_MAX_SECONDS = 10

MUSIC_BY_ENERGY = {
    EnergyLevel.HIGH.value: "Upbeat trap / electronic",
    EnergyLevel.LOW.value: "Chill ambient / lo-fi",
    EnergyLevel.MEDIUM.value: "Modern hip-hop / R&B",
}

RATIONALE_SEPARATOR = " • "


def assemble_creative(options: AssemblerOptions,
                      rng: Optional[random.Random] = None) -> CreativeAssembly:
    """Assemble a creative plan from a video analysis"""
    rng = rng or random.Random()
    analysis = options.analysis
    voice = options.voice_profile or VoiceProfile()
    target_duration = options.target_duration or DEFAULT_TARGET_DURATION

    hook = generate_hook(analysis, voice, rng)
    caption = generate_caption(analysis, voice, rng)
    cta = generate_cta(voice, rng)
    hashtags = generate_hashtags(analysis) if options.include_hashtags else []
    sequence = build_sequence(analysis, target_duration)
    overlays = build_overlays(analysis, hook, cta, sequence)

    return CreativeAssembly(
        format=determine_format(analysis, options.platform),
        hook=hook,
        caption=caption,
        cta=cta,
        hashtags=hashtags,
        overlays=overlays,
        sequence=sequence,
        template_style=determine_template_style(options.mode, analysis),
        music_suggestion=suggest_music(analysis),
        music_energy=analysis.energy_level,
        duration_target=target_duration,
        creative_rationale=generate_rationale(analysis, options.mode),
    )


def generate_hook(analysis: VideoAnalysis, voice: VoiceProfile, rng: random.Random) -> str:
    forced = None
    if analysis.has_shot_type(SceneLabel.BEFORE, SceneLabel.AFTER):
        forced = BEFORE_AFTER_HOOK
    elif analysis.has_shot_type(SceneLabel.REVEAL_SHOT):
        forced = REVEAL_HOOK
    return CopyTemplates.hook(
        analysis.detected_vehicle, analysis.wrap_color,
        forced=forced, tone=voice.tone, rng=rng,
    )


def generate_caption(analysis: VideoAnalysis, voice: VoiceProfile, rng: random.Random) -> str:
    return CopyTemplates.caption(
        analysis.detected_vehicle, analysis.wrap_color, voice.brand_name, rng=rng,
    )


def generate_cta(voice: VoiceProfile, rng: random.Random) -> str:
    return CopyTemplates.cta(voice.cta_style, rng=rng)


def generate_hashtags(analysis: VideoAnalysis) -> List[str]:
    extras = []
    if analysis.detected_vehicle:
        extras.append(f"#{hashtag_slug(analysis.detected_vehicle)}")
    if analysis.wrap_color:
        extras.append(f"#{hashtag_slug(analysis.wrap_color)}wrap")
    if analysis.has_shot_type(SceneLabel.REVEAL_SHOT):
        extras.extend(REVEAL_HASHTAGS)
    return (BASE_HASHTAGS + extras)[:MAX_HASHTAGS]


def build_sequence(analysis: VideoAnalysis, target_duration: float) -> List[CreativeSequence]:
    """Top scenes by score, each kept at its own source timing"""
    # sorted() is stable, equal scores keep discovery order
    scenes = sorted(analysis.scenes, key=lambda s: s.score, reverse=True)[:MAX_SEQUENCE_SCENES]

    if not scenes:
        return [CreativeSequence(start=0, end=target_duration, transition=TransitionType.NONE)]

    return [
        CreativeSequence(
            start=scene.start,
            end=scene.end,
            label=scene.label,
            transition=TransitionType.NONE if index == 0 else TransitionType.CUT,
            speed=HOOK_SPEED if scene.label == SceneLabel.HOOK_ACTION else 1.0,
        )
        for index, scene in enumerate(scenes)
    ]


def build_overlays(analysis: VideoAnalysis, hook: str, cta: str,
                   sequence: List[CreativeSequence]) -> List[CreativeOverlay]:
    overlays = [
        CreativeOverlay(
            id=HOOK_ELEMENT,
            text=hook,
            start=0,
            end=HOOK_OVERLAY_DURATION,
            style=OverlayStyle.BOLD,
            position=OverlayPosition.CENTER,
            animation=OverlayAnimation.POP,
        )
    ]

    # CTA closes the cut; segments are in score order, so take the latest end
    if sequence:
        cut_end = max(seq.end for seq in sequence)
        overlays.append(CreativeOverlay(
            id=CTA_ELEMENT,
            text=cta,
            start=max(0.0, cut_end - CTA_OVERLAY_DURATION),
            end=cut_end,
            style=OverlayStyle.CTA,
            position=OverlayPosition.BOTTOM,
            animation=OverlayAnimation.SLIDE,
        ))

    # Vehicle/color callout in the middle
    if analysis.detected_vehicle and len(sequence) > 2:
        mid = sequence[len(sequence) // 2]
        overlays.append(CreativeOverlay(
            id=OVERLAY_ELEMENT.format(n=1),
            text=CopyTemplates.callout(analysis.detected_vehicle, analysis.wrap_color),
            start=mid.start,
            end=mid.start + CALLOUT_DURATION,
            style=OverlayStyle.MINIMAL,
            position=OverlayPosition.BOTTOM,
            animation=OverlayAnimation.FADE,
        ))

    return overlays


def determine_template_style(mode: str, analysis: VideoAnalysis) -> str:
    if mode == EditorMode.AUTONOMOUS:
        return "cinematic-premium"
    if analysis.energy_level == EnergyLevel.HIGH:
        return "dynamic-fast-cut"
    if analysis.energy_level == EnergyLevel.LOW:
        return "elegant-slow"
    return "balanced-standard"


def determine_format(analysis: VideoAnalysis, platform: str) -> ContentFormat:
    # TODO: youtube_shorts and facebook have no dedicated rule yet; they share the duration rule
    if platform in (Platform.INSTAGRAM, Platform.TIKTOK):
        return ContentFormat.REEL
    if analysis.duration_seconds and analysis.duration_seconds < STORY_MAX_SECONDS:
        return ContentFormat.STORY
    return ContentFormat.REEL


def suggest_music(analysis: VideoAnalysis) -> str:
    return MUSIC_BY_ENERGY.get(analysis.energy_level, MUSIC_BY_ENERGY[EnergyLevel.MEDIUM.value])


def generate_rationale(analysis: VideoAnalysis, mode: str) -> str:
    parts = [
        f"Mode: {humanize_token(str(EditorMode(mode).value))}",
        f"Energy: {analysis.energy_level or EnergyLevel.MEDIUM.value}",
        f"Scenes: {len(analysis.scenes)} detected",
    ]
    hook_scene = analysis.best_hook_scene
    if hook_scene:
        parts.append(f"Best hook: {hook_scene.label or 'action'} at {_format_seconds(hook_scene.start)}s")
    if analysis.content_rating is not None:
        parts.append(f"Content quality: {analysis.content_rating}/100")
    return RATIONALE_SEPARATOR.join(parts)


def _format_seconds(value: float) -> str:
    # 3.0 -> "3", 2.5 -> "2.5"
    return str(int(value)) if float(value).is_integer() else str(value)


def generate_variants(options: AssemblerOptions, count: int = 3,
                      rng: Optional[random.Random] = None) -> List[CreativeAssembly]:
    """Build ``count`` variants for A/B testing.

    Variant ``i`` shifts the target duration by ``(i - 1) * 2`` seconds when a
    target was given. Variant 1 shouts its hook, variant 2 uses the minimal
    template.
    """
    rng = rng or random.Random()
    variants = []

    for i in range(count):
        if options.target_duration:
            target = options.target_duration + (i - 1) * 2
        else:
            target = DEFAULT_TARGET_DURATION
        variant = assemble_creative(
            options.model_copy(update={"target_duration": target if target > 0 else None}),
            rng=rng,
        )

        if i == 1 and variant.hook:
            variant = variant.model_copy(update={"hook": variant.hook.upper()})
        if i == 2:
            variant = variant.model_copy(update={"template_style": "minimal-clean"})

        variants.append(variant)

    return variants
