"""Render Translation Layer

Lowers a ``CreativeAssembly`` into Creatomate template render requests:
a flat map of element field paths to values, one request per target
platform, plus a validation pass before hand-off. Nothing here raises for
bad plans; problems show up in ``validate_timeline``.
"""

import logging
import re
from typing import Dict, List, Set, Union

from pydantic import ValidationError

from .render_models import (
    DEFAULT_FRAME_RATE,
    DEFAULT_HEIGHT,
    DEFAULT_TEMPLATE_ID,
    DEFAULT_WIDTH,
    CreatomateTimeline,
    OutputFormat,
    RenderJob,
    RenderStatus,
    TranslatorOptions,
    ValidationResult,
)
from ..creative_assembly.creative_assembler import (
    CTA_ELEMENT,
    CTA_OVERLAY_DURATION,
    DEFAULT_TARGET_DURATION,
    HOOK_ELEMENT,
    HOOK_OVERLAY_DURATION,
    OVERLAY_ELEMENT,
)
from ..creative_assembly.creative_models import CreativeAssembly, CreativeOverlay, Platform

logger = logging.getLogger('editor_brain.render_translator')

MIN_DIMENSION = 100
MAX_DIMENSION = 4096

PLATFORM_DIMENSIONS: Dict[str, Dict[str, int]] = {
    Platform.INSTAGRAM.value: {"width": 1080, "height": 1920},
    Platform.TIKTOK.value: {"width": 1080, "height": 1920},
    Platform.YOUTUBE_SHORTS.value: {"width": 1080, "height": 1920},
    Platform.FACEBOOK.value: {"width": 1080, "height": 1080},
}

_OVERLAY_NUMBER = re.compile(r"^Overlay-(\d+)$")


def translate_to_creatomate(options: TranslatorOptions) -> CreatomateTimeline:
    """Translate a creative plan into a Creatomate template modification set"""
    creative = options.creative
    modifications: Dict[str, Union[str, float, int, bool, None]] = {
        "Video.source": options.video_url,
    }

    # Hook text
    if creative.hook:
        modifications[f"{HOOK_ELEMENT}.text"] = creative.hook
        modifications[f"{HOOK_ELEMENT}.time"] = 0
        modifications[f"{HOOK_ELEMENT}.duration"] = HOOK_OVERLAY_DURATION

    # CTA near the end of the cut
    if creative.cta:
        end_time = cut_end_time(creative)
        modifications[f"{CTA_ELEMENT}.text"] = creative.cta
        modifications[f"{CTA_ELEMENT}.time"] = max(0, end_time - CTA_OVERLAY_DURATION)
        modifications[f"{CTA_ELEMENT}.duration"] = CTA_OVERLAY_DURATION

    colors = options.brand_colors
    if colors and colors.primary:
        modifications[f"{HOOK_ELEMENT}.fill_color"] = colors.primary
        modifications["Overlay.fill_color"] = colors.primary
    if colors and colors.secondary:
        modifications[f"{CTA_ELEMENT}.fill_color"] = colors.secondary

    if options.music_url:
        modifications["Audio.source"] = options.music_url
    if options.logo_url:
        modifications["Logo.source"] = options.logo_url

    # Remaining overlays keep the element name they were created with
    for element, overlay in name_extra_overlays(creative.overlays):
        modifications[f"{element}.text"] = overlay.text
        modifications[f"{element}.time"] = overlay.start
        modifications[f"{element}.duration"] = overlay.end - overlay.start

    return CreatomateTimeline(
        template_id=options.template_id or DEFAULT_TEMPLATE_ID,
        modifications=modifications,
        output_format=OutputFormat.MP4,
        width=DEFAULT_WIDTH,
        height=DEFAULT_HEIGHT,
        frame_rate=DEFAULT_FRAME_RATE,
    )


def cut_end_time(creative: CreativeAssembly) -> float:
    if not creative.sequence:
        return DEFAULT_TARGET_DURATION
    return max(seq.end for seq in creative.sequence)


def name_extra_overlays(overlays: List[CreativeOverlay]):
    """Pair every non-hook, non-CTA overlay with its renderer element name.

    Overlays without an id, or repeating an id already taken, get the next
    ``Overlay-{n}`` name not already used.
    """
    reserved = {HOOK_ELEMENT, CTA_ELEMENT}
    extras = [o for o in overlays if o.id not in reserved]
    used: Set[int] = set()
    for overlay in extras:
        match = _OVERLAY_NUMBER.match(overlay.id or "")
        if match:
            used.add(int(match.group(1)))

    named = []
    taken: Set[str] = set()
    next_number = 1
    for overlay in extras:
        if overlay.id and overlay.id not in taken:
            taken.add(overlay.id)
            named.append((overlay.id, overlay))
            continue
        if overlay.id:
            logger.warning(f"Duplicate overlay element name {overlay.id}, renumbering")
        while next_number in used:
            next_number += 1
        used.add(next_number)
        element = OVERLAY_ELEMENT.format(n=next_number)
        taken.add(element)
        logger.debug(f"Overlay '{overlay.text[:40]}' has no element name, using {element}")
        named.append((element, overlay))
    return named


def create_multi_platform_render_jobs(options: TranslatorOptions) -> List[RenderJob]:
    """One pending render job per target platform, sized for that platform"""
    platforms = options.platforms or [Platform.INSTAGRAM.value]
    jobs = []

    for platform in platforms:
        platform = Platform(platform).value
        dimensions = PLATFORM_DIMENSIONS[platform]
        timeline = translate_to_creatomate(options.model_copy(update={"platforms": [platform]}))
        timeline.width = dimensions["width"]
        timeline.height = dimensions["height"]

        if platform == Platform.FACEBOOK.value:
            # Square feed video
            timeline.modifications["Video.fit"] = "cover"

        jobs.append(RenderJob(platform=platform, timeline=timeline, status=RenderStatus.PENDING))

    logger.info(f"Prepared {len(jobs)} render job(s): {', '.join(job.platform for job in jobs)}")
    return jobs


def validate_timeline(timeline: Union[CreatomateTimeline, dict]) -> ValidationResult:
    """Check a render request before it is sent; all problems are reported"""
    if isinstance(timeline, dict):
        try:
            timeline = CreatomateTimeline.model_validate(timeline)
        except ValidationError as e:
            errors = [
                f"Invalid {'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            logger.warning(f"Timeline failed validation: {'; '.join(errors)}")
            return ValidationResult(valid=False, errors=errors)
    errors = []

    if not timeline.modifications.get("Video.source"):
        errors.append("Missing video source")

    if not timeline.template_id and not timeline.modifications:
        errors.append("No template or modifications provided")

    if timeline.width is not None and not MIN_DIMENSION <= timeline.width <= MAX_DIMENSION:
        errors.append(f"Invalid width: must be between {MIN_DIMENSION} and {MAX_DIMENSION}")

    if timeline.height is not None and not MIN_DIMENSION <= timeline.height <= MAX_DIMENSION:
        errors.append(f"Invalid height: must be between {MIN_DIMENSION} and {MAX_DIMENSION}")

    if errors:
        logger.warning(f"Timeline failed validation: {'; '.join(errors)}")
    return ValidationResult(valid=not errors, errors=errors)


def export_creative_as_json(creative: CreativeAssembly) -> str:
    """Pretty JSON of a creative plan for debugging or storage"""
    return creative.model_dump_json(indent=2)
