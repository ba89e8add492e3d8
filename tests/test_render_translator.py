import json
import random

import pytest

from editor_brain.creative_assembly.creative_assembler import assemble_creative
from editor_brain.creative_assembly.creative_models import (
    AssemblerOptions,
    CreativeAssembly,
    CreativeOverlay,
    CreativeSequence,
)
from editor_brain.render_translation.render_models import (
    DEFAULT_TEMPLATE_ID,
    BrandColors,
    CreatomateTimeline,
    TranslatorOptions,
)
from editor_brain.render_translation.render_translator import (
    create_multi_platform_render_jobs,
    export_creative_as_json,
    translate_to_creatomate,
    validate_timeline,
)
from editor_brain.render_translation.timeline_builder import (
    build_advanced_timeline,
    generate_thumbnail_spec,
    map_animation,
    map_position,
    map_transition,
)

VIDEO_URL = "https://stream.example/abc.m3u8"


def translate(creative, **kwargs):
    return translate_to_creatomate(TranslatorOptions(creative=creative, video_url=VIDEO_URL, **kwargs))


def test_translate_sets_defaults_and_text_fields(sample_creative):
    timeline = translate(sample_creative)
    mods = timeline.modifications

    assert timeline.template_id == DEFAULT_TEMPLATE_ID
    assert (timeline.output_format, timeline.width, timeline.height, timeline.frame_rate) == ("mp4", 1080, 1920, 30)
    assert mods["Video.source"] == VIDEO_URL
    assert (mods["Text-1.text"], mods["Text-1.time"], mods["Text-1.duration"]) == (
        "Watch this Tesla transformation", 0, 2.5)
    assert (mods["Text-2.text"], mods["Text-2.time"], mods["Text-2.duration"]) == ("DM us to get started", 9, 3)
    assert (mods["Overlay-1.text"], mods["Overlay-1.time"], mods["Overlay-1.duration"]) == ("Tesla • satin black", 4, 2)
    assert "Audio.source" not in mods
    assert "Text-1.fill_color" not in mods


def test_translate_brand_music_logo_and_template(sample_creative):
    timeline = translate(
        sample_creative,
        brand_colors=BrandColors(primary="#ff5500", secondary="#111111"),
        music_url="https://cdn.example/beat.mp3",
        logo_url="https://cdn.example/logo.png",
        template_id="custom-template",
    )
    mods = timeline.modifications

    assert timeline.template_id == "custom-template"
    assert mods["Text-1.fill_color"] == "#ff5500"
    assert mods["Overlay.fill_color"] == "#ff5500"
    assert mods["Text-2.fill_color"] == "#111111"
    assert mods["Audio.source"] == "https://cdn.example/beat.mp3"
    assert mods["Logo.source"] == "https://cdn.example/logo.png"


def test_empty_hook_and_cta_are_skipped(sample_creative):
    creative = sample_creative.model_copy(update={"hook": "", "cta": ""})
    mods = translate(creative).modifications
    assert not any(key.startswith(("Text-1.", "Text-2.")) for key in mods)


def test_cta_without_sequence_uses_default_end(sample_creative):
    creative = sample_creative.model_copy(update={"sequence": []})
    assert translate(creative).modifications["Text-2.time"] == 12


def test_overlay_fields_follow_overlay_ids_not_positions(sample_creative):
    overlays = [
        CreativeOverlay(id="Overlay-1", text="callout", start=1, end=2, style="minimal"),
        CreativeOverlay(text="first unnamed", start=2, end=3, style="caption"),
        CreativeOverlay(id="Text-1", text="hook", start=0, end=2.5, style="bold"),
        CreativeOverlay(text="second unnamed", start=5, end=7, style="caption"),
    ]
    mods = translate(sample_creative.model_copy(update={"overlays": overlays})).modifications

    assert mods["Overlay-1.text"] == "callout"
    assert mods["Overlay-2.text"] == "first unnamed"
    assert (mods["Overlay-3.text"], mods["Overlay-3.time"], mods["Overlay-3.duration"]) == ("second unnamed", 5, 2)
    assert "Overlay-4.text" not in mods


def test_duplicate_overlay_ids_are_renumbered(sample_creative):
    overlays = [
        CreativeOverlay(id="Overlay-1", text="first", start=1, end=2, style="minimal"),
        CreativeOverlay(id="Overlay-1", text="second", start=3, end=4, style="minimal"),
    ]
    mods = translate(sample_creative.model_copy(update={"overlays": overlays})).modifications

    assert mods["Overlay-1.text"] == "first"
    assert (mods["Overlay-2.text"], mods["Overlay-2.time"]) == ("second", 3)


def test_reveal_plan_round_trip(reveal_analysis):
    creative = assemble_creative(
        AssemblerOptions(analysis=reveal_analysis, mode="auto_create", platform="instagram"),
        rng=random.Random(0),
    )
    timeline = translate(creative)

    assert timeline.modifications["Video.source"] == VIDEO_URL
    assert timeline.modifications["Text-1.time"] == 0
    assert timeline.modifications["Text-2.time"] == 0
    assert validate_timeline(timeline).valid


def test_facebook_render_job_is_square(sample_creative):
    jobs = create_multi_platform_render_jobs(
        TranslatorOptions(creative=sample_creative, video_url=VIDEO_URL, platforms=["facebook"]))

    assert len(jobs) == 1
    job = jobs[0]
    assert job.platform == "facebook"
    assert job.status == "pending"
    assert (job.timeline.width, job.timeline.height) == (1080, 1080)
    assert job.timeline.modifications["Video.fit"] == "cover"


def test_render_jobs_fan_out_per_platform(sample_creative):
    jobs = create_multi_platform_render_jobs(TranslatorOptions(
        creative=sample_creative, video_url=VIDEO_URL, platforms=["instagram", "tiktok", "youtube_shorts"]))

    assert [job.platform for job in jobs] == ["instagram", "tiktok", "youtube_shorts"]
    assert all((job.timeline.width, job.timeline.height) == (1080, 1920) for job in jobs)
    assert all("Video.fit" not in job.timeline.modifications for job in jobs)
    assert all(job.status == "pending" for job in jobs)


def test_render_jobs_default_to_instagram(sample_creative):
    jobs = create_multi_platform_render_jobs(TranslatorOptions(creative=sample_creative, video_url=VIDEO_URL))
    assert [job.platform for job in jobs] == ["instagram"]


def test_validate_reports_missing_template_and_modifications():
    result = validate_timeline(CreatomateTimeline(modifications={}, template_id=None))

    assert not result.valid
    assert "No template or modifications provided" in result.errors
    assert "Missing video source" in result.errors


def test_validate_reports_only_width_error():
    result = validate_timeline({"modifications": {"Video.source": "x"}, "width": 50})
    assert result.errors == ["Invalid width: must be between 100 and 4096"]
    assert result.valid is False


def test_validate_reports_malformed_dimensions_instead_of_raising():
    result = validate_timeline({"modifications": {"Video.source": "x"}, "width": 1080.5})

    assert result.valid is False
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Invalid width:")


def test_validate_reports_each_malformed_field():
    result = validate_timeline({"modifications": None, "height": "tall"})

    assert result.valid is False
    assert [error.split(":")[0] for error in result.errors] == ["Invalid modifications", "Invalid height"]


def test_validate_accumulates_errors():
    result = validate_timeline(CreatomateTimeline(template_id="t", width=50, height=5000))
    assert result.errors == [
        "Missing video source",
        "Invalid width: must be between 100 and 4096",
        "Invalid height: must be between 100 and 4096",
    ]


def test_translated_timeline_is_valid(sample_creative):
    result = validate_timeline(translate(sample_creative))
    assert result.valid
    assert result.errors == []


def test_thumbnail_prefers_reveal_regardless_of_order():
    creative_sequence = [
        CreativeSequence(start=0, end=5),
        CreativeSequence(start=10, end=15, label="reveal_shot"),
    ]
    for sequence in (creative_sequence, list(reversed(creative_sequence))):
        plan = _plan_with_sequence(sequence)
        assert generate_thumbnail_spec(plan)["snapshot_time"] == 10


def test_thumbnail_without_reveal_uses_latest_start():
    plan = _plan_with_sequence([
        CreativeSequence(start=0, end=5),
        CreativeSequence(start=10, end=15),
        CreativeSequence(start=3, end=6),
    ])
    assert generate_thumbnail_spec(plan) == {
        "output_format": "png", "width": 1080, "height": 1920, "snapshot_time": 10,
    }


def test_thumbnail_falls_back_without_sequence():
    assert generate_thumbnail_spec(_plan_with_sequence([]))["snapshot_time"] == 2


def test_advanced_timeline(sample_creative):
    timeline = build_advanced_timeline(
        sample_creative, VIDEO_URL,
        brand_colors=BrandColors(primary="#ff5500"),
        music_url="https://cdn.example/beat.mp3",
    )
    video, *texts, audio = timeline["elements"]

    assert (timeline["width"], timeline["height"], timeline["frame_rate"]) == (1080, 1920, 30)
    assert video["source"] == VIDEO_URL
    assert [c["transition"] for c in video["clips"]] == [None, None, "slide"]
    assert [c["playback_rate"] for c in video["clips"]] == [1.2, 1.0, 1.0]
    assert [c["duration"] for c in video["clips"]] == [4, 4, 4]

    assert [t["name"] for t in texts] == ["Text-1", "Text-2", "Overlay-1"]
    assert [t["y"] for t in texts] == ["50%", "85%", "85%"]
    assert [t["font_weight"] for t in texts] == [700, 400, 400]
    assert [t["animations"][0]["type"] for t in texts] == ["scale", "slide-in", "fade"]
    assert all(t["fill_color"] == "#ff5500" for t in texts)

    assert audio == {"type": "audio", "source": "https://cdn.example/beat.mp3", "volume": 0.7}


def test_advanced_timeline_without_music(sample_creative):
    elements = build_advanced_timeline(sample_creative, VIDEO_URL)["elements"]
    assert [e["type"] for e in elements] == ["video", "text", "text", "text"]
    assert elements[1]["fill_color"] == "#ffffff"


@pytest.mark.parametrize("value, expected", [("fade", "fade"), ("zoom", "zoom"), ("swipe", "slide"),
                                             ("cut", None), ("none", None), (None, None)])
def test_map_transition(value, expected):
    assert map_transition(value) == expected


def test_map_position_and_animation_defaults():
    assert map_position("top") == "15%"
    assert map_position(None) == "85%"
    assert map_animation("typewriter") == "text-reveal"
    assert map_animation(None) == "fade"


def test_export_creative_as_json(sample_creative):
    data = json.loads(export_creative_as_json(sample_creative))
    assert data["hook"] == sample_creative.hook
    assert data["overlays"][2]["id"] == "Overlay-1"


def _plan_with_sequence(sequence):
    return CreativeAssembly(format="reel", hook="h", caption="c", cta="x",
                            sequence=sequence, template_style="balanced-standard")
