import asyncio
import random

import pytest

from editor_brain.creative_assembly.creative_models import VoiceProfile
from editor_brain.pipeline import EditorBrainPipeline, PipelineResult, run_editor_brain
from editor_brain.utils.config import AssemblyConfig, BrandConfig, Config, VoiceLayers

URL = "https://stream.example/abc.m3u8"


def run_pipeline(client, config=None, **kwargs):
    pipeline = EditorBrainPipeline(config, analysis_client=client)
    return asyncio.run(pipeline.run(URL, rng=random.Random(5), **kwargs))


def test_pipeline_produces_validated_jobs(fake_client):
    result = run_pipeline(fake_client, transcript="Fresh satin black wrap on this Tesla",
                          platforms=["instagram", "facebook"])

    assert len(result.analysis.scenes) == 3
    assert result.creative.hook == "Wait for the reveal... 👀"
    assert "#tesla" in result.creative.hashtags
    assert "#satinblackwrap" in result.creative.hashtags
    assert result.timeline.modifications["Video.source"] == URL
    assert [job.platform for job in result.render_jobs] == ["instagram", "facebook"]
    assert [v.valid for v in result.validation] == [True, True]
    assert result.valid
    assert fake_client.calls == [(URL, "Fresh satin black wrap on this Tesla")]


def test_pipeline_survives_upstream_failure(failing_client):
    result = run_pipeline(failing_client)

    assert result.analysis.scenes == []
    assert [(s.start, s.end) for s in result.creative.sequence] == [(0, 15)]
    assert [job.platform for job in result.render_jobs] == ["instagram"]
    assert result.valid


def test_pipeline_rejects_missing_url(fake_client):
    pipeline = EditorBrainPipeline(analysis_client=fake_client)
    with pytest.raises(ValueError):
        asyncio.run(pipeline.run(""))
    assert fake_client.calls == []


def test_unset_options_come_from_config(failing_client):
    config = Config(
        assembly=AssemblyConfig(mode="autonomous", platform="youtube_shorts", target_duration=20),
        brand=BrandConfig(voice=VoiceLayers(default=VoiceProfile(cta_style="urgent"))),
    )
    result = run_pipeline(failing_client, config=config, duration=6)

    assert result.creative.template_style == "cinematic-premium"
    assert result.creative.format == "story"
    assert result.creative.sequence[0].end == 20
    assert result.creative.cta == "Limited slots available - DM NOW"


def test_caller_voice_profile_wins_over_config_layers(failing_client):
    config = Config(brand=BrandConfig(voice=VoiceLayers(
        brand=VoiceProfile(cta_style="urgent"),
        customer=VoiceProfile(tone="luxury"),
    )))
    result = run_pipeline(failing_client, config=config, voice_profile=VoiceProfile(cta_style="soft"))
    assert result.creative.cta == "Learn more about our services"


def test_result_round_trips_through_json(fake_client, tmp_path):
    result = run_pipeline(fake_client)
    path = tmp_path / "out" / "result.json"
    result.save_to_file(str(path))

    loaded = PipelineResult.load_from_file(str(path))
    assert loaded.creative == result.creative
    assert loaded.render_jobs == result.render_jobs
    assert loaded.analysis.best_hook_scene == result.analysis.best_hook_scene


def test_run_editor_brain_one_shot(fake_client):
    result = asyncio.run(run_editor_brain(URL, analysis_client=fake_client, platforms=["tiktok"]))
    assert [job.platform for job in result.render_jobs] == ["tiktok"]


def test_analysis_client_is_built_from_config(monkeypatch):
    monkeypatch.delenv("EDITOR_BRAIN_ANALYSIS_URL", raising=False)
    pipeline = EditorBrainPipeline(Config())
    with pytest.raises(ValueError):
        pipeline.analysis_client
