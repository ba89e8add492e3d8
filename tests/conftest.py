import pytest

from editor_brain.creative_assembly.creative_models import CreativeAssembly, CreativeOverlay, CreativeSequence
from editor_brain.video_intelligence.analysis_models import AnalyzedScene, VideoAnalysis


class FakeAnalysisClient:
    """Returns a canned payload and records what it was asked"""

    def __init__(self, result=None):
        self.result = result if result is not None else {}
        self.calls = []

    async def analyze(self, playback_url, transcript=""):
        self.calls.append((playback_url, transcript))
        return self.result


class FailingAnalysisClient:
    def __init__(self, error=None):
        self.error = error or ConnectionError("edge function unreachable")

    async def analyze(self, playback_url, transcript=""):
        raise self.error


@pytest.fixture
def wrap_payload():
    return {
        "cuts": [
            {"start": 0, "end": 1.5, "score": 0.8, "description": "Hook: installer applying vinyl"},
            {"start": 1.5, "end": 4, "score": 0.6, "description": "Close detail of squeegee work"},
            {"start": 4, "end": 6, "score": 0.95, "description": "Final reveal of the car"},
        ],
        "summary": "Satin black wrap on a Tesla",
        "recommendations": ["Open on the reveal"],
        "color_grading": "warm",
        "transitions": ["whip"],
        "text_overlays": [],
        "speed_ramps": ["ramp at 4s"],
    }


@pytest.fixture
def fake_client(wrap_payload):
    return FakeAnalysisClient(wrap_payload)


@pytest.fixture
def failing_client():
    return FailingAnalysisClient()


@pytest.fixture
def reveal_analysis():
    scene = AnalyzedScene(start=0, end=3, score=0.9, label="reveal_shot")
    return VideoAnalysis(
        scenes=[scene],
        shot_types=["reveal_shot"],
        best_hook_scene=scene,
        energy_level="medium",
        content_rating=74,
    )


@pytest.fixture
def empty_analysis():
    return VideoAnalysis(energy_level="medium", content_rating=50)


@pytest.fixture
def sample_creative():
    return CreativeAssembly(
        format="reel",
        hook="Watch this Tesla transformation",
        caption="caption",
        cta="DM us to get started",
        hashtags=["#wrap"],
        overlays=[
            CreativeOverlay(id="Text-1", text="Watch this Tesla transformation", start=0, end=2.5,
                            style="bold", position="center", animation="pop"),
            CreativeOverlay(id="Text-2", text="DM us to get started", start=9, end=12,
                            style="cta", position="bottom", animation="slide"),
            CreativeOverlay(id="Overlay-1", text="Tesla • satin black", start=4, end=6,
                            style="minimal", position="bottom", animation="fade"),
        ],
        sequence=[
            CreativeSequence(start=0, end=4, label="hook_action", transition="none", speed=1.2),
            CreativeSequence(start=4, end=8, label="detail", transition="cut"),
            CreativeSequence(start=8, end=12, label="b-roll", transition="swipe"),
        ],
        template_style="balanced-standard",
    )
