"""Editor AI Brain pipeline that chains analysis, assembly and translation"""

import json
import random
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from .creative_assembly.creative_assembler import assemble_creative
from .creative_assembly.creative_models import AssemblerOptions, CreativeAssembly, VoiceProfile
from .creative_assembly.voice_profile import resolve_voice_profile
from .render_translation.render_models import (
    BrandColors,
    CreatomateTimeline,
    RenderJob,
    TranslatorOptions,
    ValidationResult,
)
from .render_translation.render_translator import (
    create_multi_platform_render_jobs,
    translate_to_creatomate,
    validate_timeline,
)
from .utils.config import Config
from .utils.logger import LoggerMixin
from .video_intelligence.analysis_client import AnalysisClient, build_analysis_client
from .video_intelligence.analysis_models import VideoAnalysis, VideoAnalyzerOptions
from .video_intelligence.video_analyzer import analyze_video


class PipelineResult(BaseModel):
    """Everything one pipeline run produced"""
    analysis: VideoAnalysis
    creative: CreativeAssembly
    timeline: CreatomateTimeline
    render_jobs: List[RenderJob] = []
    validation: List[ValidationResult] = []
    generated_at: datetime = Field(default_factory=datetime.now)
    generation_time_seconds: float = 0.0

    @property
    def valid(self) -> bool:
        return all(v.valid for v in self.validation)

    def save_to_file(self, filepath: str):
        """Save the complete result to a JSON file"""
        output_path = Path(filepath)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.model_dump(mode='json'), f, indent=2, ensure_ascii=False)

    @classmethod
    def load_from_file(cls, filepath: str) -> "PipelineResult":
        """Load a result from a JSON file"""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return cls(**data)


class EditorBrainPipeline(LoggerMixin):
    """Runs analyze -> assemble -> translate for one media item"""

    def __init__(self, config: Optional[Config] = None, analysis_client: Optional[AnalysisClient] = None):
        self.config = config or Config()
        self._analysis_client = analysis_client

    @property
    def analysis_client(self) -> AnalysisClient:
        # Built on first use so misconfiguration only matters when analysis runs
        if self._analysis_client is None:
            self._analysis_client = build_analysis_client(self.config)
        return self._analysis_client

    async def run(self, playback_url: str,
                  transcript: Optional[str] = None,
                  duration: Optional[float] = None,
                  mode: Optional[str] = None,
                  platform: Optional[str] = None,
                  voice_profile: Optional[VoiceProfile] = None,
                  target_duration: Optional[float] = None,
                  include_hashtags: Optional[bool] = None,
                  brand_colors: Optional[BrandColors] = None,
                  template_id: Optional[str] = None,
                  music_url: Optional[str] = None,
                  logo_url: Optional[str] = None,
                  platforms: Optional[List[str]] = None,
                  rng: Optional[random.Random] = None) -> PipelineResult:
        """Analyze a video and turn it into validated render jobs"""
        start_time = datetime.now()

        analyzer_options = VideoAnalyzerOptions(
            playback_url=playback_url,
            existing_transcript=transcript,
            duration=duration,
        )

        self.logger.info("Step 1: Analyzing video...")
        analysis = await analyze_video(analyzer_options, self.analysis_client, self.config.analysis)

        self.logger.info("Step 2: Assembling creative...")
        creative = assemble_creative(self.assembler_options(
            analysis, mode=mode, platform=platform, voice_profile=voice_profile,
            target_duration=target_duration, include_hashtags=include_hashtags,
        ), rng=rng)

        self.logger.info("Step 3: Translating to render jobs...")
        translator_options = self.translator_options(
            creative, playback_url, brand_colors=brand_colors, template_id=template_id,
            music_url=music_url, logo_url=logo_url, platforms=platforms,
        )
        timeline = translate_to_creatomate(translator_options)
        render_jobs = create_multi_platform_render_jobs(translator_options)
        validation = [validate_timeline(job.timeline) for job in render_jobs]

        result = PipelineResult(
            analysis=analysis,
            creative=creative,
            timeline=timeline,
            render_jobs=render_jobs,
            validation=validation,
            generation_time_seconds=(datetime.now() - start_time).total_seconds(),
        )
        self.logger.info(
            f"Pipeline finished: scenes={len(analysis.scenes)}, format={creative.format}, "
            f"jobs={len(render_jobs)}, valid={result.valid}"
        )
        return result

    def assembler_options(self, analysis: VideoAnalysis, mode: Optional[str] = None,
                          platform: Optional[str] = None,
                          voice_profile: Optional[VoiceProfile] = None,
                          target_duration: Optional[float] = None,
                          include_hashtags: Optional[bool] = None) -> AssemblerOptions:
        """Fill unset assembly options from config"""
        assembly = self.config.assembly
        layers = self.config.brand.voice.ordered()
        return AssemblerOptions(
            analysis=analysis,
            mode=mode or assembly.mode,
            platform=platform or assembly.platform,
            # Caller-supplied profile is the customer-most layer
            voice_profile=resolve_voice_profile(*layers, voice_profile),
            target_duration=target_duration or assembly.target_duration,
            include_hashtags=assembly.include_hashtags if include_hashtags is None else include_hashtags,
        )

    def translator_options(self, creative: CreativeAssembly, video_url: str,
                           brand_colors: Optional[BrandColors] = None,
                           template_id: Optional[str] = None,
                           music_url: Optional[str] = None,
                           logo_url: Optional[str] = None,
                           platforms: Optional[List[str]] = None) -> TranslatorOptions:
        """Fill unset translation options from config"""
        brand = self.config.brand
        return TranslatorOptions(
            creative=creative,
            video_url=video_url,
            brand_colors=brand_colors or brand.colors,
            template_id=template_id or self.config.render.template_id,
            music_url=music_url or brand.music_url,
            logo_url=logo_url or brand.logo_url,
            platforms=platforms or self.config.render.platforms,
        )


async def run_editor_brain(playback_url: str, config: Optional[Config] = None,
                           analysis_client: Optional[AnalysisClient] = None, **kwargs) -> PipelineResult:
    """One-shot convenience wrapper around ``EditorBrainPipeline.run``"""
    pipeline = EditorBrainPipeline(config, analysis_client=analysis_client)
    return await pipeline.run(playback_url, **kwargs)
