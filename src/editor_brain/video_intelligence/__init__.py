"""
Video Intelligence Engine

Turns a raw, AI-provided video analysis into a structured scene model:
- Scene segments with quality scores and labels
- Installer action detection
- Best hook moment
- Vehicle, wrap color and finish from the transcript
- Energy level and content rating
"""

from .analysis_client import AnalysisClient, EdgeFunctionAnalysisClient, OpenAIAnalysisClient, build_analysis_client
from .analysis_models import AnalysisConfig, AnalyzedScene, VideoAnalysis, VideoAnalyzerOptions
from .video_analyzer import analyze_video

__all__ = [
    'AnalysisClient',
    'AnalysisConfig',
    'AnalyzedScene',
    'EdgeFunctionAnalysisClient',
    'OpenAIAnalysisClient',
    'VideoAnalysis',
    'VideoAnalyzerOptions',
    'analyze_video',
    'build_analysis_client',
]
