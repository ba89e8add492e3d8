"""
Render Translation Layer

Lowers a creative plan into renderer documents:
- Creatomate template modifications
- Per-platform render jobs
- Element timelines and thumbnail specs
- Pre-flight validation
"""

from .render_models import BrandColors, CreatomateTimeline, RenderJob, TranslatorOptions, ValidationResult
from .render_translator import (
    create_multi_platform_render_jobs,
    export_creative_as_json,
    translate_to_creatomate,
    validate_timeline,
)
from .timeline_builder import build_advanced_timeline, generate_thumbnail_spec

__all__ = [
    'BrandColors',
    'CreatomateTimeline',
    'RenderJob',
    'TranslatorOptions',
    'ValidationResult',
    'build_advanced_timeline',
    'create_multi_platform_render_jobs',
    'export_creative_as_json',
    'generate_thumbnail_spec',
    'translate_to_creatomate',
    'validate_timeline',
]
