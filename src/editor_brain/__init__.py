"""Editor AI Brain: video analysis -> creative plan -> render job."""

from .pipeline import EditorBrainPipeline, PipelineResult, run_editor_brain

__version__ = "0.1.0"

__all__ = ['EditorBrainPipeline', 'PipelineResult', 'run_editor_brain']
