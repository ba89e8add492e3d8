"""
Creative Assembly Engine

Decides format, hook, caption, CTA, hashtags, sequence, overlays and
template style for a piece of content from its video analysis.
"""

from .creative_assembler import assemble_creative, generate_variants
from .creative_models import AssemblerOptions, CreativeAssembly, CreativeOverlay, CreativeSequence, VoiceProfile
from .voice_profile import resolve_voice_profile

__all__ = [
    'AssemblerOptions',
    'CreativeAssembly',
    'CreativeOverlay',
    'CreativeSequence',
    'VoiceProfile',
    'assemble_creative',
    'generate_variants',
    'resolve_voice_profile',
]
