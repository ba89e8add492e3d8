"""Layered voice profile resolution

Profiles come from several places (shop defaults, brand, organization,
customer). They are merged in that order, each later layer overriding the
fields it actually sets.
"""

from typing import Optional

from .creative_models import VoiceProfile


def merge_voice_profiles(base: VoiceProfile, override: Optional[VoiceProfile]) -> VoiceProfile:
    if override is None:
        return base
    updates = {
        field: value
        for field, value in override.model_dump().items()
        if value not in (None, "", [])
    }
    return base.model_copy(update=updates)


def resolve_voice_profile(*layers: Optional[VoiceProfile]) -> VoiceProfile:
    """Reduce ``layers`` left to right; pass the lowest precedence layer first."""
    resolved = VoiceProfile()
    for layer in layers:
        resolved = merge_voice_profiles(resolved, layer)
    return resolved
