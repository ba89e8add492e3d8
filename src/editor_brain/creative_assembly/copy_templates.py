"""Text templates for hooks, captions and calls to action"""

import random
from typing import List, Optional

DEFAULT_HOOK_VEHICLE = "this ride"
DEFAULT_HOOK_COLOR = "stunning finish"
DEFAULT_CAPTION_VEHICLE = "this vehicle"
DEFAULT_CAPTION_COLOR = "a custom wrap"
DEFAULT_BRAND = "our shop"
DEFAULT_CALLOUT_COLOR = "Custom Wrap"

HOOK_TEMPLATES: List[str] = [
    "Watch this {vehicle} transformation 🔥",
    "{vehicle} gets a {color} makeover",
    "This {color} wrap is INSANE",
    "Before vs After: {vehicle}",
    "POV: Your {vehicle} could look like this",
    "Wait for the reveal... 👀",
]

BEFORE_AFTER_HOOK = "Before vs After: {vehicle}"
REVEAL_HOOK = "Wait for the reveal... 👀"

TONE_HOOKS = {
    "luxury": "Experience the transformation: {vehicle}",
    "street": "{vehicle} goes CRAZY in {color} 🔥",
}

CAPTION_TEMPLATES: List[str] = [
    "We transformed {vehicle} with {color}. The results speak for themselves. "
    "Ready to transform your ride? DM us for a quote.",
    "Another day, another transformation. {vehicle} looking fresh in {color}. "
    "Tag someone who needs this.",
    "{vehicle} owner came to us with a vision. We made it reality. "
    "This is what {brand} does best.",
]

CTA_OPTIONS: List[str] = [
    "Tap link in bio for a quote",
    "DM us to get started",
    "Book your transformation today",
    "Get a free quote →",
    "Your ride deserves this. DM now.",
]

STYLE_CTAS = {
    "soft": "Learn more about our services",
    "urgent": "Limited slots available - DM NOW",
}

CALLOUT_TEMPLATE = "{vehicle} • {color}"


class CopyTemplates:
    """Fills the fixed copy templates"""

    @staticmethod
    def hook(vehicle: Optional[str], color: Optional[str], *, forced: Optional[str] = None,
             tone: Optional[str] = None, rng: random.Random) -> str:
        """Forced template first, then tone template, else a random pick"""
        values = {
            "vehicle": vehicle or DEFAULT_HOOK_VEHICLE,
            "color": color or DEFAULT_HOOK_COLOR,
        }
        if forced:
            return forced.format(**values)
        if tone in TONE_HOOKS:
            return TONE_HOOKS[tone].format(**values)
        return rng.choice(HOOK_TEMPLATES).format(**values)

    @staticmethod
    def caption(vehicle: Optional[str], color: Optional[str], brand: Optional[str], *,
                rng: random.Random) -> str:
        return rng.choice(CAPTION_TEMPLATES).format(
            vehicle=vehicle or DEFAULT_CAPTION_VEHICLE,
            color=color or DEFAULT_CAPTION_COLOR,
            brand=brand or DEFAULT_BRAND,
        )

    @staticmethod
    def cta(cta_style: Optional[str], *, rng: random.Random) -> str:
        if cta_style in STYLE_CTAS:
            return STYLE_CTAS[cta_style]
        return rng.choice(CTA_OPTIONS)

    @staticmethod
    def callout(vehicle: str, color: Optional[str]) -> str:
        return CALLOUT_TEMPLATE.format(vehicle=vehicle, color=color or DEFAULT_CALLOUT_COLOR)
