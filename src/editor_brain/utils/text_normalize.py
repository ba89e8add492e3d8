import re

_WHITESPACE = re.compile(r"\s+")


def hashtag_slug(text: str) -> str:
    """Lowercase ``text`` and drop all whitespace: 'Model 3' -> 'model3'."""
    if not text:
        return ""
    return _WHITESPACE.sub("", text.lower())


def humanize_token(token: str) -> str:
    """Replace the first underscore with a space: 'smart_assist' -> 'smart assist'."""
    return token.replace("_", " ", 1)
