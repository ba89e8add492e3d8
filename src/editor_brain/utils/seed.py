import hashlib
import random

MOD = 2 ** 32


def make_seed(*parts: str, mod: int = MOD) -> int:
    h = hashlib.sha256("||".join(map(str, parts)).encode()).hexdigest()
    return int(h[:8], 16) % mod


def make_rng(*parts) -> random.Random:
    """Random source seeded from a stable hash of ``parts``.

    With no parts the generator is seeded from system entropy.
    """
    if not parts:
        return random.Random()
    return random.Random(make_seed(*parts))
