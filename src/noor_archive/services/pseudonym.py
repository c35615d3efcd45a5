"""Pseudonyms for authors who submit anonymously."""

import random
from typing import Optional

ADJECTIVES = (
    "Luminous",
    "Radiant",
    "Soothing",
    "Gentle",
    "Serene",
    "Mystic",
    "Whispering",
    "Eternal",
    "Sunny",
    "Dancing",
    "Blooming",
    "Dreaming",
    "Hushed",
    "Wandering",
)

NOUNS = (
    "Willow",
    "Raven",
    "River",
    "Lotus",
    "Phoenix",
    "Aurora",
    "Meadow",
    "Storm",
    "Sage",
    "Echo",
    "Lantern",
    "Breeze",
    "Crescent",
    "Harbor",
)

SUFFIX_LIMIT = 10000


def generate_pseudonym(rng: Optional[random.Random] = None) -> str:
    """
    Build a display name such as ``SereneWillow42``.

    One adjective and one noun are picked uniformly, followed by a number in
    ``[0, SUFFIX_LIMIT)``, with no separators.

    Args:
        rng: Random source; the module-level generator is used when omitted
    """
    rng = rng or random
    adjective = rng.choice(ADJECTIVES)
    noun = rng.choice(NOUNS)
    number = rng.randrange(SUFFIX_LIMIT)
    return f"{adjective}{noun}{number}"
