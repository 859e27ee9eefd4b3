"""
SCRIPTOR - Synonym Configuration

Loads the synonym thesaurus used by search and cross-reference matching.

File format, one group per line::

    # comment
    love: love, loved, loveth, beloved, charity

Keys and values are trimmed and lowercased, and every key is part of its
own group. The loaded mapping is a plain ``dict`` handed to the engines;
nothing in the system holds it globally.
"""
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Union

from core.errors import SynonymConfigError


logger = logging.getLogger("scriptor.data.synonyms")

SynonymMap = Mapping[str, Sequence[str]]

DEFAULT_SYNONYMS_CONTENT = """\
# Scripture Search Tool - Synonym Configuration
# Format: key: synonym1, synonym2, ...
# Lines starting with '#' are comments.

# Deity references
god: god, lord, almighty, creator, father, jehovah, yahweh, most high
jesus: jesus, christ, savior, saviour, redeemer, messiah, son, lamb

# Spiritual concepts
love: love, loved, loveth, beloved, charity, affection, devotion
peace: peace, tranquil, calm, serenity, rest, quiet, still
joy: joy, happiness, gladness, delight, rejoice, joyful, glad
wisdom: wisdom, knowledge, understanding, insight, prudence, wise, discernment
faith: faith, belief, trust, confidence, hope, believe, believing
fear: fear, afraid, terror, dread, reverence, awe

# Sin and salvation
sin: sin, transgression, iniquity, wickedness, evil, trespass
salvation: salvation, save, saved, deliverance, rescue, redeem, redeemed

# Virtues
righteousness: righteousness, righteous, just, justice, upright
mercy: mercy, merciful, compassion, compassionate, grace, gracious
truth: truth, true, truthful, verity, honest, honesty

# Actions
praise: praise, worship, glorify, exalt, magnify, honor
prayer: prayer, pray, petition, supplication, intercession
repent: repent, repentance, turn, return, humble

# Additional concepts
spirit: spirit, soul, heart, mind
word: word, words, scripture, law, commandment, testimony
kingdom: kingdom, reign, dominion, rule
"""


def parse_synonyms(content: str) -> Dict[str, List[str]]:
    """Parse synonym configuration text into a mapping."""
    synonyms: Dict[str, List[str]] = {}

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, values = line.partition(":")
        if not sep:
            continue

        key = key.strip().lower()
        group = [v.strip().lower() for v in values.split(",")]
        group = [v for v in group if v]
        if not key or not group:
            continue

        # A word is always its own synonym
        if key not in group:
            group.insert(0, key)
        synonyms[key] = group

    return synonyms


def load_synonyms(path: Union[str, Path]) -> Dict[str, List[str]]:
    """
    Load a synonym configuration file.

    Raises:
        SynonymConfigError: if the file cannot be read
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SynonymConfigError(
            f"Could not load synonyms file ({path}): {e}",
            path=str(path),
            cause=e,
        ) from e

    synonyms = parse_synonyms(content)
    logger.info("Loaded %d synonym groups from %s", len(synonyms), path)
    return synonyms


def create_default_synonyms_file(path: Union[str, Path]) -> Path:
    """Write the default thesaurus to ``path`` and return it."""
    path = Path(path)
    try:
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_SYNONYMS_CONTENT, encoding="utf-8")
    except OSError as e:
        raise SynonymConfigError(
            f"Error creating synonyms file: {e}",
            path=str(path),
            cause=e,
            suggestions=[],
        ) from e
    return path

