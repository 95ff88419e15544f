"""Deterministic sprint name generation.

Maps a seed to a stable ``adjective-noun`` slug. The mapping is a pure
function of (seed, generator version, word lists) and is shared with other
runtimes, so the hashing steps below must not change without a version bump:

    digest = sha256(seed + generator_version)
    adjective = adjectives[uint32_be(digest[0:4]) % len(adjectives)]
    noun = nouns[uint32_be(digest[4:8]) % len(nouns)]
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from sprintnamer.exceptions import ConfigurationError, InvalidInputError

NAME_PREFIX = "Sprint "

_WORD_PATTERN = re.compile(r"^[a-z]+$")


class GeneratedName(BaseModel):
    """A generated sprint name.

    Attributes:
        name: Display name, ``"Sprint " + slug``.
        slug: Two lowercase words joined by a hyphen.
        generator_version: Version tag of the generator that produced it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name")
    slug: str = Field(description="Hyphenated adjective-noun slug")
    generator_version: str = Field(description="Generator version tag")


def _validate_wordlist(label: str, words: Sequence[str]) -> tuple[str, ...]:
    if isinstance(words, str) or len(words) == 0:
        raise ConfigurationError(f"{label} wordlist must be a non-empty list of words")
    bad = [w for w in words if not isinstance(w, str) or not _WORD_PATTERN.match(w)]
    if bad:
        raise ConfigurationError(
            f"{label} wordlist must contain only lowercase alphabetic words, got {bad[:3]!r}"
        )
    return tuple(words)


class NameGenerator:
    """Deterministic seed to sprint-name generator.

    Example:
        ```python
        generator = NameGenerator(ADJECTIVES, NOUNS, "1.0.0")
        generator.generate("2026_W04").slug  # same value on every run
        ```
    """

    def __init__(
        self,
        adjectives: Sequence[str],
        nouns: Sequence[str],
        generator_version: str,
    ) -> None:
        """Initialize the generator.

        Args:
            adjectives: Candidate first words.
            nouns: Candidate second words.
            generator_version: Version tag mixed into the hash and stored on pages.

        Raises:
            ConfigurationError: If a word list is empty or malformed, or the
                version is blank.
        """
        self._adjectives = _validate_wordlist("adjectives", adjectives)
        self._nouns = _validate_wordlist("nouns", nouns)
        if not isinstance(generator_version, str) or not generator_version.strip():
            raise ConfigurationError("generator_version must be a non-empty string")
        self._version = generator_version

    @property
    def version(self) -> str:
        """Generator version tag."""
        return self._version

    def generate(self, seed: str) -> GeneratedName:
        """Generate the name for ``seed``.

        Raises:
            InvalidInputError: If ``seed`` is not a non-empty string.
        """
        if not isinstance(seed, str) or not seed.strip():
            raise InvalidInputError("seed", "`seed` must be a non-empty string")

        digest = hashlib.sha256(seed.encode("utf-8") + self._version.encode("utf-8")).digest()
        adjective = self._adjectives[int.from_bytes(digest[0:4], "big") % len(self._adjectives)]
        noun = self._nouns[int.from_bytes(digest[4:8], "big") % len(self._nouns)]

        slug = f"{adjective}-{noun}"
        return GeneratedName(
            name=f"{NAME_PREFIX}{slug}",
            slug=slug,
            generator_version=self._version,
        )
