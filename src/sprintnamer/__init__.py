"""Sprint namer: deterministic sprint names for Notion pages.

Receives Notion webhooks and automation calls, generates a stable
``adjective-noun`` name from a seed such as ``2026_W04``, and writes it to the
page once per generator version.

Example:
    ```python
    from sprintnamer import NameGenerator
    from sprintnamer.naming import ADJECTIVES, NOUNS

    generator = NameGenerator(ADJECTIVES, NOUNS, "1.0.0")
    print(generator.generate("2026_W04").name)
    ```
"""

__version__ = "0.1.0"

from .exceptions import (
    AuthenticationError,
    CapacityExceededError,
    ConfigurationError,
    InvalidInputError,
    SprintNamerError,
    UpstreamError,
)
from .jobs import JobDispatcher, SubmitResult
from .naming import GeneratedName, NameGenerator
from .webhooks import sign, verify

__all__ = [
    "AuthenticationError",
    "CapacityExceededError",
    "ConfigurationError",
    "GeneratedName",
    "InvalidInputError",
    "JobDispatcher",
    "NameGenerator",
    "SprintNamerError",
    "SubmitResult",
    "UpstreamError",
    "__version__",
    "sign",
    "verify",
]
