"""Configuration management for the sprint namer."""

import logging
import warnings
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from sprintnamer.naming import ADJECTIVES, NOUNS
from sprintnamer.pipeline import PropertyMapping

logger = logging.getLogger(__name__)

_OPTIONAL_NAMES = (
    "automations_token",
    "notion_api_token",
    "webhook_verification_token",
    "target_database_id",
    "target_data_source_id",
    "seed_property",
    "title_property",
    "sprint_name_property",
    "sprint_slug_property",
    "sprint_generator_version_property",
)


class Settings(BaseSettings):
    """Sprint namer configuration.

    Every field can be set from the environment with the ``SPRINTNAMER_``
    prefix, e.g. ``SPRINTNAMER_NOTION_API_TOKEN``. List fields take JSON,
    e.g. ``SPRINTNAMER_ADJECTIVES='["bold", "calm"]'``.
    """

    # Environment
    env: Literal["development", "production", "test"] = Field(
        default="development",
        description="Deployment environment",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address for the HTTP server")
    port: int = Field(default=3000, ge=1, le=65535, description="HTTP server port")

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format (json for production, text for development)",
    )

    # Name generation
    generator_version: str = Field(
        default="1.0.0",
        min_length=1,
        description=(
            "Version tag mixed into the name hash and written to pages. "
            "Changing it renames every sprint on its next update."
        ),
    )
    adjectives: list[str] = Field(
        default_factory=lambda: list(ADJECTIVES),
        description="First-word list for generated slugs",
    )
    nouns: list[str] = Field(
        default_factory=lambda: list(NOUNS),
        description="Second-word list for generated slugs",
    )
    seed_format: Literal["free", "strict"] = Field(
        default="free",
        description=(
            "Seed validation for the direct naming endpoints: 'free' accepts any "
            "non-empty string, 'strict' requires YYYY_WNN. Webhooks are always strict."
        ),
    )

    # Job dispatcher
    async_max_pending: int = Field(
        default=50,
        ge=0,
        description="Maximum background jobs in flight before new ones are rejected",
    )
    shutdown_timeout_seconds: float = Field(
        default=10.0,
        ge=0.0,
        description="Seconds to wait for in-flight jobs at shutdown before cancelling them",
    )

    # API authentication
    api_auth_enabled: bool | None = Field(
        default=None,
        description=(
            "Require X-Notion-Automations-Token on the naming endpoints. "
            "Defaults to True in production or when an automations token is set."
        ),
    )
    automations_token: str | None = Field(
        default=None,
        description="Expected value of the X-Notion-Automations-Token header",
    )

    # Notion API
    notion_api_token: str | None = Field(
        default=None,
        description="Notion integration token",
    )
    notion_version: str = Field(
        default="2022-06-28",
        description="Notion-Version header sent with API requests",
    )
    notion_base_url: str = Field(
        default="https://api.notion.com/v1",
        description="Notion API root URL",
    )
    notion_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Timeout for each Notion API request",
    )

    # Webhooks
    webhook_verification_token: str | None = Field(
        default=None,
        description=(
            "Verification token from the Notion webhook subscription, used to check "
            "X-Notion-Signature. Unset accepts unsigned deliveries."
        ),
    )
    target_database_id: str | None = Field(
        default=None,
        description="Only pages created in this database are renamed",
    )
    target_data_source_id: str | None = Field(
        default=None,
        description="Only pages created in this data source are renamed",
    )
    seed_property: str | None = Field(
        default=None,
        description="Page property holding the YYYY_WNN seed",
    )
    title_property: str | None = Field(
        default=None,
        description="Property read for the seed when seed_property is empty (default: page title)",
    )

    # Output property mapping
    sprint_name_property: str | None = Field(
        default="Sprint Name",
        description="Title property receiving 'Sprint <slug> - <seed>' (blank disables)",
    )
    sprint_slug_property: str | None = Field(
        default=None,
        description="Text property receiving the slug (blank disables)",
    )
    sprint_generator_version_property: str | None = Field(
        default=None,
        description="Text property receiving the generator version (blank disables)",
    )

    model_config = {
        "env_prefix": "SPRINTNAMER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }

    @field_validator(*_OPTIONAL_NAMES, mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        """Treat blank strings as unset."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def validate_security_settings(self) -> "Settings":
        """Validate security settings based on environment.

        - Resolves api_auth_enabled default: on in production or when a token
          is configured
        - API auth requires an automations token
        - In production, a Notion token MUST be provided
        - In production, running without signature verification or a target
          collection logs a warning
        """
        is_production = self.env == "production"

        if self.api_auth_enabled is None:
            object.__setattr__(
                self, "api_auth_enabled", is_production or self.automations_token is not None
            )

        if self.api_auth_enabled and self.automations_token is None:
            raise ValueError(
                "SPRINTNAMER_AUTOMATIONS_TOKEN must be set when API auth is enabled. "
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )

        if is_production:
            if self.notion_api_token is None:
                raise ValueError("SPRINTNAMER_NOTION_API_TOKEN must be set in production")

            if not self.api_auth_enabled:
                warnings.warn(
                    "API authentication is disabled in production environment. "
                    "Set SPRINTNAMER_API_AUTH_ENABLED=true to enable.",
                    UserWarning,
                    stacklevel=2,
                )
                logger.warning("API authentication disabled in production")

            if self.webhook_verification_token is None:
                logger.warning(
                    "SPRINTNAMER_WEBHOOK_VERIFICATION_TOKEN not set; "
                    "webhook signatures will not be verified"
                )

        if self.target_database_id is None and self.target_data_source_id is None:
            logger.warning(
                "No target database or data source configured; "
                "every created page will be renamed"
            )

        return self

    @property
    def is_api_auth_enabled(self) -> bool:
        """Get resolved api_auth_enabled value (always bool, never None)."""
        if self.api_auth_enabled is None:
            return self.env == "production" or self.automations_token is not None
        return self.api_auth_enabled

    @property
    def property_mapping(self) -> PropertyMapping:
        """Output property mapping for the update pipeline."""
        return PropertyMapping(
            name_property=self.sprint_name_property,
            slug_property=self.sprint_slug_property,
            version_property=self.sprint_generator_version_property,
        )
