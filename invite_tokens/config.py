"""
invite-tokens configuration management.

Loads configuration from environment variables or .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InviteConfig(BaseSettings):
    """
    invite-tokens configuration settings.

    Can be loaded from:
    1. Environment variables (INVITE_APP_BASE_URL, INVITE_DEFAULT_HOURS_VALID, etc.)
    2. .env file in project root
    3. Direct instantiation with kwargs

    Example:
        ```python
        # From environment
        config = InviteConfig()

        # Direct instantiation
        config = InviteConfig(
            app_base_url="https://finestafrica.ai",
            default_hours_valid=72,
        )
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="INVITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Invitation links
    app_base_url: str = Field(
        default="https://finestafrica.ai",
        description="Public base URL of the application (used in invitation links)",
    )

    accept_path: str = Field(
        default="/invite/accept",
        description="Path of the page that accepts invitation tokens",
    )

    # Expiry
    default_hours_valid: float = Field(
        default=48,
        gt=0,
        description="Hours an invitation stays valid when no explicit value is given",
    )

    # Debug
    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    @field_validator("app_base_url")
    @classmethod
    def validate_app_base_url(cls, v: str) -> str:
        """Ensure the base URL is absolute."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("app_base_url must start with https:// or http://")
        return v.rstrip("/")

    @field_validator("accept_path")
    @classmethod
    def validate_accept_path(cls, v: str) -> str:
        """Ensure the accept path is rooted."""
        if not v.startswith("/"):
            raise ValueError("accept_path must start with /")
        return v


def load_config(**kwargs) -> InviteConfig:
    """
    Load invite-tokens configuration.

    Priority order:
    1. Keyword arguments
    2. Environment variables (INVITE_*)
    3. .env file

    Args:
        **kwargs: Override configuration values

    Returns:
        InviteConfig instance

    Raises:
        ValidationError: If a value is invalid

    Example:
        ```python
        # Load from environment
        config = load_config()

        # Override specific values
        config = load_config(debug=True)
        ```
    """
    return InviteConfig(**kwargs)
