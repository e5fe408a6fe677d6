"""Configuration for a catalog run."""

from pydantic import BaseModel, SecretStr, field_validator, model_validator

PUBLIC_API_BASE_URL = "https://api.github.com/"


class CatalogConfig(BaseModel):
    """Configuration for scanning a user or organization for actions.

    Exactly one scope is used: the organization when given, otherwise the user.
    """

    token: SecretStr
    user: str = ""
    organization: str = ""
    api_base_url: str = PUBLIC_API_BASE_URL
    remove_token: bool = False
    fetch_readmes: bool = False

    @field_validator("token")
    @classmethod
    def _require_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError(
                "Parameter 'PAT' is required to load all actions "
                "from the organization or user account"
            )
        return value

    @field_validator("api_base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"

    @model_validator(mode="after")
    def _require_scope(self) -> "CatalogConfig":
        if not self.user and not self.organization:
            raise ValueError(
                "Either parameter 'user' or 'organization' is required to load "
                "all actions from it. Please provide one of them."
            )
        return self

    @property
    def is_enterprise_server(self) -> bool:
        """Whether the API is a GitHub Enterprise Server instance."""
        return self.api_base_url != PUBLIC_API_BASE_URL
