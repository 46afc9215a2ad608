"""Connection settings for the Cloudflare inference and vector services."""

from pydantic import BaseModel, Field, field_validator

from .exceptions import MissingCredentialsError

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_EMBEDDING_MODEL = "@cf/baai/bge-base-en-v1.5"
DEFAULT_TEXT_MODEL = "@cf/meta/llama-3.1-8b-instruct"
DEFAULT_VECTORIZE_INDEX = "feedback-embeddings"


class CloudflareConfig(BaseModel):
    """Cloudflare account, model and index configuration."""

    account_id: str | None = Field(default=None, description="Cloudflare account ID")
    api_token: str | None = Field(default=None, description="API token with Workers AI and Vectorize access")
    base_url: str = Field(default=DEFAULT_API_BASE_URL, description="Cloudflare REST API base URL")

    embedding_model: str = Field(default=DEFAULT_EMBEDDING_MODEL, description="Text embedding model")
    text_model: str = Field(default=DEFAULT_TEXT_MODEL, description="Text generation model")
    vectorize_index: str = Field(default=DEFAULT_VECTORIZE_INDEX, description="Vectorize index name")

    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure URL doesn't end with slash."""
        return v.rstrip("/")

    def validate_credentials(self) -> None:
        """Validate that account ID and token are both present."""
        missing = []
        if not self.account_id:
            missing.append("CLOUDFLARE_ACCOUNT_ID")
        if not self.api_token:
            missing.append("CLOUDFLARE_API_TOKEN")
        if missing:
            raise MissingCredentialsError(f"Cloudflare access requires {' and '.join(missing)}")

    @property
    def account_url(self) -> str:
        """Base URL for account-scoped endpoints."""
        return f"{self.base_url}/accounts/{self.account_id}"
