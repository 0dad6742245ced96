"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).
The settings object is built once at process start and handed to every
client and tool constructor.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    N8N_API_KEY is the only required value; constructing Settings without it
    raises a ValidationError.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # N8N
    # ========================================================================
    N8N_API_KEY: str = Field(
        ...,
        min_length=1,
        description="n8n API key sent as X-N8N-API-KEY on every REST call",
    )
    N8N_BASE_URL: str = Field(
        default="http://localhost:5678",
        description="Base URL of the n8n instance (no trailing path)",
    )
    N8N_API_PATH: str = Field(default="/api/v1", description="REST API prefix")

    # Webhook Settings
    WEBHOOK_TIMEOUT_SECONDS: float = Field(
        default=30.0, gt=0, description="HTTP timeout for webhook executions"
    )

    WORKFLOW_PROVENANCE_TAG: str = Field(
        default="n8n-mcp-execution-server",
        description="Stored in meta.templateCreatedBy of created workflows",
    )

    # ========================================================================
    # MCP SERVER
    # ========================================================================
    MCP_SERVER_NAME: str = Field(default="n8n-mcp-execution-server")
    MCP_SERVER_VERSION: str = Field(default="1.0.0")

    # ========================================================================
    # LOGGING & METRICS
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")
    METRICS_PORT: int = Field(
        default=0, ge=0, le=65535, description="Prometheus exporter port (0 disables)"
    )

    @property
    def base_url(self) -> str:
        return self.N8N_BASE_URL.rstrip("/")

    @property
    def api_url(self) -> str:
        """REST API root, e.g. https://example.app.n8n.cloud/api/v1."""
        return f"{self.base_url}{self.N8N_API_PATH}"

    @property
    def webhook_url(self) -> str:
        """Production webhook prefix."""
        return f"{self.base_url}/webhook"

    @property
    def webhook_test_url(self) -> str:
        """Test webhook prefix."""
        return f"{self.base_url}/webhook-test"
