"""N8N Webhook HTTP Client."""

from typing import Any

import httpx

from hookflow_config.settings import Settings
from hookflow_obs.logging import get_logger

from .schemas import N8nWebhookResponse

logger = get_logger(__name__)

PRODUCTION_PATH_MARKER = "/webhook/"
TEST_PATH_MARKER = "/webhook-test/"
EXECUTION_ID_HEADER = "x-n8n-execution-id"


def to_test_url(webhook_url: str) -> str:
    """Point a production webhook URL at the test endpoint.

    Only the first production marker is replaced; URLs without one are
    returned unchanged.
    """
    if PRODUCTION_PATH_MARKER not in webhook_url:
        return webhook_url
    return webhook_url.replace(PRODUCTION_PATH_MARKER, TEST_PATH_MARKER, 1)


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class N8nWebhookInvoker:
    """HTTP client for calling n8n webhooks.

    Failures are reported in the returned N8nWebhookResponse instead of
    being raised: a failed run is a legitimate automation outcome.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        """Initialize webhook invoker.

        Args:
            settings: Application settings (webhook timeout)
            client: Optional preconfigured httpx client (tests inject one)
        """
        self.timeout = settings.WEBHOOK_TIMEOUT_SECONDS
        self.client = client or httpx.AsyncClient(timeout=self.timeout)

    async def execute(
        self,
        webhook_url: str,
        payload: dict[str, Any] | None = None,
        use_test_url: bool = False,
    ) -> N8nWebhookResponse:
        """Call an n8n webhook and return a normalized result.

        Args:
            webhook_url: Full webhook URL (production or test)
            payload: JSON payload to send
            use_test_url: Rewrite a production URL to the test endpoint

        Returns:
            N8nWebhookResponse with success/error info
        """
        url = to_test_url(webhook_url) if use_test_url else webhook_url

        try:
            response = await self.client.post(
                url,
                json=payload or {},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = _response_body(e.response)
            logger.error(
                "webhook_execution_failed",
                url=url,
                status=e.response.status_code,
                error=error,
            )
            return N8nWebhookResponse(
                success=False,
                error=error,
                status=e.response.status_code,
                message="Workflow execution failed",
            )
        except httpx.TimeoutException:
            logger.error("webhook_execution_timeout", url=url, timeout=self.timeout)
            return N8nWebhookResponse(
                success=False,
                error=f"Webhook timed out after {self.timeout}s",
                status=500,
                message="Workflow execution failed",
            )
        except Exception as e:
            # Malformed URLs and socket-level errors are not httpx.HTTPError.
            logger.error("webhook_execution_failed", url=url, error=str(e))
            return N8nWebhookResponse(
                success=False,
                error=str(e) or type(e).__name__,
                status=500,
                message="Workflow execution failed",
            )

        execution_id = response.headers.get(EXECUTION_ID_HEADER) or "unknown"
        logger.info("webhook_executed", url=url, status=response.status_code, execution_id=execution_id)
        return N8nWebhookResponse(
            success=True,
            execution_id=execution_id,
            data=_response_body(response) if response.content else "",
            status=response.status_code,
            message="Workflow executed successfully",
        )

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
