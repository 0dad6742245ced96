"""N8N REST API HTTP Client."""

from typing import Any
from urllib.parse import quote

import httpx

from hookflow_config.settings import Settings
from hookflow_obs.logging import get_logger

from .exceptions import N8nAPIError, N8nAuthError, N8nNotFoundError
from .schemas import WorkflowDocument

logger = get_logger(__name__)


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull ``message`` out of an n8n error body, else use ``fallback``."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


def _workflow_path(workflow_id: str, suffix: str = "") -> str:
    """Path for one workflow; the id is escaped so it stays one segment."""
    return f"/workflows/{quote(workflow_id, safe='')}{suffix}"


class N8nApiClient:
    """HTTP client for the n8n workflow REST API.

    Every request carries the X-N8N-API-KEY header. Calls use httpx's
    default timeout; there is no retry.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        """Initialize n8n API client.

        Args:
            settings: Application settings (API key and base URL)
            client: Optional preconfigured httpx client (tests inject one)
        """
        self.api_url = settings.api_url
        self.api_key = settings.N8N_API_KEY
        self.client = client or httpx.AsyncClient()

    def _headers(self, with_body: bool = False) -> dict[str, str]:
        headers = {"X-N8N-API-KEY": self.api_key}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one API call and return its decoded JSON body.

        Raises:
            N8nAPIError: On non-2xx responses or transport failures
        """
        url = f"{self.api_url}{path}"
        try:
            response = await self.client.request(
                method,
                url,
                json=json_data,
                headers=self._headers(with_body=json_data is not None),
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _error_message(e.response, str(e))
            logger.error("n8n_api_error", method=method, path=path, status=status, error=message)
            if status in (401, 403):
                raise N8nAuthError(message, status) from e
            if status == 404:
                raise N8nNotFoundError(message, status) from e
            raise N8nAPIError(message, status) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("n8n_api_unreachable", method=method, path=path, error=str(e))
            raise N8nAPIError(str(e) or type(e).__name__) from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise N8nAPIError(f"Invalid JSON from n8n: {e}", response.status_code) from e

    async def create_workflow(self, document: WorkflowDocument) -> dict[str, Any]:
        """POST a workflow document. The workflow is created inactive.

        Returns:
            The created workflow as n8n returns it (includes ``id``)
        """
        created = await self._request("POST", "/workflows", json_data=document.to_payload())
        if not isinstance(created, dict) or not created.get("id"):
            raise N8nAPIError("n8n did not return a workflow id")
        logger.info("workflow_created", workflow_id=created["id"], name=document.name)
        return created

    async def activate_workflow(self, workflow_id: str) -> dict[str, Any]:
        result = await self._request("POST", _workflow_path(workflow_id, "/activate"), json_data={})
        logger.info("workflow_activated", workflow_id=workflow_id)
        return result

    async def deactivate_workflow(self, workflow_id: str) -> dict[str, Any]:
        result = await self._request("POST", _workflow_path(workflow_id, "/deactivate"), json_data={})
        logger.info("workflow_deactivated", workflow_id=workflow_id)
        return result

    async def list_workflows(self) -> Any:
        """GET all workflows; the payload is returned unmodified."""
        return await self._request("GET", "/workflows")

    async def get_workflow(self, workflow_id: str) -> Any:
        """GET one workflow; the payload is returned unmodified."""
        return await self._request("GET", _workflow_path(workflow_id))

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
