"""
Client for the contractpoet render service
"""
from typing import Any, Dict, Optional

import requests

from contractpoet.core.config import DEFAULT_PORT


class RenderClient:
    """
    Thin wrapper over the render service endpoints.

    Example usage:
        client = RenderClient("http://localhost:8000")
        result = client.render({"function": {...}, "contract": {...}})
        if result["success"]:
            print(result["source"])
    """

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0):
        self.base_url = (base_url or f"http://localhost:{DEFAULT_PORT}").rstrip("/")
        self.timeout = timeout

    def health(self) -> Dict[str, Any]:
        response = requests.get(f"{self.base_url}/", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def render(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Render a function document with its contract.

        Returns:
            Response dict with success, source, contract, effects,
            contract_hash and error
        """
        return self._post("/api/render", document)

    def validate(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate a function document and its contract.

        Returns:
            Response dict with valid and errors
        """
        return self._post("/api/validate", document)

    def _post(self, path: str, document: Dict[str, Any]) -> Dict[str, Any]:
        response = requests.post(f"{self.base_url}{path}", json=document, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
