import logging
from typing import Dict, List, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class AgentClient:
    """Client for the remote restoration agent (asset upload + agent invocation)"""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.api_key = api_key or settings.RESTORA_AGENT_API_KEY
        self.base_url = (base_url or settings.RESTORA_AGENT_API_URL).rstrip("/")
        self.timeout = timeout or settings.RESTORA_HTTP_TIMEOUT
        self.headers = {
            'x-api-key': self.api_key,
            'Authorization': f'Bearer {self.api_key}'
        }

    def upload_files(self, source_file) -> Dict:
        """
        Upload a source file so the agent can address it

        Args:
            source_file: the validated SourceFile to upload

        Returns:
            dict with success, asset_ids and an optional error
        """
        url = f"{self.base_url}/assets/upload"
        files = {
            'files': (source_file.name, source_file.data, source_file.content_type)
        }

        response = requests.post(url, headers=self.headers, files=files, timeout=self.timeout)
        response.raise_for_status()

        result = response.json()
        if not isinstance(result, dict):
            return {'success': False, 'asset_ids': [], 'error': 'Unexpected upload response'}

        asset_ids = result.get('asset_ids')
        if not isinstance(asset_ids, list):
            asset_ids = []

        return {
            'success': bool(result.get('success')),
            'asset_ids': [str(asset_id) for asset_id in asset_ids if asset_id],
            'error': result.get('error'),
        }

    def call_agent(self, message: str, agent_id: str, assets: List[str]) -> Dict:
        """
        Invoke the restoration agent once and wait for its full response

        Args:
            message: Restoration instruction text
            agent_id: Remote agent to invoke
            assets: Asset ids returned by upload_files

        Returns:
            the raw response envelope (every field optional)
        """
        url = f"{self.base_url}/agent/chat"
        payload = {
            'message': message,
            'agent_id': agent_id,
            'assets': list(assets),
        }

        logger.debug(f"Calling agent {agent_id} with {len(payload['assets'])} asset(s)")
        response = requests.post(
            url,
            headers={**self.headers, 'Content-Type': 'application/json'},
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()

        return response.json()


def get_agent_client() -> AgentClient:
    """Build a client from the current settings."""
    return AgentClient()
