"""
Shared plumbing for the Supabase REST services (Storage and PostgREST).
"""
from typing import Dict, Optional

import requests


class SupabaseRest:
    """Holds the project URL, service-role key and per-call timeout."""

    def __init__(self, base_url: str, service_key: str, timeout: float = 60.0):
        if not base_url or not service_key:
            raise ValueError("Supabase URL and service-role key are required")
        self.base_url = base_url.rstrip('/')
        self.service_key = service_key
        self.timeout = timeout

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            'Authorization': f'Bearer {self.service_key}',
            'apikey': self.service_key,
        }
        if extra:
            headers.update(extra)
        return headers


def error_detail(response: requests.Response) -> str:
    """
    Summarize a failed Supabase response as 'HTTP <code> - <message>'.
    """
    detail = f"HTTP {response.status_code}"
    try:
        data = response.json()
    except ValueError:
        text = (response.text or '')[:200]
        return f"{detail} - {text}" if text else detail

    if isinstance(data, dict):
        message = data.get('message') or data.get('error') or data.get('hint')
        if message:
            return f"{detail} - {message}"
    return detail
