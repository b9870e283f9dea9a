"""
Case record updates through the Supabase PostgREST API.
"""
import logging
from typing import Any, Dict

import requests

from coactivo.errors import PersistenceFailed
from coactivo.models import CaseAnalysis, stored_status
from coactivo.services.supabase_rest import SupabaseRest, error_detail

logger = logging.getLogger(__name__)


class SupabaseCaseStore(SupabaseRest):
    """Writes analysis results and document paths onto case rows."""

    def __init__(self, base_url: str, service_key: str, table: str = 'expedientes', timeout: float = 60.0):
        super().__init__(base_url, service_key, timeout)
        self.table = table

    def _patch(self, case_id: str, fields: Dict[str, Any]) -> None:
        url = f"{self.base_url}/rest/v1/{self.table}"
        headers = self._headers({
            'Content-Type': 'application/json',
            'Prefer': 'return=minimal',
        })

        try:
            response = requests.patch(
                url,
                headers=headers,
                params={'id': f'eq.{case_id}'},
                json=fields,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error updating case {case_id}: {e}")
            raise PersistenceFailed(f"Network error updating case {case_id}: {e}") from e

        if response.status_code not in (200, 204):
            detail = error_detail(response)
            logger.error(f"Update failed for case {case_id}: {detail}")
            raise PersistenceFailed(f"Failed to update case {case_id}: {detail}")

    def update_case(self, case_id: str, analysis: CaseAnalysis) -> None:
        """
        Persist the classification of a case.

        Raises:
            PersistenceFailed: If the row cannot be updated.
        """
        self._patch(case_id, {
            'titulo': analysis.title_type,
            'semaforo': stored_status(analysis.status_flag),
            'observaciones': analysis.remarks,
        })
        logger.info(f"Case {case_id} updated: semaforo={analysis.status_flag}")

    def record_document(self, case_id: str, document_path: str) -> None:
        """
        Store the path of the generated document on the case.

        Raises:
            PersistenceFailed: If the row cannot be updated.
        """
        self._patch(case_id, {'mandamiento_path': document_path})
        logger.info(f"mandamiento_path recorded for case {case_id}")
