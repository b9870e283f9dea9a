"""
Runtime configuration for the worker, read from environment variables.
"""
import os
from typing import Optional

from coactivo.services.doc_builder import DocumentStyle
from coactivo.utils.env import env_float, env_str

DEFAULT_LLM_BASE_URL = 'https://openrouter.ai/api/v1'
DEFAULT_LLM_MODEL = 'deepseek/deepseek-chat-v3.1:free'


class Config:
    """
    Settings shared by the processor and its collaborators.

    Defaults match the production deployment; every value can be overridden
    with keyword arguments (tests) or environment variables (from_env).
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        cases_bucket: str = 'expedientes',
        documents_bucket: str = 'mandamientos',
        cases_table: str = 'expedientes',
        llm_api_key: Optional[str] = None,
        llm_base_url: str = DEFAULT_LLM_BASE_URL,
        llm_model: str = DEFAULT_LLM_MODEL,
        llm_timeout: float = 120.0,
        storage_timeout: float = 60.0,
        document_creator: str = 'Sistema Coactivo IA',
        document_style: Optional[DocumentStyle] = None,
    ):
        self.supabase_url = supabase_url.rstrip('/') if supabase_url else None
        self.supabase_key = supabase_key
        self.cases_bucket = cases_bucket
        self.documents_bucket = documents_bucket
        self.cases_table = cases_table
        self.llm_api_key = llm_api_key
        self.llm_base_url = llm_base_url
        self.llm_model = llm_model
        self.llm_timeout = llm_timeout
        self.storage_timeout = storage_timeout
        self.document_creator = document_creator
        self.document_style = document_style or DocumentStyle()

    @classmethod
    def from_env(cls) -> 'Config':
        """Build configuration from the process environment."""
        return cls(
            supabase_url=os.getenv('SUPABASE_URL'),
            supabase_key=os.getenv('SUPABASE_SERVICE_ROLE'),
            cases_bucket=env_str('CASES_BUCKET', 'expedientes'),
            documents_bucket=env_str('DOCUMENTS_BUCKET', 'mandamientos'),
            cases_table=env_str('CASES_TABLE', 'expedientes'),
            llm_api_key=os.getenv('OPENROUTER_API_KEY') or os.getenv('OPENAI_API_KEY'),
            llm_base_url=env_str('LLM_BASE_URL', DEFAULT_LLM_BASE_URL),
            llm_model=env_str('LLM_MODEL', DEFAULT_LLM_MODEL),
            llm_timeout=env_float('LLM_TIMEOUT', 120.0),
            storage_timeout=env_float('STORAGE_TIMEOUT', 60.0),
            document_creator=env_str('DOCUMENT_CREATOR', 'Sistema Coactivo IA'),
            document_style=DocumentStyle.from_env(),
        )

    def require_supabase(self) -> None:
        """
        Raises:
            ValueError: If the Supabase URL or service-role key is missing.
        """
        missing = []
        if not self.supabase_url:
            missing.append('SUPABASE_URL')
        if not self.supabase_key:
            missing.append('SUPABASE_SERVICE_ROLE')
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")
