"""
Case processor - coordinates the full case workflow:
download, extract, analyze, persist, draft, render, upload, record.
"""
import logging
import time
from typing import Optional

from coactivo.config import Config
from coactivo.errors import MalformedModelOutput
from coactivo.models import CaseAnalysis, CaseRequest, ProcessResult, select_template
from coactivo.services.case_store import SupabaseCaseStore
from coactivo.services.doc_builder import DOCX_CONTENT_TYPE, build_docx
from coactivo.services.llm_client import LLMClient
from coactivo.services.markup import translate
from coactivo.services.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    DRAFTING_SYSTEM_PROMPT,
    build_analysis_prompt,
    build_drafting_prompt,
)
from coactivo.services.response_parser import extract_json_object
from coactivo.services.storage import SupabaseStorage
from coactivo.services.text_extractor import extract_text

logger = logging.getLogger(__name__)


def document_path_for(request: CaseRequest) -> str:
    """Storage path of the generated document for a case."""
    return f"mandamientos/{request.user_id}/mandamiento_{request.case_id}.docx"


def document_title_for(case_id: str) -> str:
    return f"Mandamiento de Pago - Expediente {case_id}"


class CaseProcessor:
    """
    Runs one case through every stage, in order.

    Collaborators are injected:
        storage: download(bucket, path), upload(bucket, path, content, content_type, overwrite),
                 public_url(bucket, path)
        case_store: update_case(case_id, analysis), record_document(case_id, path)
        llm: complete(system_prompt, user_prompt, model=None)

    Any collaborator error ends the request. Nothing is retried and earlier
    stages are not rolled back.
    """

    def __init__(self, storage, case_store, llm, config: Optional[Config] = None):
        self.storage = storage
        self.case_store = case_store
        self.llm = llm
        self.config = config or Config()

    def analyze(self, text: str) -> CaseAnalysis:
        """
        Ask the model for the structured analysis of the case text.

        An unparseable response falls back to the fail-safe (RED) record.
        ProviderError propagates.
        """
        response = self.llm.complete(
            ANALYSIS_SYSTEM_PROMPT,
            build_analysis_prompt(text),
            self.config.llm_model,
        )
        try:
            data = extract_json_object(response)
        except MalformedModelOutput as e:
            logger.warning(f"Analysis response unusable, using fail-safe record: {e}")
            return CaseAnalysis.fail_safe()
        return CaseAnalysis.from_model_output(data)

    def draft(self, analysis: CaseAnalysis) -> str:
        """
        Ask the model for the legal document matching the status flag.

        Raises:
            UnrecognizedStatus: If the flag selects no template (no LLM call is made).
            ProviderError: If the provider fails.
            MalformedModelOutput: If the draft is empty.
        """
        kind = select_template(analysis.status_flag)
        logger.info(f"Drafting {kind.value} document (semaforo={analysis.status_flag})")

        draft = self.llm.complete(
            DRAFTING_SYSTEM_PROMPT,
            build_drafting_prompt(analysis, kind),
            self.config.llm_model,
        )
        if not draft or not draft.strip():
            raise MalformedModelOutput('Empty draft returned by model')
        return draft

    def render(self, draft: str, case_id: str) -> bytes:
        return build_docx(
            translate(draft),
            style=self.config.document_style,
            title=document_title_for(case_id),
            author=self.config.document_creator,
        )

    def process(self, request: CaseRequest) -> ProcessResult:
        """
        Process one case end to end.

        Args:
            request: Case id, stored file path and owning user.

        Returns:
            ProcessResult with the analysis and the public document URL.

        Raises:
            CaseProcessingError: The error of the first stage that failed.
        """
        start_time = time.time()
        case_id = request.case_id
        logger.info(f"Processing case {case_id}: file={request.file_path}")

        data = self.storage.download(self.config.cases_bucket, request.file_path)
        logger.info(f"[{case_id}] downloaded {len(data):,} bytes")

        text = extract_text(data, request.file_path)
        logger.info(f"[{case_id}] extracted {len(text)} characters")

        analysis = self.analyze(text)
        logger.info(f"[{case_id}] analyzed: semaforo={analysis.status_flag}")

        self.case_store.update_case(case_id, analysis)
        logger.info(f"[{case_id}] analysis persisted")

        draft = self.draft(analysis)
        logger.info(f"[{case_id}] drafted {len(draft)} characters")

        document = self.render(draft, case_id)
        logger.info(f"[{case_id}] rendered {len(document):,} bytes")

        path = document_path_for(request)
        bucket = self.config.documents_bucket
        self.storage.upload(bucket, path, document, DOCX_CONTENT_TYPE, True)
        document_url = self.storage.public_url(bucket, path)
        logger.info(f"[{case_id}] uploaded to {bucket}/{path}")

        self.case_store.record_document(case_id, path)

        duration = time.time() - start_time
        logger.info(f"Case {case_id} processed in {duration:.2f}s: {document_url}")
        return ProcessResult(analysis=analysis, document_url=document_url, document_path=path)


def build_processor(config: Config) -> CaseProcessor:
    """
    Wire the production collaborators from configuration.

    Raises:
        ValueError: If required settings are missing.
    """
    config.require_supabase()
    storage = SupabaseStorage(config.supabase_url, config.supabase_key, timeout=config.storage_timeout)
    case_store = SupabaseCaseStore(
        config.supabase_url,
        config.supabase_key,
        table=config.cases_table,
        timeout=config.storage_timeout,
    )
    llm = LLMClient(
        api_key=config.llm_api_key,
        model=config.llm_model,
        base_url=config.llm_base_url,
        timeout=config.llm_timeout,
    )
    return CaseProcessor(storage, case_store, llm, config)
