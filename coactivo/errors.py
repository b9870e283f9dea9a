"""
Error taxonomy for the case processing worker.
Every error is terminal for the request that raised it.
"""


class CaseProcessingError(Exception):
    """Base class for failures that end a case processing request."""
    stage = 'processing'


class DownloadFailed(CaseProcessingError):
    """Raised when the case file cannot be downloaded from storage."""
    stage = 'download'


class UnsupportedFormat(CaseProcessingError):
    """Raised when the case file is neither a PDF nor a DOCX document."""
    stage = 'extraction'


class ExtractionFailed(CaseProcessingError):
    """Raised when the underlying parser cannot read the case file."""
    stage = 'extraction'


class ProviderError(CaseProcessingError):
    """Raised when the LLM provider answers with an error instead of a completion."""
    stage = 'llm'


class MalformedModelOutput(CaseProcessingError):
    """Raised when no usable content can be recovered from a model response."""
    stage = 'llm'


class UnrecognizedStatus(CaseProcessingError):
    """Raised when a status flag does not map to a document template."""
    stage = 'drafting'


class PersistenceFailed(CaseProcessingError):
    """Raised when the case record cannot be updated."""
    stage = 'persistence'


class UploadFailed(CaseProcessingError):
    """Raised when the generated document cannot be uploaded."""
    stage = 'upload'
