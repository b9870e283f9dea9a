"""
Domain records for a processed case: the analysis extracted by the model,
the status flag that drives template selection, and the inbound request.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from coactivo.errors import UnrecognizedStatus

FAIL_SAFE_REMARKS = (
    "No fue posible interpretar la respuesta del análisis automático. "
    "El expediente se marca en ROJO y requiere revisión manual por un abogado."
)

NOT_AVAILABLE = 'No disponible'


class StatusFlag(str, Enum):
    """Validity of the executive title: valid, valid with issues, invalid or time-barred."""
    GREEN = 'GREEN'
    YELLOW = 'YELLOW'
    RED = 'RED'

    @classmethod
    def parse(cls, value: Optional[str]) -> 'StatusFlag':
        """
        Map a raw flag (English or Spanish, any case) to a StatusFlag.

        Raises:
            UnrecognizedStatus: If the value is not a known flag.
        """
        key = (value or '').strip().upper()
        if key in STATUS_ALIASES:
            return STATUS_ALIASES[key]
        raise UnrecognizedStatus(f"Unrecognized status flag: {value!r}")


STATUS_ALIASES = {
    'GREEN': StatusFlag.GREEN,
    'VERDE': StatusFlag.GREEN,
    'YELLOW': StatusFlag.YELLOW,
    'AMARILLO': StatusFlag.YELLOW,
    'RED': StatusFlag.RED,
    'ROJO': StatusFlag.RED,
}

# Values stored in the expedientes.semaforo column
STORED_STATUS = {
    StatusFlag.GREEN: 'VERDE',
    StatusFlag.YELLOW: 'AMARILLO',
    StatusFlag.RED: 'ROJO',
}


def stored_status(status_flag: str) -> str:
    """
    Spanish column value for a status flag. Unrecognized flags are stored as-is.
    """
    try:
        return STORED_STATUS[StatusFlag.parse(status_flag)]
    except UnrecognizedStatus:
        return status_flag


class TemplateKind(str, Enum):
    """Kind of legal document requested from the drafting prompt."""
    PAYMENT_ORDER = 'payment_order'
    LEGAL_DIAGNOSTIC = 'legal_diagnostic'


TEMPLATE_BY_STATUS = {
    StatusFlag.GREEN: TemplateKind.PAYMENT_ORDER,
    StatusFlag.YELLOW: TemplateKind.PAYMENT_ORDER,
    StatusFlag.RED: TemplateKind.LEGAL_DIAGNOSTIC,
}


def select_template(status_flag: Optional[str]) -> TemplateKind:
    """
    Choose the document template for a status flag.

    Raises:
        UnrecognizedStatus: If the flag is not GREEN, YELLOW or RED.
    """
    return TEMPLATE_BY_STATUS[StatusFlag.parse(status_flag)]


# Record field -> keys accepted in the model output. The Spanish keys are the
# ones the analysis prompt asks for.
FIELD_KEYS = {
    'debtor_name': ('debtor_name', 'nombre'),
    'issuing_entity': ('issuing_entity', 'entidad'),
    'total_amount': ('total_amount', 'valor'),
    'resolution_date': ('resolution_date', 'fecha_resolucion'),
    'enforceability_date': ('enforceability_date', 'fecha_ejecutoria'),
    'title_type': ('title_type', 'tipo_titulo'),
    'status_flag': ('status_flag', 'semaforo'),
    'remarks': ('remarks', 'observacion', 'observaciones'),
}

PROMPT_LABELS = (
    ('debtor_name', 'Nombre del deudor'),
    ('issuing_entity', 'Entidad'),
    ('total_amount', 'Valor total'),
    ('resolution_date', 'Fecha de resolución'),
    ('enforceability_date', 'Fecha de ejecutoria'),
    ('title_type', 'Tipo de título'),
    ('status_flag', 'Semáforo'),
    ('remarks', 'Observación'),
)


def _read_field(data: Mapping[str, Any], keys) -> str:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (dict, list)):
            continue
        return str(value)
    return ''


def _normalize_flag(raw: str) -> str:
    if not raw:
        return StatusFlag.RED.value
    try:
        return StatusFlag.parse(raw).value
    except UnrecognizedStatus:
        return raw.strip().upper()


@dataclass
class CaseAnalysis:
    """Structured facts of a case plus its status flag and remarks."""
    debtor_name: str = ''
    issuing_entity: str = ''
    total_amount: str = ''
    resolution_date: str = ''
    enforceability_date: str = ''
    title_type: str = ''
    status_flag: str = StatusFlag.RED.value
    remarks: str = ''

    @classmethod
    def from_model_output(cls, data: Mapping[str, Any]) -> 'CaseAnalysis':
        """
        Build a record from the JSON object returned by the analysis prompt.

        Missing or null fields read as empty strings; a missing status flag
        reads as RED. Unknown flags are kept so drafting can reject them.
        """
        values = {field: _read_field(data, keys) for field, keys in FIELD_KEYS.items()}
        values['status_flag'] = _normalize_flag(values['status_flag'])
        return cls(**values)

    @classmethod
    def fail_safe(cls) -> 'CaseAnalysis':
        """Record used when the analysis response cannot be parsed."""
        return cls(status_flag=StatusFlag.RED.value, remarks=FAIL_SAFE_REMARKS)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def as_prompt_text(self) -> str:
        """Render the record as labelled lines for the drafting prompt."""
        lines = []
        for field, label in PROMPT_LABELS:
            lines.append(f"{label}: {getattr(self, field) or NOT_AVAILABLE}")
        return '\n'.join(lines)


def _first_present(payload: Mapping[str, Any], *keys) -> Optional[Any]:
    # 0 is a valid id; only null and blank values count as missing
    for key in keys:
        value = payload.get(key)
        if value is not None and str(value).strip() != '':
            return value
    return None


@dataclass
class CaseRequest:
    """Inbound request: which case, which stored file, which owner."""
    case_id: str
    file_path: str
    user_id: str

    @classmethod
    def from_payload(cls, payload: Any) -> 'CaseRequest':
        """
        Validate a JSON body. Spanish field names from older callers are accepted.

        Raises:
            ValueError: If the body is not an object or a field is missing.
        """
        if not isinstance(payload, dict):
            raise ValueError('Request body must be a JSON object')

        case_id = _first_present(payload, 'case_id', 'expediente_id')
        file_path = _first_present(payload, 'file_path', 'archivo_path')
        user_id = _first_present(payload, 'user_id')

        missing = [
            name for name, value in (
                ('case_id', case_id), ('file_path', file_path), ('user_id', user_id)
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        return cls(case_id=str(case_id).strip(), file_path=str(file_path).strip(), user_id=str(user_id).strip())


@dataclass
class ProcessResult:
    analysis: CaseAnalysis
    document_url: str
    document_path: str
