"""
Prompt templates for case analysis and legal document drafting
(Colombian coactive collection procedure).
"""
from coactivo.models import CaseAnalysis, TemplateKind

ANALYSIS_SYSTEM_PROMPT = "Eres un abogado experto en cobro coactivo colombiano."

ANALYSIS_PROMPT_TEMPLATE = '''Analiza el siguiente expediente y devuelve ÚNICAMENTE un objeto JSON con esta estructura:
{{
  "nombre": "",
  "entidad": "",
  "valor": "",
  "fecha_resolucion": "",
  "fecha_ejecutoria": "",
  "tipo_titulo": "",
  "semaforo": "",
  "observacion": ""
}}

Reglas:
- Conserva exactamente los nombres de las claves y escribe cada valor como texto.
- En "valor" indica el VALOR TOTAL de la deuda; revisa el texto con cuidado.
- En "semaforo" responde VERDE si es un título ejecutivo válido, AMARILLO si es un título ejecutivo con algún problema y ROJO si es un título ejecutivo NO VÁLIDO o PRESCRITO.
- En "observacion" redacta un reporte detallado que le permita a un abogado decidir si firma o no el mandamiento de pago. Detalla cada uno de los aspectos revisados.
- No agregues texto antes ni después del JSON.

Texto:
"""
{text}
"""'''

DRAFTING_SYSTEM_PROMPT = "Eres un abogado profesional en procesos coactivos."

OUTPUT_WARNING = (
    "ADVERTENCIA: EL CONTENIDO QUE GENERES SERÁ PEGADO DIRECTAMENTE EN UN DOCUMENTO. "
    "SOLO GENERA LO PEDIDO, SIN INTRODUCCIONES NI COMENTARIOS SOBRE LA TAREA."
)

FORMAT_RULES = '''Formato:
- Usa títulos (#), subtítulos (##) y negritas (**texto**); el resto es texto plano.
- Cada sección comienza con su título en mayúsculas.
- Separa los párrafos con saltos de línea claros.
- No uses listas ni numeraciones (nada de 1., 2., viñetas).
- Usa un lenguaje jurídico formal, propio de actos administrativos colombianos, digno de un abogado de prestigio.'''

PAYMENT_ORDER_INSTRUCTIONS = '''Con fundamento en el artículo 826 del Estatuto Tributario, genera el texto completo de un MANDAMIENTO DE PAGO en formato legal colombiano, con estas secciones en este orden:

ENCABEZADO
Título principal centrado y en mayúsculas: MANDAMIENTO DE PAGO. Nombre de la entidad que expide el acto, lugar y fecha de expedición, y número o radicado del expediente.

CONSIDERANDO
La competencia para el cobro coactivo según los artículos 823 a 829 del Estatuto Tributario y demás normas aplicables. Los hechos: existencia del título ejecutivo, su ejecutoria y el monto adeudado.

RESUELVE
La orden de pago al deudor dentro del plazo legal de diez (10) días hábiles, la advertencia de embargo y secuestro de bienes en caso de incumplimiento, y la constancia de que contra el mandamiento no procede recurso.

FIRMA Y AUTORIZACIÓN
Nombre y cargo del funcionario competente, con espacio para firma y sello institucional.'''

LEGAL_DIAGNOSTIC_INSTRUCTIONS = '''El título ejecutivo de este expediente fue calificado como NO VÁLIDO o PRESCRITO. Genera el texto completo de un DIAGNÓSTICO JURÍDICO dirigido a un abogado, con estas secciones en este orden:

DIAGNÓSTICO DEL TÍTULO EJECUTIVO
Identificación del expediente, la entidad y el deudor.

ANÁLISIS
Los motivos por los que el título no es exigible (requisitos del título, ejecutoria, prescripción, competencia u otros), con el fundamento normativo aplicable.

CONCLUSIÓN Y RECOMENDACIONES
La decisión sugerida y las actuaciones que el abogado debería adelantar.'''

INSTRUCTIONS_BY_TEMPLATE = {
    TemplateKind.PAYMENT_ORDER: PAYMENT_ORDER_INSTRUCTIONS,
    TemplateKind.LEGAL_DIAGNOSTIC: LEGAL_DIAGNOSTIC_INSTRUCTIONS,
}


def build_analysis_prompt(text: str) -> str:
    return ANALYSIS_PROMPT_TEMPLATE.format(text=text)


def build_drafting_prompt(analysis: CaseAnalysis, kind: TemplateKind) -> str:
    """
    Build the drafting request for the selected template.

    Args:
        analysis: The persisted case analysis (read-only).
        kind: Template chosen from the status flag.
    """
    return (
        f"{OUTPUT_WARNING}\n\n"
        f"{INSTRUCTIONS_BY_TEMPLATE[kind]}\n\n"
        f"{FORMAT_RULES}\n\n"
        f"Datos del expediente:\n{analysis.as_prompt_text()}\n"
    )
