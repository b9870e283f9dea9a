"""
Unit tests for JSON recovery from model responses.
"""
import json

import pytest

from coactivo.errors import MalformedModelOutput
from coactivo.services.response_parser import extract_json_object


class TestExtractJsonObject:
    """Test suite for extract_json_object."""

    def test_fenced_json_with_prose(self):
        """Fences and surrounding prose are discarded."""
        raw = 'Here: ```json\n{"a":"1","b":"2"}\n``` thanks'
        assert extract_json_object(raw) == {"a": "1", "b": "2"}

    def test_plain_object(self):
        assert extract_json_object('{"semaforo": "VERDE"}') == {"semaforo": "VERDE"}

    def test_bare_fences_without_language(self):
        raw = '```\n{"nombre": "Juan"}\n```'
        assert extract_json_object(raw) == {"nombre": "Juan"}

    def test_uppercase_fence_marker(self):
        raw = '```JSON\n{"nombre": "Juan"}\n```'
        assert extract_json_object(raw) == {"nombre": "Juan"}

    @pytest.mark.parametrize("prefix,suffix", [
        ("", ""),
        ("Claro, aquí está el análisis:\n", ""),
        ("", "\nEspero que sea útil."),
        ("Respuesta: ```json\n", "\n```\nFin."),
        ("   \n\t", "  \n"),
    ])
    def test_recovers_object_from_wrappers(self, prefix, suffix):
        """A single well-formed object is recovered exactly, whatever wraps it."""
        obj = {
            "nombre": "ACME S.A.S.",
            "valor": "$ 1.250.000",
            "observacion": "Título con {llaves} internas",
        }
        raw = prefix + json.dumps(obj, ensure_ascii=False) + suffix
        assert extract_json_object(raw) == obj

    def test_nested_objects_are_kept(self):
        raw = 'x {"a": {"b": "c"}, "d": "e"} y'
        assert extract_json_object(raw) == {"a": {"b": "c"}, "d": "e"}

    def test_returns_only_present_keys(self):
        """Defaults are not the parser's job."""
        assert extract_json_object('{"nombre": null}') == {"nombre": None}

    @pytest.mark.parametrize("raw", [
        "No puedo analizar este documento.",
        "```json\n```",
        "[1, 2, 3]",
        "} backwards {",
    ])
    def test_no_object_fails(self, raw):
        with pytest.raises(MalformedModelOutput):
            extract_json_object(raw)

    @pytest.mark.parametrize("raw", [None, "", "   \n"])
    def test_empty_response_fails(self, raw):
        with pytest.raises(MalformedModelOutput):
            extract_json_object(raw)

    def test_invalid_json_fails_with_cause(self):
        with pytest.raises(MalformedModelOutput) as exc_info:
            extract_json_object('{"nombre": "Juan",}')
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_fail(self, constant):
        with pytest.raises(MalformedModelOutput):
            extract_json_object('{"valor": %s}' % constant)

    def test_deep_nesting_fails(self):
        depth = 100000
        raw = '{"a": ' + "[" * depth + "]" * depth + "}"
        with pytest.raises(MalformedModelOutput) as exc_info:
            extract_json_object(raw)
        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_two_objects_are_spanned_together(self):
        """First '{' to last '}': an example object before the real one breaks parsing."""
        raw = 'Ejemplo: {"nombre": ""} Respuesta: {"nombre": "Juan"}'
        with pytest.raises(MalformedModelOutput):
            extract_json_object(raw)
