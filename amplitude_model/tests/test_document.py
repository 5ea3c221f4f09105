"""Tests for reading and writing model documents."""

import json

import pytest

from amplitude_model.errors import DuplicateNameError, InvalidComponentError, ValueFormatError
from amplitude_model.serialization.document import (
    Checkpoint,
    ComponentSpec,
    ModelDocument,
    ParameterPoint,
    dump_document,
    load_document,
)


class TestComponentSpec:

    def test_splits_name_type_and_fields(self):
        spec = ComponentSpec.from_dict({"name": "bw", "type": "BreitWigner", "mass": 1.0, "x": "s"})
        assert spec.name == "bw"
        assert spec.type == "BreitWigner"
        assert dict(spec.fields) == {"mass": 1.0, "x": "s"}

    def test_fields_are_read_only(self):
        spec = ComponentSpec.from_dict({"name": "c", "type": "Const", "value": 1.0})
        with pytest.raises(TypeError):
            spec.fields["value"] = 2.0

    @pytest.mark.parametrize("record", [
        {"type": "Const", "value": 1.0},
        {"name": "", "type": "Const"},
        {"name": "c", "value": 1.0},
        ["name", "type"],
    ])
    def test_incomplete_records_are_rejected(self, record):
        with pytest.raises(InvalidComponentError):
            ComponentSpec.from_dict(record)

    def test_to_dict_round_trip(self):
        record = {"name": "c", "type": "Const", "value": 1.0}
        assert ComponentSpec.from_dict(record).to_dict() == record


class TestParameterPoint:

    def test_to_context_parses_complex_values(self):
        point = ParameterPoint.from_dict({"name": "p", "parameters": [
            {"name": "m", "value": 1.5},
            {"name": "c", "value": "0.5-1.0i"},
        ]})
        assert point.to_context() == {"m": 1.5, "c": complex(0.5, -1.0)}

    def test_duplicate_parameter_names_raise(self):
        point = ParameterPoint.from_dict({"name": "p", "parameters": [
            {"name": "m", "value": 1.0},
            {"name": "m", "value": 2.0},
        ]})
        with pytest.raises(DuplicateNameError, match="parameter point 'p'"):
            point.to_context()

    def test_malformed_value_raises_value_format_error(self):
        point = ParameterPoint.from_dict({"name": "p", "parameters": [{"name": "m", "value": "1.0+"}]})
        with pytest.raises(ValueFormatError):
            point.to_context()

    def test_entries_need_name_and_value(self):
        with pytest.raises(InvalidComponentError, match="'name' and 'value'"):
            ParameterPoint.from_dict({"name": "p", "parameters": [{"name": "m"}]})

    def test_empty_parameter_list(self):
        assert ParameterPoint.from_dict({"name": "p", "parameters": []}).to_context() == {}


class TestModelDocument:

    def test_sections(self, resonance_document):
        doc = resonance_document
        assert [s.name for s in doc.functions] == ["bw", "ff", "one"]
        assert [s.name for s in doc.distributions] == ["amplitude", "intensity", "half_amplitude"]
        assert [p.name for p in doc.parameter_points] == ["on_peak", "below_peak"]
        assert len(doc.checkpoints) == 4
        assert doc.checkpoints[2] == Checkpoint("on_peak", "half_amplitude", "0.0+5.0i")

    def test_components_are_functions_then_distributions(self, resonance_document):
        names = [s.name for s in resonance_document.components]
        assert names == ["bw", "ff", "one", "amplitude", "intensity", "half_amplitude"]

    def test_missing_sections_are_empty(self):
        doc = ModelDocument.from_dict({})
        assert doc.functions == () and doc.distributions == ()
        assert doc.parameter_points == () and doc.checkpoints == ()

    def test_unknown_sections_are_kept(self, minimal_model):
        minimal_model["domains"] = [{"name": "default"}]
        minimal_model["misc"]["comment"] = "hello"
        doc = ModelDocument.from_dict(minimal_model)
        assert doc.extra["domains"] == [{"name": "default"}]
        out = doc.to_dict()
        assert out["misc"]["comment"] == "hello"
        assert out["domains"] == [{"name": "default"}]

    def test_point_lookup(self, resonance_document):
        assert resonance_document.point("below_peak").name == "below_peak"
        with pytest.raises(KeyError):
            resonance_document.point("nowhere")

    def test_checkpoint_requires_all_keys(self):
        with pytest.raises(InvalidComponentError, match="missing value"):
            Checkpoint.from_dict({"point": "p", "distribution": "d"})

    @pytest.mark.parametrize("record", [
        {"point": ["p1"], "distribution": "d", "value": 1.0},
        {"point": "p1", "distribution": "", "value": 1.0},
        ["p1", "d", 1.0],
    ])
    def test_checkpoint_names_must_be_strings(self, record):
        with pytest.raises(InvalidComponentError):
            Checkpoint.from_dict(record)

    def test_document_must_be_object(self):
        with pytest.raises(InvalidComponentError):
            ModelDocument.from_dict([])


class TestLoadAndDump:

    def test_load_from_file(self, model_file):
        doc = load_document(model_file)
        assert len(doc.functions) == 3

    def test_load_from_string_path(self, model_file):
        assert load_document(str(model_file)).parameter_points[0].name == "on_peak"

    def test_load_from_mapping(self, minimal_model):
        assert load_document(minimal_model).functions[0].name == "f1"

    def test_dump_then_load_preserves_document(self, tmp_path, resonance_model):
        doc = ModelDocument.from_dict(resonance_model)
        path = tmp_path / "out.json"
        dump_document(doc, path)
        assert json.loads(path.read_text(encoding="utf-8")) == resonance_model
        assert load_document(path).to_dict() == doc.to_dict()
