"""Pytest configuration and fixtures for amplitude_model tests."""

import copy
import json

import pytest

from amplitude_model.serialization import ModelDocument


_MINIMAL_MODEL = {
    "functions": [
        {"name": "f1", "type": "Const", "value": 2.0},
    ],
    "distributions": [
        {"name": "d1", "type": "Scale", "source": "f1", "factor": 3.0},
    ],
    "parameter_points": [
        {"name": "p1", "parameters": []},
    ],
    "misc": {
        "amplitude_model_checksums": [
            {"point": "p1", "value": 6.0, "distribution": "d1"},
        ],
    },
}

# Breit–Wigner with m = 1, Γ = 0.1 and massless daughters (constant width):
#   s = 1.0 -> BW = 10i,      |BW|² = 100
#   s = 0.9 -> BW = 5 + 5i,   |BW|² = 50
_RESONANCE_MODEL = {
    "functions": [
        {"name": "bw", "type": "BreitWigner", "mass": "m_R", "width": "w_R", "x": "s"},
        {"name": "ff", "type": "BlattWeisskopf", "radius": 1.5, "l": 0, "x": "p"},
        {"name": "one", "type": "Const", "value": 1.0},
    ],
    "distributions": [
        {"name": "amplitude", "type": "Product", "factors": ["bw", "ff", "one"]},
        {"name": "intensity", "type": "Intensity", "amplitude": "amplitude"},
        {"name": "half_amplitude", "type": "Scale", "source": "amplitude", "factor": "0.5+0i"},
    ],
    "parameter_points": [
        {"name": "on_peak", "parameters": [
            {"name": "m_R", "value": 1.0},
            {"name": "w_R", "value": 0.1},
            {"name": "s", "value": 1.0},
            {"name": "p", "value": 0.3},
        ]},
        {"name": "below_peak", "parameters": [
            {"name": "m_R", "value": 1.0},
            {"name": "w_R", "value": 0.1},
            {"name": "s", "value": 0.9},
            {"name": "p", "value": 0.3},
        ]},
    ],
    "misc": {
        "amplitude_model_checksums": [
            {"point": "on_peak", "value": 100.0, "distribution": "intensity"},
            {"point": "below_peak", "value": 50.0, "distribution": "intensity"},
            {"point": "on_peak", "value": "0.0+5.0i", "distribution": "half_amplitude"},
            {"point": "below_peak", "value": "2.5+2.5i", "distribution": "half_amplitude"},
        ],
    },
}


@pytest.fixture
def minimal_model():
    """The two-component Const/Scale model as decoded JSON."""
    return copy.deepcopy(_MINIMAL_MODEL)


@pytest.fixture
def minimal_document(minimal_model):
    return ModelDocument.from_dict(minimal_model)


@pytest.fixture
def resonance_model():
    """A single-resonance model whose checksums can be worked out by hand."""
    return copy.deepcopy(_RESONANCE_MODEL)


@pytest.fixture
def resonance_document(resonance_model):
    return ModelDocument.from_dict(resonance_model)


@pytest.fixture
def model_file(tmp_path, resonance_model):
    """The resonance model written to a JSON file."""
    path = tmp_path / "model.json"
    path.write_text(json.dumps(resonance_model), encoding="utf-8")
    return path


@pytest.fixture(params=[1e-11, 9.9e-11, 0.0])
def exact_deltas(request):
    return request.param


@pytest.fixture(params=[1e-10, 1e-9, 5e-3])
def approximate_deltas(request):
    return request.param


@pytest.fixture(params=[1e-2, 1.0, float('inf'), float('nan')])
def mismatch_deltas(request):
    return request.param
