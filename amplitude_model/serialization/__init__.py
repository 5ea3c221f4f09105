"""Reading model documents: JSON layout, complex encoding and name lookup."""

from .complex_encoding import format_complex, format_number, parse_complex, parse_number
from .document import (
    Checkpoint,
    ComponentSpec,
    ModelDocument,
    ParameterPoint,
    dump_document,
    load_document,
)
from .resolver import index_by_name

__all__ = [
    "parse_complex",
    "parse_number",
    "format_complex",
    "format_number",
    "Checkpoint",
    "ComponentSpec",
    "ModelDocument",
    "ParameterPoint",
    "dump_document",
    "load_document",
    "index_by_name",
]
