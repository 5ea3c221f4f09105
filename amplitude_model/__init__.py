"""Load serialized amplitude models into an evaluable workspace and check them
against their stored reference values.
"""

from .algorithms import ChecksumValidator, Tier, ValidationResult, validate, validate_document
from .config import BuildConfig, ValidationConfig
from .errors import (
    DuplicateNameError,
    InvalidComponentError,
    MissingDependencyError,
    MissingParameterError,
    ModelError,
    UnknownDistributionError,
    UnknownPointError,
    UnknownTypeError,
    ValueFormatError,
)
from .serialization import ModelDocument, load_document, parse_complex, format_complex
from .workspace import Workspace, build, load_workspace, populate, register

__all__ = [
    "ChecksumValidator",
    "Tier",
    "ValidationResult",
    "validate",
    "validate_document",
    "BuildConfig",
    "ValidationConfig",
    "DuplicateNameError",
    "InvalidComponentError",
    "MissingDependencyError",
    "MissingParameterError",
    "ModelError",
    "UnknownDistributionError",
    "UnknownPointError",
    "UnknownTypeError",
    "ValueFormatError",
    "ModelDocument",
    "load_document",
    "parse_complex",
    "format_complex",
    "Workspace",
    "build",
    "load_workspace",
    "populate",
    "register",
]
