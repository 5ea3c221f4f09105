"""Exception hierarchy for loading and validating amplitude models.

All errors derive from ``ModelError`` which is itself a ``ValueError`` so that
callers that only care about "bad input" can keep catching ``ValueError``.
"""

from __future__ import annotations


class ModelError(ValueError):
    """Base class for all model loading / validation errors."""


class UnknownTypeError(ModelError):
    """A component ``type`` has no registered constructor."""

    def __init__(self, type_name: str, spec_name: str | None = None):
        self.type_name = type_name
        self.spec_name = spec_name
        where = f" (component {spec_name!r})" if spec_name else ""
        super().__init__(f"Unknown component type {type_name!r}{where}")


class MissingDependencyError(ModelError):
    """A component references a name that is not (yet) in the workspace."""

    def __init__(self, spec_name: str, missing: str):
        self.spec_name = spec_name
        self.missing = missing
        super().__init__(
            f"Component {spec_name!r} references {missing!r}, which is not defined before it"
        )


class DuplicateNameError(ModelError):
    """Two records share a name where names must be unique."""

    def __init__(self, name: str, context: str = "records"):
        self.name = name
        super().__init__(f"Duplicate name {name!r} in {context}")


class InvalidComponentError(ModelError):
    """A record is missing a required field or has a field of the wrong shape."""


class UnknownDistributionError(ModelError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Distribution {name!r} is not in the workspace")


class UnknownPointError(ModelError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Parameter point {name!r} is not defined")


class ValueFormatError(ModelError):
    """A numeric value (usually a complex-encoded string) could not be parsed."""


class MissingParameterError(ModelError):
    """Evaluation needed a parameter that the context does not provide."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Parameter {parameter!r} missing from evaluation context")
