"""
Checksum validation of a built workspace.

Model files carry reference values ("checksums") of their distributions at
named parameter points. Re-evaluating the workspace at those points and
comparing against the stored values tells whether a model was deserialized
faithfully. Each checkpoint is classified into a tier by the size of the
discrepancy ``delta = |reference - computed|``:

- Exact:        delta < 1e-10
- Approximate:  1e-10 <= delta < 1e-2
- Mismatch:     delta >= 1e-2 (also: any checkpoint that cannot be evaluated)

Checkpoints are independent: a failure in one is recorded in its own row and
never stops the others. Evaluation may run on a thread pool since the
workspace is read-only once built.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from amplitude_model.config import BuildConfig, ValidationConfig
from amplitude_model.errors import ModelError, UnknownDistributionError, UnknownPointError
from amplitude_model.serialization.complex_encoding import parse_number
from amplitude_model.serialization.document import Checkpoint, ModelDocument, ParameterPoint
from amplitude_model.serialization.resolver import index_by_name
from amplitude_model.workspace.builder import Workspace, populate

logger = logging.getLogger(__name__)

__all__ = [
    'Tier',
    'ValidationResult',
    'classify',
    'validate',
    'validate_document',
    'summarize',
    'results_to_dataframe',
    'ChecksumValidator',
]


class Tier(str, Enum):
    EXACT = 'Exact'
    APPROXIMATE = 'Approximate'
    MISMATCH = 'Mismatch'


@dataclass(frozen=True)
class ValidationResult:
    distribution: str
    point: str
    tier: Tier
    delta: float = float('nan')
    reference: Any = None
    computed: Any = None
    error: Optional[str] = None

    @property
    def status(self) -> str:
        """Tier name, or 'ERROR' when the checkpoint could not be evaluated."""
        return 'ERROR' if self.error is not None else self.tier.value


def classify(delta: float, *, config: Optional[ValidationConfig] = None) -> Tier:
    """Map a discrepancy onto a tier using half-open intervals."""
    config = config or ValidationConfig()
    if not np.isfinite(delta):
        return Tier.MISMATCH
    if delta < config.exact_tolerance:
        return Tier.EXACT
    if delta < config.approximate_tolerance:
        return Tier.APPROXIMATE
    return Tier.MISMATCH


def _discrepancy(reference: Any, computed: Any) -> float:
    # complex modulus; array-valued results are reduced to the worst entry
    diff = np.abs(np.asarray(reference) - np.asarray(computed))
    if diff.size == 0:
        return float('nan')
    return float(np.max(diff))


def _lookup_distribution(workspace: Mapping, name: str) -> Any:
    if isinstance(workspace, Workspace):
        return workspace.lookup(name)
    try:
        return workspace[name]
    except KeyError:
        raise UnknownDistributionError(name) from None


def _field(record: Any, key: str) -> Any:
    # raw records may be malformed; read what is there for the error row
    return record.get(key) if isinstance(record, Mapping) else getattr(record, key, None)


def _label(record: Any, key: str) -> str:
    value = _field(record, key)
    return value if isinstance(value, str) else repr(value)


def _check(
    record: Any,
    workspace: Mapping,
    points: Mapping[str, ParameterPoint],
    config: ValidationConfig,
) -> ValidationResult:
    try:
        checkpoint = record if isinstance(record, Checkpoint) else Checkpoint.from_dict(record)
        distribution = _lookup_distribution(workspace, checkpoint.distribution)
        point = points.get(checkpoint.point)
        if point is None:
            raise UnknownPointError(checkpoint.point)
        computed = distribution.evaluate(point.to_context())
        reference = parse_number(checkpoint.value)
        delta = _discrepancy(reference, computed)
    except (ModelError, ArithmeticError) as e:
        dist_name, point_name = _label(record, "distribution"), _label(record, "point")
        logger.warning(f"Checkpoint {dist_name!r} @ {point_name!r} failed: {e}")
        return ValidationResult(
            distribution=dist_name,
            point=point_name,
            tier=Tier.MISMATCH,
            reference=_field(record, "value"),
            error=str(e),
        )

    tier = classify(delta, config=config)
    logger.debug(f"{checkpoint.distribution} @ {checkpoint.point}: delta={delta:.3e} -> {tier.value}")
    return ValidationResult(
        distribution=checkpoint.distribution,
        point=checkpoint.point,
        tier=tier,
        delta=delta,
        reference=reference,
        computed=computed,
    )


def _as_points(records: Iterable[Any]) -> List[ParameterPoint]:
    return [r if isinstance(r, ParameterPoint) else ParameterPoint.from_dict(r) for r in records]


def validate(
    workspace: Mapping,
    checkpoints: Iterable[Any],
    parameter_points: Iterable[Any],
    *,
    config: Optional[ValidationConfig] = None,
) -> List[ValidationResult]:
    """
    Evaluate every checkpoint against the workspace.

    Parameters
    ----------
    workspace : Workspace or Mapping
        Built components keyed by name
    checkpoints : iterable of Checkpoint or dict
        Records with ``point``, ``distribution`` and reference ``value``
    parameter_points : iterable of ParameterPoint or dict
        Named parameter points the checkpoints refer to
    config : ValidationConfig, optional
        Tier tolerances and number of worker threads

    Returns
    -------
    list of ValidationResult
        One result per checkpoint, in checkpoint order

    Raises
    ------
    DuplicateNameError
        If two parameter points share a name
    """
    config = config or ValidationConfig()
    # raw records are parsed per checkpoint so one malformed entry only fails its own row
    checkpoints = list(checkpoints)
    points = index_by_name(_as_points(parameter_points), context="parameter_points")

    def run(c: Any) -> ValidationResult:
        return _check(c, workspace, points, config)

    if config.max_workers > 1 and len(checkpoints) > 1:
        # map() yields in submission order, so rows stay in checkpoint order
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            results = list(pool.map(run, checkpoints))
    else:
        results = [run(c) for c in checkpoints]

    counts = summarize(results)
    logger.info(
        f"Checksum validation: {counts['Exact']} exact, {counts['Approximate']} approximate, "
        f"{counts['Mismatch']} mismatch ({counts['errors']} errors) of {counts['total']}"
    )
    return results


def validate_document(
    doc: ModelDocument,
    *,
    build_config: Optional[BuildConfig] = None,
    config: Optional[ValidationConfig] = None,
) -> List[ValidationResult]:
    """Populate a workspace from ``doc`` and validate its embedded checksums."""
    workspace = populate(doc, config=build_config)
    return validate(workspace, doc.checkpoints, doc.parameter_points, config=config)


def summarize(results: Sequence[ValidationResult]) -> Dict[str, int]:
    counts = {tier.value: 0 for tier in Tier}
    for r in results:
        counts[r.tier.value] += 1
    counts['errors'] = sum(1 for r in results if r.error is not None)
    counts['total'] = len(results)
    return counts


def results_to_dataframe(results: Sequence[ValidationResult]) -> pd.DataFrame:
    """Tabulate results, one row per checkpoint."""
    columns = ['distribution', 'point', 'status', 'tier', 'delta', 'reference', 'computed', 'error']
    rows = [
        {
            'distribution': r.distribution,
            'point': r.point,
            'status': r.status,
            'tier': r.tier.value,
            'delta': r.delta,
            'reference': r.reference,
            'computed': r.computed,
            'error': r.error,
        }
        for r in results
    ]
    return pd.DataFrame(rows, columns=columns)


class ChecksumValidator:
    """
    Class-based interface for checksum validation.

    Holds a document and its workspace and delegates to the functional API.
    """

    def __init__(
        self,
        document: ModelDocument,
        workspace: Optional[Mapping] = None,
        build_config: Optional[BuildConfig] = None,
        config: Optional[ValidationConfig] = None,
    ):
        self.document = document
        self.config = config or ValidationConfig()
        self.workspace = workspace if workspace is not None else populate(document, config=build_config)
        self.results: Optional[List[ValidationResult]] = None

    def validate(self) -> List[ValidationResult]:
        self.results = validate(
            self.workspace,
            self.document.checkpoints,
            self.document.parameter_points,
            config=self.config,
        )
        return self.results

    def _require_results(self) -> None:
        if self.results is None:
            raise RuntimeError("Must call validate() first")

    @property
    def passed(self) -> bool:
        """True if no checkpoint is a Mismatch."""
        self._require_results()
        return all(r.tier is not Tier.MISMATCH for r in self.results)

    @property
    def all_exact(self) -> bool:
        self._require_results()
        return all(r.tier is Tier.EXACT for r in self.results)

    def to_dataframe(self) -> pd.DataFrame:
        self._require_results()
        return results_to_dataframe(self.results)

    def get_report(self) -> str:
        """Get formatted validation report."""
        if self.results is None:
            return "Validation has not been run. Call .validate() first."

        lines = [f"\n{' Amplitude Model Checksums ':=^60}"]
        if not self.results:
            lines.append(" (document has no checkpoints)")
        for r in self.results:
            detail = r.error if r.error is not None else f"delta = {r.delta:.3e}"
            lines.append(f" ▸ {r.distribution} @ {r.point}: {r.status} ({detail})")
        counts = summarize(self.results)
        lines.append('-' * 60)
        lines.append(
            f" Exact: {counts['Exact']}  Approximate: {counts['Approximate']}  "
            f"Mismatch: {counts['Mismatch']}  Errors: {counts['errors']}"
        )
        lines.append('=' * 60)
        return "\n".join(lines)
