from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from amplitude_model.errors import DuplicateNameError, InvalidComponentError

__all__ = ['index_by_name', 'record_name']


def record_name(record: Any) -> str:
    """Return the ``name`` of a mapping record or of an object with a ``name`` attribute."""
    if isinstance(record, Mapping):
        name = record.get('name')
    else:
        name = getattr(record, 'name', None)
    if not isinstance(name, str):
        raise InvalidComponentError(f"Record has no string 'name' field: {record!r}")
    return name


def index_by_name(
    records: Iterable[Any],
    extract: Optional[Callable[[Any], Any]] = None,
    *,
    context: str = "records",
) -> Dict[str, Any]:
    """Index ``records`` by their ``name``.

    Args:
        records: Sequence of mappings (or objects) carrying a ``name``
        extract: Optional projection applied to each record, e.g. to pull out
            a numeric ``value`` so the result can serve as an evaluation context
        context: Label used in the duplicate-name error message

    Returns:
        Insertion-ordered ``name -> record`` (or ``name -> extract(record)``)

    Raises:
        DuplicateNameError: If two records share a name
        InvalidComponentError: If a record has no name
    """
    index: Dict[str, Any] = {}
    for record in records:
        name = record_name(record)
        if name in index:
            raise DuplicateNameError(name, context)
        index[name] = extract(record) if extract is not None else record
    return index
