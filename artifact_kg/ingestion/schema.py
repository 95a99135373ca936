"""
Schema Resolution

Maps an artifact file name to the record kind it holds.

Matching policy:
    - Any path or URL prefix is stripped; only the base name is compared.
    - The base name must equal one of the seven canonical names exactly
      (case-sensitive), e.g. ``entities.parquet``.
    - Otherwise the literal prefix ``create_final_`` is stripped once and
      the comparison is retried, so ``create_final_entities.parquet`` also
      resolves. ``Create_Final_entities.parquet`` or ``ENTITIES.parquet``
      do not.
    - Anything else resolves to ``Unresolved``; callers skip such files.
"""

from artifact_kg.errors import UnresolvedSchemaError
from artifact_kg.types.records import CANONICAL_PREFIX, RecordKind, Unresolved

CANONICAL_FILE_NAMES: dict[str, RecordKind] = {kind.file_name: kind for kind in RecordKind}
"""Canonical base name -> kind, in canonical file order."""


def base_name(file_name: str) -> str:
    """Strip any ``/`` or ``\\`` separated prefix from a path or URL."""
    return file_name.replace("\\", "/").rsplit("/", 1)[-1]


def resolve(file_name: str) -> RecordKind | Unresolved:
    """
    Resolve a file name to its record kind.

    Args:
        file_name: Bare name, filesystem path or URL

    Returns:
        The matching RecordKind, or Unresolved(file_name) if none matches
    """
    name = base_name(file_name)

    kind = CANONICAL_FILE_NAMES.get(name)
    if kind is not None:
        return kind

    if name.startswith(CANONICAL_PREFIX):
        kind = CANONICAL_FILE_NAMES.get(name[len(CANONICAL_PREFIX):])
        if kind is not None:
            return kind

    return Unresolved(file_name)


def require_kind(file_name: str) -> RecordKind:
    """
    Resolve a file name, raising if it is not a known artifact.

    Raises:
        UnresolvedSchemaError: If the name matches no record kind
    """
    result = resolve(file_name)
    if isinstance(result, Unresolved):
        raise UnresolvedSchemaError(file_name)
    return result
