"""Environment variable overrides for resolved configuration keys."""

from collections.abc import Iterator, Mapping
from typing import Any


def env_var_name(key_path: str, prefix: str = "", replacement: str = "_") -> str:
    """Derive the environment variable name for a dotted key path.

    "db.host" with prefix "app" becomes "APP_DB_HOST".
    """
    name = f"{prefix}_{key_path}" if prefix else key_path
    return name.upper().replace(".", replacement)


def _iter_leaves(
    mapping: Mapping[str, Any], parents: tuple[str, ...] = ()
) -> Iterator[tuple[str, ...]]:
    for key, value in mapping.items():
        parts = (*parents, str(key))
        if isinstance(value, Mapping) and value:
            yield from _iter_leaves(value, parts)
        else:
            yield parts


def iter_leaf_paths(mapping: Mapping[str, Any]) -> Iterator[str]:
    """Yield the dotted path of every non-mapping value in a nested mapping."""
    for parts in _iter_leaves(mapping):
        yield ".".join(parts)


def apply_env_overrides(
    store: dict[str, Any],
    environ: Mapping[str, str],
    prefix: str = "",
    replacement: str = "_",
    allow_empty: bool = False,
) -> list[str]:
    """Replace store leaves with matching environment variable values.

    Only keys already present in the store are considered. Values are
    kept as raw strings; coercion happens when unmarshaling into the target.

    Args:
        store: Resolution store, modified in place
        environ: Environment to read from
        prefix: Optional env prefix, upper-cased and joined with "_"
        replacement: Replacement for "." in derived names
        allow_empty: Whether a set-but-empty variable counts as an override

    Returns:
        Names of the environment variables that were applied
    """
    applied: list[str] = []
    for parts in list(_iter_leaves(store)):
        name = env_var_name(".".join(parts), prefix, replacement)
        value = environ.get(name)
        if value is None or (value == "" and not allow_empty):
            continue
        node = store
        for part in parts[:-1]:
            node = node[part]
        node[parts[-1]] = value
        applied.append(name)
    return applied
