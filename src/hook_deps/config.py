"""
Runtime Configuration Store.

Holds the recognized hook names (the sole tunable parameter of the rewrite
core) and the file extensions processed by directory conversions. Values are
resolved from ``[tool.hook_deps]`` in the nearest ``pyproject.toml`` and then
overridden by explicit arguments (CLI flags).
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_HOOK_NAMES: Tuple[str, ...] = ("useMemo", "useEffect", "useCallback")
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs")

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the rewrite engine.
  """

  hook_names: List[str] = Field(
    default_factory=lambda: list(DEFAULT_HOOK_NAMES),
    description="Callee names whose calls receive a dependency array.",
  )
  extensions: List[str] = Field(
    default_factory=lambda: list(DEFAULT_EXTENSIONS),
    description="File suffixes picked up when converting a directory.",
  )

  @field_validator("hook_names")
  @classmethod
  def validate_hook_names(cls, v: List[str]) -> List[str]:
    """
    Ensures hook names are JavaScript identifiers, dropping duplicates.

    Args:
        v (List[str]): Raw names.

    Returns:
        List[str]: Stripped, deduplicated names in their original order.

    Raises:
        ValueError: If a name is not an identifier or the list is empty.
    """
    cleaned = list(dict.fromkeys(name.strip() for name in v))
    if not cleaned:
      raise ValueError("At least one hook name is required.")
    for name in cleaned:
      if not _JS_IDENTIFIER.match(name):
        raise ValueError(f"Invalid hook name: '{name}'")
    return cleaned

  @field_validator("extensions")
  @classmethod
  def validate_extensions(cls, v: List[str]) -> List[str]:
    """Normalizes suffixes to lowercase with a leading dot."""
    normalized = []
    for ext in v:
      ext = ext.strip().lower()
      if not ext:
        continue
      normalized.append(ext if ext.startswith(".") else f".{ext}")
    return list(dict.fromkeys(normalized))

  @classmethod
  def load(
    cls,
    hook_names: Optional[List[str]] = None,
    extra_hooks: Optional[List[str]] = None,
    extensions: Optional[List[str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        hook_names (Optional[List[str]]): Replaces the configured hook set.
        extra_hooks (Optional[List[str]]): Added on top of the resolved hook set.
        extensions (Optional[List[str]]): Replaces the configured suffixes.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the resolved values fail validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config = _load_toml_settings(start_dir)

    # 1. Hook names: CLI replaces TOML, which replaces defaults
    final_hooks = list(hook_names or toml_config.get("hook_names", DEFAULT_HOOK_NAMES))

    # 2. Extra hooks from both sources extend the set
    final_hooks.extend(toml_config.get("extra_hooks", []))
    final_hooks.extend(extra_hooks or [])

    # 3. Extensions
    final_extensions = list(extensions or toml_config.get("extensions", DEFAULT_EXTENSIONS))

    try:
      return cls(hook_names=final_hooks, extensions=final_extensions)
    except ValidationError as e:
      raise ValueError(f"Configuration validation failed: {e}")


def _load_toml_settings(start_path: Path) -> Dict[str, Any]:
  """
  Searches the directory and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Dict: The ``[tool.hook_deps]`` table, or an empty dict.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}
      return data.get("tool", {}).get("hook_deps", {})

  return {}
