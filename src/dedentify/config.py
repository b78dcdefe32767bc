"""
Runtime Configuration Store.

Holds the match configuration (marker names or a custom predicate) and the
edit toggles of the dedent transform. Options may be given in snake_case or in
camelCase (``tagName``, ``keepFunctionCall``, ``trimLeft``, ``trimRight``,
``shouldDedent``).

Project defaults are read from the ``[tool.dedentify]`` table of the nearest
``pyproject.toml``.
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

DEFAULT_TAG_NAME = "dedent"

# Predicate signature: (candidate_expression, is_named_identifier) -> bool
ShouldDedent = Callable[..., Any]

_CAMEL_CASE_OPTIONS = {
  "tagName": "tag_name",
  "keepFunctionCall": "keep_function_call",
  "trimLeft": "trim_left",
  "trimRight": "trim_right",
  "shouldDedent": "should_dedent",
}


def _snake_case_keys(options: Dict[str, Any]) -> Dict[str, Any]:
  """Maps camelCase option names onto field names."""
  return {_CAMEL_CASE_OPTIONS.get(k, k): v for k, v in options.items()}


class DedentConfig(BaseModel):
  """
  Configuration for matching and dedenting marked templates.
  """

  model_config = ConfigDict(extra="forbid")

  tag_name: List[str] = Field(
    default_factory=lambda: [DEFAULT_TAG_NAME],
    validation_alias=AliasChoices("tag_name", "tagName"),
    description="Marker identifier name(s). A single string is a one-element set.",
  )
  keep_function_call: bool = Field(
    False,
    validation_alias=AliasChoices("keep_function_call", "keepFunctionCall"),
    description="If True, leave the call/tag wrapper in place and only rewrite its text.",
  )
  trim_left: bool = Field(
    True,
    validation_alias=AliasChoices("trim_left", "trimLeft"),
    description="Remove the leading newline of the first segment.",
  )
  trim_right: bool = Field(
    True,
    validation_alias=AliasChoices("trim_right", "trimRight"),
    description="Remove the trailing indent-only line of the last segment.",
  )
  should_dedent: Optional[ShouldDedent] = Field(
    None,
    validation_alias=AliasChoices("should_dedent", "shouldDedent"),
    description="Custom predicate replacing name matching entirely.",
  )

  @field_validator("tag_name", mode="before")
  @classmethod
  def normalize_tag_name(cls, v: Union[str, List[str], Tuple[str, ...]]) -> List[str]:
    """
    Accepts a single name or a collection of names.

    Args:
        v: Raw option value.

    Returns:
        List[str]: Stripped, non-empty marker names.

    Raises:
        ValueError: If no usable name is given.
    """
    if isinstance(v, str):
      v = [v]
    names = [str(n).strip() for n in v]
    if not names or not all(names):
      raise ValueError("tag_name must contain at least one non-empty identifier")
    return names

  @property
  def names(self) -> FrozenSet[str]:
    """
    The accepted marker names as a set.

    Returns:
        FrozenSet[str]: Configured names.
    """
    return frozenset(self.tag_name)

  @classmethod
  def from_options(cls, options: Optional[Dict[str, Any]] = None, **kwargs: Any) -> "DedentConfig":
    """
    Builds a config from a plugin-style options mapping.

    Keys may use either spelling. Keyword arguments take precedence.

    Args:
        options: Options mapping (e.g. ``{"tagName": "md"}``).
        **kwargs: Additional options.

    Returns:
        DedentConfig: The validated configuration.
    """
    return cls.model_validate({**_snake_case_keys(options or {}), **_snake_case_keys(kwargs)})

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "DedentConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        search_path: Directory to start searching for TOML config. Defaults to cwd.
        **overrides: Option values; None entries are ignored.

    Returns:
        DedentConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the merged settings fail validation.
    """
    toml_config = _load_toml_settings(search_path or Path.cwd())
    explicit = {k: v for k, v in _snake_case_keys(overrides).items() if v is not None}

    try:
      return cls.model_validate({**_snake_case_keys(toml_config), **explicit})
    except ValidationError as e:
      raise ValueError(f"Invalid dedentify configuration: {e}")


def _load_toml_settings(start_path: Path) -> Dict[str, Any]:
  """
  Searches start_path and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path: Directory to start search from.

  Returns:
      Dict[str, Any]: The ``[tool.dedentify]`` table, or an empty dict.
  """
  if not tomllib:
    return {}

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      settings = dict(data.get("tool", {}).get("dedentify", {}))
      # Predicates are code, not data.
      settings.pop("should_dedent", None)
      settings.pop("shouldDedent", None)
      return settings

  return {}
