"""
Parameter catalogue for the dashboard assistant.

This module loads the fixed set of monitored well parameters and the alias
table that maps free-text phrases to parameter ids. The catalogue is built once
and shared read-only by the resolver, classifier and action builder.
"""
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from dashboard_assistant.config import get_catalogue_path


class CatalogueError(ValueError):
    """Raised when the parameter catalogue or alias table is invalid."""


class Parameter(BaseModel):
    """A monitored sensor quantity."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    unit: str
    groups: Tuple[str, ...] = ()


class Catalogue:
    """
    Immutable parameter catalogue and alias table.

    Aliases keep the order they were declared in, parameter by parameter, so
    that alias scans are reproducible.
    """

    def __init__(self, parameters: List[Parameter], aliases: Dict[str, str]):
        self._parameters = tuple(parameters)
        self._by_id = MappingProxyType({p.id: p for p in self._parameters})
        self._aliases = MappingProxyType(dict(aliases))

    @property
    def parameters(self) -> Tuple[Parameter, ...]:
        return self._parameters

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self._parameters)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def get(self, param_id: str) -> Optional[Parameter]:
        return self._by_id.get(param_id)

    def label(self, param_id: str) -> str:
        """Display label for a parameter id, or the id itself if unknown."""
        param = self._by_id.get(param_id)
        return param.label if param else param_id

    def group(self, name: str) -> Tuple[str, ...]:
        """Ids of the parameters in a semantic group, in catalogue order."""
        return tuple(p.id for p in self._parameters if name in p.groups)

    def __contains__(self, param_id: object) -> bool:
        return param_id in self._by_id

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return "Catalogue(ids={}, aliases={})".format(list(self.ids), len(self._aliases))


def load_yaml_config(filepath: Union[str, Path], required_key: str = None) -> dict:
    """Load a YAML configuration file with error handling."""
    filepath = Path(filepath)
    try:
        with open(filepath, 'r', encoding='utf-8') as file:
            config = yaml.safe_load(file)
    except FileNotFoundError:
        raise CatalogueError(f"Configuration file not found: {filepath}")
    except yaml.YAMLError as e:
        raise CatalogueError(f"Invalid YAML in {filepath.name}: {str(e)}")
    if config is None:
        raise CatalogueError(f"Empty configuration file: {filepath.name}")
    if required_key and required_key not in config:
        raise CatalogueError(f"Missing required key '{required_key}' in {filepath.name}")
    return config[required_key] if required_key else config


def build_catalogue(entries: List[dict]) -> Catalogue:
    """
    Build a catalogue from parameter entries.

    Each entry holds ``id``, ``label``, ``unit`` and optional ``groups`` and
    ``aliases``. The id is always registered as an alias of itself.

    Raises:
        CatalogueError: On duplicate ids, malformed entries, or an alias that
            refers to more than one parameter
    """
    if not isinstance(entries, list) or not entries:
        raise CatalogueError("Catalogue must define a non-empty list of parameters")

    parameters: List[Parameter] = []
    aliases: Dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            raise CatalogueError(f"Parameter entry must be a mapping, got {type(entry).__name__}")
        try:
            param = Parameter(
                id=entry.get("id"),
                label=entry.get("label"),
                unit=entry.get("unit"),
                groups=tuple(entry.get("groups") or ()),
            )
        except ValidationError as e:
            raise CatalogueError(f"Invalid parameter entry {entry.get('id')!r}: {e}")
        if any(p.id == param.id for p in parameters):
            raise CatalogueError(f"Duplicate parameter id '{param.id}'")
        parameters.append(param)

        phrases = [param.id] + [str(a) for a in (entry.get("aliases") or [])]
        for phrase in phrases:
            phrase = phrase.strip().lower()
            if not phrase:
                continue
            owner = aliases.setdefault(phrase, param.id)
            if owner != param.id:
                raise CatalogueError(
                    f"Alias '{phrase}' maps to both '{owner}' and '{param.id}'"
                )

    return Catalogue(parameters, aliases)


def load_catalogue(path: Union[str, Path, None] = None) -> Catalogue:
    """Load the catalogue from a YAML file (defaults to the bundled one)."""
    path = Path(path) if path else get_catalogue_path()
    entries = load_yaml_config(path, "parameters")
    catalogue = build_catalogue(entries)
    print(f"Loaded parameter catalogue from {path.name}: {len(catalogue)} parameters, "
          f"{len(catalogue.aliases)} aliases")
    return catalogue


@lru_cache(maxsize=1)
def get_default_catalogue() -> Catalogue:
    return load_catalogue()
