"""Resource descriptors and the path specs that expand into them."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ResourceDescriptor:
    """A discovered file or directory plus the template fields merged into it."""

    src: str | None = None
    src_dir: str | None = None
    dir: str | None = None
    enoent: bool = False
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PathSpec:
    """A bare path to expand."""

    path: str


@dataclass
class ResourceSpec:
    """A path to expand together with fields merged into every result."""

    src: str
    fields: dict[str, Any] = field(default_factory=dict)


Spec = PathSpec | ResourceSpec | ResourceDescriptor

_DESCRIPTOR_KEYS = {"src", "srcDir", "src_dir", "dir", "enoent"}


def as_spec(raw: Any) -> Spec:
    """Discriminate a raw input into a tagged spec.

    Strings become PathSpecs, mappings with ``src`` become ResourceSpecs and
    descriptors pass through untouched.
    """
    if isinstance(raw, (PathSpec, ResourceSpec, ResourceDescriptor)):
        return raw
    if isinstance(raw, str):
        return PathSpec(raw)
    if isinstance(raw, Mapping) and raw.get("src"):
        fields = {k: v for k, v in raw.items() if k != "src"}
        return ResourceSpec(src=raw["src"], fields=fields)
    if isinstance(raw, Mapping):
        return cast(raw)
    raise TypeError(f"Cannot expand resource of type {type(raw).__name__}")


def cast(raw: Any) -> ResourceDescriptor:
    """Normalize a string or mapping into a descriptor."""
    if isinstance(raw, ResourceDescriptor):
        return raw
    if isinstance(raw, str):
        return ResourceDescriptor(src=raw)
    if isinstance(raw, Mapping):
        return ResourceDescriptor(
            src=raw.get("src"),
            src_dir=raw.get("src_dir", raw.get("srcDir")),
            dir=raw.get("dir"),
            enoent=bool(raw.get("enoent", False)),
            fields={k: v for k, v in raw.items() if k not in _DESCRIPTOR_KEYS},
        )
    raise TypeError(f"Cannot cast {type(raw).__name__} to a resource")


def source(resource: ResourceDescriptor) -> str:
    """The string a descriptor is sorted by."""
    return resource.src or resource.dir or ""


def sort_key(resource: ResourceDescriptor) -> tuple[str, str]:
    """Case-insensitive collation, ties broken by code point."""
    name = source(resource)
    return (name.casefold(), name)
