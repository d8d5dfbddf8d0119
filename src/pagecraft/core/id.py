"""ID Generation.

ULID-based identifiers for components and projects.

- 80 random bits per id, so rapid creation (grouping, pasting) does not collide
- Sortable by creation millisecond; order within one millisecond is random
- Prefixed with the component type or a slug for readable logs
"""

import re
from typing import NewType

from ulid import ULID

ComponentID = NewType("ComponentID", str)
"""Component identifier (``<type>_<ULID>``)"""

ProjectID = NewType("ProjectID", str)
"""Project identifier (``<slug>_<ULID>``)"""


class Prefix:
    """Reserved id prefixes."""

    GROUP = "group"
    PROJECT = "project"


_SEPARATOR = "_"
_SLUG_STRIP = re.compile(r"[^a-z0-9-]+")
_WHITESPACE = re.compile(r"\s+")


def generate_raw() -> str:
    """Generate ULID without prefix."""
    return str(ULID())


def generate_prefixed(prefix: str) -> str:
    """Generate ``<prefix>_<ULID>``."""
    return f"{prefix}{_SEPARATOR}{generate_raw()}"


def new_component_id(component_type: str) -> ComponentID:
    """Generate a component id carrying its type."""
    return ComponentID(generate_prefixed(component_type))


def new_group_id() -> ComponentID:
    """Generate id for a grouping container."""
    return ComponentID(generate_prefixed(Prefix.GROUP))


def slugify(name: str) -> str:
    """Lowercase, whitespace to hyphens, drop everything else."""
    slug = _WHITESPACE.sub("-", name.strip().lower())
    slug = _SLUG_STRIP.sub("", slug)
    return slug or Prefix.PROJECT


def new_project_id(name: str) -> ProjectID:
    """Generate a project id from its name and the current time."""
    return ProjectID(generate_prefixed(slugify(name)))
