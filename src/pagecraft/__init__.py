"""Page-builder editor core: component tree, history, layout and document schema."""

from pagecraft.editor import EditorSession
from pagecraft.schema import SCHEMA_VERSION, PageSchema, ProjectData
from pagecraft.tree import Component

__version__ = "0.1.0"

__all__ = ["EditorSession", "SCHEMA_VERSION", "PageSchema", "ProjectData", "Component", "__version__"]
