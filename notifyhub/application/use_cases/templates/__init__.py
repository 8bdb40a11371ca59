"""Template-related use cases."""

from .create_template import create_template
from .delete_template import delete_template
from .get_template import get_template
from .list_templates import list_templates
from .preview_template import preview_template
from .rendering import extract_variables, render_template
from .update_template import update_template

__all__ = [
    "create_template",
    "delete_template",
    "extract_variables",
    "get_template",
    "list_templates",
    "preview_template",
    "render_template",
    "update_template",
]
