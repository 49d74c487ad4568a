"""rn-scaffold scaffolder -- writes React Native project structures.

This package turns a tree description (built from Jinja2 templates and a
``ScaffoldOptions`` record) into directories, files and per-directory
``README.md`` descriptions.

Quick usage::

    from rn_scaffold.scaffolder import ProjectGenerator
    from rn_scaffold.config import ScaffoldOptions

    generator = ProjectGenerator(ScaffoldOptions(include_redux=False))
    result = await generator.generate("/path/to/workspace", "MyAwesomeApp")
"""

from rn_scaffold.scaffolder.component import ComponentGenerator, ComponentResult
from rn_scaffold.scaffolder.materializer import (
    MaterializeResult,
    TreeMaterializer,
    describe,
)
from rn_scaffold.scaffolder.project import ProjectGenerator
from rn_scaffold.scaffolder.templates import TemplateRenderer
from rn_scaffold.scaffolder.tree import ABSENT, Absent, Directory, File, from_mapping

__all__ = [
    "ABSENT",
    "Absent",
    "ComponentGenerator",
    "ComponentResult",
    "Directory",
    "File",
    "MaterializeResult",
    "ProjectGenerator",
    "TemplateRenderer",
    "TreeMaterializer",
    "describe",
    "from_mapping",
]
