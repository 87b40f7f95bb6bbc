"""momo scaffolder -- generates turbo monorepos and their apps and packages.

Quick usage::

    from momo.scaffolder import ProjectGenerator, ProjectOptions

    options = ProjectOptions(name="my-monorepo", scope="@acme", manager="pnpm")
    project_path = await ProjectGenerator(options).generate("/tmp/my-monorepo")
"""

from momo.scaffolder.component import ComponentGenerator, add_component
from momo.scaffolder.generator import ProjectGenerator, ProjectOptions, create_project
from momo.scaffolder.templates import TemplateRenderer

__all__ = [
    "ComponentGenerator",
    "ProjectGenerator",
    "ProjectOptions",
    "TemplateRenderer",
    "add_component",
    "create_project",
]
