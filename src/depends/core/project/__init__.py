"""Project and solution analysis from restore artifacts.

Public API::

    from depends.core.project import LockFileAssembler, SolutionAggregator

    graph = LockFileAssembler().assemble("src/App/App.csproj")
    graph = SolutionAggregator().aggregate("App.sln")
"""

from depends.core.project.assembler import LockFileAssembler
from depends.core.project.evaluation import (
    PackageReference,
    ProjectEvaluation,
    ProjectEvaluator,
    ProjectItem,
)
from depends.core.project.msbuild import MSBuildProjectEvaluator
from depends.core.project.solution import SolutionProject, read_solution
from depends.core.project.workspace import SolutionAggregator

__all__ = [
    "LockFileAssembler",
    "MSBuildProjectEvaluator",
    "PackageReference",
    "ProjectEvaluation",
    "ProjectEvaluator",
    "ProjectItem",
    "SolutionAggregator",
    "SolutionProject",
    "read_solution",
]
