"""
Override directives given on the command line.

Each argument has the form ``PROJECT/REPOSITORY`` or ``PROJECT/REPOSITORY:PACKAGE``.
The first form only adds the repository to the image sources,
the second one also makes PROJECT the only provider of PACKAGE in REPOSITORY.
"""

from typing import List
from typing import NamedTuple
from typing import Optional

from . import oscerr


class OverrideDirective(NamedTuple):
    project: str
    repository: str
    package: Optional[str] = None

    def __str__(self):
        result = f"{self.project}/{self.repository}"
        if self.package:
            result += f":{self.package}"
        return result

    @classmethod
    def from_string(cls, value: str) -> "OverrideDirective":
        if "/" not in value:
            raise oscerr.WrongArgs(f"Invalid argument (expected format is PROJECT/REPOSITORY[:PACKAGE]): {value}")

        project, rest = value.split("/", 1)
        package = None
        if ":" in rest:
            repository, package = rest.split(":", 1)
            if not package:
                raise oscerr.WrongArgs(f"Empty package name in argument: {value}")
        else:
            repository = rest

        if not project or not repository:
            raise oscerr.WrongArgs(f"Invalid argument (expected format is PROJECT/REPOSITORY[:PACKAGE]): {value}")

        return cls(project, repository, package)


class RepoArg(NamedTuple):
    project: str
    repository: str
    package_overrides: List[str]


def parse_directives(args) -> List[OverrideDirective]:
    return [OverrideDirective.from_string(i) for i in args]


def group_directives(directives) -> List[RepoArg]:
    """
    Collapse ``directives`` into distinct (project, repository) pairs in first-seen order,
    each carrying the packages overridden for that pair.
    """
    result = {}
    for directive in directives:
        key = (directive.project, directive.repository)
        repo_arg = result.setdefault(key, RepoArg(directive.project, directive.repository, []))
        if directive.package and directive.package not in repo_arg.package_overrides:
            repo_arg.package_overrides.append(directive.package)
    return list(result.values())


def format_overrides(repo_args) -> List[str]:
    """
    Lines describing which project provides which package; empty if there are no ``repo_args``.
    """
    if not repo_args:
        return []

    lines = ["The following packages will be overridden:"]
    for repo_arg in repo_args:
        lines.append(f"  - {repo_arg.project}/{repo_arg.repository} will provide:")
        for package in repo_arg.package_overrides:
            lines.append(f"    - {package}")
    return lines
