"""
Reading and filtering of the buildinfo documents produced by the build service.

A buildinfo lists the repository path of the build (``<path project=... repository=...>``)
and every build dependency (``<bdep name=... project=... repository=...>``) together with
the project that was resolved to provide it.
"""

from typing import List
from typing import Optional
from typing import Tuple

from . import oscerr
from .output import print_msg
from .util.xml import xml_fromstring
from .util.xml import xml_remove
from .util.xml import xml_tostring


def buildinfo_paths(buildinfo_text) -> List[Tuple[str, str]]:
    """
    Return distinct (project, repository) pairs of all ``path`` elements in document order.
    """
    root = xml_fromstring(buildinfo_text)
    result = []
    for path in root.iter("path"):
        project = path.get("project")
        repository = path.get("repository")
        if project is None or repository is None:
            print_msg(f"Skipping incomplete path element: project={project} repository={repository}", print_to="debug")
            continue
        if (project, repository) not in result:
            result.append((project, repository))
    return result


def buildinfo_error(buildinfo_text) -> Optional[str]:
    """
    Return the text of the ``error`` element the build service puts into an unresolvable buildinfo.
    """
    root = xml_fromstring(buildinfo_text)
    error = root.find("error")
    if error is None:
        return None
    return (error.text or "").strip() or "unknown error"


def check_buildinfo(buildinfo_text):
    error = buildinfo_error(buildinfo_text)
    if error is None:
        return
    if error.startswith("unresolvable: "):
        error = "unresolvable:\n     " + "\n     ".join(error[14:].split(","))
    raise oscerr.BuildinfoError(f"buildinfo is broken... it says: {error}")


def filter_buildinfo(buildinfo_text, directives):
    """
    Remove ``bdep`` entries that are provided by a project other than the one
    a directive picked for the package in the given repository.

    Directives without a package don't remove anything.
    Entries not matched by any directive are kept in their original order.
    Bytes in, bytes in the document's encoding out.
    """
    root = xml_fromstring(buildinfo_text)

    for directive in directives:
        if not directive.package:
            continue
        matches = root.xpath(
            "//bdep[@name = $name and @repository = $repository and @project != $project]",
            name=directive.package,
            repository=directive.repository,
            project=directive.project,
        )
        for bdep in matches:
            print_msg(
                f"Removing bdep '{bdep.get('name')}' provided by '{bdep.get('project')}/{bdep.get('repository')}'",
                print_to="debug",
            )
            xml_remove(bdep)

    return xml_tostring(root, like=buildinfo_text)
