"""
Patching of kiwi image descriptors.

The product descriptor generated by the build service lists its package sources as
``instrepo`` elements under ``instsource``. Before a local build they are replaced with
the repositories the buildinfo resolved against, followed by the repositories picked on
the command line, numbered by priority in that order.
"""

from typing import List
from typing import Tuple

from lxml import etree

from . import oscerr
from .buildinfo import buildinfo_paths
from .output import print_msg
from .util.xml import xml_append
from .util.xml import xml_fromstring
from .util.xml import xml_remove
from .util.xml import xml_tostring


OBS_SCHEME = "obs://"


def repository_paths(buildinfo_text, directives) -> List[Tuple[str, str]]:
    """
    Return the ordered (project, repository) pairs the descriptor should list.

    Pairs from the buildinfo come first, then the pairs from ``directives``.
    Each list is deduplicated on its own, so a pair present in both lists appears twice.
    """
    custom_paths = []
    for directive in directives:
        pair = (directive.project, directive.repository)
        if pair not in custom_paths:
            custom_paths.append(pair)
    return buildinfo_paths(buildinfo_text) + custom_paths


def patch_kiwi(kiwi_text, buildinfo_text, directives, scheme=OBS_SCHEME, fname="<kiwi>"):
    """
    Return ``kiwi_text`` with all ``instrepo`` elements replaced by one element per
    repository path; priorities start at 1 and follow the order of ``repository_paths()``.
    The result is bytes in the descriptor's encoding if ``kiwi_text`` is bytes.
    """
    root = xml_fromstring(kiwi_text)
    paths = repository_paths(buildinfo_text, directives)

    for instrepo in root.xpath("//instrepo"):
        xml_remove(instrepo)

    instsource = root.find(".//instsource")
    if instsource is None and root.tag == "instsource":
        instsource = root
    if instsource is None:
        if paths:
            raise oscerr.KiwiError(fname, "the descriptor contains no 'instsource' element")
        return xml_tostring(root, like=kiwi_text)

    for num, (project, repository) in enumerate(paths, 1):
        instrepo = etree.Element("instrepo", name=f"obsrepository_{num}", priority=str(num), local="true")
        xml_append(instsource, instrepo)
        xml_append(instrepo, etree.Element("source", path=f"{scheme}{project}/{repository}"))
        print_msg(f"Adding instrepo {num}: {scheme}{project}/{repository}", print_to="debug")

    return xml_tostring(root, like=kiwi_text)


def kiwi_repositories(kiwi_text) -> List[Tuple[str, int, str]]:
    """
    Return (name, priority, source path) of every ``instrepo`` in the descriptor.
    """
    root = xml_fromstring(kiwi_text)
    result = []
    for instrepo in root.xpath("//instrepo"):
        source = instrepo.find("source")
        path = source.get("path") if source is not None else None
        result.append((instrepo.get("name"), int(instrepo.get("priority", "0")), path))
    return result
