"""
Functions that manipulate with XML.

Documents are handled with lxml. The XML declaration is copied verbatim from the
input and only the whitespace around added or removed nodes is touched, so the rest
of a document keeps its formatting. lxml still writes attributes in double quotes
and empty elements in their short form when it serializes a document.
"""

import re
from typing import Optional

from lxml import etree


XML_DECLARATION_RE = re.compile(r"\s*<\?xml\b.*?\?>\s*", re.DOTALL)
XML_DECLARATION_BYTES_RE = re.compile(rb"\s*<\?xml\b.*?\?>\s*", re.DOTALL)
XML_ENCODING_RE = re.compile(r"""encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")


def _parser():
    # never resolve entities or touch the network while reading descriptors
    return etree.XMLParser(remove_blank_text=False, resolve_entities=False, no_network=True)


def xml_declaration(text):
    """
    Return the XML declaration of ``text`` together with the whitespace
    that follows it, or an empty string (bytes) if there is none.
    """
    if isinstance(text, bytes):
        match = XML_DECLARATION_BYTES_RE.match(text)
        return match.group(0) if match else b""
    match = XML_DECLARATION_RE.match(text)
    return match.group(0) if match else ""


def has_xml_declaration(text) -> bool:
    return bool(xml_declaration(text))


def xml_fromstring(text):
    """
    Parse ``text`` and return the root element.

    Pass bytes read from a file, lxml decodes them according to the declared encoding.
    A str is encoded with the encoding its declaration names first,
    because lxml refuses str input that carries an encoding declaration.

    Raises ``lxml.etree.XMLSyntaxError`` on malformed input.
    """
    if isinstance(text, str):
        match = XML_ENCODING_RE.search(xml_declaration(text))
        text = text.encode(match.group(1) if match else "utf-8")
    return etree.fromstring(text, parser=_parser())


def xml_tostring(root, like=None):
    """
    Serialize the whole document ``root`` belongs to.

    When ``like`` is given, the result follows its outer shape: the result has the
    type of ``like`` (bytes are encoded in the document's encoding), the XML declaration
    of ``like`` is copied as it is and a trailing newline is added only if ``like`` ends with one.
    """
    tree = root.getroottree()

    if isinstance(like, bytes):
        encoding = tree.docinfo.encoding or "UTF-8"
        result = xml_declaration(like) + etree.tostring(tree, encoding=encoding, xml_declaration=False)
        if like.endswith(b"\n") and not result.endswith(b"\n"):
            result += b"\n"
        return result

    result = etree.tostring(tree, encoding="unicode")
    if like is None:
        return result
    result = xml_declaration(like) + result
    if like.endswith("\n") and not result.endswith("\n"):
        result += "\n"
    return result


def _indentation(node) -> Optional[str]:
    """
    Return the whitespace in front of ``node`` if it starts on a new line.
    """
    previous = node.getprevious()
    if previous is not None:
        text = previous.tail
    elif node.getparent() is not None:
        text = node.getparent().text
    else:
        return None
    if text is not None and not text.strip() and "\n" in text:
        return text
    return None


def xml_append(parent, child, space: str = "  "):
    """
    Append ``child`` to ``parent`` and indent it like its siblings.

    Only the whitespace right before and after ``child`` changes,
    the formatting of the existing nodes stays as it is.
    """
    level = sum(1 for _ in parent.iterancestors())

    if len(parent):
        last = parent[-1]
        closing = last.tail
        if closing is None or closing.strip() or "\n" not in closing:
            closing = "\n" + space * level
        inner = _indentation(parent[0]) or closing + space
        last.tail = inner
    else:
        closing = parent.text
        if closing is None or closing.strip() or "\n" not in closing:
            closing = _indentation(parent) or "\n" + space * level
        inner = closing + space
        parent.text = inner

    parent.append(child)
    child.tail = closing


def xml_remove(node):
    """
    Detach ``node`` from its parent.

    lxml drops the node's tail together with the node; if it was the last child,
    the tail carries the indentation of the parent's closing tag and is moved to
    the preceding sibling (or the parent's text).
    """
    parent = node.getparent()
    if parent is None:
        raise ValueError("Cannot remove the root element")

    if node.getnext() is None and node.tail is not None:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = node.tail
        else:
            parent.text = node.tail

    parent.remove(node)
