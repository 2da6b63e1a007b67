"""Namespace-aware lookup and serialisation of XML elements."""

from __future__ import annotations

import copy

from lxml import etree


def first_set(a: str | None, b: str) -> str:
    """Return ``a`` unless it is empty, otherwise ``b``."""
    return a if a else b


def find_children(
    parent_el: etree._Element, namespace: str, tag: str
) -> list[etree._Element]:
    """Return the direct children of ``parent_el`` named ``tag`` in ``namespace``.

    Matching is on the resolved namespace URI, so the prefix used in the
    document does not matter.
    """
    matches = []
    for child in parent_el:
        if not isinstance(child.tag, str):
            continue
        name = etree.QName(child)
        if name.localname == tag and (name.namespace or "") == namespace:
            matches.append(child)
    return matches


def find_one_child(
    parent_el: etree._Element, namespace: str, tag: str
) -> etree._Element:
    """Return the single matching child; raise ValueError if there is not exactly one."""
    children = find_children(parent_el, namespace, tag)
    if not children:
        raise ValueError(f"cannot find {namespace}:{tag} element")
    if len(children) > 1:
        raise ValueError(f"expected exactly one {namespace}:{tag} element")
    return children[0]


def find_child(
    parent_el: etree._Element, namespace: str, tag: str
) -> etree._Element | None:
    """Return the matching child, or None; raise ValueError if there are several."""
    children = find_children(parent_el, namespace, tag)
    if not children:
        return None
    if len(children) > 1:
        raise ValueError(f"expected at most one {namespace}:{tag} element")
    return children[0]


def element_to_bytes(el: etree._Element) -> bytes:
    """Serialise ``el`` as a standalone document carrying every namespace it uses."""
    detached = copy.deepcopy(el)
    detached.tail = None
    return etree.tostring(detached, with_tail=False)


def element_to_string(el: etree._Element) -> str:
    """Serialise ``el`` like :func:`element_to_bytes`; return "" if that fails."""
    try:
        return element_to_bytes(el).decode("utf-8")
    except (ValueError, TypeError, etree.LxmlError):
        return ""