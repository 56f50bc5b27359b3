"""Name-based lookups over parsed document trees."""

from typing import Iterator, Optional, Tuple

from collada_lite.tree.nodes import (
    Attribute,
    ClosedTag,
    Header,
    Node,
    Numbers,
    StringAttr,
    Tag,
)


def find_child_by_name(tree: Node, name: str) -> Optional[Tag]:
    """Return the direct ``Tag`` child of ``tree`` called ``name``.

    When several children share the name the *last* one is returned. Only
    ``Tag`` nodes are searched; self-closing children are never matched.
    """
    if not isinstance(tree, Tag):
        return None
    found: Optional[Tag] = None
    for child in tree.children:
        if isinstance(child, Tag) and child.name == name:
            found = child
    return found


def extract_numbers(tree: Optional[Node]) -> Optional[Tuple[float, ...]]:
    """Return the numbers held by a ``Tag`` whose first child is a number run."""
    if not isinstance(tree, Tag) or not tree.children:
        return None
    first = tree.children[0]
    if isinstance(first, Numbers):
        return first.values
    return None


def first_attribute(tree: Node) -> Optional[Attribute]:
    """Return the first attribute of an element."""
    if isinstance(tree, (Tag, ClosedTag)) and tree.attributes:
        return tree.attributes[0]
    return None


def find_source(mesh: Node, key: str) -> Optional[Tag]:
    """Find the child whose leading ``id`` attribute contains ``key``.

    Mirrors :func:`find_child_by_name`: the last matching child wins.
    """
    if not isinstance(mesh, Tag):
        return None
    found: Optional[Tag] = None
    for child in mesh.children:
        if not isinstance(child, Tag):
            continue
        attribute = first_attribute(child)
        if (
            isinstance(attribute, StringAttr)
            and attribute.name == "id"
            and key in attribute.value
        ):
            found = child
    return found


def find_path(tree: Optional[Node], *names: str) -> Optional[Tag]:
    """Follow ``names`` through nested children, stopping at the first gap.

    A ``Header`` at the start of the walk is stepped through transparently.
    """
    current: Optional[Node] = tree
    if isinstance(current, Header):
        current = current.child
    for name in names:
        if current is None:
            return None
        current = find_child_by_name(current, name)
    if isinstance(current, Tag):
        return current
    return None


def iter_nodes(tree: Node) -> Iterator[Node]:
    """Yield every node of ``tree`` in document order."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Header):
            stack.append(node.child)
        elif isinstance(node, Tag):
            stack.extend(reversed(node.children))


def count_elements(tree: Node) -> int:
    """Count ``Tag`` and ``ClosedTag`` nodes in ``tree``."""
    return sum(1 for node in iter_nodes(tree) if isinstance(node, (Tag, ClosedTag)))


def max_depth(tree: Node) -> int:
    """Return the deepest element nesting level (0 for an empty tree)."""
    if isinstance(tree, Header):
        return max_depth(tree.child)
    if isinstance(tree, ClosedTag):
        return 1
    if isinstance(tree, Tag):
        return 1 + max((max_depth(child) for child in tree.children), default=0)
    return 0
