from collections.abc import Iterator

from tree_sitter import Node as TSNode


def iter_nodes(node: TSNode, node_type: str | None = None) -> Iterator[TSNode]:
    """Yield ``node`` and its descendants in document order.

    Args:
        node: Root of the subtree to walk.
        node_type: When given, only nodes of this type are yielded.
    """
    stack: list[TSNode] = [node]
    while stack:
        current = stack.pop()
        if node_type is None or current.type == node_type:
            yield current
        stack.extend(reversed(current.children))
