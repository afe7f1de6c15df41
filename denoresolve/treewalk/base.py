"""
Base classes for tree traversal
"""

from denoresolve.common.defaults import ResourceLimits


class TreeVisitor:
    """
    Base visitor class for traversing syntax tree nodes

    Dispatches each node to 'visit_<node type>' when defined, otherwise to
    generic_visit which descends into the children
    """

    def __init__(self, logger=None):
        self.logger = logger
        self._depth = 0
        self._max_depth = ResourceLimits.MAX_TREE_DEPTH

    def visit(self, node):
        """
        Visit a node and return the result

        Args:
            node (object): The tree node to visit

        Returns:
            The result of visiting the node
        """
        if node is None:
            return None

        if self._depth >= self._max_depth:
            if self.logger:
                self.logger.warning(f"Tree depth limit ({self._max_depth}) reached, skipping deeper nodes")
            return None

        node_type_str = str(node.type).strip()
        method = getattr(self, f"visit_{node_type_str.replace('-', '_')}", self.generic_visit)

        self._depth += 1
        try:
            try:
                return method(node)
            except RecursionError:
                # Gracefully stop traversal if Python recursion limit is hit
                if self.logger:
                    self.logger.warning("Python recursion limit reached during tree traversal; stopping descent")
                return None
        finally:
            self._depth -= 1

    def generic_visit(self, node):
        """
        Default visit method that traverses all children

        Args:
            node (object): The tree node whose children to visit
        """
        if node is None:
            return

        for child in node.children:
            self.visit(child)
