#
# Copyright (c) 2023 Radiance Technologies, Inc.
#
# This file is part of SEXPKIT.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program. If not, see
# <http://www.gnu.org/licenses/>.
#
"""
Defines an abstract representation of s-expressions as nodes in trees.
"""

import abc
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple, Union

import numpy as np

from sexpkit.language.sexp.exception import IllegalSexpOperationException


class SexpNode(abc.ABC):
    """
    Abstract class of a node in an s-exp represented as a tree.

    The only concrete subclasses are `SexpAtom` and `SexpList`.
    Nodes are immutable once constructed and compare structurally.
    """

    class RecurAction(Enum):
        """
        Records the result of a recursively applied function.
        """

        ContinueRecursion = 0
        StopRecursion = 1

    __slots__ = ()

    def __getitem__(self, index: Union[int, slice]):
        """
        Get the `index`-th child of this node.

        Parameters
        ----------
        index : int or slice
            The index of the requested child.

        Returns
        -------
        SexpNode or tuple of SexpNode
            The requested child node(s).

        Raises
        ------
        IllegalSexpOperationException
            If the node has no children, i.e., it is an atom.
        IndexError
            If the index is out of bounds.
        """
        return self.children[index]

    def __iter__(self) -> Iterator['SexpNode']:
        """
        Iterate over the immediate children of this node.

        Raises
        ------
        IllegalSexpOperationException
            If the node has no children, i.e., it is an atom.
        """
        return iter(self.children)

    def __len__(self) -> int:
        """
        Get the number of immediate children.

        Returns
        -------
        int
            The number of immediate children of this node, which is
            zero for an atom.
        """
        children = self.get_children()
        return len(children) if children is not None else 0

    @abc.abstractmethod
    def __eq__(self, other: object) -> bool:  # noqa: D105
        ...

    @abc.abstractmethod
    def __hash__(self) -> int:  # noqa: D105
        ...

    def __repr__(self) -> str:  # noqa: D105
        return f"{type(self).__name__}({self})"

    @abc.abstractmethod
    def __str__(self) -> str:
        """
        Get a representation of this subtree as an s-expression.

        The representation parses back into an equal tree.
        """
        ...

    @property
    def children(self) -> Tuple['SexpNode', ...]:
        """
        Get the children of the SexpList, or throw exception.

        Raises
        ------
        IllegalSexpOperationException
            If the node is not a list.
        """
        children = self.get_children()
        if children is None:
            raise IllegalSexpOperationException(
                f"Type mismatch: expected list but got atom {self}")
        return children

    @property
    def content(self) -> str:
        """
        Get the content of the SexpAtom, or throw exception.

        Returns
        -------
        str
            The content of the node if it is an atom.

        Raises
        ------
        IllegalSexpOperationException
            If the content is None, i.e. the node is not an atom.
        """
        content = self.get_content()
        if content is None:
            raise IllegalSexpOperationException(
                f"Type mismatch: expected atom but got list {self}")
        else:
            return content
        # end if

    @property
    @abc.abstractmethod
    def height(self) -> int:
        """
        Get the height of the s-expression rooted at this node.

        Returns
        -------
        int
            The height of the tree rooted at this `SexpNode`.
        """
        ...

    @property
    @abc.abstractmethod
    def num_nodes(self) -> int:
        """
        Get the number of nodes in this node's subtree.
        """
        ...

    @property
    @abc.abstractmethod
    def num_leaves(self) -> int:
        """
        Get the number of leaves in this node's subtree.
        """
        ...

    @abc.abstractmethod
    def apply_recur(self, func: Callable[["SexpNode"], RecurAction]) -> None:
        """
        Apply a function in depth-first-search order to this subtree.

        Parameters
        ----------
        func : Callable[["SexpNode"], RecurAction]
            A function that modifies variables in its closure.
            If it returns `RecurAction.StopRecursion` for a list, the
            children of that list are not visited.
        """
        ...

    @abc.abstractmethod
    def contains_str(self, s: str) -> bool:
        """
        Return whether the given string is an atom in this subtree.
        """
        ...

    def flatten(self) -> List["SexpNode"]:
        """
        Flatten the s-expression tree according to a preorder traversal.

        Returns
        -------
        list of SexpNode
            The nodes contained in this s-expression tree in preorder
            (each node appears before any children).
        """
        node_list = []

        def _visit(node: SexpNode) -> SexpNode.RecurAction:
            node_list.append(node)
            return SexpNode.RecurAction.ContinueRecursion

        self.apply_recur(_visit)
        return node_list

    def get_children(self) -> Optional[Tuple["SexpNode", ...]]:
        """
        Get the children of this (list) node.

        Returns
        -------
        tuple of SexpNode or None
            This node's children if this is a list node, otherwise None.
        """
        return None

    def get_content(self) -> Optional[str]:
        """
        Get the content of this (atom) node.

        Returns
        -------
        str or None
            The node's content if this is an atom node, otherwise None.
        """
        return None

    def is_atom(self) -> bool:
        """
        Check if this node is an atom.
        """
        return False

    def is_list(self) -> bool:
        """
        Check if this node is a list.
        """
        return False

    @abc.abstractmethod
    def pretty_format(self, max_depth: float = np.inf) -> str:
        """
        Format this s-expression into a human-readable string.

        Parameters
        ----------
        max_depth : float, optional
            The maximum depth at which content should be printed, by
            default unbounded.
            Deeper lists are elided.

        Returns
        -------
        str
            A pretty human-readable string for this s-expression.
        """
        ...

    @abc.abstractmethod
    def to_python_ds(self) -> Union[str, list]:
        """
        Convert this s-expression to Python lists and strings.
        """
        ...

    @classmethod
    def deserialize(cls, data: str) -> 'SexpNode':
        """
        Parse the given s-expression into an `SexpNode`.

        Parameters
        ----------
        data : str
            A serialized s-expression.

        Returns
        -------
        SexpNode
            The parsed, deserialized s-expression.
        """
        # TODO: Refactor to remove circular reference.
        from sexpkit.language.sexp.parser import SexpParser
        return SexpParser.parse(data)
