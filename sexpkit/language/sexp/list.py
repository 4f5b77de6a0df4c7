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
Defines internal, non-leaf s-expression nodes with branching subtrees.
"""

from typing import Any, Callable, Iterable, Iterator, List, Tuple, Union

import numpy as np

from sexpkit.language.sexp.node import SexpNode


class SexpList(SexpNode):
    """
    An internal node of an s-expression tree with multiple branches.

    Display, comparison, hashing, and the tree metrics walk the subtree
    with an explicit stack and so accept lists of any nesting depth.
    `apply_recur`, `contains_str`, `pretty_format`, and `to_python_ds`
    recurse once per level of nesting.

    Parameters
    ----------
    children : Iterable[SexpNode], optional
        The ordered children of the list, by default none.
    """

    __slots__ = ("_children",)

    pprint_newline = "\n"
    pprint_tab = "  "

    def __init__(self, children: Iterable[SexpNode] = ()) -> None:
        children = tuple(children)
        for c in children:
            if not isinstance(c, SexpNode):
                raise TypeError(
                    f"Expected SexpNode children, got {type(c).__name__}")
        object.__setattr__(self, "_children", children)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: D105
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:  # noqa: D105
        if not isinstance(other, SexpNode):
            return NotImplemented
        stack: List[Tuple[SexpNode, SexpNode]] = [(self, other)]
        while stack:
            left, right = stack.pop()
            if left.is_atom() != right.is_atom():
                return False
            elif left.is_atom():
                if left.content != right.content:
                    return False
            elif len(left) != len(right):
                return False
            else:
                stack.extend(zip(left.children, right.children))
            # end if
        # end while
        return True

    def __hash__(self) -> int:  # noqa: D105
        # the display form is unambiguous, so equal trees display equally
        return hash((SexpList, str(self)))

    def __reduce__(self):  # noqa: D105
        return SexpList, (self._children,)

    def __str__(self) -> str:  # noqa: D105
        parts: List[str] = []
        stack: List[Union[SexpNode, str]] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif item.is_atom():
                parts.append(str(item))
            else:
                stack.append(")")
                children = item.children
                for i in reversed(range(len(children))):
                    stack.append(children[i])
                    if i > 0:
                        stack.append(" ")
                # end for
                stack.append("(")
            # end if
        # end while
        return "".join(parts)

    def _walk(self) -> Iterator[Tuple[SexpNode, int]]:
        """
        Iterate over the subtree in preorder without recursion.

        Yields
        ------
        node : SexpNode
            A node of the subtree, starting with this list.
        depth : int
            The number of lists on the path from this list to `node`,
            counting `node` itself if it is a list.
        """
        stack: List[Tuple[SexpNode, int]] = [(self, 1)]
        while stack:
            node, depth = stack.pop()
            if node.is_atom():
                yield node, depth - 1
            else:
                yield node, depth
                stack.extend((c, depth + 1) for c in reversed(node.children))
            # end if
        # end while

    @classmethod
    def of(cls, *children: SexpNode) -> 'SexpList':
        """
        Make a list from the given children.

        Examples
        --------
        >>> SexpList.of(SexpAtom("a"), SexpList.of(SexpAtom("b")))
        SexpList((a (b)))
        """
        return cls(children)

    @property
    def height(self) -> int:  # noqa: D102
        return max(depth for _, depth in self._walk())

    @property
    def num_nodes(self) -> int:  # noqa: D102
        return sum(1 for _ in self._walk())

    @property
    def num_leaves(self) -> int:  # noqa: D102
        return sum(1 for node, _ in self._walk() if node.is_atom())

    def apply_recur(  # noqa: D102
            self,
            func: Callable[["SexpNode"],
                           SexpNode.RecurAction]) -> None:
        recur_action = func(self)

        if recur_action == SexpNode.RecurAction.ContinueRecursion:
            for child in self._children:
                child.apply_recur(func)
            # end for
        # end if

    def contains_str(self, s: str) -> bool:  # noqa: D102
        for c in self._children:
            if c.contains_str(s):
                return True
            # end if
        # end for
        return False

    def get_children(self) -> Tuple[SexpNode, ...]:  # noqa: D102
        return self._children

    def is_list(self) -> bool:  # noqa: D102
        return True

    def pretty_format(
            self,
            max_depth: float = np.inf,
            depth: int = 0,
            strip: bool = True) -> str:  # noqa: D102
        formatted = self.pretty_format_recur(self, max_depth, depth)
        if strip:
            formatted = formatted.strip()
        return formatted

    def to_python_ds(self) -> list:  # noqa: D102
        return [child.to_python_ds() for child in self._children]

    @classmethod
    def pretty_format_recur(
            cls,
            sexp: SexpNode,
            max_depth: float,
            depth: int) -> str:
        """
        Recursively pretty-print the given node's subtree.

        Parameters
        ----------
        sexp : SexpNode
            A node.
        max_depth : float
            The maximum depth at which content should be printed.
            An ellipsis is printed in place of a list when the maximum
            depth is met.
        depth : int
            The depth of the given node `sexp`.

        Returns
        -------
        str
            The pretty-printed format of the s-expression.
        """
        if sexp.is_atom():
            return sexp.pretty_format()
        # end if

        if len(sexp) == 0:
            return "()"
        elif max_depth <= 0:
            return "..."
        else:
            return (
                cls.pprint_newline + depth * cls.pprint_tab + "(" + " ".join(
                    [
                        cls.pretty_format_recur(c,
                                                max_depth - 1,
                                                depth + 1)
                        for c in sexp.children
                    ]) + ")")
        # end if
