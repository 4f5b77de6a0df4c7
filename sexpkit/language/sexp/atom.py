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
Defines leaf s-expression nodes with string content.
"""
from typing import Any, Callable

from sexpkit.language.sexp.dialect import DEFAULT_DIALECT
from sexpkit.language.sexp.node import SexpNode
from sexpkit.util.string import quote_escape


class SexpAtom(SexpNode):
    """
    An atomic node containing a single string of content.

    Parameters
    ----------
    content : Any, optional
        The content of the atom.
        Values that are not strings are converted with `str`, so
        ``SexpAtom(8080) == SexpAtom("8080")``.
    """

    __slots__ = ("_content",)

    def __init__(self, content: Any = "") -> None:
        object.__setattr__(
            self,
            "_content",
            content if isinstance(content,
                                  str) else str(content))

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: D105
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:  # noqa: D105
        if not isinstance(other, SexpNode):
            return NotImplemented
        else:
            return other.is_atom() and other.get_content() == self._content

    def __hash__(self) -> int:  # noqa: D105
        return hash((SexpAtom, self._content))

    def __reduce__(self):  # noqa: D105
        return SexpAtom, (self._content,)

    def __str__(self) -> str:  # noqa: D105
        content = self._content
        terminators = DEFAULT_DIALECT.atom_terminators
        if not content or any(c.isspace() or c in terminators
                              for c in content):
            content = quote_escape(content, force=True)
        return content

    @property
    def height(self) -> int:  # noqa: D102
        return 0

    @property
    def num_nodes(self) -> int:  # noqa: D102
        return 1

    @property
    def num_leaves(self) -> int:  # noqa: D102
        return 1

    def apply_recur(  # noqa: D102
        self,
        func: Callable[["SexpNode"],
                       SexpNode.RecurAction]) -> None:
        func(self)

    def contains_str(self, s: str) -> bool:
        """
        Return whether `s` is equal to this node's content.
        """
        return self._content == s

    def get_content(self) -> str:  # noqa: D102
        return self._content

    def is_atom(self) -> bool:  # noqa: D102
        return True

    def pretty_format(self, *args, **kwargs) -> str:
        """
        Return the s-expression form of this node.
        """
        return str(self)

    def to_python_ds(self) -> str:
        """
        Return the string content of this node.
        """
        return self._content
