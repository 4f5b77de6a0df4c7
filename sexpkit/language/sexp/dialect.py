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
Defines the lexical dialect of the s-expressions that may be tokenized.
"""
from typing import Dict, FrozenSet, Tuple

from sexpkit.util.radpytools.dataclasses import immutable_dataclass


@immutable_dataclass
class SexpDialect:
    r"""
    The configurable characters of the s-expression lexical grammar.

    The default instance implements the grammar::

        document   := expr*
        expr       := atom | '(' expr* ')'
        atom       := quoted | unquoted
        quoted     := '"' ( escape | any-char-except('"','\\') )* '"'
        escape     := '\\' ( '"' | '\\' | 'n' | 'r' | 't' | any-other-char )
        unquoted   := char+   ; char not in whitespace, '(', ')', '"', ';'
        comment    := ';' any-char-except('\n')* ('\n' | EOF)
    """

    lpar: str = "("
    rpar: str = ")"
    quote: str = '"'
    escape: str = "\\"
    comment: str = ";"
    escapes: Tuple[Tuple[str, str], ...] = (
        ('"', '"'),
        ("\\", "\\"),
        ("n", "\n"),
        ("r", "\r"),
        ("t", "\t"),
    )
    """
    Pairs of an escaped character and its decoded replacement.

    An escaped character not listed here is preserved verbatim along
    with the escape character that precedes it.
    """

    def __post_init__(self) -> None:  # noqa: D105
        special = [self.lpar, self.rpar, self.quote, self.escape, self.comment]
        for c in special:
            if len(c) != 1 or c.isspace():
                raise ValueError(
                    f"Dialect characters must be single non-whitespace "
                    f"characters, got {c!r}")
        if len(set(special)) != len(special):
            raise ValueError(
                f"Dialect characters must be distinct, got {special}")

    @property
    def atom_terminators(self) -> FrozenSet[str]:
        """
        Get the non-whitespace characters that end an unquoted atom.
        """
        return frozenset([self.lpar, self.rpar, self.quote, self.comment])

    @property
    def escape_table(self) -> Dict[str, str]:
        """
        Get a mapping from escaped characters to their decoded values.
        """
        return dict(self.escapes)


DEFAULT_DIALECT = SexpDialect()
