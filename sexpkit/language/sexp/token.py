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
Abstractions for s-expression lexical tokens.
"""
from enum import Enum
from typing import Optional

from sexpkit.util.radpytools.dataclasses import immutable_dataclass


class TokenKind(Enum):
    """
    The closed set of lexical token kinds.
    """

    LPAR = "("
    RPAR = ")"
    ATOM = "ATOM"
    EOF = "<EOF>"


@immutable_dataclass
class Token:
    """
    A lexical token tagged with its location in the tokenized text.
    """

    kind: TokenKind
    offset: int
    """
    The 0-based character offset of the first character of the token.

    The end-of-input marker is located at the length of the text.
    """
    value: Optional[str] = None
    """
    The text of an atom, decoded of any escape sequences.

    Only `TokenKind.ATOM` tokens have a value.
    An unquoted atom is never empty, but a quoted atom such as ``""``
    may decode to the empty string.
    """

    def __str__(self) -> str:
        """
        Get a condensed representation of the token.
        """
        if self.kind == TokenKind.ATOM:
            return f"{self.value!r}@{self.offset}"
        else:
            return f"{self.kind.value}@{self.offset}"

    def is_eof(self) -> bool:
        """
        Return whether this token marks the end of the input.
        """
        return self.kind == TokenKind.EOF
