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
Defines exceptions related to s-expressions and their parsing.
"""

from typing import Tuple, Type


class IllegalSexpOperationException(TypeError):
    """
    Exception type indicating illegal s-exp operations.

    Raised when a node is used as an atom but is a list or vice versa.
    """

    pass


class SexpParseException(ValueError):
    """
    For representing errors thrown while parsing an s-expression.

    Parameters
    ----------
    message : str
        A description of the failure.
    position : int
        The 0-based character offset into the parsed text at which the
        failure was detected.
    """

    def __init__(self, message: str, position: int = -1):
        super().__init__(message, position)
        self.message = message
        self.position = position

    def __reduce__(self) -> Tuple[Type['SexpParseException'],
                                  Tuple[str,
                                        int]]:  # noqa: D105
        return type(self), (self.message, self.position)

    def __str__(self) -> str:  # noqa: D105
        if self.position < 0:
            return self.message
        return f"{self.message} at position {self.position}"


class SexpLexException(SexpParseException):
    """
    For representing errors thrown while tokenizing an s-expression.
    """

    pass
