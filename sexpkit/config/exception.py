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
Defines exceptions related to querying s-expression configurations.
"""

from typing import Tuple, Type


class SexpConfigException(LookupError):
    """
    For representing missing or invalid configuration values.

    Parameters
    ----------
    message : str
        A description of the failure.
    path : str
        The dot-separated path of the offending configuration value.
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(message, path)
        self.message = message
        self.path = path

    def __reduce__(self) -> Tuple[Type['SexpConfigException'],
                                  Tuple[str,
                                        str]]:  # noqa: D105
        return type(self), (self.message, self.path)

    def __str__(self) -> str:  # noqa: D105
        return f"{self.message} at path '{self.path}'"
