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
Descriptors that bind configuration paths to class attributes.
"""
from typing import Any, Dict, Generic, Optional, Tuple, Type, TypeVar

from sexpkit.config.sexp_config import SexpConfig

T = TypeVar('T')

_getters: Dict[type, Tuple[str, str]] = {
    str: ("get_string", "get_string_value"),
    int: ("get_int", "get_int_value"),
    float: ("get_float", "get_float_value"),
    bool: ("get_boolean", "get_boolean_value"),
    list: ("get_string_list", "get_string_list_value"),
}


class SexpConfigField(Generic[T]):
    """
    A read-only attribute backed by a typed configuration value.

    The owning object must expose the `SexpConfig` to query as an
    attribute, named ``config`` by default.
    The value is looked up on every access.

    Parameters
    ----------
    path : str
        The dot-separated path of the value.
    kind : Type[T], optional
        One of `str`, `int`, `float`, `bool`, or `list` (of strings),
        by default `str`.
    required : bool, optional
        Whether a missing or invalid value raises `SexpConfigException`
        (True, the default) or yields `default` (False).
    default : Optional[T], optional
        The value of an optional field that is missing or invalid, by
        default None.
    config_attr : str, optional
        The name of the owner's `SexpConfig` attribute, by default
        ``"config"``.

    Raises
    ------
    TypeError
        If `kind` is not supported.

    Examples
    --------
    >>> class Server:
    ...     host = SexpConfigField("server.host")
    ...     port = SexpConfigField("server.port", int)
    ...     debug = SexpConfigField("server.debug", bool, required=False)
    ...     def __init__(self, config):
    ...         self.config = config
    ...
    >>> server = Server(SexpConfig.from_string("(server (port 80))"))
    >>> server.port
    80
    >>> server.debug is None
    True
    """

    def __init__(
            self,
            path: str,
            kind: Type[T] = str,
            required: bool = True,
            default: Optional[T] = None,
            config_attr: str = "config") -> None:
        if kind not in _getters:
            raise TypeError(f"Unsupported configuration field type {kind}")
        self.path = path
        self.kind = kind
        self.required = required
        self.default = default
        self.config_attr = config_attr
        self.name: Optional[str] = None
        safe, strict = _getters[kind]
        self._getter = strict if required else safe

    def __set_name__(self, owner: type, name: str) -> None:  # noqa: D105
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        """
        Look up the value in the instance's configuration.
        """
        if instance is None:
            return self
        config: SexpConfig = getattr(instance, self.config_attr)
        value = getattr(config, self._getter)(self.path)
        return self.default if value is None else value

    def __set__(self, instance: Any, value: Any) -> None:  # noqa: D105
        raise AttributeError(
            f"Configuration field {self.name} ({self.path}) is read-only")

    def __repr__(self) -> str:  # noqa: D105
        return (
            f"{type(self).__name__}({self.path!r}, {self.kind.__name__}, "
            f"required={self.required})")
