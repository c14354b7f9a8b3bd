#
# This file is part of eveng-client
# Copyright (c) 2024-2025, the eveng-client authors.
# All rights reserved.
#
# Python bindings and link reconciliation for the EVE-NG emulation platform
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
"""
Link decoration attributes of EVE-NG Pro.

The server keeps these on the target interface of a connection and reports
them back only through the lab topology listing, where every value is a
string. `Style` is the typed form of that data; each field has an explicit
default that replaces absent or unparsable values.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Callable, Optional

from ..exceptions import InvalidProperty

STYLES = ("Solid", "Dashed")
LINK_STYLES = ("Straight", "Bezier", "Flowchart", "StateMachine")

DEFAULTS: dict[str, Any] = {
    "style": "Solid",
    "color": "#3e7089",
    "srcpos": 0.15,
    "dstpos": 0.85,
    "linkstyle": "Straight",
    "width": 2,
    "label": "",
    "labelpos": 0.5,
    "stub": 0,
    "curviness": 10,
    "beziercurviness": 150,
    "round": 0,
    "midpoint": 0.5,
}


@dataclass
class Style:
    """
    A bundle of link decoration attributes. A field left as None is unset;
    ``Style()`` therefore means "no style reported", which is not the same
    as ``Style.with_defaults()``.
    """

    style: Optional[str] = None
    color: Optional[str] = None
    srcpos: Optional[float] = None
    dstpos: Optional[float] = None
    linkstyle: Optional[str] = None
    width: Optional[int] = None
    label: Optional[str] = None
    labelpos: Optional[float] = None
    stub: Optional[int] = None
    curviness: Optional[int] = None
    beziercurviness: Optional[int] = None
    round: Optional[int] = None
    midpoint: Optional[float] = None

    @classmethod
    def with_defaults(cls, **overrides: Any) -> Style:
        values = dict(DEFAULTS)
        values.update(overrides)
        return cls(**values)

    @property
    def empty(self) -> bool:
        """Check if no field of the style is set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def validate(self) -> None:
        """
        Check the enumerated fields.

        :raises InvalidProperty: If `style` or `linkstyle` has an unknown value.
        """
        if self.style is not None and self.style not in STYLES:
            raise InvalidProperty(
                f"Invalid style '{self.style}', expected one of {', '.join(STYLES)}"
            )
        if self.linkstyle is not None and self.linkstyle not in LINK_STYLES:
            raise InvalidProperty(
                f"Invalid linkstyle '{self.linkstyle}', "
                f"expected one of {', '.join(LINK_STYLES)}"
            )

    def resolved(self) -> Style:
        """Return a copy with every unset field replaced by its default."""
        values = {
            name: DEFAULTS[name] if value is None else value
            for name, value in asdict(self).items()
        }
        return Style(**values)

    def as_payload(self) -> dict[str, Any]:
        """Convert the style to the body of an interface style update."""
        return asdict(self.resolved())

    def as_dict(self) -> dict[str, Any]:
        """Convert the style to its persisted representation."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Style | None:
        if data is None:
            return None
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_topology(cls, entry: dict[str, Any]) -> Style:
        """
        Parse the string-typed attributes of a topology entry.

        :param entry: One entry of the lab topology listing.
        :returns: A fully populated style.
        """
        values = {}
        for field in fields(cls):
            parse = _PARSERS[field.name]
            values[field.name] = parse(entry.get(field.name), DEFAULTS[field.name])
        return cls(**values)


def _parse_str(value: Any, default: str) -> str:
    if not isinstance(value, str) or value == "":
        return default
    return value


def _parse_label(value: Any, default: str) -> str:
    # an empty label is a legitimate value
    if not isinstance(value, str):
        return default
    return value


def _parse_float(value: Any, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


_PARSERS: dict[str, Callable[[Any, Any], Any]] = {
    "style": _parse_str,
    "color": _parse_str,
    "srcpos": _parse_float,
    "dstpos": _parse_float,
    "linkstyle": _parse_str,
    "width": _parse_int,
    "label": _parse_label,
    "labelpos": _parse_float,
    "stub": _parse_int,
    "curviness": _parse_int,
    "beziercurviness": _parse_int,
    "round": _parse_int,
    "midpoint": _parse_float,
}
