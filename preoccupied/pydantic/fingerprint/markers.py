# This library is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this library; if not, see <http://www.gnu.org/licenses/>.

"""
preoccupied.pydantic.fingerprint.markers

Field markers understood by the shape walker.

Use the :func:`Ignore` factory to keep a field out of a candidate's paths.
The field is still validated normally once the candidate has been selected.

Example:

```python
class Login(BaseModel):
    user: str
    session: Session = Ignore(default=None)
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from dataclasses import dataclass
from typing import Any

from pydantic import Field
from pydantic.fields import FieldInfo


__all__ = (
    "Ignore",
    "IgnoreConfig",
    "is_ignored",
)


@dataclass(frozen=True)
class IgnoreConfig:
    """
    Marker metadata excluding a field from fingerprint paths.
    """


def Ignore(  # noqa: N802 - PascalCase factory
        default: Any = None,
        **field_kwargs: Any) -> FieldInfo:
    """
    Create a FieldInfo that the shape walker will skip entirely.
    """

    info = Field(default, **field_kwargs)
    metadata = list(info.metadata)
    metadata.append(IgnoreConfig())

    # annoying.
    object.__setattr__(info, "metadata", metadata)

    return info


def is_ignored(field_info: FieldInfo) -> bool:
    """
    True if the field was declared with :func:`Ignore`.
    """

    return any(isinstance(item, IgnoreConfig) for item in field_info.metadata)


# The end.
