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
preoccupied.pydantic.fingerprint
Namespace package segment resolving JSON documents to pydantic models by the
shape of their fields.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from .errors import (
    DecodeFailed, FingerprintError, InvalidConfiguration, InvalidDocument,
    MalformedInput, NoMatch, NotARecord, ResolutionFailed, UnsupportedType)
from .fingerprints import build_fingerprints
from .kinds import DocumentType, Kind, append_to_path, lookup, normalize_name
from .markers import Ignore
from .parameters import (
    Candidate, Default, EnableDebug, Environment, SelectOn, Setting)
from .resolver import CandidateShape, FingerprintResolver
from .selector import FingerprintSelector
from .unmarshaler import Decoded, Unmarshaler
from .walker import bind_document, build_paths


__all__ = (
    "Candidate",
    "Default",
    "EnableDebug",
    "Ignore",
    "SelectOn",

    "Environment",
    "Setting",

    "Unmarshaler",
    "Decoded",
    "FingerprintSelector",
    "FingerprintResolver",
    "CandidateShape",

    "DocumentType",
    "Kind",
    "append_to_path",
    "bind_document",
    "build_fingerprints",
    "build_paths",
    "lookup",
    "normalize_name",

    "FingerprintError",
    "InvalidConfiguration",
    "NotARecord",
    "UnsupportedType",
    "InvalidDocument",
    "MalformedInput",
    "NoMatch",
    "ResolutionFailed",
    "DecodeFailed",
)


# The end.
