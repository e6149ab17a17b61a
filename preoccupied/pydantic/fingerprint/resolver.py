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
preoccupied.pydantic.fingerprint.resolver
Resolve parsed JSON documents to a registered candidate by fingerprint.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from .errors import InvalidDocument
from .kinds import Kind, lookup


__all__ = (
    "CandidateShape",
    "FingerprintResolver",
)


@dataclass(frozen=True, eq=False)
class CandidateShape:
    """
    A registered model, with its full path map and its fingerprint.
    """

    model: Type[BaseModel]
    paths: Mapping[str, Kind]
    fingerprint: Mapping[str, Kind]


    @property
    def name(self) -> str:
        return self.model.__name__


    def matches(self, document: Mapping[str, Any]) -> bool:
        """
        True if any single fingerprint entry is satisfied by the document.
        """

        for path, kind in self.fingerprint.items():
            if kind.accepts(lookup(document, path)):
                return True
        return False


class FingerprintResolver:
    """
    Finds the candidate whose fingerprint a document satisfies.

    Candidates are checked in registration order and the first whose
    fingerprint has any matching entry wins, so the outcome for a document
    satisfying more than one fingerprint is stable. Nothing is written after
    construction, so a resolver may be shared between threads.
    """

    def __init__(self, candidates: Iterable[CandidateShape]) -> None:
        self._candidates: Tuple[CandidateShape, ...] = tuple(candidates)


    @property
    def candidates(self) -> Tuple[CandidateShape, ...]:
        return self._candidates


    @staticmethod
    def check_document(document: Any) -> Mapping[str, Any]:
        if not isinstance(document, Mapping):
            raise InvalidDocument(
                f"Document root must be an object, not {type(document).__name__}."
            )
        return document


    def resolve(self, document: Mapping[str, Any]) -> Optional[CandidateShape]:
        """
        Return the first candidate with a satisfied fingerprint entry, or None.

        :raises InvalidDocument: if the document root is not an object
        """

        document = self.check_document(document)
        for candidate in self._candidates:
            if candidate.matches(document):
                return candidate
        return None


    def resolve_all(self, document: Mapping[str, Any]) -> Tuple[CandidateShape, ...]:
        """
        Return every candidate with a satisfied fingerprint entry, in
        registration order. Useful for spotting ambiguous documents.
        """

        document = self.check_document(document)
        return tuple(c for c in self._candidates if c.matches(document))


def freeze(mapping: Mapping[str, Kind]) -> Mapping[str, Kind]:
    return MappingProxyType(dict(mapping))


# The end.
