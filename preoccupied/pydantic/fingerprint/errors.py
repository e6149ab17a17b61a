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
preoccupied.pydantic.fingerprint.errors
Exception types raised while building or using a fingerprint unmarshaler.

Construction failures (:class:`InvalidConfiguration`, :class:`NotARecord`,
:class:`UnsupportedType`) abort the whole unmarshaler. Request failures
(:class:`InvalidDocument`, :class:`NoMatch`, :class:`ResolutionFailed`,
:class:`DecodeFailed`) only affect the call that raised them.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


__all__ = (
    "DecodeFailed",
    "FingerprintError",
    "InvalidConfiguration",
    "InvalidDocument",
    "MalformedInput",
    "NoMatch",
    "NotARecord",
    "ResolutionFailed",
    "UnsupportedType",
)


class FingerprintError(Exception):
    """
    Base class for every error raised by this package.
    """


class InvalidConfiguration(FingerprintError, ValueError):
    """
    The parameters given to the unmarshaler cannot produce an environment.
    """


class NotARecord(FingerprintError, TypeError):
    """
    A registered candidate is not a pydantic model class.
    """


class UnsupportedType(FingerprintError, TypeError):
    """
    A candidate declares a field whose type has no JSON value kind.
    """

    def __init__(self, annotation, path: str = "", owner=None) -> None:
        self.annotation = annotation
        self.path = path
        self.owner = owner

        where = ""
        if owner is not None:
            where = f" in {getattr(owner, '__name__', owner)}"
        if path:
            where = f"{where} at '{path}'"
        super().__init__(f"unsupported type{where}: {annotation!r}")


class InvalidDocument(FingerprintError, ValueError):
    """
    The document to resolve is not a JSON object.
    """


class MalformedInput(InvalidDocument):
    """
    The raw input could not be parsed into a JSON object.
    """


class NoMatch(FingerprintError, LookupError):
    """
    No candidate fingerprint is satisfied by the document.
    """


class ResolutionFailed(FingerprintError):
    """
    Resolution faulted on an otherwise valid document. The underlying
    exception is chained as ``__cause__``.
    """


class DecodeFailed(FingerprintError, ValueError):
    """
    The document resolved to a candidate, but did not validate as that
    candidate. The pydantic ``ValidationError`` is chained as ``__cause__``.
    """

    def __init__(self, message: str, candidate=None) -> None:
        super().__init__(message)
        self.candidate = candidate


# The end.
