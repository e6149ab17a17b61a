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
preoccupied.pydantic.fingerprint.fingerprints

Reduce each candidate's path map down to the entries that no other
candidate shares.

Example:

```python
found = build_fingerprints({
    "first": {"foo": Kind.STRING, "shared": Kind.NUMBER},
    "second": {"bar": Kind.STRING, "shared": Kind.NUMBER},
})

assert found == {
    "first": {"foo": Kind.STRING},
    "second": {"bar": Kind.STRING},
}
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Dict, Hashable, List, Mapping, TypeVar

from .kinds import Kind


__all__ = (
    "build_fingerprints",
    "count_owners",
)


K = TypeVar("K", bound=Hashable)


def count_owners(
        paths_by_candidate: Mapping[K, Mapping[str, Kind]]) -> Dict[str, List[Kind]]:
    """
    For every path, list the kind each candidate declares there, one entry
    per candidate declaring it.
    """

    owners: Dict[str, List[Kind]] = {}
    for paths in paths_by_candidate.values():
        for path, kind in paths.items():
            owners.setdefault(path, []).append(kind)
    return owners


def build_fingerprints(
        paths_by_candidate: Mapping[K, Mapping[str, Kind]]) -> Dict[K, Dict[str, Kind]]:
    """
    Return a new mapping of each candidate to the subset of its path map that
    collides with no other candidate. An entry collides when another
    candidate declares the same path with a kind accepting any of the same
    document types.

    Candidate order and each candidate's path order are preserved. A
    candidate may well end up with an empty fingerprint, in which case no
    document can ever resolve to it. The input mappings are not modified.
    """

    owners = count_owners(paths_by_candidate)

    result: Dict[K, Dict[str, Kind]] = {}
    for candidate, paths in paths_by_candidate.items():
        unique = {}
        for path, kind in paths.items():
            # our own entry is always among the owners, hence the 1
            clashes = sum(1 for other in owners[path] if kind.collides(other))
            if clashes == 1:
                unique[path] = kind
        result[candidate] = unique

    return result


# The end.
