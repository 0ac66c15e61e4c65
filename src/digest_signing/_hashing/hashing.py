# Copyright 2025 The digest-signing Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Digest values and the primitives that produce them.

Every primitive in `digest_signing` (plain hash or HMAC, in memory or over a
stream) implements `HashEngine`. The ones that accept data incrementally also
implement `Streaming`, and the higher level engines only talk to that pair of
interfaces.

A `Digest` only records the algorithm name next to the raw value. Keys and
salts leave no trace in it.
"""

import abc
import base64
import dataclasses
from typing import Protocol


@dataclasses.dataclass(frozen=True)
class Digest:
    """The output of one `HashEngine.compute` call.

    Attributes:
        algorithm: The `digest_name` of the engine, e.g. `sha256` or
          `hmac-sha256`.
        digest_value: The raw digest bytes.
    """

    algorithm: str
    digest_value: bytes

    @property
    def digest_hex(self) -> str:
        """The digest as lowercase hexadecimal text."""
        return self.digest_value.hex()

    @property
    def digest_base64(self) -> str:
        """The digest as standard Base64 text, with padding."""
        return base64.b64encode(self.digest_value).decode("ascii")

    @property
    def digest_size(self) -> int:
        return len(self.digest_value)


class HashEngine(metaclass=abc.ABCMeta):
    """A source of `Digest` values for one fixed algorithm."""

    @abc.abstractmethod
    def compute(self) -> Digest:
        """Returns the digest of everything given to the engine so far."""

    @property
    @abc.abstractmethod
    def digest_name(self) -> str:
        """The registry name of the algorithm.

        Unkeyed engines report the bare hash name (`sha512`). HMAC engines
        prefix it with `hmac-` (`hmac-sha512`).
        """

    @property
    @abc.abstractmethod
    def digest_size(self) -> int:
        """Number of bytes in every digest this engine returns."""


class Streaming(Protocol):
    """Incremental input for engines that hash data piece by piece."""

    @abc.abstractmethod
    def update(self, data: bytes) -> None:
        """Feeds `data` after whatever was fed before."""

    @abc.abstractmethod
    def reset(self, data: bytes = b"") -> None:
        """Drops all input and starts over from `data`.

        HMAC engines keep their key across resets.
        """


class StreamingHashEngine(Streaming, HashEngine):
    """A `HashEngine` fed through `update`, one chunk at a time."""
