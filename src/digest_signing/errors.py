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


"""Exceptions raised by the `digest_signing` library.

Only preconditions get dedicated exception types. Read and write failures are
reported through the built-in `OSError` hierarchy, unchanged. A digest mismatch
during verification is not an error: verification returns `False`.
"""


class DigestSigningError(Exception):
    """Base class for all errors raised by this library."""


class ArgumentRequiredError(DigestSigningError, ValueError):
    """A required byte string, text or key was `None`."""


class EmptyInputError(DigestSigningError, ValueError):
    """A digest was requested over a missing or zero-length message."""


class MissingKeyError(DigestSigningError, ValueError):
    """A keyed operation was invoked without a key."""


class SourceNotFoundError(DigestSigningError, FileNotFoundError):
    """The file to sign or verify is missing or cannot be read."""
