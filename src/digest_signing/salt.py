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


"""Generation of random salts and keys.

All material comes from the operating system's cryptographically secure random
source, through `secrets`.
"""

import secrets


def generate(length: int) -> bytes:
    """Returns `length` random bytes, suitable as a salt or as a key.

    Args:
        length: The number of bytes to generate. Zero yields empty bytes.

    Raises:
        ValueError: The length is negative.
    """
    if length < 0:
        raise ValueError(f"Length must be non-negative, got {length}.")
    return secrets.token_bytes(length)
