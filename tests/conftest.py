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


"""Test fixtures to share between tests. Not part of the public API."""

import os

import pytest

from tests import test_support


# Note: Don't make fixtures with global scope as some tests alter the files!
@pytest.fixture
def sample_file(tmp_path_factory):
    """A small file with known text."""
    file = tmp_path_factory.mktemp("data") / "file"
    file.write_bytes(test_support.KNOWN_FILE_TEXT)
    return file


@pytest.fixture
def empty_file(tmp_path_factory):
    """An empty file."""
    file = tmp_path_factory.mktemp("data") / "empty"
    file.write_bytes(b"")
    return file


@pytest.fixture
def large_file(tmp_path_factory):
    """A file larger than the copy buffer, with random contents."""
    file = tmp_path_factory.mktemp("data") / "large"
    file.write_bytes(os.urandom(test_support.LARGE_FILE_SIZE))
    return file


@pytest.fixture
def key_file(tmp_path_factory):
    """A file holding a raw key."""
    file = tmp_path_factory.mktemp("keys") / "signing.key"
    file.write_bytes(b"\x00\x01secret key bytes\xff")
    return file
