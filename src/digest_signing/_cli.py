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


"""The main entry-point for the digest_signing package."""

import base64
import logging
import pathlib
import sys

import click

import digest_signing
from digest_signing._hashing import algorithms


_KEYED_ALGORITHMS = [a.value for a in algorithms.KeyedHashAlgorithm]
_UNKEYED_ALGORITHMS = [a.value for a in algorithms.HashAlgorithm]
_ALL_ALGORITHMS = _UNKEYED_ALGORITHMS + _KEYED_ALGORITHMS


# Decorator for the commonly used option to select the keyed algorithm.
_keyed_algorithm_option = click.option(
    "--algorithm",
    type=click.Choice(_KEYED_ALGORITHMS, case_sensitive=False),
    default=algorithms.DEFAULT_KEYED_HASH_ALGORITHM.value,
    show_default=True,
    help="Keyed digest algorithm. Must be the same for signing and verifying.",
)


# Decorator for the commonly used option to pass the key as text.
_key_option = click.option(
    "--key",
    type=str,
    metavar="KEY",
    envvar="DIGEST_SIGNING_KEY",
    help="The secret key, as UTF-8 text. This can also be set via the "
    "DIGEST_SIGNING_KEY env var.",
)


# Decorator for the commonly used option to read the key from a file.
_key_file_option = click.option(
    "--key_file",
    type=click.Path(
        exists=True, dir_okay=False, readable=True, path_type=pathlib.Path
    ),
    metavar="KEY_PATH",
    help="Path to a file whose raw bytes are the secret key.",
)


def _read_key(key: str | None, key_file: pathlib.Path | None) -> bytes:
    """Returns the key given by exactly one of `--key` and `--key_file`."""
    if key is not None and key_file is not None:
        raise click.UsageError("Only one of --key and --key_file can be used.")
    if key_file is not None:
        try:
            return key_file.read_bytes()
        except OSError as err:
            raise click.FileError(str(key_file), hint=str(err)) from err
    if key is not None:
        return key.encode("utf-8")
    raise click.UsageError("A key is required, pass --key or --key_file.")


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(digest_signing.__version__, "--version")
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default="INFO",
    show_default=True,
    metavar="LEVEL",
    envvar="DIGEST_SIGNING_LOG_LEVEL",
    help="Set the logging level. This can also be set via the "
    "DIGEST_SIGNING_LOG_LEVEL env var.",
)
def main(log_level: str) -> None:
    """Keyed digests and signed files.

    Use each subcommand's `--help` option for details on each mode.
    """
    logging.basicConfig(
        format="%(message)s", level=getattr(logging, log_level.upper())
    )


@main.command(name="sign")
@click.argument("source", type=pathlib.Path, metavar="SOURCE_PATH")
@click.option(
    "--output",
    type=pathlib.Path,
    metavar="SIGNED_PATH",
    help="Location of the signed file. Defaults to SOURCE_PATH.signed.",
)
@_keyed_algorithm_option
@_key_option
@_key_file_option
def _sign(
    source: pathlib.Path,
    output: pathlib.Path | None,
    algorithm: str,
    key: str | None,
    key_file: pathlib.Path | None,
) -> None:
    """Sign a file.

    Writes the keyed digest of SOURCE_PATH followed by the contents of
    SOURCE_PATH to the signed file. The algorithm and the key are not stored,
    the verifier must be given the same ones.
    """
    secret = _read_key(key, key_file)
    if output is None:
        output = source.with_name(source.name + ".signed")

    try:
        digest_signing.signing.Config().use_keyed_hash(
            algorithm=algorithm, key=secret
        ).sign(source, output)
    except Exception as err:
        click.echo(f"Signing failed with error: {err}", err=True)
        sys.exit(1)

    click.echo(f"Signing succeeded, signed file written to {output}")


@main.command(name="verify")
@click.argument("signed", type=pathlib.Path, metavar="SIGNED_PATH")
@_keyed_algorithm_option
@_key_option
@_key_file_option
def _verify(
    signed: pathlib.Path,
    algorithm: str,
    key: str | None,
    key_file: pathlib.Path | None,
) -> None:
    """Verify a signed file.

    Recomputes the keyed digest of the contents of SIGNED_PATH and compares it
    with the digest stored in its header. Exits with a non-zero status if they
    differ.
    """
    secret = _read_key(key, key_file)

    try:
        verified = (
            digest_signing.verifying.Config()
            .use_keyed_hash(algorithm=algorithm, key=secret)
            .verify(signed)
        )
    except Exception as err:
        click.echo(f"Verification failed with error: {err}", err=True)
        sys.exit(1)

    if not verified:
        click.echo("Verification failed", err=True)
        sys.exit(1)

    click.echo("Verification succeeded")


@main.command(name="digest")
@click.argument(
    "path", type=pathlib.Path, metavar="PATH", required=False, default=None
)
@click.option(
    "--text", type=str, metavar="TEXT", help="Hash TEXT instead of a file."
)
@click.option(
    "--algorithm",
    type=click.Choice(_ALL_ALGORITHMS, case_sensitive=False),
    default=algorithms.DEFAULT_HASH_ALGORITHM.value,
    show_default=True,
    help="Digest algorithm. HMAC algorithms need a key.",
)
@click.option(
    "--salt",
    type=str,
    metavar="SALT",
    help="Salt appended to the input, for unkeyed algorithms.",
)
@_key_option
@_key_file_option
@click.option(
    "--base64",
    "as_base64",
    is_flag=True,
    help="Print the digest in Base64 instead of hexadecimal.",
)
def _digest(
    path: pathlib.Path | None,
    text: str | None,
    algorithm: str,
    salt: str | None,
    key: str | None,
    key_file: pathlib.Path | None,
    as_base64: bool,
) -> None:
    """Print the digest of a file or of a text.

    Exactly one of PATH and `--text` must be given.
    """
    if (path is None) == (text is None):
        raise click.UsageError("Pass exactly one of PATH and --text.")

    if algorithm.lower() in _KEYED_ALGORITHMS:
        if salt is not None:
            raise click.UsageError("--salt is only for unkeyed algorithms.")
        hasher = digest_signing.hashing.KeyedHasher(
            algorithm, _read_key(key, key_file)
        )
    else:
        # An exported DIGEST_SIGNING_KEY is ignored for unkeyed digests.
        key_source = click.get_current_context().get_parameter_source("key")
        if key_file is not None or (
            key is not None
            and key_source != click.core.ParameterSource.ENVIRONMENT
        ):
            raise click.UsageError("A key is only for HMAC algorithms.")
        hasher = digest_signing.hashing.Hasher(algorithm)
        if salt is not None:
            hasher.set_salt_text(salt)

    try:
        with hasher:
            if text is not None:
                hasher.compute_digest(text.encode("utf-8"))
            else:
                hasher.compute_file(path)
            result = hasher.hashed_base64 if as_base64 else hasher.hashed_hex
    except Exception as err:
        click.echo(f"Hashing failed with error: {err}", err=True)
        sys.exit(1)

    click.echo(result)


@main.command(name="salt")
@click.argument("length", type=click.IntRange(min=0), metavar="LENGTH")
@click.option(
    "--base64",
    "as_base64",
    is_flag=True,
    help="Print the salt in Base64 instead of hexadecimal.",
)
def _salt(length: int, as_base64: bool) -> None:
    """Print LENGTH random bytes, usable as a salt or as a key."""
    value = digest_signing.salt.generate(length)
    if as_base64:
        click.echo(base64.b64encode(value).decode("ascii"))
    else:
        click.echo(value.hex())
