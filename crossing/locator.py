"""Destination locator parsing and object key resolution."""

import crossing.exceptions
import crossing.types


def parse_locator(raw: str) -> crossing.types.StorageLocator:
    """Split a ``[scheme://]bucket[/key]`` locator into bucket and key."""
    _, sep, rest = raw.partition("://")
    if not sep:
        rest = raw

    bucket, _, key = rest.partition("/")
    if not bucket:
        raise crossing.exceptions.InvalidLocator(f"invalid S3 URL: {raw}")

    return {
        "bucket": bucket,
        "key": key,
    }


def resolve_key(parsed_key: str, source_path: str) -> str:
    """Derive the object key the source file is stored under.

    A bare bucket uses the source path as given, directory components
    included. A key ending in a separator is treated as a literal prefix for
    the source path. Any other key is used as is.
    """
    if parsed_key == "" or parsed_key == "/":
        return source_path
    if parsed_key.endswith("/"):
        return parsed_key + source_path
    return parsed_key
