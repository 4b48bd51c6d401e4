"""Source file reading."""

import aiofiles

import crossing.exceptions
import crossing.sniff
import crossing.types


async def read_source(path: str) -> crossing.types.FileContent:
    """Read the whole source file into memory and sniff its content type."""
    try:
        f = await aiofiles.open(path, "rb")
    except OSError as e:
        raise crossing.exceptions.FileOpenFailed(f"err opening file: {e}") from e

    try:
        body: bytes = await f.read()
    except OSError as e:
        raise crossing.exceptions.FileReadFailed(f"err reading file: {e}") from e
    finally:
        await f.close()

    return {
        "body": body,
        "content_type": crossing.sniff.detect_content_type(body),
    }
