"""Encrypted file put operation."""

import asyncio
import json
import typing

import botocore.exceptions
import click

import crossing.client
import crossing.common
import crossing.exceptions
import crossing.reader
import crossing.s3_client
import crossing.types


def report(opts: crossing.types.PutOptions, version_id: str | None) -> None:
    """Print the version id of the uploaded object if requested."""
    if opts["verbose_output"]:
        # Unlike Go json.Marshal, <, > and & are not escaped, S3 version ids
        # never contain them.
        click.echo(f'{{ "VersionId": {json.dumps(version_id, ensure_ascii=False)} }}')


async def put(
    opts: crossing.types.PutOptions,
    session: crossing.types.CrossingSession,
    content: crossing.types.FileContent,
) -> str | None:
    """Encrypt and upload an already read source file."""
    request: crossing.types.UploadRequest = {
        "bucket": opts["bucket"],
        "object_key": opts["key"],
        "kms_key_id": opts["kms_key_id"],
        "source_path": opts["source"],
    }
    crossing.common.conditional_echo_debug(
        opts,
        f"Uploading {request['source_path']} to bucket {request['bucket']} with key {request['object_key']}",
    )

    return await crossing.s3_client.s3_put_encrypted_object(
        session,
        opts,
        request,
        content,
    )


async def wrap_put_exceptions(opts: crossing.types.PutOptions) -> int:
    """Wrap the put operation with required exception handling."""
    session = await crossing.client.open_session(
        profile=opts["profile"],
        region=opts["region"],
        s3_endpoint_url=opts["s3_endpoint_url"],
        kms_endpoint_url=opts["kms_endpoint_url"],
    )

    exc: typing.Any = None
    ret = 0
    version_id: str | None = None
    try:
        # Read the file before any client is opened, a missing file must not
        # cause network traffic.
        crossing.common.conditional_echo_verbose(opts, f"Reading {opts['source']}")
        content = await crossing.reader.read_source(opts["source"])
        crossing.common.conditional_echo_debug(
            opts,
            f"Read {len(content['body'])} bytes, detected content type {content['content_type']}",
        )

        boto_session = crossing.client.get_boto_session(session)
        async with (
            boto_session.client(
                service_name="s3",
                endpoint_url=session["s3_endpoint_url"] or None,
            ) as s3,
            boto_session.client(
                service_name="kms",
                endpoint_url=session["kms_endpoint_url"] or None,
            ) as kms,
        ):
            session["s3_client"] = s3
            session["kms_client"] = kms
            version_id = await put(opts, session, content)
    except asyncio.CancelledError:
        click.echo("Received a keyboard interrupt, aborting...", err=True)
        return 1
    except (
        crossing.exceptions.FileOpenFailed,
        crossing.exceptions.FileReadFailed,
        crossing.exceptions.EncryptionSetupFailed,
        crossing.exceptions.UploadFailed,
    ) as e:
        click.echo(f"err uploading file: {e}", err=True)
        return 1
    except botocore.exceptions.BotoCoreError as e:
        click.echo(f"err uploading file: {e}", err=True)
        return 1
    except Exception as e:
        ret = 42
        if opts["debug"]:
            exc = e
        else:
            click.echo(f"err uploading file: {e}", err=True)
    finally:
        # Only surface the traceback of unhandled exceptions when debugging
        if exc is not None:
            click.echo("Program encountered an unhandled exception.", err=True)
            click.echo(
                "If you think there's a mistake, copy this message and lines after it, and include it in your support request for diagnostic purposes.",
                err=True,
            )
            click.echo("Exception details:", err=True)
            click.echo(
                "-------------------------- BEGIN EXCEPTION TRACEBACK --------------------------",
                err=True,
            )
            raise exc

    if ret == 0:
        report(opts, version_id)

    return ret
