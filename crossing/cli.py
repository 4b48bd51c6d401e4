"""CLI for uploading files to S3 with client-side encryption."""

import asyncio
import sys

import click

import crossing.exceptions
import crossing.locator
import crossing.put
import crossing.types


def validate_locator(
    ctx: click.Context, param: click.Parameter, value: str
) -> crossing.types.StorageLocator:
    """Parse the destination locator while the arguments are validated."""
    try:
        return crossing.locator.parse_locator(value)
    except crossing.exceptions.InvalidLocator as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


@click.command(short_help="Upload a file to S3")
@click.option(
    "--kms-key-id",
    "-k",
    required=True,
    help="KMS CMK ID to use for encryption.",
)
@click.option(
    "--verbose-output",
    "-V",
    is_flag=True,
    help="Set to output the version id of the uploaded object.",
)
@click.option("--profile", default="", help="AWS shared config profile to use.")
@click.option("--region", default="", help="AWS region of the bucket and the KMS key.")
@click.option("--s3-endpoint-url", default="", help="S3 endpoint url.")
@click.option("--kms-endpoint-url", default="", help="KMS endpoint url.")
@click.option(
    "--verbose",
    is_flag=True,
    help="Print more information.",
)
@click.option("--debug", is_flag=True, help="Print debug information.")
@click.argument("source")
@click.argument("s3url", metavar="S3URL", callback=validate_locator)
def put(
    source: str,
    s3url: crossing.types.StorageLocator,
    kms_key_id: str,
    verbose_output: bool,
    profile: str,
    region: str,
    s3_endpoint_url: str,
    kms_endpoint_url: str,
    verbose: bool,
    debug: bool,
) -> None:
    """Encrypt and upload a file to S3.

    Using Client Side Encryption (CSE), encrypt SOURCE and upload it to
    S3URL, given as BUCKET or BUCKET/KEY. A bare bucket stores the file under
    the source path, a key ending in / is used as a prefix for it.
    """
    opts: crossing.types.PutOptions = {
        "source": source,
        "bucket": s3url["bucket"],
        "key": crossing.locator.resolve_key(s3url["key"], source),
        "kms_key_id": kms_key_id,
        "verbose_output": verbose_output,
        "verbose": verbose,
        "debug": debug,
        "profile": profile,
        "region": region,
        "s3_endpoint_url": s3_endpoint_url,
        "kms_endpoint_url": kms_endpoint_url,
    }

    ret = 0
    try:
        ret = asyncio.run(crossing.put.wrap_put_exceptions(opts))
    except KeyboardInterrupt:
        ret = 1
    sys.exit(ret)


@click.group()
def wrap():
    """Client-side encryption utilities for S3."""
    pass


wrap.add_command(put)


if __name__ == "__main__":
    wrap()
