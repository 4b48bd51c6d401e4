"""Encrypted object upload to S3."""

import crossing.common
import crossing.envelope
import crossing.exceptions
import crossing.types

from botocore.exceptions import BotoCoreError, ClientError


async def s3_put_encrypted_object(
    session: crossing.types.CrossingSession,
    opts: crossing.types.PutOptions,
    request: crossing.types.UploadRequest,
    content: crossing.types.FileContent,
    encrypt: crossing.types.EncryptFunction | None = None,
    wrap_key: crossing.types.WrapKeyFunction | None = None,
) -> str | None:
    """Encrypt the file contents and upload them in a single put.

    Returns the version id reported by S3, or None if the bucket doesn't
    report one.
    """
    if session["s3_client"] is None:
        raise crossing.exceptions.NoS3Client

    if encrypt is None:
        encrypt = crossing.envelope.encrypt_content
    if wrap_key is None:
        wrap_key = crossing.envelope.generate_data_key

    bucket = request["bucket"]
    key = request["object_key"]

    crossing.common.conditional_echo_debug(
        opts, f"Generating a data key with KMS key {request['kms_key_id']}"
    )
    data_key = await wrap_key(session, request["kms_key_id"])

    crossing.common.conditional_echo_verbose(opts, f"Encrypting {request['source_path']}")
    encrypted = encrypt(content["body"], data_key)

    crossing.common.conditional_echo_verbose(opts, f"Uploading to {bucket}/{key}")
    crossing.common.conditional_echo_debug(
        opts,
        f"Object size {len(encrypted['body'])} bytes, content type {content['content_type']}",
    )
    try:
        resp = await session["s3_client"].put_object(
            Bucket=bucket,
            Key=key,
            Body=encrypted["body"],
            ContentLength=len(encrypted["body"]),
            ContentType=content["content_type"],
            Metadata=encrypted["metadata"],
        )
    except (ClientError, BotoCoreError) as e:
        raise crossing.exceptions.UploadFailed(f"bad response: {e}") from e

    crossing.common.conditional_echo_debug(opts, f"Upload complete for {key}")

    return resp.get("VersionId")
