"""AWS session settings for the S3 and KMS clients."""

import os

import aioboto3
import botocore.exceptions

import crossing.exceptions
import crossing.types


async def open_session(
    profile: str = "",
    region: str = "",
    s3_endpoint_url: str = "",
    kms_endpoint_url: str = "",
) -> crossing.types.CrossingSession:
    """Open a new session, filling missing settings from the environment."""
    ret: crossing.types.CrossingSession = {
        "s3_client": None,
        "kms_client": None,
        "profile": (
            profile
            if profile
            else os.environ.get(
                "AWS_PROFILE",
                "",
            )
        ),
        "region": (
            region
            if region
            else os.environ.get(
                "AWS_REGION",
                os.environ.get("AWS_DEFAULT_REGION", ""),
            )
        ),
        "s3_endpoint_url": (
            s3_endpoint_url
            if s3_endpoint_url
            else os.environ.get(
                "S3_ENDPOINT_URL",
                "",
            )
        ),
        "kms_endpoint_url": (
            kms_endpoint_url
            if kms_endpoint_url
            else os.environ.get(
                "KMS_ENDPOINT_URL",
                "",
            )
        ),
    }

    return ret


def get_boto_session(session: crossing.types.CrossingSession) -> aioboto3.Session:
    """Create the aioboto3 session using the default credential chain."""
    try:
        return aioboto3.Session(
            profile_name=session["profile"] or None,
            region_name=session["region"] or None,
        )
    except botocore.exceptions.BotoCoreError as e:
        raise crossing.exceptions.EncryptionSetupFailed(
            f"err establishing credentials: {e}"
        ) from e
