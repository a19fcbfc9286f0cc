from dataclasses import dataclass
from typing import Any, Optional, Protocol, cast

import botocore.client
import botocore.exceptions
import boto3.session

from .factory import make_unique_resource
from .handle import unique_resource


__all__ = [
    "S3",
    "S3Interface",
    "MultipartUpload",
    "abort_multipart_upload",
    "multipart_upload",
    "upload_part",
    "complete_multipart_upload",
]


class S3Interface(Protocol):
    def abort_multipart_upload(self, **kwargs) -> dict: ...
    def complete_multipart_upload(self, **kwargs) -> dict: ...
    def create_multipart_upload(self, **kwargs) -> dict: ...
    def upload_part(self, **kwargs) -> dict: ...


def S3(
    aws_access_key_id: Optional[str] = None,
    aws_secret_access_key: Optional[str] = None,
    aws_session_token: Optional[str] = None,
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
    verify: Optional[bool | str] = None,
    endpoint_url: Optional[str] = None,
    config: Optional[botocore.client.Config] = None
) -> S3Interface:
    session = boto3.session.Session(
        aws_access_key_id=aws_access_key_id,
        aws_secret_access_key=aws_secret_access_key,
        aws_session_token=aws_session_token,
        region_name=region_name,
        profile_name=profile_name,
    )

    return cast(S3Interface, session.client(
        "s3",
        verify=verify,
        endpoint_url=endpoint_url,
        config=config,
    ))


@dataclass(frozen=True)
class MultipartUpload:
    Bucket: str
    Key: str
    UploadId: str


class abort_multipart_upload:
    '''Deleter discarding an unfinished multipart upload and its parts'''

    def __init__(self, client: S3Interface):
        self.client = client

    def __call__(self, upload: MultipartUpload) -> None:
        try:
            self.client.abort_multipart_upload(Bucket=upload.Bucket, Key=upload.Key, UploadId=upload.UploadId)
        except botocore.exceptions.ClientError as e:
            # already aborted or completed elsewhere
            if e.response["Error"]["Code"] != "NoSuchUpload":
                raise e


type UploadHandle = unique_resource[MultipartUpload, abort_multipart_upload]


def multipart_upload(client: S3Interface, Bucket: str, Key: str, **kwargs) -> UploadHandle:
    """
    Start a multipart upload owned by the returned handle.

    The upload is aborted when the handle is reset or leaves a `with` block,
    unless complete_multipart_upload() succeeded first.
    """
    res = client.create_multipart_upload(Bucket=Bucket, Key=Key, **kwargs)
    upload = MultipartUpload(Bucket=Bucket, Key=Key, UploadId=res["UploadId"])
    return make_unique_resource(upload, abort_multipart_upload(client))


def upload_part(handle: UploadHandle, PartNumber: int, Body: bytes) -> dict[str, Any]:
    upload = handle.get()
    res = handle.get_deleter().client.upload_part(
        Bucket=upload.Bucket,
        Key=upload.Key,
        UploadId=upload.UploadId,
        PartNumber=PartNumber,
        Body=Body,
    )
    return {"ETag": res["ETag"], "PartNumber": PartNumber}


def complete_multipart_upload(handle: UploadHandle, Parts: list[dict[str, Any]]) -> dict:
    if not handle:
        raise ValueError("multipart upload is not owned by this handle")
    upload = handle.get()
    res = handle.get_deleter().client.complete_multipart_upload(
        Bucket=upload.Bucket,
        Key=upload.Key,
        UploadId=upload.UploadId,
        MultipartUpload={"Parts": Parts},
    )
    handle.release()
    return res
