"""Example: Relaying an AWS S3 object to an HTTP endpoint."""

from upload_io import UploadIO, open_source
from upload_io.client import send

# Open the S3 object using URI (auto-detection)
source = open_source("s3://my-bucket/path/to/file.bin")

# Or use explicit S3Source for more control
# from upload_io.sources import S3Source
# import boto3
# s3_client = boto3.client("s3", region_name="us-east-1")
# source = S3Source(bucket="my-bucket", key="path/to/file.bin", client=s3_client)

print("Source metadata:", source.get_metadata())

with UploadIO(source, chunk_size=64 * 1024) as upload:
    response = send("http://127.0.0.1:9909/upload", upload)

print(f"Relayed {upload.uploaded} bytes, response: {response.status_code}")
