"""Example: Uploading a local file with progress reporting."""

import sys

from upload_io import UploadIO
from upload_io.client import send
from upload_io.sources import LocalFileSource

if len(sys.argv) != 3:
    print("Usage: python example_local.py <file_path> <url>")
    sys.exit(1)

path, url = sys.argv[1], sys.argv[2]

source = LocalFileSource(path)
size = source.get_metadata()["size"]
uploaded_total = 0


def on_progress(uploaded_chunk: int) -> None:
    global uploaded_total
    uploaded_total += uploaded_chunk
    print(f"Uploaded: {uploaded_total} / {size} bytes")


with UploadIO(source, 4096, on_progress) as upload:
    response = send(url, upload, headers={"Content-Type": "application/octet-stream"})

print(f"Upload complete! Response: {response.status_code}")

# # Or limit the upload to 64 KiB/s
# with UploadIO(LocalFileSource(path), max_speed=64 * 1024) as upload:
#     send(url, upload)
