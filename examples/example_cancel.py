"""Example: Cancelling an upload from another thread."""

import sys
import threading
import time

from upload_io import UploadIO
from upload_io.client import send
from upload_io.sources import LocalFileSource

if len(sys.argv) != 2:
    print("Usage: python example_cancel.py <file_path>")
    sys.exit(1)

source = LocalFileSource(sys.argv[1])
size = source.get_metadata()["size"]
uploaded_total = 0


def on_progress(uploaded_chunk: int) -> None:
    global uploaded_total
    uploaded_total += uploaded_chunk
    print(f"Uploaded: {uploaded_total} / {size} bytes")


upload = UploadIO(source, 4096, on_progress)


def run() -> None:
    try:
        response = send("http://127.0.0.1:9909/upload", upload)
        print(f"Upload complete! Response: {response.status_code}")
    except OSError as e:
        print(f"Upload stopped: {e}")


# Start the upload in a separate thread
uploader = threading.Thread(target=run)
uploader.start()

# Cancel the upload after 5 seconds
time.sleep(5)
upload.cancel()
uploader.join()
print(f"Upload cancelled after {upload.uploaded} bytes")

# A time budget can also be given up front:
# from upload_io import deadline_predicate
# upload = UploadIO(source, should_cancel=deadline_predicate(5))
