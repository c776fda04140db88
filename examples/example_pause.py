"""Example: Pausing and resuming an upload."""

import mimetypes
from pathlib import Path
import sys
import threading
import time

from upload_io import UploadIO
from upload_io.client import send
from upload_io.sources import LocalFileSource

if len(sys.argv) != 2:
    print("Usage: python example_pause.py <file_path>")
    sys.exit(1)

path = Path(sys.argv[1])
mime, _ = mimetypes.guess_type(path.name)
upload = UploadIO(LocalFileSource(path), 4096)
uploading = threading.Event()
uploading.set()


def toggle() -> None:
    # Every second of upload time, pause for 10 seconds
    while uploading.is_set():
        time.sleep(1)
        if not uploading.is_set():
            break
        print("\nPausing upload...")
        upload.pause()
        time.sleep(10)
        print("Resuming upload...")
        upload.resume()


threading.Thread(target=toggle, daemon=True).start()

start = time.monotonic()
headers = {
    "Content-Type": mime or "application/octet-stream",
    "Content-Disposition": f"attachment; filename={path.name}",
}

try:
    response = send("http://127.0.0.1:9909/upload", upload, headers=headers, timeout=60)
    total_time = time.monotonic() - start
    print(
        f"Upload complete! Response: {response.status_code} {response.text!r} "
        f"in {total_time:.2f} seconds"
    )
finally:
    uploading.clear()
    upload.close()
