"""Command-line interface for streaming uploads."""

import logging
import sys

import typer

from upload_io.callbacks import ProgressTracker, deadline_predicate
from upload_io.client import send
from upload_io.sources import open_source
from upload_io.upload import CHUNK_SIZE, UploadIO

app = typer.Typer(add_completion=False)


def _parse_headers(values: list[str]) -> dict[str, str]:
    headers = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Header must look like 'Name: value', got {value!r}")
        headers[name.strip()] = content.strip()
    return headers


def _print_progress(uploaded: int, total: int | None) -> None:
    if total:
        typer.echo(f"Uploaded: {uploaded} / {total} bytes", err=True)
    else:
        typer.echo(f"Uploaded: {uploaded} bytes", err=True)


@app.command()
def main(
    source: str = typer.Argument(
        ...,
        help="Data to upload: /path/to/file, s3://bucket/key, or https://url",
    ),
    url: str = typer.Argument(..., help="Destination HTTP/HTTPS URL"),
    method: str = typer.Option("POST", help="HTTP method"),
    chunk_size: int = typer.Option(CHUNK_SIZE, min=1, help="Bytes read per chunk"),
    max_speed: float | None = typer.Option(
        None,
        help="Throughput ceiling in bytes per second (default: unlimited)",
    ),
    cancel_after: float | None = typer.Option(
        None,
        help="Cancel the upload after this many seconds",
    ),
    content_type: str = typer.Option(
        "application/octet-stream",
        help="Content-Type of the request body",
    ),
    header: list[str] = typer.Option(
        [],
        "--header",
        "-H",
        help="Extra request header as 'Name: value' (repeatable)",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print progress"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Stream a file to an HTTP endpoint with progress, throttling and cancellation.

    Sources:
    - Local files: /path/to/file
    - S3: s3://bucket/key
    - HTTP/HTTPS: https://example.com/file
    """
    # Configure logging
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    headers = {"Content-Type": content_type, **_parse_headers(header)}

    try:
        upload_source = open_source(source)
        tracker = ProgressTracker(
            total=upload_source.get_metadata().get("size"),
            report=None if quiet else _print_progress,
        )
        should_cancel = deadline_predicate(cancel_after) if cancel_after is not None else None

        with UploadIO(
            upload_source,
            chunk_size=chunk_size,
            on_progress=tracker,
            should_cancel=should_cancel,
            max_speed=max_speed,
        ) as upload:
            try:
                response = send(url, upload, method=method, headers=headers)
            except OSError:
                if upload.aborted:
                    typer.echo(f"Upload cancelled after {upload.uploaded} bytes", err=True)
                    raise typer.Exit(code=1) from None
                raise

            size = upload.size
            if upload.aborted or (size is not None and upload.uploaded < size):
                typer.echo(f"Upload cancelled after {upload.uploaded} bytes", err=True)
                raise typer.Exit(code=1)

        typer.echo(f"Upload complete! Response: {response.status_code}", err=True)
        if response.text:
            sys.stdout.write(response.text)

    except typer.Exit:
        raise
    except FileNotFoundError as e:
        typer.echo(f"Error: File not found: {e}", err=True)
        raise typer.Exit(code=1) from None
    except ImportError as e:
        typer.echo(
            f"Error: Missing dependency: {e}\nInstall with: pip install upload-io[all]",
            err=True,
        )
        raise typer.Exit(code=1) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        raise typer.Exit(code=1) from None


if __name__ == "__main__":
    app()
