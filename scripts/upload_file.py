#!/usr/bin/env python3
"""
Upload a single file to S3 through a presigned POST policy.

Usage:
  .venv/bin/python scripts/upload_file.py <path> [--bucket B] [--region R]
      [--key K | --dest-dir D [--filename F]] [--content-type T] [--acl A]
      [--no-ssl] [--endpoint-url URL] [--meta name=value ...]

Notes:
- Credentials come from AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (or .env).
- Ctrl-C cancels the in-flight upload.
- Exit code 0 on success, 1 on failure, 130 when cancelled.
"""
from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from presigned_upload import (
    ACL,
    CancelToken,
    FractionProgressReporter,
    UploadCanceledError,
    UploadError,
    upload_file,
)
from presigned_upload.core.config import settings
from presigned_upload.infrastructure.adapters.http_session import http_sessions

logger = logging.getLogger("upload_file")


def parse_metadata(items: Optional[List[str]]) -> Dict[str, str]:
    metadata: Dict[str, str] = {}
    for item in items or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Metadata must be name=value: {item!r}")
        metadata[name] = value
    return metadata


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Upload a file via S3 presigned POST")
    ap.add_argument("path", help="Local file to upload")
    ap.add_argument("--bucket", default=settings.aws_s3_bucket)
    ap.add_argument("--region", default=settings.aws_s3_region)
    ap.add_argument("--key", default=None, help="Full object key")
    ap.add_argument("--dest-dir", default=settings.aws_s3_prefix.rstrip("/"))
    ap.add_argument("--filename", default=None)
    ap.add_argument("--content-type", default=settings.upload_default_content_type)
    ap.add_argument(
        "--acl",
        default=settings.upload_default_acl,
        choices=[a.value for a in ACL],
    )
    ap.add_argument("--no-ssl", action="store_true", help="Use http:// endpoints")
    ap.add_argument("--endpoint-url", default=settings.aws_s3_endpoint_url)
    ap.add_argument("--meta", action="append", metavar="NAME=VALUE")
    return ap


async def run(args: argparse.Namespace) -> int:
    token = CancelToken()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel, "interrupted")
    except NotImplementedError:  # pragma: no cover - Windows event loops
        pass

    last = {"pct": -1}

    def show(fraction: float) -> None:
        pct = int(fraction * 100)
        if pct // 10 != last["pct"] // 10 or pct == 100:
            logger.info("Progress: %d%%", pct)
        last["pct"] = pct

    try:
        url = await upload_file(
            access_key=settings.aws_access_key_id,
            secret_key=settings.aws_secret_access_key,
            bucket=args.bucket,
            file_path=args.path,
            key=args.key,
            dest_dir=args.dest_dir,
            region=args.region,
            acl=args.acl,
            filename=args.filename,
            content_type=args.content_type,
            use_ssl=not args.no_ssl,
            metadata=parse_metadata(args.meta),
            endpoint_url=args.endpoint_url,
            on_progress=FractionProgressReporter(show),
            cancel_token=token,
        )
    except UploadCanceledError:
        logger.warning("Upload cancelled")
        return 130
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "request"
            logger.error("Invalid upload request: %s: %s", field, err["msg"])
        return 1
    except UploadError as e:
        logger.error("Upload failed: %s", e.message)
        return 1
    except ValueError as e:
        logger.error("Invalid upload request: %s", e)
        return 1
    finally:
        with contextlib.suppress(NotImplementedError):
            loop.remove_signal_handler(signal.SIGINT)
        await http_sessions.close()

    print(url)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
        datefmt=settings.log_date_format,
    )
    ap = build_parser()
    args = ap.parse_args(argv)
    if not args.bucket:
        ap.error("--bucket is required (or set AWS_S3_BUCKET)")
    try:
        parse_metadata(args.meta)
    except argparse.ArgumentTypeError as e:
        ap.error(str(e))
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
