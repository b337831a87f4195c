"""Command line entry point for one-off blob uploads.

Usage:
    python -m blob_uploader report.pdf --agent research --origin https://app.example.com
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Sequence

from .agents import create_browser_agent_resolver, static_agent_resolver
from .client import BlobUploader
from .config import Settings
from .environment import environ_probe
from .errors import BlobUploaderError
from .models import FilePayload, UploadResult

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blob-uploader",
        description="Upload a file to the blob storage endpoint",
    )
    parser.add_argument("path", help="File to upload")
    parser.add_argument("--agent", help="Agent namespace (overrides ambient markers)")
    parser.add_argument("--base-url", dest="upload_base_url", help="Upload endpoint base")
    parser.add_argument("--origin", dest="location_origin", help="Origin of the blob server")
    parser.add_argument("--filename-header", dest="filename_header", help="Filename header name")
    parser.add_argument("--mime", help="MIME type to send instead of the guessed one")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {
        key: value
        for key in ("upload_base_url", "location_origin", "filename_header")
        if (value := getattr(args, key)) is not None
    }
    return Settings(**overrides)


async def _upload(args: argparse.Namespace, settings: Settings) -> UploadResult:
    payload = FilePayload.from_path(args.path, mime=args.mime)
    probe = environ_probe()
    if settings.location_origin is None:
        snapshot = probe()
        if snapshot is not None and snapshot.location:
            settings = settings.model_copy(update={"location_origin": snapshot.location})
    if args.agent is not None:
        resolver = static_agent_resolver(args.agent)
    else:
        resolver = create_browser_agent_resolver(settings.default_agent, probe=probe)
    async with BlobUploader.from_settings(
        settings, agent_resolver=resolver, probe=probe
    ) as uploader:
        return await uploader.upload(payload)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    settings = _settings_from_args(args)
    try:
        result = asyncio.run(_upload(args, settings))
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.path, exc)
        return 1
    except BlobUploaderError as exc:
        logger.error("Upload failed: %s", exc)
        return 1
    print(json.dumps(result.to_wire(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
