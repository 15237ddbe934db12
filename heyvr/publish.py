import argparse
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from heyvr.libs.config import PublishConfig, USAGE, load_config
from heyvr.libs.heyvr_api import HeyVRUploader, UploadError
from heyvr.libs.notifications import NotificationService
from heyvr.libs.streams import LogStream
from heyvr.libs.version import classify_version
from heyvr.libs.zip import ArchiveError, zip_directory

# ===============================================================
# Argument Parsing
# ===============================================================

class ArgumentParseError(Exception):
    """Raised instead of exiting when argparse rejects the command line."""


class _CollectingParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise ArgumentParseError(message)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    No flag is marked required and every value is optional, so a dangling
    flag such as `--version` with an empty CI variable parses as missing
    and load_config reports it together with the other precondition errors.
    """
    parser = _CollectingParser(prog="heyvr", description="Publish a WebXR build to heyVR.", allow_abbrev=False)
    parser.add_argument("--version", nargs="?", help="x.y.z, converted into 'minor'/'major'/'patch'")
    parser.add_argument("--gameId", nargs="?", help="Game ID for heyVR")
    parser.add_argument("--path", nargs="?", help="Path to the game, index.html required at root (default deploy/ or public/)")
    parser.add_argument("--sdkVersion", nargs="?", help="heyVR SDK version (default 1)")
    return parser


def report_errors(errors: List[str]) -> None:
    """Print all validation errors followed by the usage text."""
    print(f"Found {len(errors)} errors:", file=sys.stderr)
    for e in errors:
        print(f"✘ {e}", file=sys.stderr)
    print(USAGE)

# ===============================================================
# Publishing
# ===============================================================

def publish(config: PublishConfig, stream: LogStream, result: Dict[str, Any]) -> Dict[str, Any]:
    """Zip the build directory and upload it to heyVR.

    Args:
        config: Validated publish configuration
        stream: LogStream instance for logging progress
        result: Publish summary, filled in as the steps complete

    Returns:
        The upload result returned by HeyVRUploader

    Raises:
        ArchiveError: If the build directory cannot be compressed
        UploadError: If the upload fails
    """
    increment = classify_version(config.version)
    result["increment"] = increment

    game_file = zip_directory(config.path, stream)
    result["size"] = len(game_file)
    stream.log(f"Publishing {increment} version ({len(game_file) / 1000} kB)")

    stream.log(f"Publishing {increment} version of {config.game_id} to HeyVR.")
    uploader = HeyVRUploader(config.access_token, stream, timeout=config.timeout)
    upload = uploader.upload_build(config.game_id, game_file, increment, config.sdk_version)
    stream.log("Done.")
    return upload

# ===============================================================
# Main
# ===============================================================

def main(argv: Optional[List[str]] = None) -> int:
    try:
        args, unknown = build_parser().parse_known_args(argv)
    except ArgumentParseError as e:
        report_errors([str(e)])
        return 1

    config, errors = load_config(args)
    if unknown:
        errors.insert(0, f"Unknown argument(s): {' '.join(unknown)}")
    if errors:
        report_errors(errors)
        return 1

    stream = LogStream()
    notification_service = NotificationService()
    result: Dict[str, Any] = {
        "gameId": config.game_id,
        "version": config.version,
        "sdkVersion": config.sdk_version,
        "startedAt": datetime.now(timezone.utc).isoformat(),
    }

    try:
        publish(config, stream, result)
    except ArchiveError as e:
        stream.log(str(e), level="error")
        result["completedAt"] = datetime.now(timezone.utc).isoformat()
        notification_service.send_publish_notification(result, "failed", str(e))
        return 1
    except UploadError as e:
        stream.log(str(e), level="error")
        if e.body:
            stream.log(e.body, level="error")
        result["completedAt"] = datetime.now(timezone.utc).isoformat()
        notification_service.send_publish_notification(result, "failed", str(e))
        return 1

    result["completedAt"] = datetime.now(timezone.utc).isoformat()
    notification_service.send_publish_notification(result, "completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
