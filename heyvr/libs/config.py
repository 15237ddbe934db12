import math
import os
from argparse import Namespace
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

ACCESS_TOKEN_VAR: str = "HEYVR_ACCESS_TOKEN"
DEFAULT_PATHS: Tuple[str, ...] = ("deploy", "public")
DEFAULT_SDK_VERSION: int = 1
DEFAULT_UPLOAD_TIMEOUT: float = 300

USAGE = """
# Usage
heyvr --version <version> --gameId <gameId>

version  x.y.z, converted into 'minor'/'major'/'patch'.
gameId   Game ID for heyVR.
path     Path to the game, index.html required at root.
         Default deploy/ or public/.

The command expects 'HEYVR_ACCESS_TOKEN' environment
variable for authentication."""


@dataclass
class PublishConfig:
    """Everything one publish run needs, gathered from argv and the environment."""

    version: Optional[str]
    game_id: Optional[str]
    path: Optional[str]
    access_token: Optional[str]
    sdk_version: int = DEFAULT_SDK_VERSION
    timeout: float = DEFAULT_UPLOAD_TIMEOUT


def resolve_build_path(path: Optional[str]) -> Optional[str]:
    """Return the explicit path, else the first default directory that exists."""
    if path:
        return path
    for candidate in DEFAULT_PATHS:
        if os.path.exists(candidate):
            return candidate
    return None


def load_config(args: Namespace, environ: Mapping[str, str] = os.environ) -> Tuple[PublishConfig, List[str]]:
    """Build the publish configuration and collect every precondition error.

    Errors are gathered instead of raised so a CI run can report all of them
    at once.

    Args:
        args: Parsed command line arguments (version, gameId, path, sdkVersion)
        environ: Environment to read the access token and timeout from

    Returns:
        The configuration and a list of human readable errors, empty if valid
    """
    errors: List[str] = []

    if not args.version:
        errors.append("Missing 'version' argument.")
    if not args.gameId:
        errors.append("Missing 'gameId' argument.")

    path = resolve_build_path(args.path)
    if not path:
        errors.append("No such path: deploy/ or public/\nPass a path via --path argument.")
    elif not os.path.exists(path):
        errors.append(f"Provided path {path} does not exist.")
    elif not os.path.isfile(os.path.join(path, "index.html")):
        errors.append(f"Provided path {path} does not contain an index.html.")

    sdk_version = DEFAULT_SDK_VERSION
    if args.sdkVersion:
        try:
            sdk_version = int(args.sdkVersion)
        except ValueError:
            errors.append(f"Invalid 'sdkVersion' argument: {args.sdkVersion}")

    access_token = environ.get(ACCESS_TOKEN_VAR)
    if not access_token:
        errors.append(f"'{ACCESS_TOKEN_VAR}' environment variable not set.")

    timeout = DEFAULT_UPLOAD_TIMEOUT
    raw_timeout = environ.get("HEYVR_UPLOAD_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            timeout = DEFAULT_UPLOAD_TIMEOUT
            errors.append(f"Invalid 'HEYVR_UPLOAD_TIMEOUT' value: {raw_timeout}")
        else:
            if not math.isfinite(timeout) or timeout <= 0:
                timeout = DEFAULT_UPLOAD_TIMEOUT
                errors.append(f"Invalid 'HEYVR_UPLOAD_TIMEOUT' value: {raw_timeout}")

    # LogStream connects with this port once a stream is requested
    if environ.get("HEYVR_LOG_STREAM"):
        raw_port = environ.get("VALKEY_PORT")
        if raw_port and not raw_port.strip().isdigit():
            errors.append(f"Invalid 'VALKEY_PORT' value: {raw_port}")

    config = PublishConfig(
        version=args.version,
        game_id=args.gameId,
        path=path,
        access_token=access_token,
        sdk_version=sdk_version,
        timeout=timeout,
    )
    return config, errors
