from datetime import datetime
import os
import sys
import redis
from typing import Optional


class LogStream():
    """A logging stream that prints publish output and optionally mirrors it to a Redis stream."""

    def __init__(self, stream_name: Optional[str] = None) -> None:
        self.stream_name: Optional[str] = stream_name or os.environ.get("HEYVR_LOG_STREAM") or None
        self.redis_client: Optional[redis.Redis] = None

        # Connect to Valkey only when a stream is requested
        if self.stream_name:
            try:
                port = int(os.environ.get("VALKEY_PORT", 6379))
            except ValueError:
                print(f"Log stream {self.stream_name} disabled: invalid VALKEY_PORT", file=sys.stderr)
                return
            use_ssl = os.environ.get("VALKEY_USE_SSL", "false").lower() == "true"
            self.redis_client = redis.Redis(
                host=os.environ.get("VALKEY_HOST", "valkey"),
                port=port,
                password=os.environ.get("VALKEY_PASSWORD") or None,
                ssl=use_ssl,
                decode_responses=True,
            )

    # Log a line to the console and the stream
    def log(self, line: str, level: str = "info") -> None:
        """Print a line and append it to the Redis stream if one is configured."""
        out = sys.stdout if level[0].lower() == "i" else sys.stderr
        print(line, file=out)

        if self.redis_client is None:
            return
        try:
            self.redis_client.xadd(
                self.stream_name,
                {
                    "line": line,
                    "timestamp": datetime.now().isoformat(),
                    "level": level[0].lower()
                },
            )
        except redis.RedisError as e:
            # Keep publishing even if the relay is unreachable
            print(f"Log stream {self.stream_name} unavailable, disabling: {str(e)}", file=sys.stderr)
            self.redis_client = None
