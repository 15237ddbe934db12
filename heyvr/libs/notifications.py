"""Notification service for sending publish results to Slack and Discord.

Webhooks are configured via environment variables (SLACK_WEBHOOK_URL and
DISCORD_WEBHOOK_URL). A failing webhook never fails the publish itself.
"""

import os
import requests
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone


class NotificationService:
    """Send publish notifications to Slack and Discord webhooks."""


    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """Read webhook URLs from the environment; missing ones are skipped."""
        env = os.environ if environ is None else environ
        self.slack_webhook = (env.get("SLACK_WEBHOOK_URL", "") or "").strip()
        self.discord_webhook = (env.get("DISCORD_WEBHOOK_URL", "") or "").strip()


    def send_publish_notification(self, result: Dict[str, Any], status: str, error: Optional[str] = None) -> None:
        """Send notification about a publish to all configured services.

        Args:
            result: Publish summary (gameId, version, increment, sdkVersion, size, startedAt, completedAt)
            status: Either 'completed' or 'failed'
            error: Optional error message if the publish failed
        """
        if not self.slack_webhook and not self.discord_webhook:
            return

        print(f"Sending {status} notification for {result.get('gameId', 'unknown')}")

        if self.discord_webhook:
            self._send_discord_notification(result, status, error)

        if self.slack_webhook:
            self._send_slack_notification(result, status, error)


    def _format_duration(self, start: str, end: str) -> str:
        """Format the time between two ISO 8601 timestamps, e.g. "2m 5s"."""
        try:
            start_dt = datetime.fromisoformat(start.replace('Z', '+00:00'))
            end_dt = datetime.fromisoformat(end.replace('Z', '+00:00'))
            elapsed = max(0, int((end_dt - start_dt).total_seconds()))
            hours, remainder = divmod(elapsed, 3600)
            minutes, seconds = divmod(remainder, 60)

            if hours > 0:
                return f"{hours}h {minutes}m {seconds}s"
            elif minutes > 0:
                return f"{minutes}m {seconds}s"
            else:
                return f"{seconds}s"
        except (AttributeError, ValueError):
            return "N/A"


    def _build_fields(self, result: Dict[str, Any], error: Optional[str]) -> List[Dict[str, Any]]:
        """Build the name/value fields shared by both platforms."""
        fields = [
            ('Game', result.get('gameId') or 'N/A', True),
            ('Version', result.get('version') or 'N/A', True),
            ('Increment', result.get('increment') or 'N/A', True),
            ('SDK Version', str(result.get('sdkVersion', 'N/A')), True),
        ]

        if result.get('size') is not None:
            fields.append(('Build Size', f"{result['size'] / 1000} kB", True))

        if result.get('startedAt') and result.get('completedAt'):
            duration = self._format_duration(result['startedAt'], result['completedAt'])
            fields.append(('Publish Time', duration, True))

        if error:
            fields.append(('Error', error, False))

        return [{'name': name, 'value': value, 'inline': inline} for name, value, inline in fields]


    def _title(self, result: Dict[str, Any], status: str) -> str:
        return f"heyVR Publish {status.title()}: {result.get('gameId') or 'Unknown'}"


    def _send_discord_notification(self, result: Dict[str, Any], status: str, error: Optional[str] = None) -> None:
        """Send a rich embed to the Discord webhook, green on success and red on failure."""
        color = 3381519 if status == 'completed' else 13632211  # 0x33A64F : 0xD32F2F
        title = self._title(result, status)
        message = {
            'content': title,
            'embeds': [
                {
                    'title': title,
                    'color': color,
                    'fields': self._build_fields(result, error),
                    'timestamp': result.get('completedAt') or datetime.now(timezone.utc).isoformat()
                }
            ]
        }

        try:
            response = requests.post(self.discord_webhook, json=message, timeout=10)
            if response.status_code >= 400:
                print(f"Discord webhook error: {response.status_code} - {response.text}")
            else:
                print("Discord notification sent successfully")
        except requests.exceptions.RequestException as e:
            print(f"Error sending Discord notification: {str(e)}")


    def _send_slack_notification(self, result: Dict[str, Any], status: str, error: Optional[str] = None) -> None:
        """Send a colored attachment to the Slack webhook."""
        color = '#36a64f' if status == 'completed' else '#d32f2f'
        fields = [
            {'title': f['name'], 'value': f['value'], 'short': f['inline']}
            for f in self._build_fields(result, error)
        ]
        message = {
            'attachments': [
                {
                    'color': color,
                    'title': self._title(result, status),
                    'fields': fields,
                    'ts': int(datetime.now(timezone.utc).timestamp())
                }
            ]
        }

        try:
            response = requests.post(self.slack_webhook, json=message, timeout=10)
            if response.status_code >= 400:
                print(f"Slack webhook error: {response.status_code} - {response.text}")
            else:
                print("Slack notification sent successfully")
        except requests.exceptions.RequestException as e:
            print(f"Error sending Slack notification: {str(e)}")
