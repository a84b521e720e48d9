"""Chat webhook notifications."""

import logging
import requests


class ChatNotifier:
    """Posts plain-text messages to a Slack incoming webhook."""

    def __init__(self, webhook_url: str = None, session: requests.Session = None, timeout: float = 30):
        self.webhook_url = webhook_url
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def send(self, text: str) -> bool:
        """Post a message to the webhook.

        Delivery is best effort: failures are logged and reported through the
        return value, never raised.

        Args:
            text: Message text in Slack mrkdwn

        Returns:
            True if the webhook accepted the message
        """
        if not self.enabled:
            logging.info("No chat webhook configured, skipping notification")
            return False

        try:
            response = self.session.post(self.webhook_url, json={'text': text}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logging.warning(f"Failed to send chat notification: {e}")
            return False

        logging.info("Sent chat notification")
        return True
