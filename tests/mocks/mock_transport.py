import smtplib
import threading
import time
from email.message import EmailMessage
from typing import List, Set


class RecordingTransport:
    """Stands in for SMTP: keeps every message instead of sending it."""

    def __init__(self):
        self.sent: List[EmailMessage] = []
        self.should_fail = False
        self.failing_recipients: Set[str] = set()
        self.delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0  # Highest number of overlapping sends seen
        self._lock = threading.Lock()

    def send(self, message: EmailMessage) -> None:
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if self.should_fail or message["To"] in self.failing_recipients:
                raise smtplib.SMTPRecipientsRefused({message["To"]: (550, b"mailbox unavailable")})
            self.sent.append(message)
        finally:
            with self._lock:
                self.in_flight -= 1

    @property
    def recipients(self) -> List[str]:
        return [message["To"] for message in self.sent]

    def bodies(self) -> List[str]:
        return [message.get_body(preferencelist=("plain",)).get_content() for message in self.sent]

    def clear_history(self):
        """Clear test history"""
        self.sent = []
        self.max_in_flight = 0
