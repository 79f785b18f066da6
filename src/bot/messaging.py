"""Outbound side of the chat transport."""

from typing import Protocol, TextIO


class Messenger(Protocol):
    def say(self, text: str) -> None:
        """Send one message to the conversation the command came from. Messages arrive in call order."""
        ...


class StreamMessenger:
    """Writes replies to a text stream, one per line (console bot / local testing)."""

    def __init__(self, stream: TextIO, prefix: str = "bot> ") -> None:
        self.stream = stream
        self.prefix = prefix

    def say(self, text: str) -> None:
        self.stream.write(f"{self.prefix}{text}\n")
        self.stream.flush()
