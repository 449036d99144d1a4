from __future__ import annotations
from PyQt6.QtCore import QObject, pyqtSignal


def format_bytes(data: bytes | list[int]) -> str:
    return " ".join(f"{b:02X}" for b in data)


class AppLogger(QObject):
    message_logged = pyqtSignal(str, str)  # category, message

    def log(self, category: str, message: str) -> None:
        print(f"[{category}] {message}", flush=True)
        self.message_logged.emit(category, message)

    def midi(self, message: str) -> None:
        self.log("MIDI", message)

    def codec(self, message: str) -> None:
        self.log("CODEC", message)

    def general(self, message: str) -> None:
        self.log("GENERAL", message)

    def patch(self, target: str, index: int, data: bytes) -> None:
        """Log a header patch sent to the sampler, e.g. ``Program 4 @65: 76 FE``."""
        self.midi(f"{target} @{index}: {format_bytes(data)}")
