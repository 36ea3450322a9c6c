import os
from datetime import datetime
from typing import List

# -----------------------------
# Debug helpers (enable with --debug or env SALVO_DEBUG=1)
# -----------------------------
DEBUG_LOG_PATH = "salvo_debug.log"


def _env_enabled() -> bool:
    raw = os.getenv("SALVO_DEBUG")
    if raw is None:
        return False
    return str(raw).strip().lower() not in {"", "0", "false", "no", "off"}


class DebugLog:
    """Appends debug events to a log file. Disabled sinks drop everything."""

    def __init__(self, enabled: bool = False, path: str = DEBUG_LOG_PATH):
        self.enabled = enabled
        self.path = path

    @classmethod
    def from_env(cls) -> "DebugLog":
        return cls(_env_enabled(), os.getenv("SALVO_DEBUG_LOG") or DEBUG_LOG_PATH)

    def _write(self, lines: List[str]) -> None:
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError:
            pass

    def event(self, title: str, message: str, details: str = "", *, level: str = "info") -> None:
        """Log a debug event with optional multi-line details."""
        if not self.enabled:
            return
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        lines = [f"[{ts}] {level.upper()} | {title} | {message}"]
        if details:
            lines.extend(f"    {ln}" for ln in details.splitlines())
        self._write(lines)


class MemoryDebugLog(DebugLog):
    """Keeps events in memory; used by tests and by callers that inspect runs."""

    def __init__(self):
        super().__init__(enabled=True, path="")
        self.events: List[tuple] = []

    def event(self, title: str, message: str, details: str = "", *, level: str = "info") -> None:
        self.events.append((level, title, message, details))


NULL_DEBUG = DebugLog(enabled=False)
