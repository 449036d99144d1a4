from __future__ import annotations
import json
from pathlib import Path

_DEFAULTS = {
    "log_header_patches": False,
    "new_sample_rate": 44100,
    "new_sample_root_hz": 440.0,
    "new_program_keygroup_program_number": 255,
}


def default_config_path() -> Path:
    return Path.home() / ".config" / "samplerkit" / "config.json"


class AppConfig:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_config_path()
        self.log_header_patches: bool = _DEFAULTS["log_header_patches"]
        self.new_sample_rate: int = _DEFAULTS["new_sample_rate"]
        self.new_sample_root_hz: float = _DEFAULTS["new_sample_root_hz"]
        # Keygroups of a freshly created program are addressed through this
        # placeholder program number until the instrument assigns a slot.
        self.new_program_keygroup_program_number: int = _DEFAULTS["new_program_keygroup_program_number"]
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text())
            for key in _DEFAULTS:
                if key in data:
                    setattr(self, key, data[key])
        except (json.JSONDecodeError, OSError):
            pass

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: getattr(self, key) for key in _DEFAULTS}
        self._path.write_text(json.dumps(data, indent=2))
