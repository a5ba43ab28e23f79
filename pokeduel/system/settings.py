from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List, Optional
from pokeduel.core.logging import logger

SETTINGS_FILENAME = ".pokeduel_settings.json"

_LEVELS = {"DEBUG","INFO","WARN","ERROR"}
_DELAY_DEFAULTS = {
    "pre_resolution_delay": 0.5,
    "hit_animation_delay": 0.6,
    "post_resolution_delay": 1.0,
    "opponent_delay": 1.0,
}

@dataclass
class SettingsData:
    pre_resolution_delay: float = 0.5   # wind-up before the accuracy roll
    hit_animation_delay: float = 0.6    # attack animation on a hit
    post_resolution_delay: float = 1.0  # lets HP bars / log settle
    opponent_delay: float = 1.0         # pause before the opponent acts
    log_level: str = "WARN"             # DEBUG / INFO / WARN / ERROR
    seed: Optional[int] = None          # fixed RNG seed; None = fresh each run
    color: bool = True

    def normalize(self):
        for name, default in _DELAY_DEFAULTS.items():
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, (int, float)) or val < 0:
                setattr(self, name, default)
            else:
                setattr(self, name, float(val))
        if self.log_level not in _LEVELS:
            self.log_level = "WARN"
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            self.seed = None
        self.color = bool(self.color)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                if not isinstance(raw, dict):
                    raise ValueError("settings root must be an object")
                # Unknown keys are dropped, missing ones take defaults
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_logging(self):
        lvl: str = self.data.log_level
        if lvl in _LEVELS:
            logger.set_level(lvl)  # type: ignore[arg-type]
        logger.color = self.data.color

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def update(self, **changes):
        for key, value in changes.items():
            if not hasattr(self.data, key):
                raise AttributeError(f"Unknown setting '{key}'")
            setattr(self.data, key, value)
        self.data.normalize()
        self.apply_logging()
        self.save()
        self._notify()

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)
