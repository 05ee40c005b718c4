from __future__ import annotations
import json, logging, os
from pathlib import Path
from typing import Optional

from mnk.config import GameConfig

logger = logging.getLogger(__name__)

ENV_VAR = "MNK_PREFS"


def default_path() -> Path:
    env = os.environ.get(ENV_VAR)
    return Path(env) if env else Path.home() / ".mnk_prefs.json"


def load_prefs(path: Optional[Path] = None) -> GameConfig:
    """Saved size/win/mode, clamped like any other input. Defaults if the file is missing or unreadable."""
    path = path or default_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return GameConfig()
    except (OSError, ValueError) as e:
        logger.warning("could not read preferences from %s: %s", path, e)
        return GameConfig()
    if not isinstance(data, dict):
        logger.warning("ignoring preferences in %s: not an object", path)
        return GameConfig()
    return GameConfig.from_raw(data.get("size"), data.get("win"), data.get("mode"))


def save_prefs(cfg: GameConfig, path: Optional[Path] = None) -> None:
    path = path or default_path()
    try:
        path.write_text(json.dumps(cfg.as_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning("could not save preferences to %s: %s", path, e)
