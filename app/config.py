from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from utils.constants import AI_MOVE_DELAY, CONFIRM_FRAMES, MODEL_PATH, RESET_LABEL

ENV_PREFIX = "HANDCOUNT_"


@dataclass
class AppConfig:
    """
    Central configuration injected into all components.
    Every field can be overridden with a HANDCOUNT_<FIELD> environment variable.
    """
    # ---- paths ---------------------------------------------------------
    model_path: Path = Path(MODEL_PATH)
    landmarker_path: Path = Path("models/hand_landmarker.task")

    # ---- camera --------------------------------------------------------
    camera_device: int = 0
    fps_limit: int = 30

    # ---- hand tracker --------------------------------------------------
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_presence_confidence: float = 0.5

    # ---- debouncer -----------------------------------------------------
    confirm_frames: int = CONFIRM_FRAMES

    # ---- game ----------------------------------------------------------
    reset_label: str = RESET_LABEL
    ai_delay: float = AI_MOVE_DELAY
    game_engine: str = ""           # "module:factory", empty = counting only

    # ---- logging -------------------------------------------------------
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.confirm_frames <= 0:
            raise ValueError(f"confirm_frames must be positive, got {self.confirm_frames}")
        if self.fps_limit < 0:
            raise ValueError(f"fps_limit must be >= 0, got {self.fps_limit}")
        if self.ai_delay < 0:
            raise ValueError(f"ai_delay must be >= 0, got {self.ai_delay}")

    # ------------------------------------------------------------------
    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "AppConfig":
        """Defaults, overridden by a .env file, overridden by the real environment."""
        load_dotenv(env_file)
        overrides = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            try:
                overrides[f.name] = _coerce(f.type, raw)
            except ValueError as exc:
                raise ValueError(f"{ENV_PREFIX}{f.name.upper()}={raw!r}: {exc}") from exc
        return cls(**overrides)


def _coerce(type_name: str, raw: str):
    # Field types are strings because of `from __future__ import annotations`.
    if type_name == "Path":
        return Path(raw)
    if type_name == "int":
        return int(raw)
    if type_name == "float":
        return float(raw)
    return raw


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# Default singleton — import and use directly, or override in tests.
default_config = AppConfig()
