"""Configuration management via .env file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_REFRESH_INTERVAL = 0.1
DEFAULT_PAGE_JUMP = 10


def _xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


@dataclass
class AppConfig:
    # Paths
    data_dir: Path = field(default_factory=lambda: _xdg_data_home() / "booktimer")
    config_dir: Path = field(default_factory=lambda: _xdg_config_home() / "booktimer")
    library_path: Path = field(init=False)
    log_path: Path = field(init=False)

    # Dashboard
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL  # seconds between repaints
    page_jump: int = DEFAULT_PAGE_JUMP

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        self.config_dir = Path(self.config_dir)
        self.library_path = self.data_dir / "library.json"
        self.log_path = self.data_dir / "booktimer.log"
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_config(env_path: Optional[Path] = None) -> AppConfig:
    """Load config from .env file. Searches CWD then config dir."""
    search_paths = [
        env_path,
        Path.cwd() / ".env",
        _xdg_config_home() / "booktimer" / ".env",
        Path.home() / ".env",
    ]
    for p in search_paths:
        if p and p.exists():
            load_dotenv(p)
            break

    kwargs = {}
    data_dir = os.getenv("BOOKTIMER_DATA_DIR")
    if data_dir:
        kwargs["data_dir"] = Path(data_dir).expanduser()

    return AppConfig(
        refresh_interval=_env_float(
            "BOOKTIMER_REFRESH_INTERVAL", DEFAULT_REFRESH_INTERVAL
        ),
        page_jump=_env_int("BOOKTIMER_PAGE_JUMP", DEFAULT_PAGE_JUMP),
        **kwargs,
    )
