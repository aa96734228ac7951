import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from models.autoplay import AutoplayMode

DEFAULT_DIRECTORY = "."


@dataclass
class StartupOptions:
    """Startup configuration, normally built from the command line."""

    directory: str = DEFAULT_DIRECTORY
    play: Optional[str] = None
    random_start: bool = False
    volume: Optional[float] = None
    repeat_list: bool = False
    repeat_track: bool = False
    sequential: bool = False
    shuffle: bool = False
    exit_when_idle: bool = False
    no_listing: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "StartupOptions":
        return cls(
            directory=args.dir or DEFAULT_DIRECTORY,
            play=args.play,
            random_start=args.random,
            volume=args.volume,
            repeat_list=args.repeat_list,
            repeat_track=args.repeat,
            sequential=args.sequential,
            shuffle=args.shuffle,
            exit_when_idle=args.no_remain,
            no_listing=args.no_listing,
            log_level=args.log_level,
        )

    def validate(self) -> list[str]:
        """Return a list of problems; empty when the options are usable."""
        issues = []
        if self.volume is not None and not (0.0 <= self.volume <= 1.0):
            issues.append(f"Volume must be between 0.0 and 1.0, got {self.volume}")
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            issues.append(f"Invalid log level: {self.log_level}")
        return issues

    def autoplay_mode(self) -> AutoplayMode:
        return AutoplayMode(
            repeat_track=self.repeat_track,
            repeat_list=self.repeat_list,
            sequential=self.sequential,
            shuffle=self.shuffle,
        )

    def directory_path(self) -> Path:
        return Path(self.directory).expanduser()

    def play_path(self) -> Optional[str]:
        """Absolute path of the file to play at startup, if any."""
        if self.play is None:
            return None
        return str(Path(self.play).expanduser().resolve())
