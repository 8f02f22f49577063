import os
from pathlib import Path
from dataclasses import dataclass

APP_DIR_NAME = "EggTimer"

# Lil helper function to create a directory (and its parents) if it's missing.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the per-user data folder. APPDATA on Windows, XDG data home (or ~/.local/share) everywhere else.
def user_data_root():
    appdata = os.getenv("APPDATA")
    if appdata:
        return Path(appdata) / APP_DIR_NAME
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME.lower()
    return Path.home() / ".local" / "share" / APP_DIR_NAME.lower()

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    settings: Path

    @staticmethod
    def build(data_root: Path | None = None):
        # Folder for all user-specific stuff, logs and settings
        data = ensure_directory(data_root or user_data_root())
        logs = ensure_directory(data / "logs")

        return ProjectPaths(
            data = data,
            logs = logs,
            settings = data / "settings.json",
        )
PATHS = ProjectPaths.build()
