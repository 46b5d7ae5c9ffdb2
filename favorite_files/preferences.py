"""User preferences for favorite-files.

Loads settings from ~/.favorite-files/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger

APP_DIR = Path.home() / ".favorite-files"
PREFS_PATH = APP_DIR / "preferences.yaml"

_DEFAULT_YAML = """\
# favorite-files preferences
# Delete this file to reset to defaults.

storage:
  state_dir: ""                  # where workspace state lives (empty = ~/.favorite-files)
  backup_dir: ""                 # import backups (empty = workspace root, else home)

export:
  indent: 2                      # JSON indentation for export and backup files

import:
  confirm: true                  # ask before replacing favorites on import

display:
  show_relative_paths: true      # show files relative to the workspace root
  show_bookmark_lines: true      # prefix bookmark labels with their line number
"""


@dataclass
class StoragePreferences:
    """Where state and backups are written."""

    state_dir: str = ""
    backup_dir: str = ""

    def resolved_state_dir(self) -> Path:
        return Path(self.state_dir).expanduser() if self.state_dir else APP_DIR

    def resolved_backup_dir(self) -> Path | None:
        return Path(self.backup_dir).expanduser() if self.backup_dir else None


@dataclass
class ExportPreferences:
    indent: int = 2


@dataclass
class ImportPreferences:
    confirm: bool = True


@dataclass
class DisplayPreferences:
    """Display settings for the favorites tree."""

    show_relative_paths: bool = True
    show_bookmark_lines: bool = True


@dataclass
class Preferences:
    """Top-level preferences."""

    storage: StoragePreferences = field(default_factory=StoragePreferences)
    export: ExportPreferences = field(default_factory=ExportPreferences)
    import_: ImportPreferences = field(default_factory=ImportPreferences)
    display: DisplayPreferences = field(default_factory=DisplayPreferences)


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or PREFS_PATH
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data.get("storage"), dict):
                sdata = data["storage"]
                if "state_dir" in sdata:
                    prefs.storage.state_dir = str(sdata["state_dir"] or "")
                if "backup_dir" in sdata:
                    prefs.storage.backup_dir = str(sdata["backup_dir"] or "")
            if isinstance(data.get("export"), dict):
                edata = data["export"]
                if "indent" in edata:
                    prefs.export.indent = max(0, int(edata["indent"]))
            if isinstance(data.get("import"), dict):
                idata = data["import"]
                if "confirm" in idata:
                    prefs.import_.confirm = bool(idata["confirm"])
            if isinstance(data.get("display"), dict):
                ddata = data["display"]
                if "show_relative_paths" in ddata:
                    prefs.display.show_relative_paths = bool(ddata["show_relative_paths"])
                if "show_bookmark_lines" in ddata:
                    prefs.display.show_bookmark_lines = bool(ddata["show_bookmark_lines"])
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError):
            logger.debug("invalid preferences file %s, using defaults", path, exc_info=True)
            return Preferences()
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default preferences to %s", path, exc_info=True)

    return prefs


def save_backup_dir(backup_dir: str, path: Path | None = None) -> None:
    """Persist the storage.backup_dir preference to the preferences file.

    Surgically updates only the backup_dir value, preserving the rest of the
    file (including user comments) as-is.
    """
    path = path or PREFS_PATH
    try:
        if path.exists():
            text = path.read_text(encoding="utf-8")
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = _DEFAULT_YAML

        value = yaml.safe_dump(backup_dir, default_style='"').strip().splitlines()[0]
        if re.search(r"^\s+backup_dir:", text, re.MULTILINE):
            text = re.sub(
                r"^(\s+backup_dir:)[^#\n]*",
                lambda m: f"{m.group(1)} {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
            # keep a trailing comment aligned by a single space
            text = re.sub(r'^(\s+backup_dir: "[^"\n]*")#', r"\1 #", text, flags=re.MULTILINE)
        elif re.search(r"^storage:", text, re.MULTILINE):
            text = re.sub(
                r"^(storage:.*)$",
                lambda m: f"{m.group(1)}\n  backup_dir: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            text = text.rstrip("\n") + f"\n\nstorage:\n  backup_dir: {value}\n"
        path.write_text(text, encoding="utf-8")
    except OSError:
        logger.debug("failed to save backup_dir preference", exc_info=True)
