"""Constants shared by the command layer and the host app."""

from __future__ import annotations

APP_NAME = "favorite-files"
APP_VERSION = "0.3.0"

# Slash commands understood by FavoritesAppBase._handle_command
SLASH_COMMANDS = (
    "/help",
    "/open",
    "/refresh",
    "/fav",
    "/group",
    "/bookmark",
    "/bm",
    "/alias",
    "/export",
    "/import",
    "/backup-dir",
    "/stats",
    "/quit",
)

HELP_TEXT = """\
favorite-files commands

  /open <path>                         Set the active file
  /refresh                             Reload the favorites tree

  /fav add [group]                     Add the active file (creates the group)
  /fav remove <path> [group]           Remove a file from its group
  /fav move <group> <from> <to>        Move a file to another file's position

  /group create <name>                 Create a group
  /group rename <old> <new>            Rename a group
  /group delete <name>                 Delete a group
  /group add <name>                    Add the active file to an existing group
  /group bookmark <name> <line> [text] Bookmark a line of the active file in a group
  /group clear-bookmarks <name>        Remove every bookmark of a group

  /bookmark add <line> [text]          Bookmark a line of the active file
  /bookmark remove <label> [--file F] [--group G]
  /bookmark rename <label> <text> [--file F] [--group G]
  /bookmark clear [path]               Remove the bookmarks of a file
  /bookmark clear-all                  Remove every global bookmark

  /alias <path> <alias>                Show a file under another name
  /alias remove <path>                 Drop a file alias

  /export [path]                       Export favorites and bookmarks
  /import <path>                       Replace favorites and bookmarks from a file
  /backup-dir [path|default]           Show or set where import backups go
  /stats                               Show counts
  /quit                                Quit

Labels are a bookmark's description, or "Line N" when it has none.
Quote arguments that contain spaces: /group rename "Old name" "New name"\
"""
