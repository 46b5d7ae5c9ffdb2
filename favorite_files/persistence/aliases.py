"""File alias persistence store."""

from __future__ import annotations

from .state import ALIASES_KEY, StateKeyStore


class AliasStore(StateKeyStore):
    """Display aliases for favorite files (``{file_path: alias}``)."""

    key = ALIASES_KEY

    def load(self) -> dict[str, str]:
        """Load aliases from the workspace state."""
        return self.load_raw()

    def alias_for(self, file_path: str) -> str | None:
        return self.load().get(file_path) or None

    def set_alias(self, file_path: str, alias: str) -> None:
        """Set or, with an empty *alias*, clear the alias of *file_path*."""
        alias = alias.strip()
        with self.lock:
            aliases = self.load()
            if alias:
                aliases[file_path] = alias
            else:
                aliases.pop(file_path, None)
            self.save_raw(aliases)

    def remove_alias(self, file_path: str) -> bool:
        """Remove the alias of *file_path*. Return ``False`` if none was set."""
        with self.lock:
            aliases = self.load()
            if file_path not in aliases:
                return False
            del aliases[file_path]
            self.save_raw(aliases)
        return True
