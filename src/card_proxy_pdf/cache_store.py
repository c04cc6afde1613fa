"""Key-value file cache rooted at a single directory."""
from __future__ import annotations

from pathlib import Path

from .errors import CacheError


class CacheStore:
    """
    Files addressed by relative keys such as ``carddb.json`` or ``images/01001.png``.

    Keys never leave the cache directory. Parent folders are created on write.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path(self, key: str) -> Path:
        """Absolute path of `key` inside the cache."""
        root = self.root.resolve()
        candidate = (root / key).resolve()
        if candidate != root and root not in candidate.parents:
            raise CacheError(f"cache key escapes cache directory: {key!r}")
        return candidate

    def exists(self, key: str) -> bool:
        try:
            return self.path(key).is_file()
        except CacheError:
            return False

    def modified_time(self, key: str) -> float:
        """Last modification time of a cached file, in seconds since the epoch."""
        try:
            return self.path(key).stat().st_mtime
        except OSError as e:
            raise CacheError(f"could not stat {key}: {e}") from e

    def read_file(self, key: str) -> bytes:
        try:
            return self.path(key).read_bytes()
        except OSError as e:
            raise CacheError(f"could not read {key} from cache: {e}") from e

    def write_file(self, key: str, data: bytes) -> Path:
        """
        Store `data` under `key`.

        The bytes go to a sibling temp file first and are then moved into
        place, so a reader never sees a half-written entry.
        """
        target = self.path(key)
        tmp = target.with_name(target.name + ".part")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            tmp.replace(target)
        except OSError as e:
            raise CacheError(f"could not write {key} to cache: {e}") from e
        return target
