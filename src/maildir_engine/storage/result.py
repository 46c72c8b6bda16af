# =============================================================================
# Storage Results
# =============================================================================
# Filesystem failures are returned to the caller, not raised. Every
# mutating storage operation hands back a StorageResult carrying either
# the path it produced or a human-readable reason and the path involved.
# =============================================================================

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StorageResult:
    """
    Outcome of a storage operation.

    Attributes:
        success: True if the operation completed.
        path: On success, the resulting path. On failure, the path the
              operation was working on (usually the target).
        error: Human-readable failure reason. None on success.
        collision: True if the failure was caused by the target already
                   existing. Callers retry with a freshly generated name.

    Usage:
        >>> result = atomic_write(tmp_dir, target, content)
        >>> if not result:
        ...     print(f"Write failed: {result.error}")
    """
    success: bool
    path: Path | None = None
    error: str | None = None
    collision: bool = False

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, path: Path) -> "StorageResult":
        return cls(success=True, path=path)

    @classmethod
    def failed(
        cls, error: str, path: Path | None = None, collision: bool = False
    ) -> "StorageResult":
        return cls(success=False, path=path, error=error, collision=collision)
