"""
Path authorization for store files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


@dataclass
class PathPolicy:
    """
    Decides whether a path may be used as a store file.

    A path is allowed when it has no ``..`` segment, resolves inside
    ``allowed_root`` and ends with ``extension``.
    """
    allowed_root: Optional[Path] = field(default_factory=Path.home)
    extension: str = ".json"

    def __post_init__(self):
        if isinstance(self.allowed_root, str):
            self.allowed_root = Path(self.allowed_root)

    def is_allowed(self, path: Union[str, Path]) -> bool:
        """Check if ``path`` may be used as a store file."""
        candidate = Path(path)
        if ".." in candidate.parts:
            return False
        resolved = candidate.resolve()
        if self.extension and not resolved.name.endswith(self.extension):
            return False
        if self.allowed_root is not None:
            root = self.allowed_root.resolve()
            if resolved != root and root not in resolved.parents:
                return False
        return True

    def __call__(self, path: Union[str, Path]) -> bool:
        return self.is_allowed(path)
