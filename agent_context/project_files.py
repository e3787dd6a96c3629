import os
from pathlib import Path

from agent_context.constants import PROJECT_IGNORED_DIRS, PROJECT_SCAN_LIMIT


class ProjectFileScanner:
    """List project files as root-relative POSIX paths.

    Hidden and dependency directories are skipped; the walk stops after
    ``limit`` files.
    """

    def __init__(self, root: Path, limit: int = PROJECT_SCAN_LIMIT) -> None:
        self.root = root
        self.limit = limit

    def list_files(self) -> list[str]:
        files: list[str] = []
        root_real = self.root.resolve()

        for current, dir_names, file_names in os.walk(str(root_real), topdown=True):
            dir_names[:] = sorted(
                name for name in dir_names if not name.startswith(".") and name not in PROJECT_IGNORED_DIRS
            )
            for name in sorted(file_names):
                relative = (Path(current) / name).relative_to(root_real)
                files.append(relative.as_posix())
                if len(files) >= self.limit:
                    return files
        return files
