"""The resolved-dependency artifact written by ``dotnet restore``.

Public API::

    from depends.core.lockfile import read_lock_file

    lock_file = read_lock_file("obj/project.assets.json")
    target = lock_file.get_target(framework, runtime_identifier)
"""

from depends.core.lockfile.models import (
    EMPTY_FOLDER_MARKER,
    LockFile,
    LockFileTarget,
    LockFileTargetLibrary,
)
from depends.core.lockfile.reader import lock_file_from_dict, read_lock_file

__all__ = [
    "EMPTY_FOLDER_MARKER",
    "LockFile",
    "LockFileTarget",
    "LockFileTargetLibrary",
    "lock_file_from_dict",
    "read_lock_file",
]
