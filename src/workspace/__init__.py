"""Single-file I/O used by the editor around the search engine.

Exports:
- open_file / save_file - read with encoding detection, write UTF-8
- read_dir - one directory level, directories first
- watch_file / unwatch_file - one process-wide modification watch
"""

from __future__ import annotations

from workspace.errors import WorkspaceIOError
from workspace.files import FileContent, FileStat, file_stat, open_file, save_file
from workspace.listing import DirectoryEntry, read_dir
from workspace.watcher import FileWatcher, stop_watching, unwatch_file, watch_file

__all__ = [
    "DirectoryEntry",
    "FileContent",
    "FileStat",
    "FileWatcher",
    "WorkspaceIOError",
    "file_stat",
    "open_file",
    "read_dir",
    "save_file",
    "stop_watching",
    "unwatch_file",
    "watch_file",
]
