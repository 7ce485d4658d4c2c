"""
File operations module for FileHelper.

Provides non-recursive listing, oldest/newest lookup, move, copy and
delete helpers for the immediate files of a directory.

Absence that is a normal outcome (no matching files, destination already
taken, nothing to delete) is reported as an empty list, None or False.
Failures that stop an operation raise NotFoundError, InvalidArgumentError
or FileOperationError.
"""

import fnmatch
import os
import shutil
import stat
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from core.errors import FileHelperError, NotFoundError, InvalidArgumentError, FileOperationError
from core.logger import AuditLogger, ActionType, ActionStatus


@dataclass
class FileInfo:
    """Information about a file, read fresh from the file system."""
    path: str
    name: str
    size: int
    modified: datetime
    extension: str


@dataclass
class MoveResult:
    """Outcome of moving one file as part of a batch."""
    source: str
    destination: str
    moved: bool
    error: Optional[str] = None


FileTarget = Union[str, os.PathLike, FileInfo]


def _as_path(target: FileTarget) -> str:
    if isinstance(target, FileInfo):
        return target.path
    return os.fspath(target)


def _as_directory(directory: str) -> str:
    """Return directory with a trailing separator, ready for retarget_path."""
    directory = directory or os.curdir
    separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
    if directory.endswith(separators):
        return directory
    return directory + os.sep


def _extension_of(name: str) -> str:
    """Return the last '.' and what follows it; a dotfile's whole name is its extension."""
    index = name.rfind(".")
    if index < 0 or index == len(name) - 1:
        return ""
    return name[index:]


def strip_extension_separator(extension: str) -> str:
    """Remove one leading '.' from an extension, if present."""
    if extension.startswith("."):
        return extension[1:]
    return extension


def retarget_path(old_path: FileTarget, new_directory: str) -> str:
    """
    Put the file name of old_path after new_directory.

    This is plain string concatenation: new_directory must already end with
    a separator. No file-system access happens here.
    """
    return new_directory + os.path.basename(_as_path(old_path))


def _earliest(files: List[FileInfo]) -> Optional[FileInfo]:
    # min() keeps the first of equal keys
    return min(files, key=lambda f: f.modified, default=None)


def _latest(files: List[FileInfo]) -> Optional[FileInfo]:
    return max(files, key=lambda f: f.modified, default=None)


class FileHelper:
    """File-system helpers with optional audit logging of mutations."""

    def __init__(self, logger: Optional[AuditLogger] = None):
        """
        Initialize FileHelper.

        Args:
            logger: Audit logger that records moves, copies, deletes and
                creations. Nothing is recorded when omitted.
        """
        self.logger = logger

    def _audit(
        self,
        action_type: ActionType,
        description: str,
        target: Optional[str] = None,
        status: ActionStatus = ActionStatus.EXECUTED,
        result: Optional[str] = None,
        metadata: Optional[dict] = None
    ) -> None:
        if self.logger is None:
            return
        self.logger.log_action(
            action_type=action_type,
            description=description,
            target=target,
            status=status,
            result=result,
            metadata=metadata
        )

    # Queries

    def get_file_info(self, path: FileTarget) -> FileInfo:
        """
        Get information about a regular file.

        Args:
            path: Path to the file

        Returns:
            FileInfo with absolute path, size and modification time

        Raises:
            NotFoundError: If the path doesn't exist or is not a file
        """
        path_obj = Path(_as_path(path))

        try:
            st = path_obj.stat()
        except FileNotFoundError:
            raise NotFoundError(f"File not found: {path_obj}") from None
        except OSError as e:
            raise FileOperationError(f"Error reading file info: {e}") from e

        if not stat.S_ISREG(st.st_mode):
            raise NotFoundError(f"Not a file: {path_obj}")

        return FileInfo(
            path=os.path.abspath(path_obj),
            name=path_obj.name,
            size=st.st_size,
            modified=datetime.fromtimestamp(st.st_mtime),
            extension=_extension_of(path_obj.name)
        )

    def get_file_size(self, path: FileTarget) -> int:
        """Return the size of a file in bytes. Raises NotFoundError if it is missing."""
        return self.get_file_info(path).size

    def is_file_size_zero(self, path: FileTarget) -> bool:
        return self.get_file_size(path) == 0

    def list_files(self, directory: FileTarget, pattern: str = "*") -> List[FileInfo]:
        """
        List the immediate files of a directory whose names match pattern.

        Subdirectories are never included. Results are ordered by name.
        An empty pattern matches everything.

        Args:
            directory: Directory to list
            pattern: Glob pattern (``*``, ``?``, ``[seq]``)

        Returns:
            List of FileInfo objects, possibly empty

        Raises:
            NotFoundError: If directory doesn't exist or is not a directory
            FileOperationError: If the directory can't be read
        """
        path_obj = Path(_as_path(directory))

        if not path_obj.is_dir():
            raise NotFoundError(f"Directory not found: {path_obj}")

        try:
            entries = sorted(path_obj.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise FileOperationError(f"Error listing directory: {e}") from e

        pattern = pattern or "*"
        files = []
        for item in entries:
            if not fnmatch.fnmatch(item.name, pattern):
                continue
            try:
                files.append(self.get_file_info(item))
            except NotFoundError:
                # Directories, or files removed since the listing
                continue

        return files

    def list_files_by_extensions(self, directory: FileTarget, extensions: Iterable[str]) -> List[FileInfo]:
        """
        List the immediate files of a directory with one of the given extensions.

        Comparison ignores case and a leading '.', so ``"TXT"``, ``".txt"``
        and ``"txt"`` are equivalent.

        Raises:
            InvalidArgumentError: If no extensions are given
            NotFoundError: If directory doesn't exist
        """
        if extensions is None:
            raise InvalidArgumentError("No extension arguments provided.")
        if isinstance(extensions, str):
            extensions = [extensions]

        wanted = {strip_extension_separator(ext).lower() for ext in extensions}
        if not wanted:
            raise InvalidArgumentError("No extension arguments provided.")

        return [
            f for f in self.list_files(directory)
            if strip_extension_separator(f.extension).lower() in wanted
        ]

    def oldest_file(self, directory: FileTarget, pattern: str = "") -> Optional[FileInfo]:
        """Return the least recently modified matching file, or None if there is none."""
        return _earliest(self.list_files(directory, pattern))

    def oldest_file_by_extensions(self, directory: FileTarget, extensions: Iterable[str]) -> Optional[FileInfo]:
        return _earliest(self.list_files_by_extensions(directory, extensions))

    def newest_file(self, directory: FileTarget, pattern: str = "") -> Optional[FileInfo]:
        """Return the most recently modified matching file, or None if there is none."""
        return _latest(self.list_files(directory, pattern))

    def newest_file_by_extensions(self, directory: FileTarget, extensions: Iterable[str]) -> Optional[FileInfo]:
        return _latest(self.list_files_by_extensions(directory, extensions))

    def file_exists_ignoring_extension(self, path: FileTarget) -> bool:
        """
        Check whether a file with the same base name exists, whatever its extension.

        ``reports/summary`` matches ``reports/summary``, ``reports/summary.pdf``
        and ``reports/summary.tar.gz``.

        Raises:
            NotFoundError: If the containing directory doesn't exist
        """
        target = _as_path(path)
        directory = os.path.dirname(target) or os.curdir
        stem = os.path.normcase(Path(target).stem)

        for info in self.list_files(directory):
            name = os.path.normcase(info.name)
            if name == stem or name.startswith(stem + "."):
                return True
        return False

    # Moves and copies

    def _rename(self, src: str, dst: str) -> bool:
        try:
            os.rename(src, dst)
        except FileNotFoundError as e:
            self._audit(ActionType.MOVE, f"Failed to move {src}", target=dst,
                        status=ActionStatus.FAILED, result=f"Error: {e}")
            raise NotFoundError(f"Source file not found: {src}") from e
        except OSError as e:
            self._audit(ActionType.MOVE, f"Failed to move {src}", target=dst,
                        status=ActionStatus.FAILED, result=f"Error: {e}")
            raise FileOperationError(f"Error moving file: {e}") from e

        self._audit(ActionType.MOVE, f"Moved {src} to {dst}", target=dst)
        return True

    def _skip_collision(self, src: str, dst: str) -> bool:
        if not os.path.exists(dst):
            return False
        self._audit(ActionType.MOVE, f"Skipped move of {src}", target=dst,
                    status=ActionStatus.SKIPPED, result="Destination already exists")
        return True

    def move_file(self, source: FileTarget, dest_directory: FileTarget) -> bool:
        """
        Move a file into another directory, keeping its name.

        An existing file of the same name at the destination is left alone.

        Args:
            source: File to move
            dest_directory: Directory to move it into

        Returns:
            True if the file was moved, False if the destination was taken

        Raises:
            NotFoundError: If source or dest_directory doesn't exist
            FileOperationError: If the rename itself fails
        """
        src = _as_path(source)
        dest_dir = _as_directory(_as_path(dest_directory))
        dst = retarget_path(src, dest_dir)

        if self._skip_collision(src, dst):
            return False

        if not os.path.isfile(src):
            raise NotFoundError(f"Source file not found: {src}")
        if not os.path.isdir(dest_dir):
            raise NotFoundError(f"Destination directory not found: {dest_dir}")

        return self._rename(src, dst)

    def move_files(self, source_files: Iterable[FileTarget], dest_directory: FileTarget) -> List[MoveResult]:
        """
        Move each file into dest_directory independently.

        A collision or a failure on one file does not stop the others; the
        outcome of every file is returned in input order.
        """
        dest_dir = _as_directory(_as_path(dest_directory))
        results = []

        for source in source_files:
            src = _as_path(source)
            dst = retarget_path(src, dest_dir)
            try:
                moved = self.move_file(src, dest_dir)
            except FileHelperError as e:
                results.append(MoveResult(source=src, destination=dst, moved=False, error=str(e)))
                continue
            results.append(MoveResult(source=src, destination=dst, moved=moved))

        return results

    def move_files_in_directory(
        self,
        source_directory: FileTarget,
        dest_directory: FileTarget,
        pattern: str = ""
    ) -> List[MoveResult]:
        """Move the files of source_directory matching pattern. See move_files."""
        return self.move_files(self.list_files(source_directory, pattern), dest_directory)

    def move_files_by_extensions(
        self,
        source_directory: FileTarget,
        dest_directory: FileTarget,
        extensions: Iterable[str]
    ) -> List[MoveResult]:
        """Move the files of source_directory with one of the extensions. See move_files."""
        return self.move_files(self.list_files_by_extensions(source_directory, extensions), dest_directory)

    def move_and_rename_file(self, source: FileTarget, dest_path: FileTarget) -> bool:
        """
        Move a file to a full destination path, creating missing parent directories.

        Returns:
            True if moved, False if dest_path already exists

        Raises:
            NotFoundError: If source doesn't exist
            FileOperationError: If directory creation or the rename fails
        """
        src = _as_path(source)
        dst = _as_path(dest_path)

        parent = os.path.dirname(dst)
        if parent:
            try:
                os.makedirs(parent, exist_ok=True)
            except OSError as e:
                self._audit(ActionType.MOVE, f"Failed to create {parent}", target=dst,
                            status=ActionStatus.FAILED, result=f"Error: {e}")
                raise FileOperationError(f"Error creating directory: {e}") from e

        if self._skip_collision(src, dst):
            return False

        if not os.path.isfile(src):
            raise NotFoundError(f"Source file not found: {src}")

        return self._rename(src, dst)

    def copy_file(self, source: FileTarget, dest_directory: FileTarget) -> str:
        """
        Copy a file into another directory, overwriting any file of the same name.

        Args:
            source: File to copy
            dest_directory: Directory to copy it into

        Returns:
            Path of the copy

        Raises:
            NotFoundError: If source or dest_directory doesn't exist
            FileOperationError: If the copy fails
        """
        src = _as_path(source)
        if not os.path.isfile(src):
            raise NotFoundError(f"Source file not found: {src}")

        dest_dir = _as_directory(_as_path(dest_directory))
        if not os.path.isdir(dest_dir):
            raise NotFoundError(f"Destination directory not found: {dest_dir}")

        dst = retarget_path(src, dest_dir)
        file_size = os.path.getsize(src)

        try:
            shutil.copy2(src, dst)  # copy2 preserves metadata
        except OSError as e:
            self._audit(ActionType.COPY, f"Failed to copy {src} to {dst}", target=dst,
                        status=ActionStatus.FAILED, result=f"Error: {e}")
            raise FileOperationError(f"Error copying file: {e}") from e

        self._audit(ActionType.COPY, f"Copied {src} to {dst}", target=dst,
                    result=f"File copied ({file_size} bytes)")
        return dst

    # Deletion and creation

    def delete_file_safe(self, path: FileTarget) -> bool:
        """
        Delete a file if it exists.

        Returns:
            True if a file was deleted, False if there was nothing to delete

        Raises:
            FileOperationError: If the file exists but can't be deleted
        """
        target = _as_path(path)
        if not os.path.isfile(target):
            return False

        try:
            os.remove(target)
        except FileNotFoundError:
            return False
        except OSError as e:
            self._audit(ActionType.DELETE, f"Failed to delete {target}", target=target,
                        status=ActionStatus.FAILED, result=f"Error: {e}")
            raise FileOperationError(f"Error deleting file: {e}") from e

        self._audit(ActionType.DELETE, f"Deleted file: {target}", target=target)
        return True

    def delete_all_files_in_directory(self, directory: FileTarget) -> int:
        """
        Delete every immediate file of a directory, stopping at the first failure.

        Files deleted before the failure stay deleted. A file that vanishes
        after the listing counts as a failure.

        Returns:
            Number of files deleted

        Raises:
            NotFoundError: If directory doesn't exist
            FileOperationError: On the first file that can't be deleted
        """
        deleted = 0
        for info in self.list_files(directory):
            try:
                os.remove(info.path)
            except OSError as e:
                self._audit(ActionType.DELETE, f"Failed to delete {info.path}", target=info.path,
                            status=ActionStatus.FAILED, result=f"Error: {e}",
                            metadata={"deleted_before_failure": deleted})
                raise FileOperationError(f"Error deleting file: {e}") from e

            self._audit(ActionType.DELETE, f"Deleted file: {info.path}", target=info.path,
                        result=f"File deleted ({info.size} bytes)")
            deleted += 1

        return deleted

    def delete_all_files_in_directory_safe(self, directory: FileTarget) -> int:
        """
        Delete every immediate file of a directory, one file at a time.

        Files that are already gone are skipped. Other failures don't stop
        the remaining deletions; they are raised together at the end.

        Returns:
            Number of files deleted

        Raises:
            NotFoundError: If directory doesn't exist
            FileOperationError: If any file could not be deleted; ``failures``
                holds ``(path, message)`` for each
        """
        deleted = 0
        failures = []

        for info in self.list_files(directory):
            try:
                if self.delete_file_safe(info.path):
                    deleted += 1
            except FileOperationError as e:
                failures.append((info.path, str(e)))

        if failures:
            raise FileOperationError(
                f"Failed to delete {len(failures)} file(s) in {_as_path(directory)}",
                failures=failures
            )

        return deleted

    def create_empty_file(self, path: FileTarget) -> None:
        """Create a zero-length file at path, truncating any existing file."""
        target = _as_path(path)
        try:
            with open(target, "wb"):
                pass
        except OSError as e:
            self._audit(ActionType.CREATE, f"Failed to create {target}", target=target,
                        status=ActionStatus.FAILED, result=f"Error: {e}")
            raise FileOperationError(f"Error creating file: {e}") from e

        self._audit(ActionType.CREATE, f"Created empty file: {target}", target=target)


# Module-level helpers bound to a helper without an audit log
_default_helper = FileHelper()

get_file_info = _default_helper.get_file_info
get_file_size = _default_helper.get_file_size
is_file_size_zero = _default_helper.is_file_size_zero
list_files = _default_helper.list_files
list_files_by_extensions = _default_helper.list_files_by_extensions
oldest_file = _default_helper.oldest_file
oldest_file_by_extensions = _default_helper.oldest_file_by_extensions
newest_file = _default_helper.newest_file
newest_file_by_extensions = _default_helper.newest_file_by_extensions
file_exists_ignoring_extension = _default_helper.file_exists_ignoring_extension
move_file = _default_helper.move_file
move_files = _default_helper.move_files
move_files_in_directory = _default_helper.move_files_in_directory
move_files_by_extensions = _default_helper.move_files_by_extensions
move_and_rename_file = _default_helper.move_and_rename_file
copy_file = _default_helper.copy_file
delete_file_safe = _default_helper.delete_file_safe
delete_all_files_in_directory = _default_helper.delete_all_files_in_directory
delete_all_files_in_directory_safe = _default_helper.delete_all_files_in_directory_safe
create_empty_file = _default_helper.create_empty_file
