"""
File helper module.

Provides directory listing, oldest/newest lookup, move, copy and delete
operations for the immediate files of a directory.
"""

from .file_ops import (
    FileHelper,
    FileInfo,
    MoveResult,
    strip_extension_separator,
    retarget_path,
    get_file_info,
    get_file_size,
    is_file_size_zero,
    list_files,
    list_files_by_extensions,
    oldest_file,
    oldest_file_by_extensions,
    newest_file,
    newest_file_by_extensions,
    file_exists_ignoring_extension,
    move_file,
    move_files,
    move_files_in_directory,
    move_files_by_extensions,
    move_and_rename_file,
    copy_file,
    delete_file_safe,
    delete_all_files_in_directory,
    delete_all_files_in_directory_safe,
    create_empty_file,
)

__all__ = [
    'FileHelper', 'FileInfo', 'MoveResult',
    'strip_extension_separator', 'retarget_path',
    'get_file_info', 'get_file_size', 'is_file_size_zero',
    'list_files', 'list_files_by_extensions',
    'oldest_file', 'oldest_file_by_extensions',
    'newest_file', 'newest_file_by_extensions',
    'file_exists_ignoring_extension',
    'move_file', 'move_files', 'move_files_in_directory',
    'move_files_by_extensions', 'move_and_rename_file', 'copy_file',
    'delete_file_safe', 'delete_all_files_in_directory',
    'delete_all_files_in_directory_safe', 'create_empty_file',
]
