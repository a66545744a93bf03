# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the gitdrop CLI application.

This module defines the exception hierarchy used across gitdrop so that
every failure surfaces with a clear user-facing message and optional
technical details.
"""

import contextlib

import typer
from colorama import Fore, Style


class GitdropError(Exception):
    """
    Base exception for all gitdrop-related errors.

    All gitdrop-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a GitdropError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class GitError(GitdropError):
    """
    Errors related to git operations.

    Raised when git commands fail or when the working copy is in a
    state that does not allow the requested operation.
    """

    pass


class RemoteAccessError(GitError):
    """
    The remote could not be reached with the current credentials,
    or it does not exist. Never retried.
    """

    pass


class ValidationError(GitdropError):
    """
    Input validation errors.

    Raised when user input fails validation checks,
    such as malformed times or an inverted time window.
    """

    pass


class ConfigurationError(GitdropError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class FileSystemError(GitdropError):
    """
    File system operation errors.

    Raised when file or directory operations fail,
    such as missing source files.
    """

    pass


class ChunkingError(GitdropError):
    """Errors while grouping changed files into commit chunks."""

    pass


class ScheduleError(GitdropError):
    """
    Errors reading or writing a schedule artifact.

    Raised when a schedule file is missing or cannot be parsed.
    """

    pass


# Convenience functions for creating common errors
def git_not_found() -> GitError:
    """Create a GitError for when git is not available."""
    return GitError(
        "Git is not installed or not in PATH",
        "Please install git and ensure it's available in your PATH environment variable",
    )


def remote_access_denied(remote: str) -> RemoteAccessError:
    """Create a RemoteAccessError for an unreachable remote."""
    return RemoteAccessError(
        f"Cannot access remote: {remote}",
        "Make sure the repo exists and you have push access. "
        "Tip: embed a token in the URL: https://<TOKEN>@github.com/user/repo.git",
    )


def path_not_found(path: str) -> ValidationError:
    """Create a ValidationError for non-existent paths."""
    return ValidationError(
        f"Path not found: {path}", "Please check that the path exists and is accessible"
    )


def schedule_not_found(path: str) -> ScheduleError:
    """Create a ScheduleError for a missing schedule artifact."""
    return ScheduleError(
        f"Schedule file not found: {path}",
        "The schedule may have already completed, or was removed by 'gitdrop clean'",
    )


@contextlib.contextmanager
def handle_gitdrop_exception(exit_on_fail: bool = True):
    """
    Print gitdrop errors in a user friendly format.

    With exit_on_fail the process exits with status 1, otherwise the
    error is re-raised after being printed.
    """
    try:
        yield
    except GitdropError as e:
        print(f"{Fore.RED}Error:{Style.RESET_ALL} {e.message}")
        if e.details:
            print(f"{Style.DIM}{e.details}{Style.RESET_ALL}")
        if exit_on_fail:
            raise typer.Exit(1)
        raise
