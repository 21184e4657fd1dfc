"""Exception hierarchy for git-hunks."""


class GitHunksError(RuntimeError):
    """
    Base exception for all git-hunks errors.

    Args:
        message: Main error message for the user
        details: Captured diagnostic output, if any
    """

    def __init__(self, message, details=None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotARepositoryError(GitHunksError):
    """The directory is not a git repository (or git is not installed)."""

    def __init__(self, directory, details=None):
        self.directory = directory
        super().__init__("Not a git repository or git not found", details)


class InvocationFailedError(GitHunksError):
    """A git command could not be started or exited with an unexpected status."""

    def __init__(self, args, returncode=None, details=None):
        self.command = ["git", *args]
        self.returncode = returncode
        super().__init__(f"Git command failed: {(details or '').strip()}", details)


class EditorNotFoundError(GitHunksError):
    def __init__(self):
        super().__init__(
            "No supported editor found. Please install VS Code, Sublime Text, "
            "or another supported editor."
        )


class EditorError(GitHunksError):
    """The editor could not be launched or exited with an error."""
