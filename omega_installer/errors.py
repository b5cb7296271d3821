from __future__ import annotations

import shlex


class InstallerError(RuntimeError):
    """Base class for failures that abort (or flag) an installation."""


class CommandError(InstallerError):
    def __init__(self, argv: list[str], returncode: int, stderr: str = "") -> None:
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {shlex.join(argv)}\n{stderr}".rstrip())


class PrerequisiteError(InstallerError):
    pass


class BuildError(InstallerError):
    pass


class MissingSourceError(InstallerError):
    pass


class ConfigError(InstallerError):
    pass


class VerificationError(InstallerError):
    pass
