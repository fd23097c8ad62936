"""Exception hierarchy for yao.

Every failure that should stop a sync or get run derives from YaoError.
The CLI catches YaoError, prints it and exits with status 1.
"""


class YaoError(Exception):
    """Base exception for all yao errors."""


class ConfigError(YaoError):
    """Raised when the configuration file cannot be read or validated."""


class ToolMissingError(YaoError):
    """Raised when a required external binary is not on PATH."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"required tool not found in PATH: {tool}")


class PackageNotFoundError(YaoError):
    """Raised when a name is in neither the repositories nor the AUR."""

    def __init__(self, name: str, where: str = "repos or AUR") -> None:
        self.name = name
        super().__init__(f"{name} not found in {where}")


class LookupFailedError(YaoError):
    """Raised when the AUR RPC endpoint answers with a non-success status."""

    def __init__(self, name: str, status: int | str) -> None:
        self.name = name
        self.status = status
        super().__init__(f"AUR lookup for {name} failed: {status}")


class DownloadFailedError(YaoError):
    """Raised when a snapshot download does not complete."""

    def __init__(self, name: str, status: int | str) -> None:
        self.name = name
        self.status = status
        super().__init__(f"download failed for {name}: {status}")


class ExtractionFailedError(YaoError):
    """Raised when the archive tool cannot unpack a snapshot."""


class EmptyPlanError(YaoError):
    """Raised when makepkg lists no artifacts for a package."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"packagelist is empty for {name}")


class BuildFailedError(YaoError):
    """Raised when makepkg exits with a non-zero status."""

    def __init__(self, name: str, returncode: int, stage: str = "build") -> None:
        self.name = name
        self.returncode = returncode
        self.stage = stage
        super().__init__(f"makepkg {stage} failed for {name} with status {returncode}")


class NoArtifactsProducedError(YaoError):
    """Raised when a successful build leaves no installable artifact."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"build of {name} produced none of the planned package files")


class InstallFailedError(YaoError):
    """Raised when pacman exits with a status other than success or declined."""

    def __init__(self, target: str, returncode: int) -> None:
        self.target = target
        self.returncode = returncode
        super().__init__(f"pacman failed to install {target} with status {returncode}")


class EditorNotFoundError(YaoError):
    """Raised when the PKGBUILD review editor cannot be launched."""

    def __init__(self, editor: str) -> None:
        self.editor = editor
        super().__init__(f"editor not found: {editor}")


class FileOperationError(YaoError):
    """Raised when a filesystem step of a package's pipeline fails."""

    def __init__(self, name: str, stage: str, error: OSError) -> None:
        self.name = name
        self.stage = stage
        super().__init__(f"{stage} failed for {name}: {error}")
