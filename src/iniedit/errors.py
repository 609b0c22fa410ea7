class IniEditError(Exception):
    """Base class for iniedit errors."""


class IniFileNotFoundError(IniEditError):
    """Raised when the file to load does not exist."""


class IniReadError(IniEditError):
    """Raised when a file exists but cannot be read or decoded."""


class DuplicateSectionError(IniEditError):
    """Raised when adding a section whose name is already taken."""


class SectionNotFoundError(IniEditError):
    """Raised when a section is not present in the document."""


class KeyNotFoundError(IniEditError):
    """Raised when a key is not present in a section."""


class InvalidNameError(IniEditError):
    """Raised when a section name or key cannot be written as INI."""


class NoTargetPathError(IniEditError):
    """Raised when saving before a target path is known."""


class SaveError(IniEditError):
    """Raised when the document cannot be written to disk."""


class BackupError(SaveError):
    """Raised when the pre-write backup copy fails."""
