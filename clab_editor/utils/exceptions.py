# clab_editor/utils/exceptions.py


class ClabEditorError(Exception):
    """
    Base exception for all clab-editor errors.
    """


class TopologyFileError(ClabEditorError):
    """Raised when a topology file is missing or invalid."""


class UnknownNetworkTypeError(ClabEditorError, ValueError):
    """
    Raised when a network identifier is requested for a type outside the
    containerlab special endpoint vocabulary.
    """
