"""
Error Taxonomy for Receipt Replay

Core errors derive from ReceiptError (a ValueError: every one of them is
caused by the input document). Renderer errors derive from RendererError
and never originate in the replay core.
"""

from typing import Optional


class ReceiptError(ValueError):
    """Base class for all receipt parsing and replay failures."""


class MalformedInput(ReceiptError):
    """Bad hex, bad JSON, or a structurally invalid operation record."""


class MissingField(ReceiptError):
    """A required receipt field is absent."""

    def __init__(self, field: str):
        super().__init__(f"Invalid receipt! {field} not found.")
        self.field = field


class MissingBranches(ReceiptError):
    """The receipt has no top-level branch to replay."""


class UnsupportedVersion(ReceiptError):
    """The receipt is not a v3 receipt, or nests deeper than v3 allows."""


class UnsupportedOperation(ReceiptError):
    """An 'op' value this engine does not implement."""

    def __init__(self, op: str):
        super().__init__(f"Unsupported operation: {op!r}")
        self.op = op


class AnchorExtractionFailed(ReceiptError):
    """The anchor branch does not yield an OP_RETURN/TXID."""


class RendererError(RuntimeError):
    """Base class for failures of the external graph renderer."""


class RendererUnavailable(RendererError):
    """The Graphviz program could not be found."""


class RendererFailed(RendererError):
    """The Graphviz program ran but did not produce an image."""

    def __init__(self, message: str, diagnostics: Optional[str] = None):
        if diagnostics:
            message = f"{message} Graphviz said: {diagnostics}"
        super().__init__(message)
        self.diagnostics = diagnostics or ''
