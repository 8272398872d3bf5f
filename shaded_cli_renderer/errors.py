#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/errors.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

class RendererError(Exception):
    """Base class for errors raised by the renderer package."""


class MissingAssetError(RendererError):
    """A mesh file could not be read."""

    def __init__(self, path, reason=None):
        self.path = str(path)
        self.reason = reason
        msg = f"Could not load '{self.path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ViewportError(RendererError, ValueError):
    """Raised for a viewport without a positive width and height."""
