"""
Graphviz Renderer

Writes dot text to a temporary file and runs the Graphviz `dot` program on
it. The temporary file is removed whether rendering succeeds or fails.
"""

from pathlib import Path
from typing import Optional, Union
import logging
import os
import shutil
import subprocess
import tempfile

from .errors import RendererFailed, RendererUnavailable

logger = logging.getLogger(__name__)


DOT_PROGRAM = 'dot'


def which(program: str) -> Optional[str]:
    """Full path of program, or None if it is not on PATH."""
    return shutil.which(program)


class GraphvizRenderer:
    """Render dot text to an image with an external Graphviz binary."""

    def __init__(self, program: str = DOT_PROGRAM, timeout: Optional[float] = None):
        self.program = program
        self.timeout = timeout

    def available(self) -> bool:
        return which(self.program) is not None

    def render(self, dot_text: str, output: Union[str, Path], fmt: Optional[str] = None) -> Path:
        """
        Render dot_text into output.

        Args:
            dot_text: Graphviz source
            output: Image path to write
            fmt: Graphviz output format; defaults to the output extension

        Raises:
            RendererUnavailable: the dot program is not installed
            RendererFailed: the dot file could not be written, or dot exited
                with a non-zero status
        """
        output = Path(output)
        fmt = (fmt or output.suffix.lstrip('.') or 'png').lower()

        executable = which(self.program)
        if executable is None:
            raise RendererUnavailable(f"Graphviz {self.program} program not available!")

        fd, dot_path = tempfile.mkstemp(suffix='.dot', prefix='receiptviz-')
        os.close(fd)
        try:
            try:
                Path(dot_path).write_text(dot_text, encoding='utf-8')
            except OSError as e:
                raise RendererFailed(f"Unable to write dotfile: {e}") from e

            command = [executable, dot_path, f'-T{fmt}', '-o', str(output)]
            logger.info("Rendering %s", ' '.join(command))
            try:
                result = subprocess.run(
                    command,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired as e:
                raise RendererFailed(f"Graphviz timed out after {self.timeout}s.") from e
            except OSError as e:
                raise RendererFailed(f"Unable to run {self.program}.", str(e)) from e

            if result.returncode != 0:
                diagnostics = (result.stderr or result.stdout or '').strip()
                logger.error("Graphviz exited with status %d: %s", result.returncode, diagnostics)
                raise RendererFailed("Failed to produce an output image.", diagnostics)
        finally:
            try:
                os.unlink(dot_path)
            except FileNotFoundError:
                pass

        return output
