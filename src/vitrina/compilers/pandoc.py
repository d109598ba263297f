"""External compiler running the pandoc executable.

Pandoc runs with the document's directory as working directory so relative
includes and bibliographies resolve. Its HTML has decoded image paths and
``class="sourceCode <lang>"`` code blocks.

With math enabled pandoc is run with ``--mathjax``; its math spans are then
rewritten into the same ``math/tex`` scripts the in-process compiler emits.
"""

from __future__ import annotations

import asyncio
import os
import re
from collections.abc import Sequence

from vitrina.errors import CompilerError
from vitrina.utils.html import parse_fragment
from vitrina.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FLAVOR = "markdown-raw_tex+tex_math_single_backslash"

_MATH_DELIMITERS = re.compile(r"^\\[\[(]|\\[\])]$")


def convert_math_spans(html: str) -> str:
    """Replace pandoc ``--mathjax`` spans with ``math/tex`` scripts."""
    tree = parse_fragment(html)
    for span in tree.find_all("span", class_="math"):
        display = "display" in (span.get("class") or ())
        script = tree.new_tag(
            "script",
            attrs={"type": "math/tex; mode=display" if display else "math/tex"},
        )
        script.string = _MATH_DELIMITERS.sub("", span.get_text().strip())
        span.clear()
        span.append(script)
    return str(tree)


class PandocCompiler:
    """DocumentCompiler backed by a pandoc subprocess.

    Args:
        executable: Pandoc binary name or path
        arguments: Extra command-line arguments appended as given
        flavor: Pandoc input format (``--from``)
    """

    name = "pandoc"

    __slots__ = ("arguments", "executable", "flavor")

    def __init__(
        self,
        executable: str = "pandoc",
        arguments: Sequence[str] = (),
        flavor: str = DEFAULT_FLAVOR,
    ) -> None:
        self.executable = executable
        self.arguments = tuple(arguments)
        self.flavor = flavor

    def command(self, render_math: bool = False) -> list[str]:
        args = [self.executable, f"--from={self.flavor}", "--to=html"]
        if render_math:
            args.append("--mathjax")
        args.extend(self.arguments)
        return args

    async def compile(
        self,
        text: str,
        source_path: str | None,
        render_math: bool = False,
    ) -> str:
        cwd = os.path.dirname(source_path) if source_path else None
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command(render_math),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd or None,
            )
        except OSError as e:
            raise CompilerError(self.name, f"cannot run {self.executable!r}: {e}") from e

        stdout, stderr = await process.communicate(text.encode("utf-8"))
        errors = stderr.decode("utf-8", errors="replace").strip()
        if process.returncode != 0:
            raise CompilerError(self.name, errors or "no output", process.returncode)
        if errors:
            logger.warning("pandoc: %s", errors)

        html = stdout.decode("utf-8")
        return convert_math_spans(html) if render_math else html


__all__ = [
    "DEFAULT_FLAVOR",
    "PandocCompiler",
    "convert_math_spans",
]
