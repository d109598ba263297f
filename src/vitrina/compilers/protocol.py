"""DocumentCompiler protocol — the interface of markdown-to-HTML backends.

Backends turn document source into an HTML fragment. They raise
CompilerError on failure and never return partial output.

Example:
    from vitrina.compilers.protocol import DocumentCompiler

    async def compile_page(compiler: DocumentCompiler, text: str) -> str:
        return await compiler.compile(text, None, render_math=False)

"""

from typing import Protocol


class DocumentCompiler(Protocol):
    """Protocol for document compiler backends."""

    name: str

    async def compile(
        self,
        text: str,
        source_path: str | None,
        render_math: bool = False,
    ) -> str:
        """Compile document source to an HTML fragment.

        Args:
            text: Normalized document source
            source_path: Path of the document, if it has one
            render_math: Emit ``math/tex`` scripts for math markup

        Returns:
            HTML fragment.

        Raises:
            CompilerError: The backend could not produce output.

        """
        ...
