"""Document compiler backends.

Available Compilers:
- MarkdownItCompiler: in-process markdown-it-py (default)
- PandocCompiler: external pandoc process, selected by
  RenderConfig.external_backend_enabled

"""

from vitrina.compilers.markdown import MarkdownItCompiler
from vitrina.compilers.pandoc import PandocCompiler
from vitrina.compilers.protocol import DocumentCompiler

__all__ = ["DocumentCompiler", "MarkdownItCompiler", "PandocCompiler"]
