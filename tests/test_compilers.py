"""Tests for the markdown-it and pandoc compiler backends."""

import asyncio
import shutil

import pytest

from vitrina.compilers import MarkdownItCompiler, PandocCompiler
from vitrina.compilers.pandoc import DEFAULT_FLAVOR, convert_math_spans
from vitrina.errors import CompilerError
from vitrina.utils.html import parse_fragment


class TestMarkdownItCompiler:
    def test_heading(self) -> None:
        assert MarkdownItCompiler().render("# Hi") == "<h1>Hi</h1>\n"

    def test_fenced_code_class(self) -> None:
        html = MarkdownItCompiler().render("```rust\nfn main() {}\n```")
        assert '<code class="lang-rust">' in html

    def test_raw_html_passes_through(self) -> None:
        html = MarkdownItCompiler().render("<div onclick=\"x()\">raw</div>")
        assert 'onclick="x()"' in html

    def test_tables_enabled(self) -> None:
        html = MarkdownItCompiler().render("| a | b |\n|---|---|\n| 1 | 2 |")
        assert "<table>" in html

    def test_strikethrough_enabled(self) -> None:
        assert "<s>gone</s>" in MarkdownItCompiler().render("~~gone~~")

    def test_inline_math(self) -> None:
        html = MarkdownItCompiler().render("Area $\\pi r^2$.", render_math=True)
        assert '<script type="math/tex">\\pi r^2</script>' in html

    def test_display_math(self) -> None:
        html = MarkdownItCompiler().render("$$\nE = mc^2\n$$", render_math=True)
        script = parse_fragment(html).find("script")
        assert script["type"] == "math/tex; mode=display"
        assert script.string.strip() == "E = mc^2"

    def test_math_disabled_keeps_dollars(self) -> None:
        html = MarkdownItCompiler().render("Costs $5 and $6.")
        assert "<script" not in html
        assert "$5" in html

    def test_math_cannot_close_script(self) -> None:
        html = MarkdownItCompiler().render("$a</script><b>$", render_math=True)
        script = parse_fragment(html).find("script")
        assert "<b>" in script.string

    def test_math_closing_tag_any_case(self) -> None:
        html = MarkdownItCompiler().render("$a</SCRIPT>$", render_math=True)
        assert "<\\/SCRIPT>" in html

    def test_math_keeps_other_closing_sequences(self) -> None:
        html = MarkdownItCompiler().render("$a </ b$", render_math=True)
        assert '<script type="math/tex">a </ b</script>' in html

    def test_compile_is_awaitable(self) -> None:
        html = asyncio.run(MarkdownItCompiler().compile("*x*", "/d/doc.md"))
        assert html == "<p><em>x</em></p>\n"

    def test_decode(self) -> None:
        assert MarkdownItCompiler.decode("my%20fig.png") == "my fig.png"


class TestPandocCommand:
    def test_default_command(self) -> None:
        assert PandocCompiler().command() == ["pandoc", f"--from={DEFAULT_FLAVOR}", "--to=html"]

    def test_math_and_extra_arguments(self) -> None:
        compiler = PandocCompiler("/usr/local/bin/pandoc", ["--standalone"], flavor="gfm")
        assert compiler.command(render_math=True) == [
            "/usr/local/bin/pandoc",
            "--from=gfm",
            "--to=html",
            "--mathjax",
            "--standalone",
        ]


class TestPandocFailures:
    def test_missing_executable(self) -> None:
        compiler = PandocCompiler("vitrina-no-such-pandoc")
        with pytest.raises(CompilerError) as excinfo:
            asyncio.run(compiler.compile("# Hi", None))
        assert excinfo.value.backend == "pandoc"

    @pytest.mark.skipif(shutil.which("false") is None, reason="needs the false utility")
    def test_nonzero_exit(self) -> None:
        compiler = PandocCompiler(shutil.which("false"))
        with pytest.raises(CompilerError) as excinfo:
            asyncio.run(compiler.compile("# Hi", None))
        assert excinfo.value.returncode == 1


@pytest.mark.skipif(shutil.which("pandoc") is None, reason="pandoc not installed")
class TestPandocCompiler:
    def test_heading(self) -> None:
        html = asyncio.run(PandocCompiler().compile("# Hi", None))
        assert parse_fragment(html).h1.get_text() == "Hi"

    def test_runs_in_document_directory(self, tmp_path) -> None:
        doc = tmp_path / "doc.md"
        html = asyncio.run(PandocCompiler().compile("![a](b.png)", str(doc)))
        assert parse_fragment(html).img["src"] == "b.png"

    def test_math(self) -> None:
        html = asyncio.run(PandocCompiler().compile("$x^2$", None, render_math=True))
        assert parse_fragment(html).find("script")["type"] == "math/tex"


class TestConvertMathSpans:
    def test_inline(self) -> None:
        html = convert_math_spans('<p><span class="math inline">\\(x^2\\)</span></p>')
        assert html == '<p><span class="math inline"><script type="math/tex">x^2</script></span></p>'

    def test_display(self) -> None:
        html = convert_math_spans('<span class="math display">\\[\\sum x\\]</span>')
        script = parse_fragment(html).script
        assert script["type"] == "math/tex; mode=display"
        assert script.string == "\\sum x"

    def test_other_markup_untouched(self) -> None:
        assert convert_math_spans("<p>no math</p>") == "<p>no math</p>"
