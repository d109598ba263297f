"""Tests for project root resolution."""

from vitrina.project import ProjectRoots


class TestProjectRoots:
    def test_relativize_inside_root(self) -> None:
        roots = ProjectRoots(["/work/site"])
        assert roots.relativize("/work/site/docs/index.md") == ("/work/site", "docs/index.md")

    def test_relativize_outside_roots(self) -> None:
        roots = ProjectRoots(["/work/site"])
        assert roots.relativize("/elsewhere/notes.md") == (None, "/elsewhere/notes.md")

    def test_sibling_prefix_is_not_contained(self) -> None:
        roots = ProjectRoots(["/work/site"])
        assert roots.relativize("/work/site2/a.md")[0] is None

    def test_deepest_root_wins(self) -> None:
        roots = ProjectRoots(["/work", "/work/site"])
        assert roots.relativize("/work/site/a.md") == ("/work/site", "a.md")

    def test_unsaved_document(self) -> None:
        assert ProjectRoots(["/work"]).relativize("") == (None, "")

    def test_paths_are_normalized_and_deduplicated(self) -> None:
        roots = ProjectRoots(["/work/site/", "/work/site"])
        assert roots.paths == ("/work/site",)

    def test_add_path(self) -> None:
        roots = ProjectRoots()
        roots.add_path("/work")
        assert roots.relativize("/work/a.md") == ("/work", "a.md")
