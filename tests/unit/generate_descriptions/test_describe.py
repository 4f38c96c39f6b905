"""Tests for generate_descriptions.describe module."""

from generate_descriptions.describe import generate_hook, normalize_hashtags, render_description


class TestNormalizeHashtags:
    def test_cleans_and_dedups(self) -> None:
        tags = ["#Warhammer", "warhammer", " Mini Painting ", "", "#"]
        assert normalize_hashtags(tags) == ["warhammer", "minipainting"]

    def test_cap(self) -> None:
        assert normalize_hashtags(["a", "b", "c", "d"], limit=2) == ["a", "b"]


class TestGenerateHook:
    def test_tutorial(self) -> None:
        hook = generate_hook("How to Paint Goblins.", "tutorial")
        assert hook.startswith("Learn paint goblins in this step-by-step hobby tutorial.")

    def test_vlog(self) -> None:
        hook = generate_hook("Sunday Ramble", "vlog")
        assert hook.startswith("Sunday Ramble - Join me in today's hobby session")


class TestRenderDescription:
    def test_layout(self) -> None:
        text = render_description("Hook text.", "https://example.com", ["a", "b"])
        assert text == (
            "Hook text.\n"
            "\n"
            "---\n"
            "🌐 Website & Blog: https://example.com\n"
            "---\n"
            "\n"
            "#a #b\n"
        )

    def test_no_website(self) -> None:
        assert render_description("Hook.", "", ["a"]) == "Hook.\n\n#a\n"
