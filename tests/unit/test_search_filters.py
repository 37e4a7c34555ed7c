"""Tests for include/exclude rule compilation."""

from __future__ import annotations

from search.filters import BUILTIN_EXCLUDE_DIRS, build_filter_set


def test_builtin_directories_always_excluded() -> None:
    """Ensure built-in directories are pruned even with no caller rules."""
    rules = build_filter_set()
    for name in BUILTIN_EXCLUDE_DIRS:
        assert not rules.allows_dir(name)
        assert not rules.allows_dir(f"pkg/{name}")
        assert not rules.allows_file(f"pkg/{name}/index.js")
    assert rules.allows_dir("src")
    assert rules.allows_file("src/main.py")


def test_builtin_match_is_by_exact_component() -> None:
    """Ensure names that merely contain a built-in name are kept."""
    rules = build_filter_set()
    assert rules.allows_dir("builder")
    assert rules.allows_file("targets/notes.txt")


def test_exclude_fragment_matches_at_any_depth() -> None:
    """Ensure exclude fragments apply to names anywhere in the tree."""
    rules = build_filter_set(excludes=["*.log", "vendor"])
    assert not rules.allows_file("app.log")
    assert not rules.allows_file("deep/nested/app.log")
    assert not rules.allows_dir("lib/vendor")
    assert not rules.allows_file("vendor/pkg/mod.py")
    assert rules.allows_file("src/app.py")


def test_include_fragments_narrow_files_only() -> None:
    """Ensure include rules restrict files but never prune directories."""
    rules = build_filter_set(includes=["*.py"])
    assert rules.allows_dir("docs")
    assert rules.allows_file("docs/conf.py")
    assert not rules.allows_file("docs/index.md")


def test_exclude_beats_include() -> None:
    """Ensure a file matching both lists is excluded."""
    rules = build_filter_set(excludes=["generated_*.py"], includes=["*.py"])
    assert not rules.allows_file("src/generated_api.py")
    assert rules.allows_file("src/api.py")


def test_blank_and_duplicate_fragments_ignored() -> None:
    """Ensure whitespace-only fragments add no rules and duplicates collapse."""
    rules = build_filter_set(excludes=["", "   ", "*.tmp", " *.tmp "], includes=["  "])
    assert rules.include_spec is None
    assert rules.exclude_lines == ("**/*.tmp", "**/*.tmp/**")
    assert rules.allows_file("readme.md")


def test_leading_slash_is_stripped() -> None:
    """Ensure a rooted fragment is treated like a relative one."""
    rules = build_filter_set(excludes=["/secret"])
    assert not rules.allows_dir("secret")
    assert not rules.allows_dir("a/secret")


def test_rule_lines_reports_compiled_rules() -> None:
    """Ensure diagnostics expose the compiled rule text."""
    rules = build_filter_set(excludes=["tmp"], includes=["*.md"])
    lines = rules.rule_lines()
    assert lines["exclude"] == ("**/tmp", "**/tmp/**")
    assert lines["include"] == ("**/*.md",)
    assert "node_modules" in lines["builtin"]


def test_malformed_fragment_is_dropped() -> None:
    """Ensure a fragment with an invalid character range does not fail the others."""
    rules = build_filter_set(excludes=["a[b-a]", "*.log"], includes=["a[z-a]", "*.txt"])
    assert rules.exclude_lines == ("**/*.log", "**/*.log/**")
    assert rules.include_lines == ("**/*.txt",)
    assert not rules.allows_file("x.log")
    assert rules.allows_file("x.txt")


def test_only_malformed_include_leaves_files_unrestricted() -> None:
    """Ensure dropping every include rule means no include restriction."""
    rules = build_filter_set(includes=["a[z-a]"])
    assert rules.include_spec is None
    assert rules.allows_file("src/main.py")


def test_files_named_like_builtin_dirs_are_kept() -> None:
    """Ensure built-in names exclude directories but not files with that name."""
    rules = build_filter_set()
    assert rules.allows_file("build")
    assert rules.allows_file("scripts/build")
    assert rules.allows_file("tools/dist")
    assert not rules.allows_file("build/out.txt")
