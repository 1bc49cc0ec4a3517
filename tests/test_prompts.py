"""Tests for prompt loading utilities."""

import pytest

from src import prompts


@pytest.fixture(autouse=True)
def clear_prompt_cache(monkeypatch):
    """Ensure cached prompts do not leak across tests."""
    monkeypatch.delenv("PROMPT_VARIANT", raising=False)
    prompts.load_prompt.cache_clear()
    yield
    prompts.load_prompt.cache_clear()


def test_load_prompt_reads_default_variant(tmp_path, monkeypatch):
    """load_prompt should read files relative to PROMPTS_ROOT."""
    monkeypatch.setattr(prompts, "PROMPTS_ROOT", tmp_path)
    target = tmp_path / "default"
    target.mkdir(parents=True)
    (target / "default_roadmap_user.txt").write_text("user prompt", encoding="utf-8")

    result = prompts.load_prompt("roadmap/user")
    assert result == "user prompt"


def test_load_prompt_falls_back_to_default(monkeypatch, tmp_path):
    """Missing variant should fall back to default text."""
    monkeypatch.setattr(prompts, "PROMPTS_ROOT", tmp_path)
    monkeypatch.setenv("PROMPT_VARIANT", "beta")
    target = tmp_path / "default"
    target.mkdir(parents=True)
    (target / "default_roadmap_user.txt").write_text("default prompt", encoding="utf-8")

    result = prompts.load_prompt("roadmap/user")
    assert result == "default prompt"


def test_load_prompt_missing_file_raises(monkeypatch, tmp_path):
    monkeypatch.setattr(prompts, "PROMPTS_ROOT", tmp_path)

    with pytest.raises(FileNotFoundError, match="roadmap/user"):
        prompts.load_prompt("roadmap/user")


def test_render_prompt_escapes_braces():
    """render_prompt should escape braces in inserted values."""
    template = "Value: {value}"
    rendered = prompts.render_prompt(template, value="{example}")

    assert rendered == "Value: {example}"


def test_render_prompt_maps_none_to_empty():
    assert prompts.render_prompt("[{value}]", value=None) == "[]"


def test_build_roadmap_prompt_includes_profile():
    """The shipped default template should carry all three fields."""
    prompt = prompts.build_roadmap_prompt("3", "Computer Science Engineering", "Python, C")

    assert "- **Current Semester:** 3" in prompt
    assert "- **Engineering Branch:** Computer Science Engineering" in prompt
    assert "- **Existing Skills:** Python, C" in prompt
    assert '"### Semester 3: Building Foundations"' in prompt
    assert "four key areas" in prompt


@pytest.mark.parametrize("skills", ["", "   ", None])
def test_build_roadmap_prompt_uses_fallback_for_blank_skills(skills):
    prompt = prompts.build_roadmap_prompt("5", "Mechanical Engineering", skills)

    assert f"- **Existing Skills:** {prompts.SKILLS_FALLBACK}" in prompt
    assert prompts.SKILLS_FALLBACK == "Just getting started!"


def test_build_roadmap_prompt_concise_variant():
    """The concise variant asks for emoji-tagged bullets."""
    prompt = prompts.build_roadmap_prompt("8", "Civil Engineering", "AutoCAD", variant="concise")

    assert "concise, scannable, and visually engaging action plan" in prompt
    assert '"### Semester 8: Key Focus Areas"' in prompt
    assert "- **Existing Skills:** AutoCAD" in prompt


def test_build_roadmap_prompt_variant_from_environment(monkeypatch):
    monkeypatch.setenv("PROMPT_VARIANT", "Concise")

    prompt = prompts.build_roadmap_prompt("2", "Electrical Engineering", "")

    assert "Key Focus Areas" in prompt


def test_build_roadmap_prompt_keeps_skills_verbatim():
    """Non-blank skills are inserted exactly as typed"""
    prompt = prompts.build_roadmap_prompt("4", "Information Technology", "  Python, SQL  ")

    assert "- **Existing Skills:**   Python, SQL  \n" in prompt
