"""Post suggestion unit tests (pure)."""

import pytest

from app.application.services.post_suggestion import (
    generate_post_suggestion,
    suggest_tag,
    suggest_title,
)


@pytest.mark.parametrize(
    ("text", "tag"),
    [
        ("any internship openings?", "professional"),
        ("best notes for the semester exam", "notes-links"),
        ("I feel so sad lately", "confession"),
        ("weekend trip to the hills", "plan-meet"),
        ("should I invest in crypto", "stock-market"),
        ("valorant squad needed", "gaming"),
        ("favourite spotify songs", "music"),
        ("random thought", "general"),
    ],
)
def test_suggest_tag_by_keyword_category(text: str, tag: str) -> None:
    assert suggest_tag(text) == tag


def test_suggest_title_strips_punctuation_and_title_cases_lowercase() -> None:
    assert suggest_title("how to get internships??!") == "How To Get Internships"


def test_suggest_title_keeps_mixed_case() -> None:
    assert suggest_title("Best GPU for ML?") == "Best GPU for ML"


def test_suggest_title_truncates_to_100_chars() -> None:
    title = suggest_title("A" + "b" * 150)
    assert len(title) == 100
    assert title.endswith("...")


def test_generate_post_suggestion() -> None:
    suggestion = generate_post_suggestion("any hackathon teams?", "https://forum.test")
    assert suggestion.title == "Any Hackathon Teams"
    assert "any hackathon teams" in suggestion.content
    assert suggestion.tag == "general"
    assert suggestion.link == "https://forum.test"
