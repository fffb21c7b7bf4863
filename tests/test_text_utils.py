"""Angle description preview and objective shortening."""
from content_studio.utils.text import clean_and_truncate_description, format_objective_text, markdown_to_plain


def test_short_description_is_not_truncated() -> None:
    result = clean_and_truncate_description("**Bold** idea", 150)
    assert result.truncated == "Bold idea"
    assert result.full_markdown == "**Bold** idea"
    assert result.is_truncated is False


def test_markdown_is_flattened() -> None:
    text = "### Why it works\nPosition the brand.\n- **Data** first\n- Take a stance"
    assert markdown_to_plain(text) == "Position the brand. • Data first • Take a stance"


def test_cut_at_sentence_end() -> None:
    description = "A" * 100 + ". " + "B" * 80
    result = clean_and_truncate_description(description, 150)
    assert result.is_truncated
    assert result.truncated == "A" * 100 + "."


def test_cut_at_word_boundary() -> None:
    description = " ".join(["word"] * 50)
    result = clean_and_truncate_description(description, 30)
    assert result.truncated.endswith("...")
    assert len(result.truncated) <= 33
    assert not result.truncated[:-3].endswith(" ")


def test_hard_cut_without_break() -> None:
    result = clean_and_truncate_description("x" * 200, 150)
    assert result.truncated == "x" * 150 + "..."


def test_objective_drops_opening_verb_and_filler() -> None:
    assert format_objective_text("Establish the brand as the reference") == "the brand as the reference"
    assert (
        format_objective_text("Shift the market perception so that buyers trust us")
        == "buyers trust us"
    )
    assert format_objective_text("Build trust") == "Build trust"
