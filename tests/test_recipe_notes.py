from mise_recipes.app.services.recipe_notes import (
    NoteEntry,
    clean_description,
    dedupe_lines,
    extract_notes_from_description,
    normalize_imported_notes,
    split_inline_numbered_notes,
)


def test_clean_description():
    assert clean_description("Crispy &amp; quick.  Recipe video above.") == "Crispy & quick."
    assert clean_description("   ") is None
    assert clean_description(None) is None


def test_split_inline_numbered_notes():
    assert split_inline_numbered_notes("1. Use ripe fruit. 2. Keeps for a week.") == [
        NoteEntry(text="Use ripe fruit.", number=1),
        NoteEntry(text="Keeps for a week.", number=2),
    ]
    assert split_inline_numbered_notes("3\\. Freeze the dough.") == [NoteEntry(text="Freeze the dough.", number=3)]
    assert split_inline_numbered_notes("Plain note") == [NoteEntry(text="Plain note")]
    assert split_inline_numbered_notes("") == []


def test_normalize_imported_notes_prefers_numbered_variant():
    notes = normalize_imported_notes(
        ["Notes", "Use ripe fruit.", "1. Use ripe fruit.", "Note 2", "- Chill overnight", "chill overnight"]
    )
    assert notes == ["1. Use ripe fruit.", "Chill overnight"]


def test_extract_notes_from_description():
    result = extract_notes_from_description("A tangy tart. Use unwaxed lemons, see note 1. Serves a crowd!")
    assert result.description == "A tangy tart. Serves a crowd!"
    assert result.notes == ["Use unwaxed lemons, see note 1."]

    only_notes = extract_notes_from_description("Note 2: chill the base.")
    assert only_notes.description is None
    assert only_notes.notes == ["Note 2: chill the base."]


def test_dedupe_lines_is_case_insensitive():
    assert dedupe_lines([" Salt ", "salt", "", "Pepper"]) == ["Salt", "Pepper"]
