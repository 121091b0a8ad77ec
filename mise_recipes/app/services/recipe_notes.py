"""Post-processing for imported recipe notes and descriptions."""

import re
from typing import List, NamedTuple, Optional

from mise_recipes.app.services.text_normalizer import clean_text, decode_entities

RECIPE_NOTE_HEADING = re.compile(r"^(recipe\s+)?notes?:?\s*$", re.IGNORECASE)
_NOTE_MARKER = re.compile(r"(^|\s)(\d+)[.)]\s+")
_ESCAPED_MARKER = re.compile(r"\\([.)])")


class NoteEntry(NamedTuple):
    text: str
    number: Optional[int] = None


class DescriptionNotes(NamedTuple):
    description: Optional[str]
    notes: List[str]


def _normalize(value: str) -> str:
    return clean_text(decode_entities(value))


def clean_description(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    cleaned = re.sub(r"\brecipe video above\b\.?", "", _normalize(value), flags=re.IGNORECASE)
    cleaned = clean_text(cleaned)
    return cleaned or None


def split_inline_numbered_notes(value: str) -> List[NoteEntry]:
    """Split "1. Use ripe fruit. 2. Keeps for a week." into numbered entries."""
    normalized = _ESCAPED_MARKER.sub(r"\1", _normalize(value))
    if not normalized:
        return []

    starts = [match.start() + len(match.group(1)) for match in _NOTE_MARKER.finditer(normalized)]
    if len(starts) < 2:
        single = re.match(r"^(\d+)[.)]\s+(.+)$", normalized)
        if single:
            return [NoteEntry(text=clean_text(single.group(2)), number=int(single.group(1)))]
        return [NoteEntry(text=normalized)]

    entries: List[NoteEntry] = []
    bounds = starts + [len(normalized)]
    for start, end in zip(bounds, bounds[1:]):
        segment = clean_text(normalized[start:end])
        numbered = re.match(r"^(\d+)[.)]\s*(.+)$", segment)
        if numbered:
            entries.append(NoteEntry(text=clean_text(numbered.group(2)), number=int(numbered.group(1))))
        elif segment:
            entries.append(NoteEntry(text=segment))
    return [entry for entry in entries if entry.text]


def normalize_imported_notes(notes: List[str]) -> List[str]:
    """Dedupe notes case-insensitively, preferring the numbered variant.

    Bare "Notes" headings and "Note 3" stubs are dropped; numbered notes are
    rendered as ``"3. text"``.
    """
    deduped: List[NoteEntry] = []
    seen = {}
    for note in notes:
        for entry in split_inline_numbered_notes(note):
            cleaned = _ESCAPED_MARKER.sub(r"\1", _normalize(entry.text))
            cleaned = re.sub(r"^[-*]\s*", "", cleaned)
            cleaned = re.sub(r"^\d+[.)]\s*", "", cleaned).strip()
            if not cleaned or RECIPE_NOTE_HEADING.match(cleaned) or re.match(r"^note\s*\d+$", cleaned, re.IGNORECASE):
                continue
            key = cleaned.lower()
            if key in seen:
                existing = deduped[seen[key]]
                if entry.number is not None and existing.number is None:
                    deduped[seen[key]] = NoteEntry(text=cleaned, number=entry.number)
                continue
            seen[key] = len(deduped)
            deduped.append(NoteEntry(text=cleaned, number=entry.number))

    return [f"{entry.number}. {entry.text}" if entry.number is not None else entry.text for entry in deduped]


def extract_notes_from_description(value: Optional[str]) -> DescriptionNotes:
    """Move sentences that point at a numbered note out of the description."""
    if not value:
        return DescriptionNotes(description=None, notes=[])

    notes: List[str] = []
    kept: List[str] = []
    for sentence in re.split(r"(?<=[.!?])\s+", value):
        sentence = sentence.strip()
        if not sentence:
            continue
        if re.search(r"\bsee\s+note\s*\d+", sentence, re.IGNORECASE) or re.match(r"^note\s*\d+", sentence, re.IGNORECASE):
            notes.append(sentence)
            continue
        kept.append(sentence)

    description = " ".join(kept).strip()
    return DescriptionNotes(description=description or None, notes=notes)


def dedupe_lines(lines: List[str]) -> List[str]:
    seen = set()
    result: List[str] = []
    for line in lines:
        key = line.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(line.strip())
    return result
