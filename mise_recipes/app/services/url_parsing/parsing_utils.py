"""General parsing utilities for recipe extraction."""

import re
from typing import Any, List, Optional
from urllib.parse import parse_qs, urlparse

from mise_recipes.app.services.text_normalizer import clean_text, decode_entities


def normalize_text(value: Any) -> str:
    """Decode entities and collapse whitespace; non-strings become empty."""
    if not isinstance(value, str):
        return ""
    return clean_text(decode_entities(value))


def normalize_url_candidate(value: str) -> str:
    cleaned = decode_entities(value).strip()
    cleaned = re.sub(r"^[(\"'`\\\[]+", "", cleaned)
    return re.sub(r"[)\"'`\\\]>.,;]+$", "", cleaned)


def to_optional_url(value: Any) -> Optional[str]:
    """Return an absolute http(s) URL or None."""
    if not isinstance(value, str):
        return None
    candidate = normalize_url_candidate(value)
    if not candidate:
        return None
    parsed = urlparse(candidate)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return None
    return candidate


def _hostname(url: str) -> str:
    return re.sub(r"^www\.", "", (urlparse(url).hostname or "").lower())


def get_video_kind(value: Optional[str]) -> Optional[str]:
    """``"youtube"``, ``"vimeo"`` or None for any other host."""
    if not value:
        return None
    hostname = _hostname(value)
    if hostname == "youtu.be" or hostname.endswith("youtube.com") or hostname.endswith("youtube-nocookie.com"):
        return "youtube"
    if hostname in {"vimeo.com", "player.vimeo.com"} or hostname.endswith(".vimeo.com"):
        return "vimeo"
    return None


def normalize_video_url(value: Optional[str]) -> Optional[str]:
    """Canonicalise YouTube links to ``https://youtu.be/ID`` and Vimeo to ``https://vimeo.com/ID``."""
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return None
    hostname = _hostname(value)
    segments = [segment for segment in parsed.path.split("/") if segment]

    if hostname == "youtu.be":
        return f"https://youtu.be/{segments[0]}" if segments else value
    if hostname.endswith("youtube.com") or hostname.endswith("youtube-nocookie.com"):
        if parsed.path == "/watch":
            video_id = parse_qs(parsed.query).get("v", [None])[0]
            return f"https://youtu.be/{video_id}" if video_id else value
        if len(segments) >= 2 and segments[0] in {"embed", "shorts"}:
            return f"https://youtu.be/{segments[1]}"
    if get_video_kind(value) == "vimeo":
        match = re.search(r"(\d+)", parsed.path)
        return f"https://vimeo.com/{match.group(1)}" if match else value
    return value


def parse_yield(value: Any) -> Optional[int]:
    """Parse servings from a number, a "4 servings" string or a list of either."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, list):
        for entry in value:
            parsed = parse_yield(entry)
            if parsed is not None and parsed > 0:
                return parsed
        return None
    if isinstance(value, str):
        match = re.search(r"\d+", value)
        if match:
            return int(match.group())
    return None


def parse_duration_minutes(value: Any) -> Optional[int]:
    """Parse an ISO-8601 ``PT#H#M`` duration into minutes; zero becomes None."""
    if not isinstance(value, str):
        return None
    match = re.search(r"PT(?:(\d+)H)?(?:(\d+)M)?", value, re.IGNORECASE)
    if not match:
        return None
    total = int(match.group(1) or 0) * 60 + int(match.group(2) or 0)
    return total or None


def extract_image(value: Any) -> Optional[str]:
    """Extract image URL from various schema.org image formats."""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and value:
        return extract_image(value[0])
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        return value["url"]
    return None


def normalize_source_url(value: Optional[str]) -> Optional[str]:
    """Canonical form used to recognise a re-import: https, no www, no query or fragment."""
    if not value:
        return None
    parsed = urlparse(value.strip())
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        return None
    hostname = re.sub(r"^www\.", "", parsed.hostname.lower())
    path = parsed.path or "/"
    if path != "/":
        path = path.rstrip("/") or "/"
    return f"https://{hostname}{path}"


def build_source_url_candidates(value: Optional[str]) -> List[str]:
    """Spellings under which a recipe from this URL may already be stored."""
    if not value:
        return []
    candidates: List[str] = []

    def add(candidate: str) -> None:
        if candidate not in candidates:
            candidates.append(candidate)

    normalized = normalize_source_url(value)
    if normalized:
        for suffix in ("", "/", "?", "#"):
            add(f"{normalized}{suffix}")

    parsed = urlparse(value)
    if parsed.scheme in {"http", "https"} and parsed.hostname:
        host = re.sub(r"^www\.", "", parsed.hostname.lower())
        other_scheme = "https" if parsed.scheme == "http" else "http"
        path = parsed.path.rstrip("/")
        for scheme in (parsed.scheme, other_scheme):
            for hostname in (host, f"www.{host}"):
                base = f"{scheme}://{hostname}{path}"
                for suffix in ("", "/", "?", "#"):
                    add(f"{base}{suffix}")

    add(value)
    return candidates
