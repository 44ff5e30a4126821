"""Common validation helpers for blog use cases."""

from collections.abc import Iterable

from app.domain.errors import InvalidSpecError

MAX_TITLE_LENGTH = 100


def ensure_valid_title(title: str) -> str:
    normalized = title.strip()
    if not normalized:
        raise InvalidSpecError("Title is required")
    if len(normalized) > MAX_TITLE_LENGTH:
        raise InvalidSpecError(
            f"Title cannot be more than {MAX_TITLE_LENGTH} characters"
        )
    return normalized


def ensure_valid_content(content: str) -> str:
    if not content.strip():
        raise InvalidSpecError("Content is required")
    return content


def normalize_tags(tags: str | Iterable[str] | None) -> list[str]:
    """Accept a comma separated string or a list and return clean tags."""

    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [tag.strip() for tag in tags if tag and tag.strip()]
