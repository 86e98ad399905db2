import re
from dataclasses import dataclass
from typing import Iterable, Tuple

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class SkillToken:
    original: str
    normalized: str


def normalize_skill(name: str) -> str:
    """Canonical comparable form: lowercase, trimmed, alphanumerics only."""
    if not isinstance(name, str):
        return ""
    return _NON_ALNUM.sub("", name.strip().lower())


def normalize_skills(names: Iterable[str]) -> Tuple[SkillToken, ...]:
    if not names:
        return ()
    return tuple(
        SkillToken(original=n if isinstance(n, str) else "", normalized=normalize_skill(n))
        for n in names
    )


def normalize_level(level: str) -> str:
    """Map free-form authority levels onto the canonical tier labels."""
    key = normalize_skill(level)
    return LEVEL_SYNS.get(key, level.strip() if isinstance(level, str) else "")


LEVEL_SYNS = {
    "csuite": "C-Suite",
    "clevel": "C-Suite",
    "executive": "Executive",
    "director": "Director",
    "manager": "Manager",
}
