"""
Keep selected words out of machine translation.

    >>> p = protect_preserved_terms("Senior Data Consultant", ["Data"])
    >>> p.text
    'Senior __KEEP_TERM_0__ Consultant'
    >>> p.restore("Consultant Senior __KEEP_TERM_0__")
    'Consultant Senior Data'
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

KEEP_TOKEN_PREFIX = "__KEEP_TERM_"

# models sometimes lower-case or re-case the placeholders
_ANY_TOKEN = re.compile(rf"{re.escape(KEEP_TOKEN_PREFIX)}(\d+)__", re.IGNORECASE)
_LEFTOVER = re.compile(KEEP_TOKEN_PREFIX.strip("_"), re.IGNORECASE)


def keep_token(index: int) -> str:
    return f"{KEEP_TOKEN_PREFIX}{index}__"


@dataclass
class ProtectedText:
    text: str
    replacements: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def tokens(self) -> List[str]:
        return [token for token, _ in self.replacements]

    def missing(self, translated: str) -> List[str]:
        """Placeholders the model dropped (case is ignored)."""
        found = {int(m.group(1)) for m in _ANY_TOKEN.finditer(translated or "")}
        return [keep_token(i) for i in range(len(self.replacements)) if i not in found]

    def restore(self, translated: str) -> str:
        def put_back(m: re.Match) -> str:
            i = int(m.group(1))
            return self.replacements[i][1] if i < len(self.replacements) else m.group(0)
        return _ANY_TOKEN.sub(put_back, translated)

    def is_intact(self, translated: str) -> bool:
        """Every placeholder survived and none is left over once restored."""
        if self.missing(translated):
            return False
        return not (self.replacements and _LEFTOVER.search(self.restore(translated)))


def _whole_word(term: str) -> re.Pattern:
    # \b breaks on terms that start/end with punctuation ("C++", ".NET")
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


def protect_preserved_terms(text: str, terms: Iterable[str]) -> ProtectedText:
    """
    Swap every whole-word, case-insensitive occurrence of each term for its
    own numbered placeholder, in the order the terms are given. Each
    occurrence is restored with exactly the spelling it had in the text.
    """
    protected = ProtectedText(text)

    def swap(m: re.Match) -> str:
        token = keep_token(len(protected.replacements))
        protected.replacements.append((token, m.group(0)))
        return token

    for term in terms or ():
        if not isinstance(term, str) or not term.strip():
            continue
        protected.text = _whole_word(term.strip()).sub(swap, protected.text)
    return protected
