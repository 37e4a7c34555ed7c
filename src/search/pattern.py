"""Compile a query plus its toggles into one reusable matcher."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from search.errors import PatternCompileError

type TemplatePart = str | GroupRef

_TEMPLATE_RE = re.compile(r"\$(?:(?P<dollar>\$)|\{(?P<braced>[A-Za-z0-9_]+)\}|(?P<bare>[A-Za-z0-9_]+))")


@dataclass(frozen=True)
class GroupRef:
    """Reference to a capture group inside a replacement template."""

    ref: int | str


@dataclass(frozen=True)
class CompiledPattern:
    """Matcher built once per invocation.

    ``is_regex`` records whether the original query was a regular expression;
    group references in replacement text are only expanded in that case.
    """

    regex: re.Pattern[str]
    is_regex: bool

    def matches(self, line: str) -> bool:
        """Return True when the matcher finds anything in ``line``.

        Returns
        -------
        bool
            ``True`` on the first match.
        """
        return self.regex.search(line) is not None

    def search(self, text: str) -> re.Match[str] | None:
        """Return the first match in ``text``, if any.

        Returns
        -------
        re.Match[str] | None
            First match or ``None``.
        """
        return self.regex.search(text)

    def replacer(self, replacement: str) -> Callable[[str], str]:
        """Return a function that replaces every match in its argument.

        Returns
        -------
        Callable[[str], str]
            Replace-all function bound to this matcher and ``replacement``.
        """
        if not self.is_regex:
            return lambda text: self.regex.sub(lambda _match: replacement, text)
        parts = parse_template(replacement)

        def _expand(match: re.Match[str]) -> str:
            return "".join(
                part if isinstance(part, str) else _group_text(match, part.ref)
                for part in parts
            )

        return lambda text: self.regex.sub(_expand, text)

    def replace_all(self, text: str, replacement: str) -> str:
        """Replace every match in ``text``.

        Returns
        -------
        str
            Text with all matches substituted.
        """
        return self.replacer(replacement)(text)


def compile_pattern(
    query: str,
    *,
    is_regex: bool,
    case_sensitive: bool,
    whole_word: bool,
) -> CompiledPattern:
    """Compile a query and its toggles.

    Parameters
    ----------
    query
        Raw query text.
    is_regex
        Treat ``query`` as a regular expression instead of literal text.
    case_sensitive
        Match case exactly; otherwise compile case-insensitively.
    whole_word
        Require word boundaries on both sides of each match.

    Returns
    -------
    CompiledPattern
        Reusable matcher.

    Raises
    ------
    PatternCompileError
        Raised when the resulting expression does not compile.
    """
    source = query if is_regex else re.escape(query)
    if whole_word:
        source = rf"\b(?:{source})\b"
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        regex = re.compile(source, flags)
    except re.error as exc:
        raise PatternCompileError(query, str(exc)) from exc
    return CompiledPattern(regex=regex, is_regex=is_regex)


@lru_cache(maxsize=64)
def parse_template(template: str) -> tuple[TemplatePart, ...]:
    """Split a replacement template into literal text and group references.

    ``$1``/``${1}`` refer to numbered groups, ``$name``/``${name}`` to named
    ones, and ``$$`` is a literal dollar sign. Anything else is literal text.

    Returns
    -------
    tuple[TemplatePart, ...]
        Literal strings interleaved with ``GroupRef`` markers.
    """
    parts: list[TemplatePart] = []
    literal: list[str] = []
    pos = 0
    for match in _TEMPLATE_RE.finditer(template):
        literal.append(template[pos : match.start()])
        pos = match.end()
        if match.group("dollar") is not None:
            literal.append("$")
            continue
        name = match.group("braced") or match.group("bare")
        if literal:
            parts.append("".join(literal))
            literal = []
        parts.append(GroupRef(int(name) if name.isdigit() else name))
    literal.append(template[pos:])
    text = "".join(literal)
    if text:
        parts.append(text)
    return tuple(part for part in parts if part != "")


def _group_text(match: re.Match[str], ref: int | str) -> str:
    try:
        value = match.group(ref)
    except IndexError:
        return ""
    return value or ""


__all__ = ["CompiledPattern", "GroupRef", "compile_pattern", "parse_template"]
