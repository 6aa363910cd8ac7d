# src/tabula/core/introspection/naming.py
"""
Naming conventions used to infer relations from column names.

Only regular English plurals are handled by default (`user` <-> `users`).
Schemas with irregular table names can pass their own `pluralize` and
`singularize` callables.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

FK_SUFFIXES: Tuple[str, ...] = ("_id", "Id")


def regular_plural(word: str) -> str:
    return word if word.endswith("s") else f"{word}s"


def regular_singular(word: str) -> str:
    return word[:-1] if word.endswith("s") and len(word) > 1 else word


@dataclass(frozen=True)
class NamingConvention:
    pluralize: Callable[[str], str] = field(default=regular_plural)
    singularize: Callable[[str], str] = field(default=regular_singular)
    fk_suffixes: Tuple[str, ...] = FK_SUFFIXES

    def strip_fk_suffix(self, column_name: str) -> Optional[str]:
        """`userId` / `user_id` -> `user`; None when the name is not FK-shaped."""
        for suffix in self.fk_suffixes:
            if column_name.endswith(suffix) and len(column_name) > len(suffix):
                return column_name[: -len(suffix)].lower()
        return None

    def table_candidates(self, stem: str) -> List[str]:
        """Names a table referenced by `stem` may carry, most specific first."""
        candidates = [stem, self.pluralize(stem)]
        return list(dict.fromkeys(candidates))

    def name_variants(self, name: str) -> List[str]:
        variants = [name, self.singularize(name), self.pluralize(name)]
        return list(dict.fromkeys(variants))


DEFAULT_NAMING = NamingConvention()
