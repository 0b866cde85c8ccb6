# -*- coding: utf-8 -*-
"""
extractor/lookups.py
====================

Tablas de consulta inmutables usadas por el resolvedor:

- `LookupTable`: clave → reemplazo (gentilicios, sustituciones propias, persona→lugar).
- `MembershipSet`: pertenencia a conjunto (lista negra de ubicaciones).

Ambas reciben `case_sensitive` al construirse; si es False, las claves se
normalizan (casefold) al cargar y al consultar. Los espacios de los extremos
se recortan solo al cargar; la consulta es exacta. Se cargan una vez y se
comparten en solo-lectura entre llamadas concurrentes.

Claves duplicadas en la fuente: gana la ÚLTIMA escritura.

La reescritura de texto completo (`replace_all`) usa un autómata Aho-Corasick
sobre las mismas claves normalizadas, así que todo lo que encuentra pasa
`contains()` y viceversa.
"""

from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import ahocorasick


class LookupKeyNotFound(KeyError):
    """`substitution()` sin un `contains()` previo verdadero (error del programador)."""


def _fold(key: str, case_sensitive: bool) -> str:
    return key if case_sensitive else key.casefold()


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class LookupTable:
    """Mapa clave → reemplazo con sensibilidad a mayúsculas configurable."""

    def __init__(self, pairs: Iterable[Tuple[str, str]] = (), case_sensitive: bool = False) -> None:
        self.case_sensitive = case_sensitive
        table: Dict[str, str] = {}
        for key, value in pairs:
            k = _fold(key.strip(), case_sensitive)
            if not k:
                continue
            table[k] = value.strip()      # last write wins
        self._table = table
        self._automaton = self._build_automaton()

    def contains(self, key: Optional[str]) -> bool:
        if key is None:
            return False
        return _fold(key, self.case_sensitive) in self._table

    def substitution(self, key: str) -> str:
        """Reemplazo para `key`; lanza LookupKeyNotFound si no existe."""
        try:
            return self._table[_fold(key, self.case_sensitive)]
        except KeyError:
            raise LookupKeyNotFound(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"LookupTable(size={len(self)}, case_sensitive={self.case_sensitive})"

    # ------------------------------------------------------------------
    # Reescritura de texto completo (pre-sustitución de gentilicios)
    # ------------------------------------------------------------------

    def _build_automaton(self) -> Optional[ahocorasick.Automaton]:
        if not self._table:
            return None
        auto = ahocorasick.Automaton()
        for k in self._table:
            auto.add_word(k, k)
        auto.make_automaton()
        return auto

    def _fold_with_offsets(self, text: str) -> Tuple[str, List[int]]:
        """
        Texto normalizado + índice (posición normalizada → carácter original).
        casefold puede alargar un carácter ("ß" → "ss"), por eso se pliega
        carácter a carácter.
        """
        if self.case_sensitive:
            return text, list(range(len(text)))
        parts: List[str] = []
        origin: List[int] = []
        for i, ch in enumerate(text):
            folded = ch.casefold()
            parts.append(folded)
            origin.extend([i] * len(folded))
        return "".join(parts), origin

    def _matches(self, text: str) -> List[Tuple[int, int, str]]:
        """(inicio, fin, clave) sin solapes: la más a la izquierda y, a igualdad, la más larga."""
        folded, origin = self._fold_with_offsets(text)
        candidates: List[Tuple[int, int, str]] = []
        for end_idx, key in self._automaton.iter(folded):
            f_start, f_end = end_idx - len(key) + 1, end_idx + 1
            start, end = origin[f_start], origin[end_idx] + 1
            # el match debe cubrir caracteres originales completos
            if f_start > 0 and origin[f_start - 1] == start:
                continue
            if f_end < len(folded) and origin[f_end] == end - 1:
                continue
            # palabra completa
            if start > 0 and _is_word_char(text[start - 1]):
                continue
            if end < len(text) and _is_word_char(text[end]):
                continue
            candidates.append((start, end, key))

        candidates.sort(key=lambda m: (m[0], -(m[1] - m[0])))
        chosen: List[Tuple[int, int, str]] = []
        last_end = 0
        for start, end, key in candidates:
            if start >= last_end:
                chosen.append((start, end, key))
                last_end = end
        return chosen

    def replace_all(self, text: str) -> str:
        """
        Reescribe cada aparición (palabra completa) de una clave por su reemplazo.
        Ej. "German troops" → "Germany troops". Costoso en textos largos.
        """
        if self._automaton is None or not text:
            return text
        out: List[str] = []
        cursor = 0
        for start, end, _ in self._matches(text):
            surface = text[start:end]
            if not self.contains(surface):
                continue
            out.append(text[cursor:start])
            out.append(self.substitution(surface))
            cursor = end
        out.append(text[cursor:])
        return "".join(out)


class MembershipSet:
    """Conjunto de claves (p. ej. lista negra de ubicaciones)."""

    def __init__(self, keys: Iterable[str] = (), case_sensitive: bool = False) -> None:
        self.case_sensitive = case_sensitive
        self._keys: FrozenSet[str] = frozenset(
            k for k in (_fold(raw.strip(), case_sensitive) for raw in keys) if k
        )

    def contains(self, key: Optional[str]) -> bool:
        if key is None:
            return False
        return _fold(key, self.case_sensitive) in self._keys

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"MembershipSet(size={len(self)}, case_sensitive={self.case_sensitive})"


#: Alias con el nombre de dominio
Blacklist = MembershipSet
