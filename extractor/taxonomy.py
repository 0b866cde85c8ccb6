# -*- coding: utf-8 -*-
"""
extractor/taxonomy.py — Taxonomía de etiquetas NER

Tabla declarativa etiqueta cruda → categoría abstracta. Un mismo resolvedor
sirve a varios modelos (inglés 3/4 clases, español AnCora, alemán DeWaC), así
que agregar un idioma = agregar filas, no ramas de código.

MISC es una pseudo-categoría: solo se conserva si el texto es un gentilicio
conocido (ver resolver.py).
"""

from __future__ import annotations
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .schemas import EntityCategory


class Miscellaneous(str, Enum):
    """Pseudo-categoría transitoria (catch-all del modelo de 4 clases)."""
    MISC = "MISC"


MISCELLANEOUS = Miscellaneous.MISC

#: Resultado de clasificar una etiqueta (None = no reconocida)
TagCategory = Union[EntityCategory, Miscellaneous]


# ---------------------------------------------------------------------------
# Filas por familia de modelos
# ---------------------------------------------------------------------------

STANFORD_TAGS: Dict[str, TagCategory] = {
    # inglés (3class / conll 4class)
    "PERSON": EntityCategory.PERSON,
    "LOCATION": EntityCategory.LOCATION,
    "ORGANIZATION": EntityCategory.ORGANIZATION,
    "MISC": MISCELLANEOUS,
    # español (AnCora)
    ":PERS": EntityCategory.PERSON,
    ":LUG": EntityCategory.LOCATION,
    ":ORG": EntityCategory.ORGANIZATION,
    # alemán (DeWaC)
    ":I-PER": EntityCategory.PERSON,
    ":I-LOC": EntityCategory.LOCATION,
    ":I-ORG": EntityCategory.ORGANIZATION,
}

# Etiquetas de pipelines spaCy (en_core_web / es_core_news / de_core_news)
SPACY_TAGS: Dict[str, TagCategory] = {
    "PER": EntityCategory.PERSON,
    "GPE": EntityCategory.LOCATION,
    "LOC": EntityCategory.LOCATION,
    "FAC": EntityCategory.LOCATION,
    "ORG": EntityCategory.ORGANIZATION,
    "NORP": MISCELLANEOUS,       # nacionalidades → se rescatan solo si son gentilicios
}


class TagTaxonomy:
    """Clasificador etiqueta → categoría, inmutable tras construirse."""

    def __init__(self, rows: Mapping[str, TagCategory]) -> None:
        self._rows: Mapping[str, TagCategory] = MappingProxyType(dict(rows))

    @classmethod
    def default(cls) -> "TagTaxonomy":
        return cls({**STANFORD_TAGS, **SPACY_TAGS})

    def with_rows(self, rows: Mapping[str, TagCategory]) -> "TagTaxonomy":
        """Nueva taxonomía con filas extra (las nuevas pisan a las existentes)."""
        return TagTaxonomy({**self._rows, **rows})

    def classify(self, raw_tag: Optional[str]) -> Optional[TagCategory]:
        """Categoría de `raw_tag` o None si no está en la tabla."""
        if raw_tag is None:
            return None
        return self._rows.get(raw_tag)

    @property
    def tags(self) -> Mapping[str, TagCategory]:
        return self._rows

    def __contains__(self, raw_tag: object) -> bool:
        return raw_tag in self._rows

    def __len__(self) -> int:
        return len(self._rows)


DEFAULT_TAXONOMY = TagTaxonomy.default()
