# -*- coding: utf-8 -*-
"""
extractor/schemas.py

Esquemas Pydantic para la etapa de Resolución de entidades.
- Comentarios en ES para claridad; identificadores en inglés por coherencia del repo.
- Entrada: texto (o lote de oraciones) + spans (tag, start, end) del clasificador.
- Salida: ExtractedEntities (personas, organizaciones, lugares).

Notas:
- `Occurrence` es una sola variante etiquetada por `category`; las ubicaciones
  del modo por-oración llevan `sentence_id` en lugar de `position`.
- No se fusionan duplicados: cada mención produce su propia ocurrencia.
"""
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, model_validator

#: Identificador de oración opaco (se pasa tal cual, sin convertir)
SentenceId = Union[str, int]


class EntityCategory(str, Enum):
    """Categorías finales de una ocurrencia."""
    PERSON = "PERSON"
    LOCATION = "LOCATION"
    ORGANIZATION = "ORGANIZATION"


class Span(BaseModel):
    """
    Span etiquetado por el clasificador externo.
    Offsets de carácter [start, end) sobre el texto EXACTO que se clasificó.
    """
    tag: str
    start: int
    end: int

    def fits(self, text: str) -> bool:
        """True si 0 <= start <= end <= len(text)."""
        return 0 <= self.start <= self.end <= len(text)


class Occurrence(BaseModel):
    """
    Mención resuelta de una entidad.

    - PERSON / ORGANIZATION: `position` = offset dentro del texto clasificado.
    - LOCATION (texto completo): `position` igual que arriba.
    - LOCATION (modo por-oración): `sentence_id` externo, `position` = None.
    """
    category: EntityCategory
    text: str
    position: Optional[int] = None
    sentence_id: Optional[SentenceId] = None

    @model_validator(mode="after")
    def _check_scope(self) -> "Occurrence":
        if self.sentence_id is not None and self.category is not EntityCategory.LOCATION:
            raise ValueError("solo las ubicaciones pueden llevar sentence_id")
        if self.position is None and self.sentence_id is None:
            raise ValueError("se requiere position o sentence_id")
        return self

    @property
    def is_sentence_scoped(self) -> bool:
        return self.sentence_id is not None

    @classmethod
    def person(cls, text: str, position: int) -> "Occurrence":
        return cls(category=EntityCategory.PERSON, text=text, position=position)

    @classmethod
    def organization(cls, text: str, position: int) -> "Occurrence":
        return cls(category=EntityCategory.ORGANIZATION, text=text, position=position)

    @classmethod
    def location(cls, text: str, position: int) -> "Occurrence":
        return cls(category=EntityCategory.LOCATION, text=text, position=position)

    @classmethod
    def sentence_location(cls, text: str, sentence_id: SentenceId) -> "Occurrence":
        return cls(category=EntityCategory.LOCATION, text=text, sentence_id=sentence_id)


class ExtractedEntities(BaseModel):
    """
    Contenedor de resultados de UNA llamada de resolución.
    Tres listas append-only; el orden de inserción es el orden de los spans.
    """
    persons: List[Occurrence] = Field(default_factory=list)
    organizations: List[Occurrence] = Field(default_factory=list)
    locations: List[Occurrence] = Field(default_factory=list)

    def add(self, occurrence: Occurrence) -> None:
        """Agrega la ocurrencia a la lista de su categoría."""
        if occurrence.category is EntityCategory.PERSON:
            self.persons.append(occurrence)
        elif occurrence.category is EntityCategory.ORGANIZATION:
            self.organizations.append(occurrence)
        else:
            self.locations.append(occurrence)

    def all(self) -> List[Occurrence]:
        """Todas las ocurrencias (personas, organizaciones, lugares)."""
        return [*self.persons, *self.organizations, *self.locations]

    def __len__(self) -> int:
        return len(self.persons) + len(self.organizations) + len(self.locations)

    def is_empty(self) -> bool:
        return len(self) == 0


class SentenceRecord(BaseModel):
    """
    Oración de entrada para el modo por lotes.
    Acepta `id`/`text` (formato del repo) o `story_sentences_id`/`sentence`
    (formato heredado de los volcados de noticias).
    """
    id: SentenceId = Field(validation_alias=AliasChoices("id", "story_sentences_id", "sentence_id"))
    text: str = Field(default="", validation_alias=AliasChoices("text", "sentence"))


__all__ = [
    "SentenceId",
    "EntityCategory",
    "Span",
    "Occurrence",
    "ExtractedEntities",
    "SentenceRecord",
]
