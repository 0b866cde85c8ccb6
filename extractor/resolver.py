# -*- coding: utf-8 -*-
"""
extractor/resolver.py — Resolución de entidades sobre spans etiquetados

Objetivos de diseño
-------------------
- Convertir spans (tag, start, end) de un clasificador externo en ocurrencias
  tipadas: personas, organizaciones y lugares (ExtractedEntities).
- Una sola rutina por-span para los dos modos de entrada:
    * texto completo: ubicaciones con `position` (offset de carácter);
    * lote de oraciones: ubicaciones con `sentence_id` externo.
- Normalización en tres capas: gentilicios, sustituciones propias y lista negra,
  más la reclasificación persona → lugar (tabla sensible a mayúsculas).
- Dependencias explícitas e inmutables: tablas y taxonomía se inyectan al
  construir; resolver no muta estado compartido.

Errores
-------
- Texto vacío / lote vacío: warning y colección vacía (no se llama al clasificador).
- Etiqueta desconocida o span fuera de rango: error en log, se descarta el span
  y se sigue con el resto.
- Fallas del clasificador: se propagan al llamador (sin reintentos).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Sequence, Union

from .classifiers import SequenceClassifier, load_classifier
from .config import ExtractorConfig
from .lookups import LookupTable, MembershipSet
from .rules import (
    load_custom_substitutions, load_demonyms, load_location_blacklist, load_person_to_place,
)
from .schemas import (
    EntityCategory, ExtractedEntities, Occurrence, SentenceId, SentenceRecord, Span,
)
from .taxonomy import DEFAULT_TAXONOMY, MISCELLANEOUS, TagTaxonomy

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Adaptador de entrada: (texto, alcance)
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class _Unit:
    """Texto a clasificar + alcance de sus ubicaciones (None = por posición)."""
    text: str
    sentence_id: Optional[SentenceId] = None


def _coerce_record(raw: Any) -> SentenceRecord:
    if isinstance(raw, SentenceRecord):
        return raw
    if isinstance(raw, dict):
        return SentenceRecord.model_validate(raw)
    # objetos con atributos (p. ej. SentenceIR u otros modelos)
    return SentenceRecord.model_validate(raw, from_attributes=True)


# ---------------------------------------------------------------------
# Resolvedor
# ---------------------------------------------------------------------

class EntityResolver:
    """
    Orquesta taxonomía + tablas sobre los spans del clasificador.

    Parámetros:
      - classifier: objeto con `classify(text) -> Sequence[Span | (tag, start, end)]`
      - demonyms / custom_substitutions / person_to_place: LookupTable
      - location_blacklist: MembershipSet
      - taxonomy: TagTaxonomy (default: Stanford + spaCy)
    """

    def __init__(
        self,
        classifier: SequenceClassifier,
        demonyms: Optional[LookupTable] = None,
        custom_substitutions: Optional[LookupTable] = None,
        person_to_place: Optional[LookupTable] = None,
        location_blacklist: Optional[MembershipSet] = None,
        taxonomy: Optional[TagTaxonomy] = None,
        model_name: Optional[str] = None,
    ) -> None:
        self.classifier = classifier
        self.demonyms = demonyms if demonyms is not None else LookupTable()
        self.custom_substitutions = custom_substitutions if custom_substitutions is not None else LookupTable()
        self.person_to_place = (
            person_to_place if person_to_place is not None else LookupTable(case_sensitive=True)
        )
        self.location_blacklist = location_blacklist if location_blacklist is not None else MembershipSet()
        self.taxonomy = taxonomy or DEFAULT_TAXONOMY
        self.model_name = model_name

    @classmethod
    def from_config(
        cls, cfg: Optional[ExtractorConfig] = None, classifier: Optional[SequenceClassifier] = None
    ) -> "EntityResolver":
        """Construye con recursos empaquetados (o rutas de `cfg`) y el clasificador del modelo."""
        cfg = cfg or ExtractorConfig()
        return cls(
            classifier=classifier if classifier is not None else load_classifier(cfg),
            demonyms=load_demonyms(cfg.demonyms_path),
            custom_substitutions=load_custom_substitutions(cfg.custom_substitutions_path),
            person_to_place=load_person_to_place(cfg.person_to_place_path),
            location_blacklist=load_location_blacklist(cfg.location_blacklist_path),
            model_name=cfg.ner_model,
        )

    @property
    def name(self) -> str:
        return f"Entity resolver ({self.model_name or 'custom classifier'})"

    # ------------------------ API pública ------------------------

    def extract_entities(self, text: Optional[str], manually_replace_demonyms: bool = False) -> ExtractedEntities:
        """
        Entidades de un texto completo.
        Con `manually_replace_demonyms` se reescriben los gentilicios antes de
        clasificar (impacto notable en rendimiento); los offsets se calculan
        sobre el texto reescrito.
        """
        if not text:
            logger.warning("extract_entities: entrada nula o vacía")
            return ExtractedEntities()
        if manually_replace_demonyms:
            logger.debug("Reemplazando gentilicios a mano")
        return self._resolve_units([_Unit(text=text)], manually_replace_demonyms)

    def extract_entities_from_sentences(
        self, sentences: Optional[Iterable[Union[SentenceRecord, dict, Any]]], manually_replace_demonyms: bool = False
    ) -> ExtractedEntities:
        """
        Entidades de un lote de oraciones. Las ubicaciones salen con el
        `sentence_id` de su oración; personas/organizaciones conservan su
        offset dentro de la oración.
        """
        records = [_coerce_record(s) for s in (sentences or [])]
        if not records:
            logger.warning("extract_entities_from_sentences: lote nulo o vacío")
            return ExtractedEntities()
        if manually_replace_demonyms:
            logger.debug("Reemplazando gentilicios a mano")
        units = [_Unit(text=r.text, sentence_id=r.id) for r in records]
        return self._resolve_units(units, manually_replace_demonyms)

    # ------------------------ Núcleo ------------------------

    def _resolve_units(self, units: Sequence[_Unit], manually_replace_demonyms: bool) -> ExtractedEntities:
        entities = ExtractedEntities()
        for unit in units:
            if not unit.text:
                logger.debug("Oración vacía omitida (id=%s)", unit.sentence_id)
                continue
            text = self.demonyms.replace_all(unit.text) if manually_replace_demonyms else unit.text
            for span in self._classify(text):
                if not span.fits(text):
                    logger.error("Span fuera de rango %s para texto de largo %d", span, len(text))
                    continue
                occ = self._resolve_span(span.tag, text[span.start:span.end], span.start, unit.sentence_id)
                if occ is not None:
                    entities.add(occ)
        return entities

    def _classify(self, text: str) -> Iterator[Span]:
        for raw in self.classifier.classify(text) or ():
            if isinstance(raw, Span):
                yield raw
            else:
                tag, start, end = raw
                yield Span(tag=tag, start=start, end=end)

    def _resolve_span(
        self, tag: str, entity_name: str, position: int, sentence_id: Optional[SentenceId] = None
    ) -> Optional[Occurrence]:
        """Decide qué ocurrencia (si alguna) produce un span ya recortado."""
        category = self.taxonomy.classify(tag)

        if category is EntityCategory.PERSON:
            if self.person_to_place.contains(entity_name):
                logger.debug("Persona %s cambiada a lugar", entity_name)
                place = self.person_to_place.substitution(entity_name)
                return self._location(place, position, sentence_id)
            return Occurrence.person(entity_name, position)

        if category is EntityCategory.LOCATION:
            if self.location_blacklist.contains(entity_name):
                logger.debug("Ubicación en lista negra ignorada: %s", entity_name)
                return None
            return self._location(entity_name, position, sentence_id)

        if category is EntityCategory.ORGANIZATION:
            return Occurrence.organization(entity_name, position)

        if category is MISCELLANEOUS:
            if self.demonyms.contains(entity_name):
                logger.debug("Gentilicio MISC encontrado y agregado: %s", entity_name)
                return self._location(entity_name, position, sentence_id)
            return None

        logger.error("Tipo NER desconocido: %s", tag)
        return None

    def _location(self, entity_name: str, position: int, sentence_id: Optional[SentenceId]) -> Occurrence:
        name = self.resolve_location_name(entity_name)
        if sentence_id is not None:
            return Occurrence.sentence_location(name, sentence_id)
        return Occurrence.location(name, position)

    def resolve_location_name(self, entity_name: str) -> str:
        """Gentilicio > sustitución propia > texto literal."""
        if self.demonyms.contains(entity_name):
            fixed = self.demonyms.substitution(entity_name)
            logger.debug("Sustitución de gentilicio: %s → %s", entity_name, fixed)
            return fixed
        if self.custom_substitutions.contains(entity_name):
            fixed = self.custom_substitutions.substitution(entity_name)
            logger.debug("Sustitución propia: %s → %s", entity_name, fixed)
            return fixed
        return entity_name
