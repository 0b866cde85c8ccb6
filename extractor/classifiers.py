# -*- coding: utf-8 -*-
"""
extractor/classifiers.py — Clasificadores de secuencia (colaborador externo)

Contrato mínimo que consume el resolvedor:
    classify(text) -> Sequence[Span]   # offsets [start, end) sobre `text`, de izq. a der.

Se incluye un adaptador spaCy (`SpacyClassifier`) seleccionado por nombre de
modelo. Cargar el modelo es un costo único de arranque; cualquier falla se
propaga como `ClassifierError` (sin reintentos).

Nota: el adaptador NO es reentrante garantizado; si se comparte entre hilos,
el llamador debe serializar `classify` (una instancia por worker o un lock).
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from .config import ExtractorConfig
from .schemas import Span
from .taxonomy import DEFAULT_TAXONOMY

logger = logging.getLogger(__name__)


class ClassifierError(RuntimeError):
    """Falla del clasificador al cargar el modelo o al etiquetar."""


@runtime_checkable
class SequenceClassifier(Protocol):
    def classify(self, text: str) -> Sequence[Span]:
        ...


class SpacyClassifier:
    """
    Adaptador spaCy → spans de carácter.

    - `nlp`: pipeline ya construido (tests, pipelines en memoria) o None para
      cargar `model_name` con `spacy.load`.
    - `keep_labels`: si viene, solo se emiten entidades con esas etiquetas
      (evita DATE/CARDINAL/... que la taxonomía no conoce).
    """

    def __init__(
        self,
        nlp: Any = None,
        model_name: Optional[str] = None,
        disable: Iterable[str] = (),
        keep_labels: Optional[Iterable[str]] = None,
    ) -> None:
        if nlp is None:
            if not model_name:
                raise ValueError("se requiere `nlp` o `model_name`")
            nlp = self._load(model_name, list(disable))
        self.nlp = nlp
        self.model_name = model_name or getattr(nlp, "meta", {}).get("name", "custom")
        self.keep_labels = frozenset(keep_labels) if keep_labels is not None else None

    @staticmethod
    def _load(model_name: str, disable: List[str]) -> Any:
        logger.info("Cargando pipeline spaCy: %s", model_name)
        try:
            import spacy  # type: ignore
            return spacy.load(model_name, disable=disable)
        except Exception as e:
            raise ClassifierError(f"no se pudo cargar el modelo spaCy {model_name!r}: {e}") from e

    def classify(self, text: str) -> List[Span]:
        doc = self.nlp(text)
        spans: List[Span] = []
        for ent in doc.ents:
            if self.keep_labels is not None and ent.label_ not in self.keep_labels:
                continue
            spans.append(Span(tag=ent.label_, start=int(ent.start_char), end=int(ent.end_char)))
        return spans


def load_classifier(cfg: ExtractorConfig) -> SpacyClassifier:
    """Clasificador spaCy para el modelo configurado (solo etiquetas de la taxonomía)."""
    logger.info("Creando NER con %s (%s)", cfg.ner_model, cfg.pipeline_name)
    return SpacyClassifier(
        model_name=cfg.pipeline_name,
        disable=cfg.spacy_disable,
        keep_labels=DEFAULT_TAXONOMY.tags.keys(),
    )
