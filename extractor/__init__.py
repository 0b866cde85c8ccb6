# -*- coding: utf-8 -*-
"""
Paquete Extractor (resolución de entidades) para geoner.
Expone los contratos, las tablas y el resolvedor principal.
"""
from .schemas import EntityCategory, Span, Occurrence, ExtractedEntities, SentenceRecord
from .lookups import LookupTable, MembershipSet, Blacklist, LookupKeyNotFound
from .taxonomy import TagTaxonomy, DEFAULT_TAXONOMY, MISCELLANEOUS
from .config import ExtractorConfig, Model
from .classifiers import SequenceClassifier, SpacyClassifier, ClassifierError
from .resolver import EntityResolver

__all__ = [
    "EntityCategory",
    "Span",
    "Occurrence",
    "ExtractedEntities",
    "SentenceRecord",
    "LookupTable",
    "MembershipSet",
    "Blacklist",
    "LookupKeyNotFound",
    "TagTaxonomy",
    "DEFAULT_TAXONOMY",
    "MISCELLANEOUS",
    "ExtractorConfig",
    "Model",
    "SequenceClassifier",
    "SpacyClassifier",
    "ClassifierError",
    "EntityResolver",
]
