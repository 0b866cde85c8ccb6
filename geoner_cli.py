#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
geoner_cli.py — CLI del proyecto geoner
=======================================

Etapas:
- extract              Texto plano (.txt) → ExtractedEntities(.json)
- extract-sentences    Lote de oraciones (.json) → ExtractedEntities(.json)
- pipeline-yaml        Ejecuta las etapas declaradas en un YAML
"""

from __future__ import annotations
import argparse
import glob
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from extractor.config import ExtractorConfig
from extractor.metrics import category_summary
from extractor.resolver import EntityResolver
from extractor.schemas import ExtractedEntities

# ---------------------------------------------------------------------------
# Logging global
# ---------------------------------------------------------------------------
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger("geoner_cli")

# ============================================================================
# Helpers
# ============================================================================
def _expand_inputs(args: Dict[str, Any], key_glob: str, key_list: str) -> List[str]:
    """Expande rutas con globs y listas explícitas."""
    results: List[str] = []
    patterns = args.get(key_glob)
    if patterns:
        if isinstance(patterns, str):
            patterns = [patterns]
        for pattern in patterns:
            results.extend(sorted(glob.glob(pattern)))
    listed = args.get(key_list)
    if listed:
        results.extend([listed] if isinstance(listed, str) else listed)
    # dedup y orden estable
    return sorted(list(dict.fromkeys(results)))


def _load_config(args: argparse.Namespace) -> ExtractorConfig:
    cfg = ExtractorConfig.from_yaml(args.config) if getattr(args, "config", None) else ExtractorConfig()
    if getattr(args, "model", None):
        cfg = replace(cfg, ner_model=args.model)
    if getattr(args, "replace_demonyms", False):
        cfg = replace(cfg, manually_replace_demonyms=True)
    return cfg


def _write(entities: ExtractedEntities, outdir: Path, stem: str) -> Path:
    out_path = outdir / f"{stem}_entities.json"
    out_path.write_text(
        json.dumps(entities.model_dump(mode="json", exclude_none=True), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return out_path


def _read_sentences(path: Path) -> List[Dict[str, Any]]:
    """Acepta una lista de oraciones o un objeto con clave `sentences` (DocumentSentences)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("sentences", [])
    return list(data)


# ============================================================================
# Commands
# ============================================================================
def cmd_extract(args: argparse.Namespace, resolver: Optional[EntityResolver] = None) -> None:
    cfg = _load_config(args)
    resolver = resolver or EntityResolver.from_config(cfg)
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    for path in args.inputs:
        p = Path(path)
        text = p.read_text(encoding="utf-8")
        entities = resolver.extract_entities(text, manually_replace_demonyms=cfg.manually_replace_demonyms)
        out_path = _write(entities, outdir, p.stem)
        logger.info("[EXTRACT OK] %s → %s (%d ocurrencias)", p, out_path, len(entities))
        if args.summary:
            logger.info("\n%s", category_summary(entities).to_string())


def cmd_extract_sentences(args: argparse.Namespace, resolver: Optional[EntityResolver] = None) -> None:
    cfg = _load_config(args)
    resolver = resolver or EntityResolver.from_config(cfg)
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    for path in args.inputs:
        p = Path(path)
        if not p.exists():
            logger.warning("[EXTRACT-SENTENCES] Archivo no encontrado: %s", p)
            continue
        sentences = _read_sentences(p)
        entities = resolver.extract_entities_from_sentences(
            sentences, manually_replace_demonyms=cfg.manually_replace_demonyms
        )
        out_path = _write(entities, outdir, p.stem)
        logger.info("[EXTRACT-SENTENCES OK] %s → %s (%d ocurrencias)", p, out_path, len(entities))
        if args.summary:
            logger.info("\n%s", category_summary(entities).to_string())


# ============================================================================
# Pipeline YAML
# ============================================================================
def cmd_pipeline_yaml(args: argparse.Namespace, resolver: Optional[EntityResolver] = None) -> None:
    conf = yaml.safe_load(Path(args.file).read_text(encoding="utf-8")) or {}
    cfg = ExtractorConfig.from_dict(conf.get("extractor") or {})
    # Un solo resolvedor para todas las etapas (el modelo se carga una vez)
    resolver = resolver or EntityResolver.from_config(cfg)

    for idx, stage in enumerate(conf.get("stages", []), 1):
        name, sargs = stage["name"], stage.get("args", {})
        logger.info("[%d] ▶ Ejecutando etapa: %s", idx, name)
        ns = argparse.Namespace(
            inputs=_expand_inputs(sargs, "inputs_glob", "inputs"),
            outdir=sargs.get("outdir", "outputs_entities"),
            summary=sargs.get("summary", False),
            config=None,
            model=None,
            replace_demonyms=sargs.get("replace_demonyms", cfg.manually_replace_demonyms),
        )
        if name == "extract":
            cmd_extract(ns, resolver)
        elif name == "extract-sentences":
            cmd_extract_sentences(ns, resolver)
        else:
            raise ValueError(f"etapa desconocida: {name}")


# ============================================================================
# CLI Entrypoint
# ============================================================================
def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("inputs", nargs="+")
    p.add_argument("--outdir", default="outputs_entities")
    p.add_argument("--config", default=None, help="YAML con ExtractorConfig")
    p.add_argument("--model", default=None, help="ENGLISH_ALL_3CLASS | ENGLISH_CONLL_4CLASS | SPANISH_ANCORA | GERMAN_DEWAC")
    p.add_argument("--replace-demonyms", action="store_true", help="Reescribe gentilicios antes de clasificar (lento)")
    p.add_argument("--summary", action="store_true", help="Imprime conteos por categoría")


def build_geoner_cli() -> argparse.ArgumentParser:
    cli = argparse.ArgumentParser(prog="geoner", description="geoner entity extraction CLI")
    cli.add_argument("--log-level", default="INFO")
    cmds = cli.add_subparsers(dest="cmd", required=True)

    # extract
    e = cmds.add_parser("extract", help="Extrae entidades de archivos de texto")
    _add_common(e)
    e.set_defaults(func=cmd_extract)

    # extract-sentences
    s = cmds.add_parser("extract-sentences", help="Extrae entidades de lotes de oraciones JSON")
    _add_common(s)
    s.set_defaults(func=cmd_extract_sentences)

    # pipeline-yaml
    py = cmds.add_parser("pipeline-yaml", help="Ejecuta pipeline desde YAML")
    py.add_argument("--file", default="pipelines/pipeline.yaml")
    py.set_defaults(func=cmd_pipeline_yaml)

    return cli


def main(argv: Optional[List[str]] = None) -> None:
    cli = build_geoner_cli()
    args = cli.parse_args(argv)
    logging.getLogger().setLevel(args.log_level.upper())
    args.func(args)

if __name__ == "__main__":
    main()
