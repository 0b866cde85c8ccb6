import pytest

from extractor.config import ExtractorConfig, Model


def test_defaults():
    cfg = ExtractorConfig()
    assert cfg.model is Model.ENGLISH_ALL_3CLASS
    assert cfg.pipeline_name == "en_core_web_sm"
    assert cfg.manually_replace_demonyms is False


def test_model_name_normalized_and_validated():
    assert ExtractorConfig(ner_model=" spanish_ancora ").ner_model == "SPANISH_ANCORA"
    with pytest.raises(ValueError):
        ExtractorConfig(ner_model="FRENCH_WIKINER")


def test_spacy_model_override():
    cfg = ExtractorConfig(ner_model="GERMAN_DEWAC", spacy_model="de_core_news_lg")
    assert cfg.pipeline_name == "de_core_news_lg"


def test_from_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("extractor:\n  ner_model: ENGLISH_CONLL_4CLASS\n  manually_replace_demonyms: true\n", encoding="utf-8")
    cfg = ExtractorConfig.from_yaml(p)
    assert cfg.model is Model.ENGLISH_CONLL_4CLASS
    assert cfg.manually_replace_demonyms is True
    assert cfg.to_dict()["ner_model"] == "ENGLISH_CONLL_4CLASS"


def test_unknown_keys_rejected():
    with pytest.raises(ValueError):
        ExtractorConfig.from_dict({"ner_modle": "X"})
