import pytest

from extractor.lookups import LookupKeyNotFound, LookupTable, MembershipSet


def test_case_insensitive_table():
    t = LookupTable([("German", "Germany")])
    assert t.contains("german") and t.contains("GERMAN")
    assert t.substitution("gErMaN") == "Germany"


def test_case_sensitive_table():
    t = LookupTable([("Jordan", "Jordan")], case_sensitive=True)
    assert t.contains("Jordan")
    assert not t.contains("jordan")


def test_substitution_without_key_fails_fast():
    t = LookupTable([("a", "b")])
    with pytest.raises(LookupKeyNotFound):
        t.substitution("missing")
    # sigue siendo KeyError
    with pytest.raises(KeyError):
        t.substitution("missing")


def test_duplicate_keys_last_write_wins():
    t = LookupTable([("Gaza", "Gaza City"), ("gaza", "Gaza Strip")])
    assert len(t) == 1
    assert t.substitution("Gaza") == "Gaza Strip"


def test_none_and_blank_keys():
    t = LookupTable([("  ", "x"), ("US", "United States")])
    assert len(t) == 1
    assert not t.contains(None)
    assert "us" in t


def test_replace_all_whole_words_longest_first():
    t = LookupTable([("Korean", "South Korea"), ("North Korean", "North Korea"), ("German", "Germany")])
    out = t.replace_all("North Korean and german envoys met Germans.")
    assert out == "North Korea and Germany envoys met Germans."


def test_replace_all_empty_table_is_identity():
    assert LookupTable().replace_all("French wine") == "French wine"


def test_membership_set_case_handling():
    s = MembershipSet(["Sun", "Mars"])
    assert s.contains("sun") and "MARS" in s
    assert not s.contains("Earth")
    strict = MembershipSet(["Sun"], case_sensitive=True)
    assert strict.contains("Sun") and not strict.contains("sun")


def test_replace_all_dotted_capital_i_left_unchanged():
    # "İ" no se pliega a "i": no hay coincidencia y tampoco excepción
    t = LookupTable([("Israeli", "Israel")])
    assert t.replace_all("İSRAELI troops") == "İSRAELI troops"
    assert t.replace_all("ISRAELI troops") == "Israel troops"


def test_replace_all_matches_casefolded_keys():
    t = LookupTable([("Straße", "X")])
    assert t.contains("STRASSE")
    assert t.replace_all("Die Straße ist lang") == "Die X ist lang"
    assert t.replace_all("Die STRASSE ist lang") == "Die X ist lang"


def test_replace_all_case_sensitive_table():
    t = LookupTable([("Jordan", "Jordania")], case_sensitive=True)
    assert t.replace_all("Jordan and jordan") == "Jordania and jordan"


def test_replace_all_keeps_surrounding_punctuation():
    t = LookupTable([("French", "France")])
    assert t.replace_all("(French), French-made, Frenchman") == "(France), France-made, Frenchman"


def test_whitespace_stripped_only_at_load():
    t = LookupTable([(" Sao Paulo ", " São Paulo ")], case_sensitive=True)
    assert t.contains("Sao Paulo")
    assert not t.contains(" Sao Paulo ")
    assert t.substitution("Sao Paulo") == "São Paulo"
    s = MembershipSet(["  Sun  "])
    assert s.contains("sun")
    assert not s.contains(" sun ")
