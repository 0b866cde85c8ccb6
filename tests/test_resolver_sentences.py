import logging

import pytest

from extractor.schemas import Occurrence, SentenceRecord

S1 = "Floods hit Pakistan."
S2 = "Aid arrived in Lahore."


def test_locations_carry_sentence_ids(scripted, make_resolver):
    clf = scripted({S1: [("LOCATION", 11, 19)], S2: [("LOCATION", 15, 21)]})
    out = make_resolver(clf).extract_entities_from_sentences([
        {"id": "s1", "text": S1},
        {"id": "s2", "text": S2},
    ])
    assert out.locations == [
        Occurrence.sentence_location("Pakistan", "s1"),
        Occurrence.sentence_location("Lahore", "s2"),
    ]
    assert all(o.position is None for o in out.locations)
    assert clf.calls == [S1, S2]


def test_legacy_story_sentence_keys_and_numeric_ids(scripted, make_resolver):
    clf = scripted({S1: [("LOCATION", 11, 19)]})
    out = make_resolver(clf).extract_entities_from_sentences([
        {"story_sentences_id": 1234, "sentence": S1},
    ])
    assert out.locations[0].sentence_id == 1234
    assert out.locations[0].text == "Pakistan"


def test_persons_and_orgs_keep_sentence_relative_positions(scripted, make_resolver):
    s = "Ana joined Acme in Lima."
    spans = [("PERSON", 0, 3), ("ORGANIZATION", 11, 15), ("LOCATION", 19, 23)]
    out = make_resolver(scripted({s: spans})).extract_entities_from_sentences(
        [SentenceRecord(id="x", text=s)]
    )
    assert out.persons == [Occurrence.person("Ana", 0)]
    assert out.organizations == [Occurrence.organization("Acme", 11)]
    assert out.locations == [Occurrence.sentence_location("Lima", "x")]


def test_same_rules_in_batch_mode(scripted, make_resolver):
    s = "German and Obama in Sun"
    spans = [("MISC", 0, 6), ("PERSON", 11, 16), ("LOCATION", 20, 23), (":LUG", 20, 23), ("WEIRD", 0, 1)]
    r = make_resolver(
        scripted({s: spans}),
        demonyms=[("German", "Germany")],
        person_to_place=[("Obama", "Obama, Fukui")],
        blacklist=["Sun"],
    )
    out = r.extract_entities_from_sentences([{"id": "s9", "text": s}])
    assert out.persons == []
    assert out.locations == [
        Occurrence.sentence_location("Germany", "s9"),
        Occurrence.sentence_location("Obama, Fukui", "s9"),
    ]


def test_manual_replacement_per_sentence(scripted, make_resolver):
    clf = scripted({"Italy wine": [("LOCATION", 0, 5)]})
    r = make_resolver(clf, demonyms=[("Italian", "Italy")])
    out = r.extract_entities_from_sentences([{"id": 1, "text": "Italian wine"}], manually_replace_demonyms=True)
    assert clf.calls == ["Italy wine"]
    assert out.locations == [Occurrence.sentence_location("Italy", 1)]


def test_empty_sentences_skipped(scripted, make_resolver):
    clf = scripted({S1: [("LOCATION", 11, 19)]})
    out = make_resolver(clf).extract_entities_from_sentences([{"id": "a", "text": ""}, {"id": "b", "text": S1}])
    assert clf.calls == [S1]
    assert [o.sentence_id for o in out.locations] == ["b"]


@pytest.mark.parametrize("batch", [None, []])
def test_empty_batch(scripted, make_resolver, batch, caplog):
    clf = scripted(default=[("LOCATION", 0, 1)])
    with caplog.at_level(logging.WARNING, logger="extractor.resolver"):
        out = make_resolver(clf).extract_entities_from_sentences(batch)
    assert out.is_empty()
    assert clf.calls == []
    assert caplog.records


def test_attribute_records_accepted(scripted, make_resolver):
    class Sent:
        def __init__(self, id, text):
            self.id, self.text = id, text

    clf = scripted({S2: [("LOCATION", 15, 21)]})
    out = make_resolver(clf).extract_entities_from_sentences([Sent("z", S2)])
    assert out.locations == [Occurrence.sentence_location("Lahore", "z")]
