import pytest

from extractor.lookups import LookupTable, MembershipSet
from extractor.resolver import EntityResolver


class ScriptedClassifier:
    """Devuelve spans fijos por texto y registra las llamadas."""

    def __init__(self, script=None, default=()):
        self.script = dict(script or {})
        self.default = list(default)
        self.calls = []

    def classify(self, text):
        self.calls.append(text)
        return list(self.script.get(text, self.default))


@pytest.fixture
def scripted():
    return ScriptedClassifier


@pytest.fixture
def make_resolver():
    def _make(classifier, demonyms=(), custom=(), person_to_place=(), blacklist=()):
        return EntityResolver(
            classifier=classifier,
            demonyms=LookupTable(demonyms),
            custom_substitutions=LookupTable(custom),
            person_to_place=LookupTable(person_to_place, case_sensitive=True),
            location_blacklist=MembershipSet(blacklist),
        )
    return _make
