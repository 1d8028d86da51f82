import pytest
from hypothesis import given, strategies as st

from cbl.completion import Completions, complete, prefix_at
from cbl.errors import VocabularyError
from cbl.vocabulary import VOCABULARY, Vocabulary


def test_vector_completions():
    result = complete("vec")
    assert result.candidates == ("vector", "vector-get", "vector-set!", "vector-length")
    assert result.exclusive is False


@pytest.mark.parametrize(
    "prefix, expected",
    [
        ("go", ("goto",)),
        ("define", ("define", "define-registers")),
        ("set", ("set!", "set-registers")),
        ("In", ("Integer",)),
        ("in", ()),
        ("zzz", ()),
        ("", ()),
    ]
)
def test_complete(prefix, expected):
    assert complete(prefix).candidates == expected


def test_categories_come_out_in_order():
    # misc keywords before operators, each in table order
    assert complete("e").candidates == ("entry", "else", "eq?")


def test_duplicates_are_reported_once():
    vocab = Vocabulary(statements=("a",), operators=("a", "ab"))
    assert complete("a", vocab) == Completions(("a", "ab"))


@st.composite
def prefixes(draw):
    word = draw(st.sampled_from(VOCABULARY.all_words()))
    return word[: draw(st.integers(min_value=1, max_value=len(word)))]


@given(prefixes())
def test_completion_containment(prefix):
    result = complete(prefix).candidates
    assert all(w.startswith(prefix) for w in result)
    assert set(result) == {w for w in VOCABULARY.all_words() if w.startswith(prefix)}


@pytest.mark.parametrize(
    "source, pos, expected",
    [
        ("(vec", 4, "vec"),
        ("(foo ve", 7, "ve"),
        ("(foo ve)", 5, ""),
        ("(set!", 5, "set!"),
        ("", 0, ""),
        ("abc", 99, "abc"),
    ]
)
def test_prefix_at(source, pos, expected):
    assert prefix_at(source, pos) == expected


@pytest.mark.parametrize("word", ["", "two words", "(paren", "semi;"])
def test_invalid_vocabulary_entries(word):
    with pytest.raises(VocabularyError):
        Vocabulary(operators=("ok", word))
