# tests/test_greetings.py
import pytest

from core.greetings import GREETINGS, resolve_greeting


@pytest.mark.parametrize(
    "country,religion,expected",
    [
        ("Pakistan", "Islam", "arabic"),
        ("France", "Muslim", "arabic"),
        ("India", "Christian", "hindi"),
        ("Nepal", "Hindu", "hindi"),
        ("Pakistan", "Christian", "urdu"),
        ("bangladesh", "", "urdu"),
        ("People's Republic of China", "Buddhist", "chinese"),
        ("JAPAN", "Shinto", "japanese"),
        ("South Korea", "none", "korean"),
        ("Mexico", "Catholic", "spanish"),
        ("France", "Catholic", "french"),
        ("Germany", "Lutheran", "german"),
        ("Italy", "", "italian"),
        ("Brazil", "", "portuguese"),
        ("Russia", "Orthodox", "russian"),
        ("Canada", "Atheist", "default"),
    ],
)
def test_resolve_greeting(country, religion, expected):
    assert resolve_greeting(country, religion) == GREETINGS[expected]


def test_religion_wins_over_country():
    # country rules for Hindi come after the Muslim rule
    assert resolve_greeting("India", "Muslim") == GREETINGS["arabic"]
    assert resolve_greeting("Pakistan", "Hindu") == GREETINGS["hindi"]


def test_resolver_is_pure_and_total():
    first = resolve_greeting("Germany", "Islam")
    assert all(resolve_greeting("Germany", "Islam") == first for _ in range(5))
    assert resolve_greeting(None, None) == "Hello"
    assert resolve_greeting("", "") == "Hello"
