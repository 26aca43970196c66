# tests/test_questions.py
import pytest

from core.questions import QUESTIONS, QuestionOutOfRange, get_question, question_count
from memory.models import Profile


def test_ledger_order_and_keys():
    assert question_count() == 7
    assert [q.key for q in QUESTIONS] == [
        "current_role",
        "experience_level",
        "skills",
        "interests",
        "work_environment",
        "industry",
        "career_goals",
    ]
    # every ledger key is a real Profile field
    assert all(Profile.field_for(q.key) == q.key for q in QUESTIONS)


@pytest.mark.parametrize("index", [-1, 7, 100])
def test_get_out_of_range(index):
    with pytest.raises(QuestionOutOfRange):
        get_question(index)


def test_render_plain_question():
    q = get_question(0)
    assert q.render() == q.question


def test_render_numbered_options():
    rendered = get_question(1).render()
    assert rendered.startswith("What's your experience level?\n\nOptions:\n1. Entry Level (0-2 years)\n")
    assert rendered.endswith("6. Executive/C-Level")
    assert get_question(4).render().count("\n") == 2 + 7
