# tests/test_state_machine.py
from core.greetings import GREETINGS
from core.questions import get_question, question_count
from core.state_machine import (
    ANALYZING_TEXT,
    FIRST_QUESTION_STEP,
    PHASE_COLLECTING,
    PHASE_DONE,
    PHASE_GENERATING,
    RELIGION_PROMPT,
    STEP_COMPLETE,
    ControllerState,
    apply_step,
    plan_step,
)
from memory.models import Profile


def _advance(state, text):
    plan = plan_step(state, text)
    apply_step(state, plan, text)
    return plan


def test_name_then_country_then_religion():
    state = ControllerState(active_session_id="s1")
    assert state.name == "COLLECTING_NAME"

    plan = _advance(state, "Aisha")
    assert plan.replies == ["Nice to meet you, Aisha! 🎉\n\nWhich country are you from?"]
    assert state.step == 1 and state.profile.name == "Aisha"
    assert state.name == "COLLECTING_COUNTRY"

    plan = _advance(state, "Pakistan")
    assert plan.replies == [RELIGION_PROMPT]
    assert state.name == "COLLECTING_RELIGION"

    plan = _advance(state, "Islam")
    assert plan.replies[0].startswith(f"{GREETINGS['arabic']} Aisha! 🙏")
    assert plan.replies[0].endswith(get_question(0).question)
    assert state.step == FIRST_QUESTION_STEP
    assert state.name == "COLLECTING_PROFILE"


def test_greeting_uses_captured_country():
    state = ControllerState(step=2, profile=Profile(name="Ravi", country="India"))
    plan = plan_step(state, "Christian")
    assert plan.replies[0].startswith(GREETINGS["hindi"])


def test_plan_does_not_mutate_state():
    state = ControllerState()
    plan_step(state, "Aisha")
    assert state.step == 0
    assert state.profile.name is None


def test_questions_advance_one_at_a_time():
    state = ControllerState(step=FIRST_QUESTION_STEP)
    q = question_count()
    for i in range(q - 1):
        plan = _advance(state, f"answer {i}")
        assert plan.replies == [get_question(i + 1).render()]
        assert state.step == FIRST_QUESTION_STEP + i + 1
        assert getattr(state.profile, get_question(i).key) == f"answer {i}"

    plan = _advance(state, "lead a team")
    assert plan.finalize
    assert plan.replies == [ANALYZING_TEXT]
    assert state.phase == PHASE_GENERATING
    assert state.name == "GENERATING"
    assert state.profile.career_goals == "lead a team"


def test_stray_input_after_collection_is_inert():
    for phase in (PHASE_GENERATING, PHASE_DONE):
        state = ControllerState(step=FIRST_QUESTION_STEP + 6, phase=phase)
        plan = _advance(state, "hello?")
        assert not plan.advances and plan.replies == [] and not plan.finalize
        assert state.phase == phase

    state = ControllerState()
    state.view("s2", Profile(name="Old"))
    plan = _advance(state, "anything")
    assert state.step == STEP_COMPLETE and state.name == "VIEWING"
    assert state.profile.name == "Old"
    assert plan.replies == []


def test_restart_resets_cursor_and_profile():
    state = ControllerState(step=5, phase=PHASE_DONE, profile=Profile(name="x"))
    state.restart("new")
    assert (state.active_session_id, state.step, state.phase) == ("new", 0, PHASE_COLLECTING)
    assert state.profile.answered() == {}
