# core/state_machine.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from core.greetings import resolve_greeting
from core.questions import get_question, question_count
from memory.models import Profile

# -------------------------------------------------------------------
# Cursor + phases
# -------------------------------------------------------------------
STEP_NAME = 0
STEP_COUNTRY = 1
STEP_RELIGION = 2
FIRST_QUESTION_STEP = 3
STEP_COMPLETE = 999  # loaded session, read/replay only

PHASE_COLLECTING = "collecting"
PHASE_GENERATING = "generating"
PHASE_DONE = "done"
PHASE_VIEWING = "viewing"

# -------------------------------------------------------------------
# Fixed assistant texts
# -------------------------------------------------------------------
WELCOME_TEXT = (
    "🌟 Welcome to your personal Career Path Assistant! I'm here to help you discover "
    "your perfect career journey.\n\nLet's start by getting to know you better. What's your name?"
)
RELIGION_PROMPT = "What's your religion or cultural background? (This helps me greet you properly)"
ANALYZING_TEXT = (
    "Perfect! 🎯 I have all the information I need. Let me analyze your profile and "
    "create a personalized career path for you..."
)
RESULT_PREFIX = "🚀 Here's your personalized career path analysis:\n\n"
CLOSING_TEXT = (
    "That's your complete career roadmap! 🎉 You can start a new conversation anytime to "
    "explore different paths or ask specific questions. Good luck on your journey! 💪"
)
APOLOGY_TEXT = (
    "I apologize, but I encountered an error while generating your career path. "
    "Please try starting a new conversation."
)


def nice_to_meet(name: str) -> str:
    return f"Nice to meet you, {name}! 🎉\n\nWhich country are you from?"


def greeting_text(greeting: str, name: Optional[str], first_question: str) -> str:
    return f"{greeting} {name}! 🙏\n\nNow let's dive into your career journey. {first_question}"


def career_title(name: Optional[str]) -> str:
    return f"{name}'s Career Path"


# -------------------------------------------------------------------
# State
# -------------------------------------------------------------------
@dataclass
class ControllerState:
    """
    Everything the controller mutates between inputs.
    Owned by a single ConversationController; nothing else writes it.
    """

    active_session_id: Optional[str] = None
    step: int = STEP_NAME
    phase: str = PHASE_COLLECTING
    profile: Profile = field(default_factory=Profile)
    show_history: bool = False

    @property
    def name(self) -> str:
        return state_name(self)

    def restart(self, session_id: str) -> None:
        self.active_session_id = session_id
        self.step = STEP_NAME
        self.phase = PHASE_COLLECTING
        self.profile = Profile()

    def view(self, session_id: str, profile: Optional[Profile]) -> None:
        self.active_session_id = session_id
        self.step = STEP_COMPLETE
        self.phase = PHASE_VIEWING
        self.profile = profile.model_copy() if profile is not None else Profile()
        self.show_history = False


def state_name(state: ControllerState) -> str:
    if state.phase == PHASE_GENERATING:
        return "GENERATING"
    if state.phase == PHASE_DONE:
        return "DONE"
    if state.phase == PHASE_VIEWING:
        return "VIEWING"
    if state.step == STEP_NAME:
        return "COLLECTING_NAME"
    if state.step == STEP_COUNTRY:
        return "COLLECTING_COUNTRY"
    if state.step == STEP_RELIGION:
        return "COLLECTING_RELIGION"
    return "COLLECTING_PROFILE"


# -------------------------------------------------------------------
# Transitions
# -------------------------------------------------------------------
@dataclass
class StepPlan:
    capture: Optional[str]  # Profile field to fill, None = nothing to capture
    replies: List[str]  # bot messages, in order
    next_step: int
    next_phase: str
    finalize: bool = False  # run generation after the replies

    @property
    def advances(self) -> bool:
        return self.capture is not None


def plan_step(state: ControllerState, text: str) -> StepPlan:
    """
    Decide what one accepted input does. Pure: reads state, never mutates it.
    """
    step = state.step
    q = question_count()

    if state.phase != PHASE_COLLECTING or not (STEP_NAME <= step < FIRST_QUESTION_STEP + q):
        # profile collection is over; the message is only logged
        return StepPlan(capture=None, replies=[], next_step=step, next_phase=state.phase)

    if step == STEP_NAME:
        return StepPlan("name", [nice_to_meet(text)], STEP_COUNTRY, PHASE_COLLECTING)

    if step == STEP_COUNTRY:
        return StepPlan("country", [RELIGION_PROMPT], STEP_RELIGION, PHASE_COLLECTING)

    if step == STEP_RELIGION:
        greeting = resolve_greeting(state.profile.country, text)
        reply = greeting_text(greeting, state.profile.name, get_question(0).question)
        return StepPlan("religion", [reply], FIRST_QUESTION_STEP, PHASE_COLLECTING)

    idx = step - FIRST_QUESTION_STEP
    key = get_question(idx).key
    if idx < q - 1:
        return StepPlan(key, [get_question(idx + 1).render()], step + 1, PHASE_COLLECTING)

    return StepPlan(key, [ANALYZING_TEXT], step, PHASE_GENERATING, finalize=True)


def apply_step(state: ControllerState, plan: StepPlan, text: str) -> None:
    if plan.capture is not None:
        state.profile.set_field(plan.capture, text)
    state.step = plan.next_step
    state.phase = plan.next_phase
