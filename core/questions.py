# core/questions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


class QuestionOutOfRange(IndexError):
    pass


@dataclass(frozen=True)
class Question:
    key: str  # Profile field name
    question: str
    options: Tuple[str, ...] = ()

    def render(self) -> str:
        """Question text with options appended as a numbered list."""
        if not self.options:
            return self.question
        numbered = "\n".join(f"{i + 1}. {opt}" for i, opt in enumerate(self.options))
        return f"{self.question}\n\nOptions:\n{numbered}"


QUESTIONS: Tuple[Question, ...] = (
    Question(
        key="current_role",
        question="What's your current role or position? (e.g., Student, Software Developer, Marketing Manager)",
    ),
    Question(
        key="experience_level",
        question="What's your experience level?",
        options=(
            "Entry Level (0-2 years)",
            "Junior (2-4 years)",
            "Mid-Level (4-7 years)",
            "Senior (7-10 years)",
            "Lead/Principal (10+ years)",
            "Executive/C-Level",
        ),
    ),
    Question(
        key="skills",
        question=(
            "What are your current skills and expertise? Please list your technical skills, "
            "soft skills, and any certifications."
        ),
    ),
    Question(
        key="interests",
        question="What are your interests and passions? What topics or activities genuinely interest you?",
    ),
    Question(
        key="work_environment",
        question="What's your preferred work environment?",
        options=(
            "Large Corporation",
            "Startup",
            "Remote Work",
            "Hybrid",
            "Freelance/Consulting",
            "Non-Profit",
            "Government",
        ),
    ),
    Question(
        key="industry",
        question="Which industry interests you the most? (e.g., Technology, Healthcare, Finance, Education)",
    ),
    Question(
        key="career_goals",
        question="What are your career goals and aspirations? Where do you see yourself in 3-5 years?",
    ),
)


def question_count() -> int:
    return len(QUESTIONS)


def get_question(index: int) -> Question:
    if not 0 <= index < len(QUESTIONS):
        raise QuestionOutOfRange(f"No question at index {index} (have {len(QUESTIONS)})")
    return QUESTIONS[index]
