"""
Questionnaire Flow - Legal Value Score
legal_value_score/models/quiz_flow.py

Explicit navigation state for the front end:

    WELCOME ──start──► PERSONA ──choose_persona──► QUESTION[0] ──answer──► … ──► QUESTION[n-1] ──answer──► RESULTS
           └─start(with_persona=False)───────────►┘

QuizState is immutable; every transition returns a new state. Scores are
computed exactly once, when the last question is answered.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from legal_value_score.core.exceptions import QuizFlowError
from legal_value_score.models.enumerations import Persona
from legal_value_score.scoring.question_bank import AnswerOption, Question
from legal_value_score.scoring.score_calculator import ScoreCalculator, ScoreResult, calculator_for
from legal_value_score.scoring.variants import ScoringVariant


class Stage(str, Enum):
    WELCOME = "welcome"
    PERSONA = "persona"
    QUESTION = "question"
    RESULTS = "results"


@dataclass(frozen=True)
class QuizState:
    stage: Stage = Stage.WELCOME
    question_index: int = 0
    persona: Persona = Persona.GENERAL
    answers: Tuple[Tuple[str, int], ...] = ()   # (question id, option index) in answer order
    result: Optional[ScoreResult] = None

    @property
    def selections(self) -> Dict[str, int]:
        return dict(self.answers)

    def progress(self, total_questions: int) -> float:
        """Share of questions answered, 0.0-1.0."""
        if self.stage == Stage.RESULTS:
            return 1.0
        if total_questions <= 0:
            return 0.0
        return len(self.answers) / total_questions


def _require(state: QuizState, *stages: Stage) -> None:
    if state.stage not in stages:
        expected = ", ".join(s.value for s in stages)
        raise QuizFlowError(f"Illegal transition from '{state.stage.value}' (expected {expected})")


def start(state: QuizState, with_persona: bool = True) -> QuizState:
    """Leave the welcome screen, optionally through persona selection."""
    _require(state, Stage.WELCOME)
    if with_persona:
        return replace(state, stage=Stage.PERSONA)
    return replace(state, stage=Stage.QUESTION, question_index=0)


def choose_persona(state: QuizState, persona: Persona) -> QuizState:
    _require(state, Stage.PERSONA)
    return replace(state, stage=Stage.QUESTION, question_index=0, persona=Persona(persona))


def current_question(state: QuizState, variant: ScoringVariant) -> Question:
    _require(state, Stage.QUESTION)
    return variant.questions[state.question_index]


def answer(
    state: QuizState,
    variant: ScoringVariant,
    option_index: int,
    calculator: Optional[ScoreCalculator] = None,
) -> QuizState:
    """
    Record the option chosen for the current question and advance.

    On the final question the answer set is scored and the state moves to RESULTS.
    """
    question = current_question(state, variant)
    if question.option_at(option_index) is None:
        raise QuizFlowError(f"Option {option_index} does not exist for {question.id}")

    answers = tuple(
        (question_id, index) for question_id, index in state.answers if question_id != question.id
    ) + ((question.id, option_index),)

    next_index = state.question_index + 1
    if next_index < len(variant.questions):
        return replace(state, question_index=next_index, answers=answers)

    calculator = calculator or calculator_for(variant)
    chosen: Dict[str, AnswerOption] = {
        question_id: variant.question(question_id).options[index] for question_id, index in answers
    }
    return replace(state, stage=Stage.RESULTS, answers=answers, result=calculator.calculate(chosen))


def back(state: QuizState) -> QuizState:
    """Return to the previous question; the earlier answer stays selected until replaced."""
    _require(state, Stage.QUESTION)
    if state.question_index == 0:
        raise QuizFlowError("Already at the first question")
    return replace(state, question_index=state.question_index - 1)


def restart() -> QuizState:
    return QuizState()


REPORT_CONTACT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("email", "email address"),
    ("first_name", "first name"),
    ("last_name", "last name"),
)


def missing_contact_fields(**contact: Optional[str]) -> List[str]:
    """Labels of the required report-form fields (email, first and last name) left blank."""
    return [label for field, label in REPORT_CONTACT_FIELDS if not (contact.get(field) or "").strip()]
