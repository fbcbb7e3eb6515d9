"""
Answer Resolution
legal_value_score/scoring/answers.py

Boundary between client input and the engine. A client selection is either
an option index (0-3) or an option object carrying the option `text`. The
configured AnswerOption is always used; client-supplied value/category are
never trusted.
"""

from typing import Any, Dict, Mapping

from legal_value_score.core.exceptions import AnswerValidationError, EmptyAnswerSetError
from legal_value_score.scoring.question_bank import AnswerOption, Question
from legal_value_score.scoring.variants import ScoringVariant


def _resolve_one(question: Question, selection: Any) -> AnswerOption:
    if isinstance(selection, bool):
        raise AnswerValidationError(question.id, "selection must be an option index or option object")

    if isinstance(selection, int):
        option = question.option_at(selection)
        if option is None:
            raise AnswerValidationError(
                question.id, f"option index {selection} out of range 0-{len(question.options) - 1}"
            )
        return option

    if isinstance(selection, Mapping):
        text = selection.get("text")
    else:
        text = getattr(selection, "text", None)

    if not isinstance(text, str):
        raise AnswerValidationError(question.id, "selection must be an option index or option object")

    option = question.option_by_text(text)
    if option is None:
        raise AnswerValidationError(question.id, f"'{text}' is not an option of this question")
    return option


def resolve_answer_set(raw_answers: Mapping[str, Any], variant: ScoringVariant) -> Dict[str, AnswerOption]:
    """
    Validate client selections against the variant's question bank.

    Raises:
        EmptyAnswerSetError: no answers supplied.
        AnswerValidationError: unknown question id or option.
    """
    if not raw_answers:
        raise EmptyAnswerSetError()

    resolved: Dict[str, AnswerOption] = {}
    for question_id, selection in raw_answers.items():
        question = variant.question(question_id)
        if question is None:
            raise AnswerValidationError(question_id, f"unknown question for variant '{variant.name}'")
        resolved[question_id] = _resolve_one(question, selection)
    return resolved


def serialize_answer_set(answers: Mapping[str, AnswerOption]) -> Dict[str, Dict[str, Any]]:
    """JSON-ready form of a resolved answer set, ordered by question id."""
    return {
        question_id: {"text": option.text, "value": option.value, "category": option.category}
        for question_id, option in sorted(answers.items())
    }
