"""
Question Bank
legal_value_score/scoring/question_bank.py

The two eight-question assessments:

  LEGACY_QUESTIONS       - "Legal Impact Score" (contract / risk / efficiency / strategic)
  OPPORTUNITY_QUESTIONS  - "Legal Value Score"  (contract_opportunity / growth_enablement /
                                                 cost_opportunity / strategic_value)

Category feeds (opportunity):
  contract_opportunity  ← q1, q4   (max 8)
  growth_enablement     ← q2, q5   (max 8)
  cost_opportunity      ← q3       (max 4)
  strategic_value       ← q6, q7, q8 (max 12)

Opportunity options are listed highest value first.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class AnswerOption:
    """One selectable answer: display text, points and the category it feeds."""
    text: str
    value: int
    category: str


@dataclass(frozen=True)
class Question:
    """A question with its ordered answer options."""
    id: str
    text: str
    options: Tuple[AnswerOption, ...]

    def option_by_text(self, text: str) -> Optional[AnswerOption]:
        for option in self.options:
            if option.text == text:
                return option
        return None

    def option_at(self, index: int) -> Optional[AnswerOption]:
        if 0 <= index < len(self.options):
            return self.options[index]
        return None

    @property
    def max_value(self) -> int:
        return max(option.value for option in self.options)


def _options(category: str, *pairs: Tuple[str, int]) -> Tuple[AnswerOption, ...]:
    return tuple(AnswerOption(text=text, value=value, category=category) for text, value in pairs)


# ---------------------------------------------------------------------------
# Legacy "impact" questionnaire
# ---------------------------------------------------------------------------

LEGACY_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q1",
        text="Do you have a central system tracking all contract obligations, renewal dates, and pricing escalations?",
        options=_options(
            "contract",
            ("Yes, comprehensive system", 4),
            ("Partial — some contracts tracked", 2),
            ("No centralized system", 0),
            ("I'm not sure", 0),
        ),
    ),
    Question(
        id="q2",
        text="Have you expanded into new markets in the last 18 months?",
        options=_options(
            "risk",
            ("Yes, multiple jurisdictions", 0),
            ("Yes, one new market", 1),
            ("Planning to expand", 2),
            ("No international operations", 4),
        ),
    ),
    Question(
        id="q3",
        text="How often does legal capacity become a bottleneck for commercial deals?",
        options=_options(
            "efficiency",
            ("Frequently (weekly or more)", 0),
            ("Occasionally (monthly)", 2),
            ("Rarely", 3),
            ("Never / We don't experience this", 4),
        ),
    ),
    Question(
        id="q4",
        text="What percentage of your legal budget goes to outside counsel?",
        options=_options(
            "efficiency",
            ("Over 75%", 0),
            ("50-75%", 1),
            ("25-50%", 2),
            ("Under 25%", 4),
        ),
    ),
    Question(
        id="q5",
        text="In the last year, have you discovered unexpected obligations or pricing increases after contracts were already in effect?",
        options=_options(
            "contract",
            ("Yes, multiple times", 0),
            ("Yes, once or twice", 2),
            ("No", 4),
            ("Unsure", 1),
        ),
    ),
    Question(
        id="q6",
        text="How confident are you in your compliance coverage across all jurisdictions where you operate?",
        options=_options(
            "risk",
            ("Very confident — audited regularly", 4),
            ("Moderately confident", 2),
            ("Somewhat confident", 1),
            ("Not confident", 0),
        ),
    ),
    Question(
        id="q7",
        text="How would your commercial teams describe working with legal?",
        options=_options(
            "strategic",
            ("Strategic enabler", 4),
            ("Neutral / transactional", 2),
            ("Occasional blocker", 1),
            ("Consistent friction point", 0),
        ),
    ),
    Question(
        id="q8",
        text="When was your last comprehensive contract portfolio review?",
        options=_options(
            "strategic",
            ("Within the last 6 months", 4),
            ("6-12 months ago", 2),
            ("Over a year ago", 1),
            ("Never / Don't recall", 0),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Opportunity questionnaire
# ---------------------------------------------------------------------------

OPPORTUNITY_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q1",
        text="Do you have a central system tracking all contract obligations, renewal dates, and pricing escalations?",
        options=_options(
            "contract_opportunity",
            ("Yes, comprehensive system", 4),
            ("Partial — some contracts tracked", 2),
            ("Spreadsheets and shared folders", 1),
            ("No centralized system", 0),
        ),
    ),
    Question(
        id="q2",
        text="How quickly can legal turn around a standard commercial contract?",
        options=_options(
            "growth_enablement",
            ("Within 48 hours", 4),
            ("Within a week", 2),
            ("Two to four weeks", 1),
            ("Longer than a month", 0),
        ),
    ),
    Question(
        id="q3",
        text="What percentage of your legal budget goes to outside counsel?",
        options=_options(
            "cost_opportunity",
            ("Under 25%", 4),
            ("25-50%", 2),
            ("50-75%", 1),
            ("Over 75%", 0),
        ),
    ),
    Question(
        id="q4",
        text="In the last year, have you discovered unexpected obligations or pricing increases after contracts were already in effect?",
        options=_options(
            "contract_opportunity",
            ("No", 4),
            ("Yes, once or twice", 2),
            ("Unsure", 1),
            ("Yes, multiple times", 0),
        ),
    ),
    Question(
        id="q5",
        text="How ready is your legal function to support expansion into new markets?",
        options=_options(
            "growth_enablement",
            ("Fully ready — playbooks in place", 4),
            ("Mostly ready", 2),
            ("Would rely on outside counsel", 1),
            ("Not ready", 0),
        ),
    ),
    Question(
        id="q6",
        text="How would your commercial teams describe working with legal?",
        options=_options(
            "strategic_value",
            ("Strategic enabler", 4),
            ("Neutral / transactional", 2),
            ("Occasional blocker", 1),
            ("Consistent friction point", 0),
        ),
    ),
    Question(
        id="q7",
        text="When was your last comprehensive contract portfolio review?",
        options=_options(
            "strategic_value",
            ("Within the last 6 months", 4),
            ("6-12 months ago", 2),
            ("Over a year ago", 1),
            ("Never / Don't recall", 0),
        ),
    ),
    Question(
        id="q8",
        text="Is legal involved in strategic planning and major commercial decisions?",
        options=_options(
            "strategic_value",
            ("Always — legal has a seat at the table", 4),
            ("Often", 2),
            ("Only when problems arise", 1),
            ("Never", 0),
        ),
    ),
)


def questions_by_id(questions: Tuple[Question, ...]) -> Dict[str, Question]:
    return {question.id: question for question in questions}
