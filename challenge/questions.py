"""Question bank for the daily challenge.

The question for a day is picked with a PRNG seeded by the date's ordinal, so
every user sees the same question on the same day and it never changes
during that day.
"""

import random
from typing import NamedTuple


class Question(NamedTuple):
    text: str
    type: str


QUESTIONS = (
    Question("What historical event would you most like to have witnessed, and why?", 'history'),
    Question("Which ancient civilization do you find the most fascinating?", 'history'),
    Question("If you could ask one person from history a single question, who and what would it be?", 'history'),
    Question("What made you laugh the hardest this week?", 'fun'),
    Question("If today had a theme song, what would it be?", 'fun'),
    Question("What is a small thing that made today better than expected?", 'fun'),
    Question("Which famous person would you most like to share a birthday with?", 'birthday'),
    Question("What is the best birthday memory you have?", 'birthday'),
    Question("Which invention could you least live without?", 'invention'),
    Question("If you could invent one thing to make everyday life easier, what would it be?", 'invention'),
    Question("Which everyday object do you think had the most surprising origin?", 'invention'),
    Question("What is one fact you learned recently that surprised you?", 'trivia'),
    Question("What topic could you talk about for an hour without any preparation?", 'trivia'),
    Question("If you could master any skill overnight, what would you choose?", 'trivia'),
)


def question_for(day, questions=QUESTIONS):
    """Deterministic pick for a calendar day."""
    return random.Random(day.toordinal()).choice(questions)
