"""
Aptitude quiz question bank and scorer.

Every question is tagged with exactly one aptitude category. Answering a
question adds one point to its category whatever option was picked, and each
category is reported as a percentage of the full question count, so an
abandoned quiz sums to less than 100.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from careers.skill_matching import rounded_percentage

logger = logging.getLogger(__name__)

TECHNICAL = 'technical'
ANALYTICAL = 'analytical'
CREATIVE = 'creative'
LEADERSHIP = 'leadership'
COMMUNICATION = 'communication'

CATEGORIES: Tuple[str, ...] = (TECHNICAL, ANALYTICAL, CREATIVE, LEADERSHIP, COMMUNICATION)

CATEGORY_INFO: Dict[str, Dict[str, str]] = {
    TECHNICAL: {
        'label': 'Technical Skills',
        'description': 'Problem-solving and technical implementation',
    },
    ANALYTICAL: {
        'label': 'Analytical Thinking',
        'description': 'Data analysis and logical reasoning',
    },
    CREATIVE: {
        'label': 'Creative Problem Solving',
        'description': 'Innovation and design thinking',
    },
    LEADERSHIP: {
        'label': 'Leadership',
        'description': 'Team management and strategic thinking',
    },
    COMMUNICATION: {
        'label': 'Communication',
        'description': 'Presentation and interpersonal skills',
    },
}


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    options: Tuple[str, ...]
    category: str


QUESTION_BANK: Tuple[Question, ...] = (
    Question(
        1,
        "When faced with a complex problem, what's your first approach?",
        (
            'Break it down into smaller, manageable parts',
            'Research similar problems and solutions',
            'Brainstorm creative alternatives',
            'Consult with team members for input',
        ),
        ANALYTICAL,
    ),
    Question(
        2,
        'Which type of project excites you most?',
        (
            'Building a new software application',
            'Analyzing data to find insights',
            'Designing user interfaces',
            'Leading a team to achieve goals',
        ),
        TECHNICAL,
    ),
    Question(
        3,
        'How do you prefer to learn new technologies?',
        (
            'Hands-on experimentation and building',
            'Reading documentation and tutorials',
            'Watching video courses',
            'Learning from mentors and peers',
        ),
        TECHNICAL,
    ),
    Question(
        4,
        'In a team setting, you naturally tend to:',
        (
            'Take charge and organize tasks',
            'Provide technical expertise',
            'Generate innovative ideas',
            'Facilitate communication between members',
        ),
        LEADERSHIP,
    ),
    Question(
        5,
        'What motivates you most in your work?',
        (
            'Solving challenging technical problems',
            'Creating something visually appealing',
            'Making data-driven decisions',
            'Helping others achieve their goals',
        ),
        CREATIVE,
    ),
    Question(
        6,
        'When presenting ideas, you prefer to:',
        (
            'Use detailed technical explanations',
            'Show visual mockups and prototypes',
            'Present data and analytics',
            'Tell compelling stories',
        ),
        COMMUNICATION,
    ),
    Question(
        7,
        'Your ideal work environment is:',
        (
            'Quiet space for deep focus',
            'Collaborative open office',
            'Flexible remote setup',
            'Dynamic, fast-paced environment',
        ),
        ANALYTICAL,
    ),
    Question(
        8,
        'When debugging code, you typically:',
        (
            'Use systematic debugging tools',
            'Add console logs strategically',
            'Review code line by line',
            'Ask colleagues for fresh perspective',
        ),
        TECHNICAL,
    ),
)

TOTAL_QUESTIONS = len(QUESTION_BANK)


def normalize_answers(pairs: Iterable[Tuple[int, int]]) -> Dict[int, int]:
    """Collapse (question, option) pairs into one answer per question; last one wins."""
    answers: Dict[int, int] = {}
    for question_index, option_index in pairs:
        answers[int(question_index)] = int(option_index)
    return answers


class QuizScorer:
    """Turn quiz answers into per-category aptitude percentages."""

    @classmethod
    def score(cls, answers: Mapping[int, int]) -> List[Dict[str, Any]]:
        """
        Score a set of answers.

        Args:
            answers: mapping of question index to selected option index

        Returns:
            One ``{'category', 'score'}`` entry per category, in the fixed
            category order, each score an integer 0-100.
        """
        counters = {category: 0 for category in CATEGORIES}
        for question_index in answers:
            index = int(question_index)
            if not 0 <= index < TOTAL_QUESTIONS:
                logger.debug(f"Ignoring answer for unknown question index {question_index}")
                continue
            counters[QUESTION_BANK[index].category] += 1

        return [
            {'category': category, 'score': rounded_percentage(counters[category], TOTAL_QUESTIONS)}
            for category in CATEGORIES
        ]

    @classmethod
    def build_result(cls, answers: Mapping[int, int], completed_at: datetime) -> Dict[str, Any]:
        """Quiz result document as stored on the profile and in the quiz history."""
        return {
            'categoryScores': cls.score(answers),
            'completedAt': completed_at,
            'totalQuestions': TOTAL_QUESTIONS,
            # Firestore map keys must be strings
            'answers': {str(index): option for index, option in sorted(answers.items())},
        }

    @classmethod
    def top_category(cls, category_scores: Optional[List[Dict[str, Any]]]) -> Optional[str]:
        """Strongest category, first in category order on ties; None when nothing scored."""
        best = None
        best_score = 0
        for entry in category_scores or []:
            if entry.get('score', 0) > best_score:
                best = entry.get('category')
                best_score = entry['score']
        return best


def question_bank_payload() -> List[Dict[str, Any]]:
    return [
        {
            'index': index,
            'id': question.id,
            'question': question.question,
            'options': list(question.options),
            'category': question.category,
        }
        for index, question in enumerate(QUESTION_BANK)
    ]
