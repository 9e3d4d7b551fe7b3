"""
Recommendation facade.

Combines the quiz scorer, job matcher and roadmap generator into the views the
client renders, and owns the persistence rules around them: a stored roadmap
is returned unchanged instead of being regenerated, and a failed save never
discards a computed result.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from django.utils import timezone

from careers.job_matching import JobMatch, JobMatchingEngine
from careers.quiz import QuizScorer
from careers.roadmap import (
    Milestone,
    RoadmapGenerator,
    complete_checkpoint,
    complete_milestone,
    roadmap_from_documents,
    roadmap_to_documents,
    skill_advice,
)

logger = logging.getLogger(__name__)


@dataclass
class RoadmapResult:
    milestones: List[Milestone]
    generated: bool
    saved: bool


@dataclass
class QuizSubmission:
    result: Dict[str, Any]
    result_id: Optional[str]
    saved: bool


def _category_scores(quiz_results: Optional[Mapping[str, Any]]) -> Optional[List[Dict[str, Any]]]:
    if not quiz_results:
        return None
    return quiz_results.get('categoryScores')


class RecommendationService:
    """Orchestrates the rule engine over a user's stored profile."""

    def __init__(self, profiles, quiz_results, progress):
        self.profiles = profiles
        self.quiz_results = quiz_results
        self.progress = progress

    @staticmethod
    def recommend(skills: Sequence[str], answers: Optional[Mapping[int, int]] = None) -> Dict[str, Any]:
        """
        Derive every recommendation for a skill set without touching storage.

        Args:
            skills: the user's skill labels
            answers: optional quiz answers (question index -> option index)

        Returns:
            Dictionary with category_scores (None when the quiz was skipped),
            job_roles, roadmap and advice.
        """
        category_scores = QuizScorer.score(answers) if answers is not None else None
        return {
            'category_scores': category_scores,
            'top_category': QuizScorer.top_category(category_scores),
            'job_roles': JobMatchingEngine.generate_roles(skills, category_scores),
            'roadmap': RoadmapGenerator.generate(skills, category_scores),
            'advice': skill_advice(skills),
        }

    def _profile(self, user_id: str) -> Dict[str, Any]:
        return self.profiles.get(user_id) or {}

    def job_roles(self, user_id: str) -> List[JobMatch]:
        profile = self._profile(user_id)
        return JobMatchingEngine.generate_roles(
            profile.get('skills') or [], _category_scores(profile.get('quizResults'))
        )

    def get_or_create_roadmap(self, user_id: str) -> RoadmapResult:
        """
        Return the stored roadmap, generating and saving one only if none exists.
        """
        profile = self._profile(user_id)
        stored = profile.get('roadmap')
        if stored:
            return RoadmapResult(milestones=roadmap_from_documents(stored), generated=False, saved=True)

        milestones = RoadmapGenerator.generate(
            profile.get('skills') or [], _category_scores(profile.get('quizResults'))
        )
        saved = self.profiles.upsert(user_id, {'roadmap': roadmap_to_documents(milestones)})
        if saved:
            logger.info(f"Generated roadmap for {user_id}")
        else:
            logger.warning(f"Generated roadmap for {user_id} but could not save it")
        return RoadmapResult(milestones=milestones, generated=True, saved=saved)

    def clear_roadmap(self, user_id: str) -> bool:
        """Drop the stored roadmap so the next request generates a new one."""
        return self.profiles.upsert(user_id, {'roadmap': None})

    def _stored_roadmap(self, user_id: str) -> List[Milestone]:
        return self.get_or_create_roadmap(user_id).milestones

    def complete_milestone(self, user_id: str, milestone_id: str) -> RoadmapResult:
        roadmap = self._stored_roadmap(user_id)
        updated = complete_milestone(roadmap, milestone_id, timezone.now())
        if updated == roadmap:
            # already complete; the stored roadmap and completion log stay as they are
            return RoadmapResult(milestones=roadmap, generated=False, saved=True)

        saved = self.profiles.upsert(user_id, {'roadmap': roadmap_to_documents(updated)})
        if saved:
            milestone = next(m for m in updated if m.id == milestone_id)
            self.progress.record_milestone_completion(user_id, milestone.to_document())
        return RoadmapResult(milestones=updated, generated=False, saved=saved)

    def complete_checkpoint(self, user_id: str, milestone_id: str, checkpoint_id: str) -> RoadmapResult:
        roadmap = self._stored_roadmap(user_id)
        updated = complete_checkpoint(roadmap, milestone_id, checkpoint_id)
        saved = self.profiles.upsert(user_id, {'roadmap': roadmap_to_documents(updated)})
        return RoadmapResult(milestones=updated, generated=False, saved=saved)

    def submit_quiz(self, user_id: str, answers: Mapping[int, int]) -> QuizSubmission:
        """Score answers, append them to the quiz history and copy them onto the profile."""
        result = QuizScorer.build_result(answers, timezone.now())
        result_id = self.quiz_results.append(user_id, result)
        profile_saved = self.profiles.upsert(user_id, {'quizResults': result})
        return QuizSubmission(result=result, result_id=result_id, saved=bool(result_id) and profile_saved)

    def profile_recommendations(self, user_id: str) -> Dict[str, Any]:
        """Facade output for the stored profile, with the persisted roadmap."""
        profile = self._profile(user_id)
        skills = profile.get('skills') or []
        category_scores = _category_scores(profile.get('quizResults'))
        roadmap = self.get_or_create_roadmap(user_id)
        return {
            'skills': skills,
            'category_scores': category_scores,
            'top_category': QuizScorer.top_category(category_scores),
            'job_roles': JobMatchingEngine.generate_roles(skills, category_scores),
            'roadmap': roadmap.milestones,
            'roadmap_saved': roadmap.saved,
            'advice': skill_advice(skills),
        }
