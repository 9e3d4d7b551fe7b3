"""
Skill matching primitives shared by the job matcher and the roadmap generator.

Matching is deliberately loose: two labels match when either one, lowercased,
contains the other. "Java" matches "JavaScript" and the other way round.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Sequence

from careers.taxonomy import SKILL_CLUSTERS


def matches(user_skill: str, target_skill: str) -> bool:
    user = (user_skill or '').lower()
    target = (target_skill or '').lower()
    if not user or not target:
        return False
    return target in user or user in target


def has_any_skill(user_skills: Iterable[str], candidates: Iterable[str]) -> bool:
    candidates = list(candidates)
    return any(matches(skill, candidate) for skill in user_skills for candidate in candidates)


def matched_skills(user_skills: Sequence[str], targets: Sequence[str]) -> List[str]:
    """Targets that at least one user skill matches, in target order."""
    return [target for target in targets if any(matches(skill, target) for skill in user_skills)]


def capability_flags(user_skills: Sequence[str]) -> Dict[str, bool]:
    """Evaluate `has_any_skill` against every taxonomy cluster."""
    return {
        cluster: has_any_skill(user_skills, cluster_skills)
        for cluster, cluster_skills in SKILL_CLUSTERS.items()
    }


def rounded_percentage(part: int, whole: int) -> int:
    """
    Integer percentage of `part` over `whole`, rounding halves up.

    Halves must go up (1/8 is 12.5% and reports as 13), so the built-in
    banker's rounding is not used.
    """
    if whole <= 0:
        return 0
    value = Decimal(part) * Decimal(100) / Decimal(whole)
    return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
