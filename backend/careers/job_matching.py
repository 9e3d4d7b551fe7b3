"""
Job Matching Engine

Ranks static job role templates against a user's skill set. Each template is
gated on coarse capability flags from the skill taxonomy, scored with the loose
substring matching primitive and returned best match first, six at most.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from careers.skill_matching import capability_flags, matched_skills, rounded_percentage
from careers.taxonomy import BACKEND, CLOUD, DATA, DESIGN, WEB

logger = logging.getLogger(__name__)

MAX_ROLES = 6


@dataclass(frozen=True)
class JobRoleTemplate:
    title: str
    description: str
    salary_range: str
    growth_rate: str
    demand_level: str
    required_skills: Tuple[str, ...]
    # Skills actually scored for the match; the displayed list when empty.
    match_skills: Tuple[str, ...] = field(default=())

    @property
    def scored_skills(self) -> Tuple[str, ...]:
        return self.match_skills or self.required_skills


@dataclass(frozen=True)
class JobMatch:
    """A role template with its per-request match against a skill set."""
    role: JobRoleTemplate
    match_percentage: int
    matched_skills: Tuple[str, ...]


Gate = Callable[[Dict[str, bool]], bool]


def _always(flags: Dict[str, bool]) -> bool:
    return True


ROLE_TEMPLATES: Tuple[Tuple[Gate, JobRoleTemplate], ...] = (
    (
        lambda flags: flags[WEB],
        JobRoleTemplate(
            title='Frontend Developer',
            description='Build user interfaces and web applications using modern frameworks and technologies.',
            salary_range='$70k - $120k',
            growth_rate='+22%',
            demand_level='High',
            required_skills=('JavaScript', 'React', 'HTML', 'CSS', 'TypeScript'),
        ),
    ),
    (
        lambda flags: flags[WEB] and flags[BACKEND],
        JobRoleTemplate(
            title='Full-Stack Developer',
            description='Work on both frontend and backend systems to create complete web applications.',
            salary_range='$80k - $140k',
            growth_rate='+25%',
            demand_level='High',
            required_skills=('JavaScript', 'React', 'Node.js', 'SQL', 'Git'),
        ),
    ),
    (
        lambda flags: flags[DATA],
        JobRoleTemplate(
            title='Data Scientist',
            description='Analyze complex data to extract insights and build predictive models.',
            salary_range='$95k - $165k',
            growth_rate='+31%',
            demand_level='High',
            required_skills=('Python', 'SQL', 'Machine Learning', 'Data Analysis'),
        ),
    ),
    (
        lambda flags: flags[DATA],
        JobRoleTemplate(
            title='Data Analyst',
            description='Transform data into actionable insights for business decision-making.',
            salary_range='$60k - $95k',
            growth_rate='+28%',
            demand_level='High',
            required_skills=('SQL', 'Python', 'Data Analysis', 'Excel'),
            match_skills=('SQL', 'Python', 'Data Analysis'),
        ),
    ),
    (
        lambda flags: flags[DESIGN],
        JobRoleTemplate(
            title='UI/UX Designer',
            description='Design user experiences and interfaces for web and mobile applications.',
            salary_range='$65k - $110k',
            growth_rate='+18%',
            demand_level='High',
            required_skills=('UI/UX Design', 'Figma', 'User Research', 'Prototyping'),
            match_skills=('UI/UX Design', 'Figma'),
        ),
    ),
    (
        lambda flags: flags[BACKEND],
        JobRoleTemplate(
            title='Backend Developer',
            description='Build server-side applications, APIs, and database systems.',
            salary_range='$75k - $130k',
            growth_rate='+20%',
            demand_level='High',
            required_skills=('Python', 'Node.js', 'SQL', 'API Development'),
            match_skills=('Python', 'Node.js', 'SQL'),
        ),
    ),
    (
        lambda flags: flags[CLOUD],
        JobRoleTemplate(
            title='DevOps Engineer',
            description='Manage infrastructure, deployment pipelines, and cloud systems.',
            salary_range='$90k - $150k',
            growth_rate='+27%',
            demand_level='High',
            required_skills=('AWS', 'Docker', 'Kubernetes', 'DevOps', 'Git'),
            match_skills=('AWS', 'Docker', 'Kubernetes', 'DevOps'),
        ),
    ),
    (
        _always,
        JobRoleTemplate(
            title='Software Engineer',
            description='Design and develop software solutions across various platforms and technologies.',
            salary_range='$80k - $135k',
            growth_rate='+24%',
            demand_level='High',
            required_skills=('Programming', 'Problem Solving', 'Git', 'Algorithms'),
            match_skills=('JavaScript', 'Python', 'Java', 'Git'),
        ),
    ),
    (
        _always,
        JobRoleTemplate(
            title='Product Manager',
            description='Guide product development from conception to launch, working with cross-functional teams.',
            salary_range='$100k - $170k',
            growth_rate='+19%',
            demand_level='Medium',
            required_skills=('Project Management', 'Analytics', 'Communication', 'Strategy'),
            match_skills=('Project Management', 'Agile'),
        ),
    ),
)


class JobMatchingEngine:
    """Rank candidate job roles for a skill set."""

    @classmethod
    def calculate_match(cls, skills: Sequence[str], role: JobRoleTemplate) -> JobMatch:
        """
        Score one role template.

        A scored skill counts once if any user skill matches it, so the
        percentage is matched scored skills over all scored skills.
        """
        scored = role.scored_skills
        hits = matched_skills(skills, scored)
        return JobMatch(
            role=role,
            match_percentage=rounded_percentage(len(hits), len(scored)),
            matched_skills=tuple(matched_skills(skills, role.required_skills)),
        )

    @classmethod
    def candidate_roles(cls, skills: Sequence[str]) -> List[JobRoleTemplate]:
        """Templates whose capability gate passes, in template order."""
        flags = capability_flags(skills)
        return [role for gate, role in ROLE_TEMPLATES if gate(flags)]

    @classmethod
    def generate_roles(
        cls,
        skills: Sequence[str],
        quiz_result: Optional[List[Dict]] = None,
        limit: int = MAX_ROLES,
    ) -> List[JobMatch]:
        """
        Rank the gated role templates for a skill set.

        Args:
            skills: the user's skill labels
            quiz_result: accepted for the presentation contract, not scored
            limit: maximum number of roles returned

        Returns:
            JobMatch list sorted by match percentage, highest first. Ties keep
            template order.
        """
        scored = [cls.calculate_match(skills, role) for role in cls.candidate_roles(skills)]
        # sorted() is stable, so equal percentages keep template order
        ranked = sorted(scored, key=lambda match: match.match_percentage, reverse=True)
        logger.debug(f"Ranked {len(ranked)} candidate roles for {len(skills)} skills")
        return ranked[:limit]
