"""
Skill taxonomy reference data.

Canonical skill names grouped into the domain clusters used to derive coarse
capability flags (web, data, design, backend, cloud), plus the suggestion list
offered while a user builds their skill set.
"""
from typing import Dict, Iterable, List, Tuple

WEB = 'web'
DATA = 'data'
DESIGN = 'design'
BACKEND = 'backend'
CLOUD = 'cloud'

SKILL_CLUSTERS: Dict[str, Tuple[str, ...]] = {
    WEB: ('JavaScript', 'React', 'HTML', 'CSS', 'Node.js', 'Vue.js', 'Angular', 'Next.js'),
    DATA: ('Python', 'SQL', 'Data Analysis', 'Machine Learning', 'R'),
    DESIGN: ('UI/UX Design', 'Figma', 'Adobe', 'Design'),
    BACKEND: ('Node.js', 'Python', 'Java', 'C++', 'Go', 'Rust', 'Express.js'),
    CLOUD: ('AWS', 'Docker', 'Kubernetes', 'DevOps'),
}

SUGGESTED_SKILLS: Tuple[str, ...] = (
    'JavaScript',
    'Python',
    'React',
    'Node.js',
    'TypeScript',
    'SQL',
    'Git',
    'AWS',
    'Docker',
    'MongoDB',
    'GraphQL',
    'Vue.js',
    'Angular',
    'Java',
    'C++',
    'Machine Learning',
    'Data Analysis',
    'UI/UX Design',
    'Project Management',
    'Agile',
    'DevOps',
    'Kubernetes',
    'Firebase',
    'Next.js',
    'Express.js',
)


def normalize_skills(raw_skills: Iterable[str]) -> List[str]:
    """
    Clean a raw skill list the way the skills form does before saving.

    Labels are stripped, empty labels dropped and exact-text duplicates
    suppressed. The first occurrence wins so display order is preserved.
    """
    skills = []
    seen = set()
    for raw in raw_skills or []:
        label = (raw or '').strip()
        if not label or label in seen:
            continue
        seen.add(label)
        skills.append(label)
    return skills


def suggested_skills(current_skills: Iterable[str]) -> List[str]:
    """Suggestions the user has not added yet (exact text comparison)."""
    current = set(current_skills or [])
    return [skill for skill in SUGGESTED_SKILLS if skill not in current]
