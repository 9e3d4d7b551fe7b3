"""
Learning roadmap generation.

A roadmap is one of four canned tracks picked by capability flags, in priority
order, followed by a professional certification milestone whose prerequisites
are the titles of the track milestones. Once stored, a roadmap only changes by
completing milestones and checkpoints; completion never goes back to false.
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from rest_framework.exceptions import NotFound

from careers.skill_matching import capability_flags, rounded_percentage
from careers.taxonomy import DATA, DESIGN, WEB

logger = logging.getLogger(__name__)

MILESTONE_TYPES = ('skill', 'course', 'project', 'certification')
DIFFICULTIES = ('Beginner', 'Intermediate', 'Advanced')
RESOURCE_TYPES = ('course', 'article', 'video', 'practice')


class MilestoneNotFound(NotFound):
    default_detail = 'Milestone not found in roadmap.'
    default_code = 'milestone_not_found'


class CheckpointNotFound(NotFound):
    default_detail = 'Checkpoint not found in milestone.'
    default_code = 'checkpoint_not_found'


@dataclass(frozen=True)
class Resource:
    type: str
    title: str
    url: Optional[str] = None
    duration: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        doc = {'type': self.type, 'title': self.title}
        if self.url:
            doc['url'] = self.url
        if self.duration:
            doc['duration'] = self.duration
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'Resource':
        return cls(
            type=doc.get('type', 'article'),
            title=doc.get('title', ''),
            url=doc.get('url'),
            duration=doc.get('duration'),
        )


@dataclass(frozen=True)
class Checkpoint:
    id: str
    title: str
    completed: bool = False

    def to_document(self) -> Dict[str, Any]:
        return {'id': self.id, 'title': self.title, 'completed': self.completed}

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'Checkpoint':
        return cls(id=str(doc.get('id')), title=doc.get('title', ''), completed=bool(doc.get('completed')))


@dataclass(frozen=True)
class Milestone:
    id: str
    title: str
    description: str
    type: str
    estimated_weeks: int
    difficulty: str
    prerequisites: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    resources: Tuple[Resource, ...] = ()
    checkpoints: Tuple[Checkpoint, ...] = ()
    completed: bool = False
    completed_at: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        doc = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'type': self.type,
            'estimatedWeeks': self.estimated_weeks,
            'difficulty': self.difficulty,
            'prerequisites': list(self.prerequisites),
            'skills': list(self.skills),
            'resources': [resource.to_document() for resource in self.resources],
            'completed': self.completed,
            'checkpoints': [checkpoint.to_document() for checkpoint in self.checkpoints],
        }
        if self.completed_at is not None:
            doc['completedAt'] = self.completed_at
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'Milestone':
        return cls(
            id=str(doc.get('id')),
            title=doc.get('title', ''),
            description=doc.get('description', ''),
            type=doc.get('type', 'skill'),
            estimated_weeks=int(doc.get('estimatedWeeks') or 0),
            difficulty=doc.get('difficulty', 'Beginner'),
            prerequisites=tuple(doc.get('prerequisites') or ()),
            skills=tuple(doc.get('skills') or ()),
            resources=tuple(Resource.from_document(r) for r in doc.get('resources') or ()),
            checkpoints=tuple(Checkpoint.from_document(c) for c in doc.get('checkpoints') or ()),
            completed=bool(doc.get('completed')),
            completed_at=doc.get('completedAt'),
        )


def roadmap_to_documents(roadmap: Sequence[Milestone]) -> List[Dict[str, Any]]:
    return [milestone.to_document() for milestone in roadmap]


def roadmap_from_documents(docs: Optional[Sequence[Dict[str, Any]]]) -> List[Milestone]:
    return [Milestone.from_document(doc) for doc in docs or ()]


def _milestone(
    id: str,
    title: str,
    description: str,
    type: str,
    weeks: int,
    difficulty: str,
    prerequisites: Sequence[str],
    skills: Sequence[str],
    resources: Sequence[Tuple],
    checkpoints: Sequence[str],
) -> Milestone:
    return Milestone(
        id=id,
        title=title,
        description=description,
        type=type,
        estimated_weeks=weeks,
        difficulty=difficulty,
        prerequisites=tuple(prerequisites),
        skills=tuple(skills),
        resources=tuple(Resource(*resource) for resource in resources),
        checkpoints=tuple(
            Checkpoint(id=f"{id}-{n}", title=checkpoint_title)
            for n, checkpoint_title in enumerate(checkpoints, start=1)
        ),
    )


@dataclass(frozen=True)
class Track:
    name: str
    predicate: Callable[[Dict[str, bool]], bool]
    milestones: Tuple[Milestone, ...]
    advice_title: str
    advice_description: str
    advice_recommendations: Tuple[str, ...] = field(default=())


FULL_STACK_DESIGNER = Track(
    name='Full-Stack Designer',
    predicate=lambda flags: flags[WEB] and flags[DESIGN],
    milestones=(
        _milestone(
            '1', 'Advanced React Patterns',
            'Master advanced React concepts including custom hooks, context patterns, and performance optimization.',
            'skill', 4, 'Intermediate',
            ['React', 'JavaScript'],
            ['React', 'TypeScript', 'Performance Optimization'],
            [('course', 'Advanced React Development', None, '6 hours'),
             ('practice', 'Build a Complex React App', None, '2 weeks')],
            ['Learn Custom Hooks', 'Implement Context API', 'Optimize Performance'],
        ),
        _milestone(
            '2', 'Design System Creation',
            'Build a comprehensive design system with reusable components and design tokens.',
            'project', 6, 'Intermediate',
            ['UI/UX Design', 'React'],
            ['Design Systems', 'Component Libraries', 'Figma'],
            [('course', 'Design Systems Fundamentals', None, '4 hours'),
             ('article', 'Building Scalable Design Systems'),
             ('practice', 'Create Your Design System', None, '4 weeks')],
            ['Define Design Tokens', 'Build Component Library', 'Document Guidelines'],
        ),
        _milestone(
            '3', 'Full-Stack Application',
            'Build a complete web application with modern frontend and backend technologies.',
            'project', 8, 'Advanced',
            ['React', 'Node.js', 'Database'],
            ['Full-Stack Development', 'API Design', 'Database Design'],
            [('course', 'Full-Stack Web Development', None, '12 hours'),
             ('practice', 'Build Portfolio Project', None, '6 weeks')],
            ['Setup Backend API', 'Implement Authentication', 'Deploy to Production'],
        ),
    ),
    advice_title='Full-Stack Designer',
    advice_description=(
        'Your combination of web development and design skills makes you perfect for roles that '
        'bridge technical implementation with user experience.'
    ),
    advice_recommendations=(
        'Consider Frontend Developer or Full-Stack Developer roles',
        'Explore UI/UX Developer positions',
        'Look into Product Designer roles at tech companies',
    ),
)

DATA_PROFESSIONAL = Track(
    name='Data Professional',
    predicate=lambda flags: flags[DATA],
    milestones=(
        _milestone(
            '1', 'Advanced Python for Data Science',
            'Master advanced Python libraries and techniques for data manipulation and analysis.',
            'skill', 5, 'Intermediate',
            ['Python', 'Basic Data Analysis'],
            ['Pandas', 'NumPy', 'Data Visualization'],
            [('course', 'Advanced Python Data Science', None, '8 hours'),
             ('practice', 'Data Analysis Projects', None, '3 weeks')],
            ['Master Pandas Operations', 'Advanced Visualization', 'Statistical Analysis'],
        ),
        _milestone(
            '2', 'Machine Learning Fundamentals',
            'Learn core ML algorithms and implement them from scratch and with libraries.',
            'course', 8, 'Intermediate',
            ['Python', 'Statistics'],
            ['Machine Learning', 'Scikit-learn', 'Model Evaluation'],
            [('course', 'Machine Learning Bootcamp', None, '15 hours'),
             ('practice', 'ML Project Portfolio', None, '5 weeks')],
            ['Supervised Learning', 'Unsupervised Learning', 'Model Deployment'],
        ),
        _milestone(
            '3', 'Data Science Capstone Project',
            'Complete an end-to-end data science project from data collection to deployment.',
            'project', 10, 'Advanced',
            ['Machine Learning', 'Data Analysis'],
            ['End-to-End ML', 'Data Pipeline', 'Model Deployment'],
            [('practice', 'Capstone Project', None, '8 weeks'),
             ('article', 'ML Project Best Practices')],
            ['Data Collection & Cleaning', 'Model Development', 'Production Deployment'],
        ),
    ),
    advice_title='Data Professional',
    advice_description=(
        'Your data analysis and programming skills position you well for the growing field of '
        'data science and analytics.'
    ),
    advice_recommendations=(
        'Explore Data Analyst or Data Scientist positions',
        'Consider Machine Learning Engineer roles',
        'Look into Business Intelligence Developer positions',
    ),
)

WEB_DEVELOPER = Track(
    name='Web Developer',
    predicate=lambda flags: flags[WEB],
    milestones=(
        _milestone(
            '1', 'Modern JavaScript Mastery',
            'Deep dive into ES6+, async programming, and modern JavaScript patterns.',
            'skill', 4, 'Intermediate',
            ['JavaScript Basics'],
            ['ES6+', 'Async/Await', 'Modern JS Patterns'],
            [('course', 'Modern JavaScript Complete Guide', None, '10 hours'),
             ('practice', 'JavaScript Challenges', None, '2 weeks')],
            ['ES6+ Features', 'Async Programming', 'Module Systems'],
        ),
        _milestone(
            '2', 'React Ecosystem Mastery',
            'Master React Router, state management, testing, and the broader React ecosystem.',
            'skill', 6, 'Intermediate',
            ['React', 'JavaScript'],
            ['React Router', 'Redux', 'React Testing'],
            [('course', 'Complete React Developer', None, '12 hours'),
             ('practice', 'React Projects', None, '4 weeks')],
            ['React Router Setup', 'State Management', 'Testing Implementation'],
        ),
        _milestone(
            '3', 'Frontend Portfolio Project',
            'Build a comprehensive portfolio showcasing your frontend development skills.',
            'project', 8, 'Advanced',
            ['React', 'Modern JavaScript'],
            ['Portfolio Development', 'Performance Optimization', 'Deployment'],
            [('practice', 'Portfolio Website', None, '6 weeks'),
             ('article', 'Frontend Best Practices')],
            ['Design & Planning', 'Development & Testing', 'Deployment & Optimization'],
        ),
    ),
    advice_title='Web Developer',
    advice_description='Your web development skills are in high demand across all industries.',
    advice_recommendations=(
        'Apply for Frontend or Full-Stack Developer roles',
        'Consider React/Vue.js Developer positions',
        'Explore opportunities at startups and tech companies',
    ),
)

GENERAL_TECH = Track(
    name='General Tech',
    predicate=lambda flags: True,
    milestones=(
        _milestone(
            '1', 'Programming Fundamentals',
            'Build a strong foundation in programming concepts and problem-solving.',
            'skill', 6, 'Beginner',
            [],
            ['Programming Logic', 'Problem Solving', 'Algorithms'],
            [('course', 'Programming Fundamentals', None, '8 hours'),
             ('practice', 'Coding Challenges', None, '4 weeks')],
            ['Basic Syntax', 'Control Structures', 'Problem Solving'],
        ),
        _milestone(
            '2', 'Web Development Basics',
            'Learn HTML, CSS, and JavaScript to build your first web applications.',
            'course', 8, 'Beginner',
            ['Programming Fundamentals'],
            ['HTML', 'CSS', 'JavaScript'],
            [('course', 'Web Development Bootcamp', None, '15 hours'),
             ('practice', 'Build 5 Projects', None, '6 weeks')],
            ['HTML Structure', 'CSS Styling', 'JavaScript Interactivity'],
        ),
        _milestone(
            '3', 'First Web Application',
            'Build your first complete web application with modern tools and practices.',
            'project', 10, 'Intermediate',
            ['HTML', 'CSS', 'JavaScript'],
            ['Web Development', 'Project Management', 'Version Control'],
            [('practice', 'Web App Project', None, '8 weeks'),
             ('course', 'Git & GitHub', None, '3 hours')],
            ['Project Planning', 'Development', 'Testing & Deployment'],
        ),
    ),
    advice_title='Tech Professional',
    advice_description='Your diverse skill set opens up many opportunities in the technology sector.',
    advice_recommendations=(
        'Consider roles that match your strongest skills',
        'Look for positions that allow skill growth',
        'Explore different areas to find your passion',
    ),
)

# Evaluated in order; the last track always matches.
TRACKS: Tuple[Track, ...] = (FULL_STACK_DESIGNER, DATA_PROFESSIONAL, WEB_DEVELOPER, GENERAL_TECH)

CERTIFICATION_ID = 'cert'


def certification_milestone(prerequisites: Sequence[str]) -> Milestone:
    return _milestone(
        CERTIFICATION_ID, 'Professional Certification',
        'Earn a recognized certification to validate your skills and boost your career prospects.',
        'certification', 2, 'Advanced',
        prerequisites,
        ['Certification', 'Professional Validation'],
        [('course', 'Certification Prep', None, '4 hours'),
         ('practice', 'Mock Exams', None, '1 week')],
        ['Study Materials', 'Practice Exams', 'Take Certification'],
    )


class RoadmapGenerator:
    """Pick a learning track for a skill set and materialize its milestones."""

    @classmethod
    def select_track(cls, skills: Sequence[str]) -> Track:
        flags = capability_flags(skills)
        return next(track for track in TRACKS if track.predicate(flags))

    @classmethod
    def generate(cls, skills: Sequence[str], quiz_result: Optional[List[Dict]] = None) -> List[Milestone]:
        """
        Build a fresh roadmap.

        The quiz result is part of the call contract but track selection only
        looks at skills.
        """
        track = cls.select_track(skills)
        roadmap = list(track.milestones)
        roadmap.append(certification_milestone([milestone.title for milestone in roadmap]))
        logger.debug(f"Generated '{track.name}' roadmap with {len(roadmap)} milestones")
        return roadmap


def skill_advice(skills: Sequence[str]) -> Dict[str, Any]:
    track = RoadmapGenerator.select_track(skills)
    return {
        'track': track.name,
        'title': track.advice_title,
        'description': track.advice_description,
        'recommendations': list(track.advice_recommendations),
    }


def _find_milestone(roadmap: Sequence[Milestone], milestone_id: str) -> int:
    for index, milestone in enumerate(roadmap):
        if milestone.id == milestone_id:
            return index
    raise MilestoneNotFound()


def complete_milestone(roadmap: Sequence[Milestone], milestone_id: str, when: datetime) -> List[Milestone]:
    """Return a copy of the roadmap with one milestone completed."""
    index = _find_milestone(roadmap, milestone_id)
    updated = list(roadmap)
    milestone = updated[index]
    if not milestone.completed:
        updated[index] = replace(milestone, completed=True, completed_at=when)
    return updated


def complete_checkpoint(roadmap: Sequence[Milestone], milestone_id: str, checkpoint_id: str) -> List[Milestone]:
    """Return a copy of the roadmap with one checkpoint completed."""
    index = _find_milestone(roadmap, milestone_id)
    milestone = roadmap[index]
    if not any(checkpoint.id == checkpoint_id for checkpoint in milestone.checkpoints):
        raise CheckpointNotFound()
    checkpoints = tuple(
        replace(checkpoint, completed=True) if checkpoint.id == checkpoint_id else checkpoint
        for checkpoint in milestone.checkpoints
    )
    updated = list(roadmap)
    updated[index] = replace(milestone, checkpoints=checkpoints)
    return updated


def roadmap_stats(roadmap: Sequence[Milestone], today: Optional[date] = None) -> Dict[str, Any]:
    """Progress figures shown above the roadmap timeline."""
    today = today or date.today()
    total = len(roadmap)
    done = [milestone for milestone in roadmap if milestone.completed]
    total_weeks = sum(milestone.estimated_weeks for milestone in roadmap)
    completed_weeks = sum(milestone.estimated_weeks for milestone in done)
    remaining_weeks = total_weeks - completed_weeks
    next_milestone = next((milestone for milestone in roadmap if not milestone.completed), None)
    return {
        'total_milestones': total,
        'completed_milestones': len(done),
        'progress_percentage': rounded_percentage(len(done), total),
        'total_weeks': total_weeks,
        'completed_weeks': completed_weeks,
        'remaining_weeks': remaining_weeks,
        'estimated_completion': today + timedelta(weeks=remaining_weeks),
        'next_milestone': next_milestone.title if next_milestone else None,
    }
