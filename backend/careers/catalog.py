"""
Course catalog defaults and search helpers.

DEFAULT_COURSES seeds the `courses` collection and is served whenever the
collection is empty.
"""
from typing import Any, Dict, List, Optional, Sequence

from careers.skill_matching import matches

ALL = 'All'
LEVELS = ('Beginner', 'Intermediate', 'Advanced')

DEFAULT_COURSES: List[Dict[str, Any]] = [
    {
        'id': '1',
        'title': 'Modern React Development',
        'description': 'Master React 18 with hooks, context, and modern patterns. Build scalable applications with best practices.',
        'benefit': 'Build production-ready React applications and advance your frontend career',
        'hoursPerWeek': 8,
        'duration': '12 weeks',
        'level': 'Intermediate',
        'category': 'Frontend Development',
        'skills': ['React', 'JavaScript', 'TypeScript', 'Next.js'],
        'instructor': 'Sarah Chen',
        'rating': 4.8,
        'studentsEnrolled': 2847,
        'price': 149,
        'tags': ['Popular', 'Career Boost'],
    },
    {
        'id': '2',
        'title': 'Python for Data Science',
        'description': 'Learn Python programming for data analysis, visualization, and machine learning applications.',
        'benefit': 'Transition into high-demand data science roles with practical Python skills',
        'hoursPerWeek': 10,
        'duration': '16 weeks',
        'level': 'Beginner',
        'category': 'Data Science',
        'skills': ['Python', 'Pandas', 'NumPy', 'Matplotlib', 'Machine Learning'],
        'instructor': 'Dr. Michael Rodriguez',
        'rating': 4.9,
        'studentsEnrolled': 3521,
        'price': 199,
        'tags': ['Bestseller', 'Career Change'],
    },
    {
        'id': '3',
        'title': 'Full-Stack JavaScript',
        'description': 'Complete web development with Node.js, Express, MongoDB, and React. Build end-to-end applications.',
        'benefit': 'Become a versatile full-stack developer capable of building complete web applications',
        'hoursPerWeek': 12,
        'duration': '20 weeks',
        'level': 'Intermediate',
        'category': 'Full-Stack Development',
        'skills': ['JavaScript', 'Node.js', 'React', 'MongoDB', 'Express.js'],
        'instructor': 'Alex Thompson',
        'rating': 4.7,
        'studentsEnrolled': 1923,
        'price': 249,
        'tags': ['Comprehensive', 'Project-Based'],
    },
    {
        'id': '4',
        'title': 'UI/UX Design Fundamentals',
        'description': 'Learn design principles, user research, prototyping, and modern design tools like Figma.',
        'benefit': 'Create beautiful, user-centered designs and launch your design career',
        'hoursPerWeek': 6,
        'duration': '10 weeks',
        'level': 'Beginner',
        'category': 'Design',
        'skills': ['UI/UX Design', 'Figma', 'User Research', 'Prototyping'],
        'instructor': 'Emma Wilson',
        'rating': 4.6,
        'studentsEnrolled': 1456,
        'price': 129,
        'tags': ['Creative', 'Portfolio Building'],
    },
    {
        'id': '5',
        'title': 'Cloud Architecture with AWS',
        'description': 'Master AWS services, serverless architecture, and cloud deployment strategies for scalable applications.',
        'benefit': 'Become a cloud architect and command higher salaries in the growing cloud market',
        'hoursPerWeek': 8,
        'duration': '14 weeks',
        'level': 'Advanced',
        'category': 'Cloud Computing',
        'skills': ['AWS', 'Docker', 'Kubernetes', 'Serverless', 'DevOps'],
        'instructor': 'James Park',
        'rating': 4.8,
        'studentsEnrolled': 987,
        'price': 299,
        'tags': ['High Salary', 'Enterprise'],
    },
    {
        'id': '6',
        'title': 'Machine Learning Fundamentals',
        'description': 'Introduction to ML algorithms, supervised and unsupervised learning, and practical implementations.',
        'benefit': 'Enter the AI field with solid ML foundations and practical project experience',
        'hoursPerWeek': 10,
        'duration': '18 weeks',
        'level': 'Intermediate',
        'category': 'Machine Learning',
        'skills': ['Python', 'Machine Learning', 'TensorFlow', 'Scikit-learn'],
        'instructor': 'Dr. Lisa Zhang',
        'rating': 4.9,
        'studentsEnrolled': 2134,
        'price': 279,
        'tags': ['AI/ML', 'Future Skills'],
    },
    {
        'id': '7',
        'title': 'Mobile App Development',
        'description': 'Build native mobile apps for iOS and Android using React Native and modern development practices.',
        'benefit': 'Develop mobile apps and tap into the growing mobile-first market',
        'hoursPerWeek': 9,
        'duration': '16 weeks',
        'level': 'Intermediate',
        'category': 'Mobile Development',
        'skills': ['React Native', 'JavaScript', 'Mobile UI', 'App Store'],
        'instructor': 'Carlos Martinez',
        'rating': 4.5,
        'studentsEnrolled': 1678,
        'price': 189,
        'tags': ['Mobile', 'Cross-Platform'],
    },
    {
        'id': '8',
        'title': 'Cybersecurity Essentials',
        'description': 'Learn security fundamentals, ethical hacking, and how to protect systems from cyber threats.',
        'benefit': 'Start a lucrative cybersecurity career in one of the fastest-growing tech fields',
        'hoursPerWeek': 7,
        'duration': '12 weeks',
        'level': 'Beginner',
        'category': 'Cybersecurity',
        'skills': ['Network Security', 'Ethical Hacking', 'Risk Assessment', 'Compliance'],
        'instructor': 'Robert Kim',
        'rating': 4.7,
        'studentsEnrolled': 1234,
        'price': 219,
        'tags': ['High Demand', 'Security'],
    },
]


def filter_courses(
    courses: Sequence[Dict[str, Any]],
    query: Optional[str] = None,
    category: Optional[str] = None,
    level: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Search title, description, skills and category; then narrow by category and level."""
    filtered = list(courses)

    if query:
        needle = query.lower()
        filtered = [
            course for course in filtered
            if needle in course.get('title', '').lower()
            or needle in course.get('description', '').lower()
            or any(needle in skill.lower() for skill in course.get('skills', []))
            or needle in course.get('category', '').lower()
        ]

    if category and category != ALL:
        filtered = [course for course in filtered if course.get('category') == category]

    if level and level != ALL:
        filtered = [course for course in filtered if course.get('level') == level]

    return filtered


def course_categories(courses: Sequence[Dict[str, Any]]) -> List[str]:
    categories = [ALL]
    for course in courses:
        category = course.get('category')
        if category and category not in categories:
            categories.append(category)
    return categories


def recommend_courses(
    courses: Sequence[Dict[str, Any]],
    skills: Sequence[str],
    limit: int = 3,
) -> List[Dict[str, Any]]:
    """
    Courses teaching skills the user already touches, most overlap first.

    Relevance is the number of course skills matched by some user skill.
    Courses with no overlap are left out.
    """
    scored = []
    for course in courses:
        relevance = sum(
            1 for course_skill in course.get('skills', [])
            if any(matches(skill, course_skill) for skill in skills)
        )
        if relevance > 0:
            scored.append({**course, 'relevanceScore': relevance})
    scored.sort(key=lambda course: course['relevanceScore'], reverse=True)
    return scored[:limit]
