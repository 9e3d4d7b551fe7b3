"""
API views for skills, the aptitude quiz, recommendations, roadmaps and courses.

Store failures are raised as StoreUnavailable and rendered by the custom
exception handler. Writes that fail after a result was computed are reported
with a `saved: false` flag next to the result instead of an error.
"""
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from careers.catalog import course_categories, filter_courses, recommend_courses
from careers.exceptions import CourseNotFound
from careers.quiz import CATEGORIES, CATEGORY_INFO, question_bank_payload
from careers.recommendations import RecommendationService
from careers.roadmap import roadmap_stats
from careers.serializers import (
    CourseFilterSerializer,
    CourseSerializer,
    EnrollmentSerializer,
    JobRoleSerializer,
    MilestoneSerializer,
    ProfileRecommendationSerializer,
    ProfileSerializer,
    ProgressUpdateSerializer,
    QuizHistorySerializer,
    QuizResultSerializer,
    QuizSubmissionSerializer,
    RecommendationRequestSerializer,
    RecommendationSerializer,
    RoadmapStatsSerializer,
    SkillSetSerializer,
)
from careers.services import get_services
from careers.taxonomy import SKILL_CLUSTERS, suggested_skills

logger = logging.getLogger(__name__)


def _uid(request):
    return request.user.username


def _roadmap_payload(result):
    return {
        'roadmap': MilestoneSerializer(result.milestones, many=True).data,
        'stats': RoadmapStatsSerializer(roadmap_stats(result.milestones, timezone.localdate())).data,
        'generated': result.generated,
        'saved': result.saved,
    }


# Profile and skills

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_detail(request):
    """Return the caller's profile document, creating an empty one on first visit."""
    user = request.user
    profile = get_services().profiles.get_or_create(
        _uid(request),
        email=user.email,
        display_name=user.get_full_name(),
    )
    return Response(ProfileSerializer(profile).data, status=status.HTTP_200_OK)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def profile_skills(request):
    """
    GET: the caller's skill set
    PUT: replace the skill set

    PUT Request Body:
    {
        "skills": ["React", "Node.js", "SQL"]
    }

    Labels are trimmed and exact duplicates dropped. Changing skills does not
    regenerate a stored roadmap.
    """
    services = get_services()
    uid = _uid(request)

    if request.method == 'GET':
        profile = services.profiles.get(uid) or {}
        return Response({'skills': profile.get('skills') or []}, status=status.HTTP_200_OK)

    serializer = SkillSetSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    skills = serializer.validated_data['skills']
    saved = services.profiles.upsert(uid, {'skills': skills})
    return Response({'skills': skills, 'saved': saved}, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([AllowAny])
def skill_suggestions(request):
    current = request.query_params.getlist('skill')
    if request.user and request.user.is_authenticated and not current:
        profile = get_services().profiles.get(_uid(request)) or {}
        current = profile.get('skills') or []
    return Response({'suggestions': suggested_skills(current)}, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([AllowAny])
def skill_taxonomy(request):
    return Response(
        {'clusters': {name: list(skills) for name, skills in SKILL_CLUSTERS.items()}},
        status=status.HTTP_200_OK,
    )


# Aptitude quiz

@api_view(['GET'])
@permission_classes([AllowAny])
def quiz_questions(request):
    return Response(
        {
            'questions': question_bank_payload(),
            'categories': [{'category': c, **CATEGORY_INFO[c]} for c in CATEGORIES],
        },
        status=status.HTTP_200_OK,
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def quiz_submit(request):
    """
    Score quiz answers and save them to the quiz history and the profile.

    POST Request Body:
    {
        "answers": [{"question": 0, "option": 2}, {"question": 1, "option": 0}]
    }

    A later answer for the same question replaces an earlier one.
    """
    serializer = QuizSubmissionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    submission = get_services().recommendations.submit_quiz(_uid(request), serializer.validated_data['answers'])
    if not submission.saved:
        logger.warning(f"Quiz results for {_uid(request)} were scored but not fully saved")

    return Response(
        {
            'id': submission.result_id,
            'results': QuizResultSerializer(submission.result).data,
            'saved': submission.saved,
        },
        status=status.HTTP_201_CREATED if submission.saved else status.HTTP_200_OK,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quiz_results(request):
    history = get_services().quiz_results.list_by_user(_uid(request))
    return Response(QuizHistorySerializer(history, many=True).data, status=status.HTTP_200_OK)


# Recommendations

@api_view(['POST'])
@permission_classes([AllowAny])
def recommendations_preview(request):
    """
    Compute quiz scores, job matches, a roadmap and advice for posted skills.

    Nothing is persisted.

    POST Request Body:
    {
        "skills": ["Figma", "React"],
        "answers": [{"question": 0, "option": 1}]  // optional
    }
    """
    serializer = RecommendationRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    recommendations = RecommendationService.recommend(data['skills'], data.get('answers'))
    return Response(RecommendationSerializer(recommendations).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_recommendations(request):
    recommendations = get_services().recommendations.profile_recommendations(_uid(request))
    return Response(ProfileRecommendationSerializer(recommendations).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def job_roles(request):
    roles = get_services().recommendations.job_roles(_uid(request))
    return Response({'job_roles': JobRoleSerializer(roles, many=True).data}, status=status.HTTP_200_OK)


# Roadmap

@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def roadmap_detail(request):
    """
    GET: the stored roadmap, generated and saved on first request
    DELETE: clear the stored roadmap so the next GET generates a new one
    """
    service = get_services().recommendations
    uid = _uid(request)

    if request.method == 'DELETE':
        if not service.clear_roadmap(uid):
            return Response(
                {'error': {'code': 'save_failed', 'message': 'Could not clear your roadmap. Please try again.'}},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    return Response(_roadmap_payload(service.get_or_create_roadmap(uid)), status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def roadmap_milestone_complete(request, milestone_id):
    result = get_services().recommendations.complete_milestone(_uid(request), milestone_id)
    return Response(_roadmap_payload(result), status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def roadmap_checkpoint_complete(request, milestone_id, checkpoint_id):
    result = get_services().recommendations.complete_checkpoint(_uid(request), milestone_id, checkpoint_id)
    return Response(_roadmap_payload(result), status=status.HTTP_200_OK)


# Courses

@api_view(['GET'])
@permission_classes([AllowAny])
def courses_list(request):
    """
    List the course catalog.

    Query params: q (search title, description, skills, category),
    category, level (Beginner|Intermediate|Advanced|All)
    """
    filters = CourseFilterSerializer(data=request.query_params)
    filters.is_valid(raise_exception=True)

    courses = get_services().courses.list_all()
    filtered = filter_courses(
        courses,
        query=filters.validated_data.get('q'),
        category=filters.validated_data.get('category'),
        level=filters.validated_data.get('level'),
    )
    return Response(
        {
            'courses': CourseSerializer(filtered, many=True).data,
            'categories': course_categories(courses),
            'count': len(filtered),
        },
        status=status.HTTP_200_OK,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def courses_recommended(request):
    services = get_services()
    profile = services.profiles.get(_uid(request)) or {}
    recommended = recommend_courses(services.courses.list_all(), profile.get('skills') or [])
    return Response({'courses': CourseSerializer(recommended, many=True).data}, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def course_enroll(request, course_id):
    services = get_services()
    if services.courses.get(course_id) is None:
        raise CourseNotFound()

    saved = services.enrollments.set(_uid(request), course_id)
    if not saved:
        return Response(
            {'error': {'code': 'save_failed', 'message': 'Could not save your enrollment. Please try again.'}},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return Response({'course_id': course_id, 'progress': 0, 'completed': False}, status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def course_progress(request, course_id):
    """
    PATCH Request Body:
    {
        "progress": 60  // 0-100; 100 marks the course completed
    }
    """
    serializer = ProgressUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    progress = serializer.validated_data['progress']

    saved = get_services().enrollments.update_progress(_uid(request), course_id, progress)
    if not saved:
        return Response(
            {'error': {'code': 'save_failed', 'message': 'Could not save your progress. Please try again.'}},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return Response(
        {'course_id': course_id, 'progress': progress, 'completed': progress >= 100},
        status=status.HTTP_200_OK,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def enrollments_list(request):
    enrollments = get_services().enrollments.list_by_user(_uid(request))
    return Response(EnrollmentSerializer(enrollments, many=True).data, status=status.HTTP_200_OK)
