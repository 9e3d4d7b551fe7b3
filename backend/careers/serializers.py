"""
Serializers for skills, quiz, recommendations, roadmap and course endpoints.

Profile data is stored with the camelCase field names of the Firestore
documents; the API speaks snake_case, so most read serializers map sources.
"""
from rest_framework import serializers

from careers.catalog import ALL, LEVELS
from careers.quiz import CATEGORY_INFO, TOTAL_QUESTIONS, QuizScorer, normalize_answers
from careers.roadmap import DIFFICULTIES, MILESTONE_TYPES, RESOURCE_TYPES
from careers.taxonomy import normalize_skills

MAX_SKILLS = 100


class SkillSetSerializer(serializers.Serializer):
    skills = serializers.ListField(
        child=serializers.CharField(max_length=100, allow_blank=True, trim_whitespace=False),
        allow_empty=True,
        max_length=MAX_SKILLS,
    )

    def validate_skills(self, value):
        return normalize_skills(value)


class QuizAnswerSerializer(serializers.Serializer):
    question = serializers.IntegerField(min_value=0, max_value=TOTAL_QUESTIONS - 1)
    option = serializers.IntegerField(min_value=0)


class QuizSubmissionSerializer(serializers.Serializer):
    answers = QuizAnswerSerializer(many=True, allow_empty=False)

    def validate_answers(self, value):
        return normalize_answers((answer['question'], answer['option']) for answer in value)


class RecommendationRequestSerializer(SkillSetSerializer):
    answers = QuizAnswerSerializer(many=True, required=False, allow_null=True)

    def validate_answers(self, value):
        if value is None:
            return None
        return normalize_answers((answer['question'], answer['option']) for answer in value)


class CategoryScoreSerializer(serializers.Serializer):
    category = serializers.CharField()
    score = serializers.IntegerField()
    label = serializers.SerializerMethodField()

    def get_label(self, obj):
        return CATEGORY_INFO.get(obj.get('category'), {}).get('label')


class JobRoleSerializer(serializers.Serializer):
    title = serializers.CharField(source='role.title')
    description = serializers.CharField(source='role.description')
    salary_range = serializers.CharField(source='role.salary_range')
    growth_rate = serializers.CharField(source='role.growth_rate')
    demand_level = serializers.CharField(source='role.demand_level')
    required_skills = serializers.ListField(child=serializers.CharField(), source='role.required_skills')
    matched_skills = serializers.ListField(child=serializers.CharField())
    match_percentage = serializers.IntegerField()


class ResourceSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=RESOURCE_TYPES)
    title = serializers.CharField()
    url = serializers.CharField(allow_null=True)
    duration = serializers.CharField(allow_null=True)


class CheckpointSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    completed = serializers.BooleanField()


class MilestoneSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    type = serializers.ChoiceField(choices=MILESTONE_TYPES)
    estimated_weeks = serializers.IntegerField()
    difficulty = serializers.ChoiceField(choices=DIFFICULTIES)
    prerequisites = serializers.ListField(child=serializers.CharField())
    skills = serializers.ListField(child=serializers.CharField())
    resources = ResourceSerializer(many=True)
    completed = serializers.BooleanField()
    completed_at = serializers.DateTimeField(allow_null=True)
    checkpoints = CheckpointSerializer(many=True)


class RoadmapStatsSerializer(serializers.Serializer):
    total_milestones = serializers.IntegerField()
    completed_milestones = serializers.IntegerField()
    progress_percentage = serializers.IntegerField()
    total_weeks = serializers.IntegerField()
    completed_weeks = serializers.IntegerField()
    remaining_weeks = serializers.IntegerField()
    estimated_completion = serializers.DateField()
    next_milestone = serializers.CharField(allow_null=True)


class AdviceSerializer(serializers.Serializer):
    track = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    recommendations = serializers.ListField(child=serializers.CharField())


class RecommendationSerializer(serializers.Serializer):
    category_scores = CategoryScoreSerializer(many=True, allow_null=True)
    top_category = serializers.CharField(allow_null=True)
    job_roles = JobRoleSerializer(many=True)
    roadmap = MilestoneSerializer(many=True)
    advice = AdviceSerializer()


class ProfileRecommendationSerializer(RecommendationSerializer):
    skills = serializers.ListField(child=serializers.CharField())
    roadmap_saved = serializers.BooleanField()


class QuizResultSerializer(serializers.Serializer):
    """A quiz result document, either from the history or the profile."""
    category_scores = CategoryScoreSerializer(many=True, source='categoryScores')
    top_category = serializers.SerializerMethodField()
    completed_at = serializers.DateTimeField(source='completedAt')
    total_questions = serializers.IntegerField(source='totalQuestions')
    answers = serializers.DictField(child=serializers.IntegerField())

    def get_top_category(self, obj):
        return QuizScorer.top_category(obj.get('categoryScores'))


class QuizHistorySerializer(serializers.Serializer):
    id = serializers.CharField()
    results = QuizResultSerializer()
    completed_at = serializers.DateTimeField(source='completedAt')


class ProfileSerializer(serializers.Serializer):
    uid = serializers.CharField(default='')
    email = serializers.CharField(allow_blank=True, default='')
    display_name = serializers.CharField(source='displayName', allow_blank=True, default='')
    skills = serializers.ListField(child=serializers.CharField(), default=list)
    quiz_results = QuizResultSerializer(source='quizResults', allow_null=True, default=None)
    has_roadmap = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(source='createdAt', allow_null=True, default=None)

    def get_has_roadmap(self, obj):
        return bool(obj.get('roadmap'))


class CourseSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    benefit = serializers.CharField(default='')
    hours_per_week = serializers.IntegerField(source='hoursPerWeek', default=0)
    duration = serializers.CharField(default='')
    level = serializers.CharField()
    category = serializers.CharField()
    skills = serializers.ListField(child=serializers.CharField(), default=list)
    instructor = serializers.CharField(default='')
    rating = serializers.FloatField(default=0)
    students_enrolled = serializers.IntegerField(source='studentsEnrolled', default=0)
    price = serializers.FloatField(default=0)
    image_url = serializers.CharField(source='imageUrl', allow_null=True, default=None)
    tags = serializers.ListField(child=serializers.CharField(), default=list)
    relevance_score = serializers.IntegerField(source='relevanceScore', allow_null=True, default=None)


class CourseFilterSerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    level = serializers.ChoiceField(choices=(ALL,) + LEVELS, required=False)


class EnrollmentSerializer(serializers.Serializer):
    id = serializers.CharField()
    course_id = serializers.CharField(source='courseId')
    progress = serializers.IntegerField()
    completed = serializers.BooleanField()
    enrolled_at = serializers.DateTimeField(source='enrolledAt', allow_null=True, default=None)
    last_accessed_at = serializers.DateTimeField(source='lastAccessedAt', allow_null=True, default=None)


class ProgressUpdateSerializer(serializers.Serializer):
    progress = serializers.IntegerField(min_value=0, max_value=100)
