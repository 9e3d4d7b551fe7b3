"""
URL configuration for the careers API.
"""
from django.urls import path
from careers import views

urlpatterns = [
    # Profile and skills
    path('profile', views.profile_detail, name='profile-detail'),
    path('profile/skills', views.profile_skills, name='profile-skills'),
    path('skills/suggestions', views.skill_suggestions, name='skill-suggestions'),
    path('skills/taxonomy', views.skill_taxonomy, name='skill-taxonomy'),

    # Aptitude quiz
    path('quiz/questions', views.quiz_questions, name='quiz-questions'),
    path('quiz/submit', views.quiz_submit, name='quiz-submit'),
    path('quiz/results', views.quiz_results, name='quiz-results'),

    # Recommendations
    path('recommendations/preview', views.recommendations_preview, name='recommendations-preview'),
    path('recommendations', views.profile_recommendations, name='recommendations'),
    path('job-roles', views.job_roles, name='job-roles'),

    # Roadmap
    path('roadmap', views.roadmap_detail, name='roadmap-detail'),
    path('roadmap/milestones/<str:milestone_id>/complete', views.roadmap_milestone_complete, name='roadmap-milestone-complete'),
    path(
        'roadmap/milestones/<str:milestone_id>/checkpoints/<str:checkpoint_id>/complete',
        views.roadmap_checkpoint_complete,
        name='roadmap-checkpoint-complete',
    ),

    # Courses
    path('courses', views.courses_list, name='courses-list'),
    path('courses/recommended', views.courses_recommended, name='courses-recommended'),
    path('courses/<str:course_id>/enroll', views.course_enroll, name='course-enroll'),
    path('courses/<str:course_id>/progress', views.course_progress, name='course-progress'),
    path('enrollments', views.enrollments_list, name='enrollments-list'),
]
