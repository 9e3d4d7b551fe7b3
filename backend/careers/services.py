"""
Service container for the careers app.

Built once by CareersConfig.ready() around a single FirebaseClient. Views and
the authentication class look collaborators up here.
"""
from dataclasses import dataclass

from django.apps import apps

from careers.firebase_utils import FirebaseClient
from careers.recommendations import RecommendationService
from careers.stores import CourseCatalog, EnrollmentStore, ProfileStore, ProgressStore, QuizResultStore


@dataclass
class CareerServices:
    firebase: FirebaseClient
    profiles: ProfileStore
    quiz_results: QuizResultStore
    enrollments: EnrollmentStore
    courses: CourseCatalog
    progress: ProgressStore
    recommendations: RecommendationService

    @classmethod
    def build(cls, firebase) -> 'CareerServices':
        profiles = ProfileStore(firebase)
        quiz_results = QuizResultStore(firebase)
        progress = ProgressStore(firebase)
        return cls(
            firebase=firebase,
            profiles=profiles,
            quiz_results=quiz_results,
            enrollments=EnrollmentStore(firebase),
            courses=CourseCatalog(firebase),
            progress=progress,
            recommendations=RecommendationService(profiles, quiz_results, progress),
        )

    def close(self) -> None:
        self.firebase.close()


def get_services() -> CareerServices:
    return apps.get_app_config('careers').services
