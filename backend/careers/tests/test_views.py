from django.apps import apps
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from careers.services import CareerServices
from careers.tests.fakes import FakeFirebaseClient, FakeFirestore

User = get_user_model()


class CareersAPITestCase(APITestCase):
    """Base case with an in-memory Firestore and an authenticated Firebase user."""

    def setUp(self):
        self.db = FakeFirestore()
        config = apps.get_app_config('careers')
        original = config.services
        config.services = CareerServices.build(FakeFirebaseClient(db=self.db))
        self.addCleanup(setattr, config, 'services', original)

        self.user = User.objects.create_user(username='uid-123', email='test@example.com', first_name='Test')
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def profile_doc(self):
        return self.db.data.get('users', {}).get('uid-123')


class ProfileSkillsTests(CareersAPITestCase):

    def test_profile_created_on_first_visit(self):
        response = self.client.get('/api/profile')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['uid'], 'uid-123')
        self.assertEqual(response.data['skills'], [])
        self.assertFalse(response.data['has_roadmap'])
        self.assertIsNotNone(self.profile_doc())

    def test_profile_after_skills_saved_first(self):
        self.client.put('/api/profile/skills', {'skills': ['React']}, format='json')
        response = self.client.get('/api/profile')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['uid'], 'uid-123')
        self.assertEqual(response.data['email'], 'test@example.com')
        self.assertEqual(response.data['skills'], ['React'])

    def test_profile_after_roadmap_generated_first(self):
        self.client.get('/api/roadmap')
        response = self.client.get('/api/profile')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['has_roadmap'])
        self.assertEqual(self.profile_doc()['uid'], 'uid-123')

    def test_update_skills_normalizes(self):
        response = self.client.put(
            '/api/profile/skills',
            {'skills': [' React ', 'React', '', 'SQL']},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['skills'], ['React', 'SQL'])
        self.assertTrue(response.data['saved'])
        self.assertEqual(self.profile_doc()['skills'], ['React', 'SQL'])

        response = self.client.get('/api/profile/skills')
        self.assertEqual(response.data['skills'], ['React', 'SQL'])

    def test_too_many_skills_rejected(self):
        response = self.client.put(
            '/api/profile/skills',
            {'skills': [f'skill-{n}' for n in range(101)]},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'validation_error')

    def test_skill_save_failure_is_degraded(self):
        self.db.fail = True
        response = self.client.put('/api/profile/skills', {'skills': ['React']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['saved'])

    def test_store_down_on_read(self):
        self.db.fail = True
        response = self.client.get('/api/profile')
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['error']['code'], 'store_unavailable')

    def test_suggestions_exclude_profile_skills(self):
        self.client.put('/api/profile/skills', {'skills': ['React']}, format='json')
        response = self.client.get('/api/skills/suggestions')
        self.assertNotIn('React', response.data['suggestions'])
        self.assertIn('Python', response.data['suggestions'])

    def test_taxonomy_is_public(self):
        response = APIClient().get('/api/skills/taxonomy')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('Figma', response.data['clusters']['design'])

    def test_requires_authentication(self):
        response = APIClient().get('/api/profile')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class QuizTests(CareersAPITestCase):

    def test_questions_are_public(self):
        response = APIClient().get('/api/quiz/questions')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['questions']), 8)
        self.assertEqual(len(response.data['categories']), 5)

    def test_submit_quiz(self):
        answers = [{'question': n, 'option': 0} for n in range(8)]
        response = self.client.post('/api/quiz/submit', {'answers': answers}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['saved'])
        scores = {entry['category']: entry['score'] for entry in response.data['results']['category_scores']}
        self.assertEqual(scores['technical'], 38)
        self.assertEqual(scores['analytical'], 25)
        self.assertEqual(response.data['results']['top_category'], 'technical')
        self.assertIn('quizResults', self.profile_doc())

    def test_submit_quiz_last_answer_wins(self):
        answers = [{'question': 0, 'option': 1}, {'question': 0, 'option': 3}]
        response = self.client.post('/api/quiz/submit', {'answers': answers}, format='json')
        self.assertEqual(response.data['results']['answers'], {'0': 3})

    def test_submit_quiz_rejects_unknown_question(self):
        response = self.client.post('/api/quiz/submit', {'answers': [{'question': 8, 'option': 0}]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_submit_quiz_degraded(self):
        self.db.fail = True
        response = self.client.post('/api/quiz/submit', {'answers': [{'question': 0, 'option': 0}]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['saved'])
        self.assertIsNone(response.data['id'])

    def test_quiz_history(self):
        self.client.post('/api/quiz/submit', {'answers': [{'question': 0, 'option': 0}]}, format='json')
        self.client.post('/api/quiz/submit', {'answers': [{'question': 1, 'option': 0}]}, format='json')

        response = self.client.get('/api/quiz/results')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        answers = [entry['results']['answers'] for entry in response.data]
        self.assertCountEqual(answers, [{'0': 0}, {'1': 0}])


class RecommendationTests(CareersAPITestCase):

    def test_preview_is_public_and_stateless(self):
        response = APIClient().post(
            '/api/recommendations/preview',
            {'skills': ['React', 'Node.js', 'SQL', 'Git', 'JavaScript']},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['category_scores'])
        self.assertEqual(response.data['job_roles'][0]['title'], 'Full-Stack Developer')
        self.assertEqual(response.data['job_roles'][0]['match_percentage'], 100)
        self.assertEqual(len(response.data['roadmap']), 4)
        self.assertEqual(self.db.data, {})

    def test_preview_with_answers(self):
        response = self.client.post(
            '/api/recommendations/preview',
            {'skills': ['Figma'], 'answers': [{'question': 4, 'option': 1}]},
            format='json',
        )
        self.assertEqual(response.data['top_category'], 'creative')
        self.assertEqual(response.data['advice']['track'], 'General Tech')

    def test_profile_recommendations(self):
        self.client.put('/api/profile/skills', {'skills': ['Figma', 'React']}, format='json')
        response = self.client.get('/api/recommendations')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['skills'], ['Figma', 'React'])
        self.assertEqual(response.data['advice']['track'], 'Full-Stack Designer')
        self.assertTrue(response.data['roadmap_saved'])

    def test_job_roles(self):
        self.client.put('/api/profile/skills', {'skills': ['Figma']}, format='json')
        response = self.client.get('/api/job-roles')
        titles = [role['title'] for role in response.data['job_roles']]
        self.assertEqual(titles, ['UI/UX Designer', 'Software Engineer', 'Product Manager'])


class RoadmapTests(CareersAPITestCase):

    def test_roadmap_generated_once(self):
        self.client.put('/api/profile/skills', {'skills': ['Python', 'SQL']}, format='json')

        first = self.client.get('/api/roadmap')
        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertTrue(first.data['generated'])
        self.assertEqual(first.data['roadmap'][0]['title'], 'Advanced Python for Data Science')
        self.assertEqual(first.data['stats']['total_milestones'], 4)

        self.client.put('/api/profile/skills', {'skills': ['Figma', 'React']}, format='json')
        second = self.client.get('/api/roadmap')
        self.assertFalse(second.data['generated'])
        self.assertEqual(second.data['roadmap'][0]['title'], 'Advanced Python for Data Science')

    def test_delete_roadmap_regenerates(self):
        self.client.get('/api/roadmap')
        self.client.put('/api/profile/skills', {'skills': ['Figma', 'React']}, format='json')

        response = self.client.delete('/api/roadmap')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.get('/api/roadmap')
        self.assertTrue(response.data['generated'])
        self.assertEqual(response.data['roadmap'][0]['title'], 'Advanced React Patterns')

    def test_complete_milestone(self):
        self.client.get('/api/roadmap')
        response = self.client.post('/api/roadmap/milestones/1/complete')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['roadmap'][0]['completed'])
        self.assertIsNotNone(response.data['roadmap'][0]['completed_at'])
        self.assertEqual(response.data['stats']['completed_milestones'], 1)
        self.assertEqual(response.data['stats']['progress_percentage'], 25)
        self.assertTrue(self.profile_doc()['roadmap'][0]['completed'])

    def test_complete_unknown_milestone(self):
        response = self.client.post('/api/roadmap/milestones/missing/complete')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'milestone_not_found')

    def test_complete_checkpoint(self):
        response = self.client.post('/api/roadmap/milestones/cert/checkpoints/cert-1/complete')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['roadmap'][-1]['checkpoints'][0]['completed'])

        response = self.client.post('/api/roadmap/milestones/cert/checkpoints/1-1/complete')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class CourseTests(CareersAPITestCase):

    def test_list_courses_with_filters(self):
        response = APIClient().get('/api/courses', {'level': 'Beginner'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 3)
        self.assertEqual(response.data['categories'][0], 'All')
        self.assertIn('hours_per_week', response.data['courses'][0])

    def test_invalid_level(self):
        response = self.client.get('/api/courses', {'level': 'Expert'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_recommended_courses(self):
        self.client.put('/api/profile/skills', {'skills': ['Python']}, format='json')
        response = self.client.get('/api/courses/recommended')

        titles = [course['title'] for course in response.data['courses']]
        self.assertEqual(titles, ['Python for Data Science', 'Machine Learning Fundamentals'])
        self.assertEqual(response.data['courses'][0]['relevance_score'], 1)

    def test_enroll_and_progress(self):
        response = self.client.post('/api/courses/2/enroll')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.patch('/api/courses/2/progress', {'progress': 100}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['completed'])

        response = self.client.get('/api/enrollments')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['course_id'], '2')
        self.assertEqual(response.data[0]['progress'], 100)

    def test_enroll_unknown_course(self):
        response = self.client.post('/api/courses/99/enroll')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'course_not_found')

    def test_progress_without_enrollment(self):
        response = self.client.patch('/api/courses/2/progress', {'progress': 10}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'enrollment_not_found')

    def test_progress_out_of_range(self):
        self.client.post('/api/courses/2/enroll')
        response = self.client.patch('/api/courses/2/progress', {'progress': 150}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
