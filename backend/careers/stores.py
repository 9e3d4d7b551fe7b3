"""
Firestore-backed boundary stores.

Each store wraps one collection. Reads raise StoreUnavailable when Firestore
is unreachable or not configured, because callers cannot continue without the
data. Writes log the failure and return False (or None for created ids) so a
computed result can still be shown with its save marked as degraded.
"""
import logging
from typing import Any, Dict, List, Optional

from django.utils import timezone
from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from careers.catalog import DEFAULT_COURSES
from careers.exceptions import EnrollmentNotFound, StoreUnavailable

logger = logging.getLogger(__name__)


class FirestoreStore:
    collection_name: str = ''

    def __init__(self, firebase):
        self.firebase = firebase

    def _collection(self):
        db = self.firebase.db
        if db is None:
            raise StoreUnavailable('Firestore is not configured.')
        return db.collection(self.collection_name)

    @staticmethod
    def _snapshot_to_dict(snapshot) -> Dict[str, Any]:
        return {'id': snapshot.id, **(snapshot.to_dict() or {})}

    def _read_failed(self, action: str, error: Exception):
        logger.error(f"Firestore read failed ({self.collection_name}.{action}): {error}")
        return StoreUnavailable()


class ProfileStore(FirestoreStore):
    """User profile documents keyed by Firebase uid, written with merge semantics."""
    collection_name = 'users'

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            snapshot = self._collection().document(user_id).get()
        except google_exceptions.GoogleAPICallError as e:
            raise self._read_failed('get', e)
        return snapshot.to_dict() if snapshot.exists else None

    def upsert(self, user_id: str, partial_profile: Dict[str, Any]) -> bool:
        """Merge the given fields into the profile; untouched fields are kept."""
        data = dict(partial_profile)
        data['updatedAt'] = firestore.SERVER_TIMESTAMP
        try:
            self._collection().document(user_id).set(data, merge=True)
            return True
        except (StoreUnavailable, google_exceptions.GoogleAPICallError) as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            return False

    def get_or_create(self, user_id: str, email: str = '', display_name: str = '') -> Dict[str, Any]:
        """
        Return the profile, creating it or filling in missing identity fields.

        Merge writes elsewhere can create the document before the user ever
        loads their profile, so identity fields may be absent.
        """
        profile = self.get(user_id) or {}
        defaults = {
            'uid': user_id,
            'email': email or '',
            'displayName': display_name or '',
            'skills': [],
            'createdAt': timezone.now(),
        }
        missing = {key: value for key, value in defaults.items() if key not in profile}
        if not missing:
            return profile

        try:
            self._collection().document(user_id).set(missing, merge=True)
            logger.info(f"Filled profile fields {sorted(missing)} for {user_id}")
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error creating profile {user_id}: {e}")
        return {**profile, **missing}


class QuizResultStore(FirestoreStore):
    """Append-only quiz history."""
    collection_name = 'quizResults'

    def append(self, user_id: str, results: Dict[str, Any]) -> Optional[str]:
        try:
            _, doc_ref = self._collection().add({
                'userId': user_id,
                'results': results,
                'completedAt': results.get('completedAt') or timezone.now(),
                'createdAt': firestore.SERVER_TIMESTAMP,
            })
            return doc_ref.id
        except (StoreUnavailable, google_exceptions.GoogleAPICallError) as e:
            logger.error(f"Error saving quiz results for {user_id}: {e}")
            return None

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Quiz results for a user, newest first."""
        query = (
            self._collection()
            .where(filter=FieldFilter('userId', '==', user_id))
            .order_by('completedAt', direction=firestore.Query.DESCENDING)
        )
        if limit:
            query = query.limit(limit)
        try:
            return [self._snapshot_to_dict(snapshot) for snapshot in query.stream()]
        except google_exceptions.GoogleAPICallError as e:
            raise self._read_failed('list_by_user', e)

    def latest(self, user_id: str) -> Optional[Dict[str, Any]]:
        results = self.list_by_user(user_id, limit=1)
        return results[0] if results else None


class EnrollmentStore(FirestoreStore):
    """Course enrollments, one document per (user, course)."""
    collection_name = 'courseEnrollments'

    @staticmethod
    def document_id(user_id: str, course_id: str) -> str:
        return f"{user_id}_{course_id}"

    def set(self, user_id: str, course_id: str, progress: int = 0, completed: bool = False) -> bool:
        try:
            self._collection().document(self.document_id(user_id, course_id)).set({
                'userId': user_id,
                'courseId': course_id,
                'enrolledAt': firestore.SERVER_TIMESTAMP,
                'progress': progress,
                'completed': completed,
                'lastAccessedAt': firestore.SERVER_TIMESTAMP,
            })
            return True
        except (StoreUnavailable, google_exceptions.GoogleAPICallError) as e:
            logger.error(f"Error enrolling {user_id} in course {course_id}: {e}")
            return False

    def update_progress(self, user_id: str, course_id: str, progress: int) -> bool:
        try:
            self._collection().document(self.document_id(user_id, course_id)).update({
                'progress': progress,
                'completed': progress >= 100,
                'lastAccessedAt': firestore.SERVER_TIMESTAMP,
            })
            return True
        except google_exceptions.NotFound:
            raise EnrollmentNotFound()
        except (StoreUnavailable, google_exceptions.GoogleAPICallError) as e:
            logger.error(f"Error updating progress for {user_id} in course {course_id}: {e}")
            return False

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        query = self._collection().where(filter=FieldFilter('userId', '==', user_id))
        try:
            return [self._snapshot_to_dict(snapshot) for snapshot in query.stream()]
        except google_exceptions.GoogleAPICallError as e:
            raise self._read_failed('list_by_user', e)


class CourseCatalog(FirestoreStore):
    """Course templates; the default catalog stands in while the collection is empty."""
    collection_name = 'courses'

    def list_all(self) -> List[Dict[str, Any]]:
        try:
            courses = [self._snapshot_to_dict(snapshot) for snapshot in self._collection().stream()]
        except (StoreUnavailable, google_exceptions.GoogleAPICallError) as e:
            logger.warning(f"Falling back to default courses: {e}")
            courses = []
        if not courses:
            return [dict(course) for course in DEFAULT_COURSES]
        return courses

    def get(self, course_id: str) -> Optional[Dict[str, Any]]:
        for course in self.list_all():
            if str(course.get('id')) == str(course_id):
                return course
        return None

    def add(self, course: Dict[str, Any]) -> Optional[str]:
        """Add a course under an auto-generated id; returns the id or None if the write failed."""
        data = {key: value for key, value in course.items() if key != 'id'}
        data['createdAt'] = firestore.SERVER_TIMESTAMP
        data['updatedAt'] = firestore.SERVER_TIMESTAMP
        try:
            _, doc_ref = self._collection().add(data)
            return doc_ref.id
        except (StoreUnavailable, google_exceptions.GoogleAPICallError) as e:
            logger.error(f"Error adding course '{course.get('title')}': {e}")
            return None

    def seed(self, courses: Optional[List[Dict[str, Any]]] = None, force: bool = False) -> int:
        """
        Write courses using their id as document id.

        Existing documents are skipped unless `force` is set. Returns the
        number of documents written.
        """
        written = 0
        collection = self._collection()
        for course in courses if courses is not None else DEFAULT_COURSES:
            data = {key: value for key, value in course.items() if key != 'id'}
            doc_ref = collection.document(str(course['id']))
            if not force and doc_ref.get().exists:
                continue
            data['createdAt'] = firestore.SERVER_TIMESTAMP
            data['updatedAt'] = firestore.SERVER_TIMESTAMP
            doc_ref.set(data)
            written += 1
        return written


class ProgressStore(FirestoreStore):
    """Milestone completion log, one document per (user, milestone)."""
    collection_name = 'milestoneCompletions'

    def record_milestone_completion(self, user_id: str, milestone_document: Dict[str, Any]) -> bool:
        milestone_id = milestone_document.get('id')
        try:
            self._collection().document(f"{user_id}_{milestone_id}").set({
                'userId': user_id,
                'milestoneId': milestone_id,
                'milestone': milestone_document,
                'completedAt': firestore.SERVER_TIMESTAMP,
            })
            return True
        except (StoreUnavailable, google_exceptions.GoogleAPICallError) as e:
            logger.error(f"Error recording milestone {milestone_id} for {user_id}: {e}")
            return False
