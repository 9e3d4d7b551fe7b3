import pytest
from datetime import datetime, timedelta, timezone

from careers.catalog import DEFAULT_COURSES
from careers.exceptions import EnrollmentNotFound, StoreUnavailable
from careers.stores import CourseCatalog, EnrollmentStore, ProfileStore, ProgressStore, QuizResultStore
from careers.tests.fakes import FakeFirebaseClient, FakeFirestore


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def client(db):
    return FakeFirebaseClient(db=db)


@pytest.mark.unit
def test_profile_upsert_merges(client, db):
    profiles = ProfileStore(client)
    assert profiles.upsert('uid-1', {'skills': ['React']}) is True
    assert profiles.upsert('uid-1', {'roadmap': []}) is True

    stored = db.data['users']['uid-1']
    assert stored['skills'] == ['React']
    assert stored['roadmap'] == []
    assert isinstance(stored['updatedAt'], datetime)
    assert profiles.get('uid-1')['skills'] == ['React']


@pytest.mark.unit
def test_profile_get_missing(client):
    assert ProfileStore(client).get('nobody') is None


@pytest.mark.unit
def test_profile_get_or_create(client, db):
    profiles = ProfileStore(client)
    created = profiles.get_or_create('uid-2', email='a@example.com', display_name='Ada')
    assert created['skills'] == []
    assert db.data['users']['uid-2']['displayName'] == 'Ada'

    profiles.upsert('uid-2', {'skills': ['SQL']})
    assert profiles.get_or_create('uid-2')['skills'] == ['SQL']


@pytest.mark.unit
def test_profile_read_failure_raises(client, db):
    db.fail = True
    with pytest.raises(StoreUnavailable):
        ProfileStore(client).get('uid-1')


@pytest.mark.unit
def test_profile_write_failure_is_reported(client, db):
    db.fail = True
    assert ProfileStore(client).upsert('uid-1', {'skills': []}) is False


@pytest.mark.unit
def test_unconfigured_firebase():
    client = FakeFirebaseClient(configured=False)
    with pytest.raises(StoreUnavailable):
        ProfileStore(client).get('uid-1')
    assert ProfileStore(client).upsert('uid-1', {'skills': []}) is False


@pytest.mark.unit
def test_quiz_results_newest_first(client):
    store = QuizResultStore(client)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    first = store.append('uid-1', {'completedAt': base, 'categoryScores': []})
    second = store.append('uid-1', {'completedAt': base + timedelta(days=1), 'categoryScores': []})
    store.append('uid-2', {'completedAt': base + timedelta(days=2), 'categoryScores': []})

    history = store.list_by_user('uid-1')
    assert [entry['id'] for entry in history] == [second, first]
    assert store.latest('uid-1')['id'] == second
    assert store.latest('uid-3') is None


@pytest.mark.unit
def test_quiz_append_failure_returns_none(client, db):
    db.fail = True
    assert QuizResultStore(client).append('uid-1', {'categoryScores': []}) is None


@pytest.mark.unit
def test_enrollment_set_and_update(client, db):
    store = EnrollmentStore(client)
    assert store.set('uid-1', '3') is True
    assert 'uid-1_3' in db.data['courseEnrollments']

    assert store.update_progress('uid-1', '3', 100) is True
    enrollment = store.list_by_user('uid-1')[0]
    assert enrollment['courseId'] == '3'
    assert enrollment['progress'] == 100
    assert enrollment['completed'] is True


@pytest.mark.unit
def test_enrollment_set_overwrites(client):
    store = EnrollmentStore(client)
    store.set('uid-1', '3')
    store.update_progress('uid-1', '3', 40)
    store.set('uid-1', '3')
    assert store.list_by_user('uid-1')[0]['progress'] == 0


@pytest.mark.unit
def test_update_progress_without_enrollment(client):
    with pytest.raises(EnrollmentNotFound):
        EnrollmentStore(client).update_progress('uid-1', '3', 10)


@pytest.mark.unit
def test_course_catalog_falls_back_to_defaults(client, db):
    catalog = CourseCatalog(client)
    assert len(catalog.list_all()) == len(DEFAULT_COURSES)
    assert catalog.get('2')['title'] == 'Python for Data Science'
    assert catalog.get('99') is None

    db.fail = True
    assert len(catalog.list_all()) == len(DEFAULT_COURSES)


@pytest.mark.unit
def test_course_catalog_seed(client, db):
    catalog = CourseCatalog(client)
    assert catalog.seed() == len(DEFAULT_COURSES)
    assert catalog.seed() == 0
    assert catalog.seed(force=True) == len(DEFAULT_COURSES)

    stored = db.data['courses']['1']
    assert 'id' not in stored
    assert catalog.get('1')['id'] == '1'


@pytest.mark.unit
def test_catalog_prefers_stored_courses(client):
    catalog = CourseCatalog(client)
    catalog.seed([{'id': 'x', 'title': 'Only', 'description': '', 'level': 'Beginner', 'category': 'Misc'}])
    assert [course['id'] for course in catalog.list_all()] == ['x']


@pytest.mark.unit
def test_progress_store(client, db):
    assert ProgressStore(client).record_milestone_completion('uid-1', {'id': 'cert', 'title': 'Cert'}) is True
    assert db.data['milestoneCompletions']['uid-1_cert']['milestoneId'] == 'cert'


@pytest.mark.unit
def test_course_catalog_add(client, db):
    catalog = CourseCatalog(client)
    course_id = catalog.add({'title': 'Rust Systems', 'description': '', 'level': 'Advanced', 'category': 'Systems'})
    assert course_id in db.data['courses']
    assert catalog.get(course_id)['title'] == 'Rust Systems'

    db.fail = True
    assert catalog.add({'title': 'Offline'}) is None


@pytest.mark.unit
def test_get_or_create_fills_identity_on_merged_profile(client, db):
    profiles = ProfileStore(client)
    profiles.upsert('uid-3', {'skills': ['Go']})

    profile = profiles.get_or_create('uid-3', email='g@example.com', display_name='Gopher')

    assert profile['uid'] == 'uid-3'
    assert profile['email'] == 'g@example.com'
    assert profile['skills'] == ['Go']
    stored = db.data['users']['uid-3']
    assert stored['displayName'] == 'Gopher'
    assert stored['skills'] == ['Go']
