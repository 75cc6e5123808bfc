"""Directory and leaderboard tests for the Campus Vote API."""

import pytest

from campusvote.errors import NotFound, ValidationError
from campusvote.services.directory_service import DirectoryService
from campusvote.utils.cache import TTLCache


@pytest.fixture
def directory(db):
    return DirectoryService(db, professor_cache=TTLCache(ttl_seconds=300))


@pytest.fixture
def tallied_candidates(db, test_candidates):
    """Tallies A=5, B=9, C=2, D=9."""
    for enrollment_number, votes in [('CAND-A', 5), ('CAND-B', 9), ('CAND-C', 2), ('CAND-D', 9)]:
        db.candidates.update_one({'enrollment_number': enrollment_number},
                                 {'$set': {'votes': votes}})
    return test_candidates


class TestCandidates:

    def test_list_candidates_in_insertion_order(self, directory, test_candidates):
        names = [c['name'] for c in directory.list_candidates()]

        assert names == ['Candidate A', 'Candidate B', 'Candidate C', 'Candidate D']

    def test_candidate_shape(self, directory, test_candidates):
        first = directory.list_candidates()[0]

        assert first == {'enrollmentnum': 'CAND-A', 'name': 'Candidate A',
                         'votes': 0, 'imgsrc': None}

    def test_top_three_breaks_ties_by_insertion_order(self, directory, tallied_candidates):
        top = directory.top_candidates(3)

        assert [c['enrollmentnum'] for c in top] == ['CAND-B', 'CAND-D', 'CAND-A']
        assert [c['votes'] for c in top] == [9, 9, 5]

    def test_top_uses_default_limit(self, db, tallied_candidates):
        service = DirectoryService(db, leaderboard_limit=1)

        assert [c['enrollmentnum'] for c in service.top_candidates()] == ['CAND-B']

    def test_top_limit_from_query_string(self, directory, tallied_candidates):
        assert len(directory.top_candidates('2')) == 2

    def test_top_limit_larger_than_pool(self, directory, tallied_candidates):
        assert len(directory.top_candidates(10)) == 4

    @pytest.mark.parametrize('limit', ['0', '-3', 'abc', '51'])
    def test_top_invalid_limit(self, directory, tallied_candidates, limit):
        with pytest.raises(ValidationError):
            directory.top_candidates(limit)


class TestProfessors:

    def test_list_professors(self, directory, db):
        db.professors.insert_one({'name': 'Dr. Nair', 'role': 'HOD', 'image_url': '/images/nair.jpg'})

        assert directory.list_professors() == [
            {'name': 'Dr. Nair', 'role': 'HOD', 'imgsrc': '/images/nair.jpg'}
        ]

    def test_professors_served_from_cache(self, directory, db):
        db.professors.insert_one({'name': 'Dr. Nair', 'role': 'HOD', 'image_url': None})
        directory.list_professors()

        db.professors.insert_one({'name': 'Prof. Rao', 'role': 'Advisor', 'image_url': None})

        assert len(directory.list_professors()) == 1

    def test_invalidate_reloads_professors(self, directory, db):
        db.professors.insert_one({'name': 'Dr. Nair', 'role': 'HOD', 'image_url': None})
        directory.list_professors()
        db.professors.insert_one({'name': 'Prof. Rao', 'role': 'Advisor', 'image_url': None})

        directory.invalidate_professors()

        assert len(directory.list_professors()) == 2


class TestHomeImage:

    def test_home_image(self, directory, db):
        db.home.insert_one({'image_url': '/images/banner.jpg'})

        assert directory.get_home_image() == {'imageUrl': '/images/banner.jpg'}

    def test_home_image_missing(self, directory):
        with pytest.raises(NotFound) as exc:
            directory.get_home_image()
        assert exc.value.message == 'No image found'


class TestTTLCache:
    """Tests for the read-through cache."""

    def test_entry_expires(self):
        now = [100.0]
        cache = TTLCache(ttl_seconds=10, clock=lambda: now[0])
        calls = []

        def loader():
            calls.append(1)
            return len(calls)

        assert cache.get_or_load('k', loader) == 1
        now[0] = 105.0
        assert cache.get_or_load('k', loader) == 1
        now[0] = 111.0
        assert cache.get_or_load('k', loader) == 2

    def test_zero_ttl_disables_caching(self):
        cache = TTLCache(ttl_seconds=0)
        calls = []

        cache.get_or_load('k', lambda: calls.append(1))
        cache.get_or_load('k', lambda: calls.append(1))

        assert len(calls) == 2

    def test_invalidate_all(self):
        cache = TTLCache(ttl_seconds=60)
        cache.get_or_load('a', lambda: 1)
        cache.get_or_load('b', lambda: 2)

        cache.invalidate()

        assert cache.get_or_load('a', lambda: 3) == 3
        assert cache.get_or_load('b', lambda: 4) == 4
