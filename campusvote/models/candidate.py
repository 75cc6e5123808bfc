"""Candidate model holding the running vote tally."""


class Candidate:
    """A student standing for election, keyed by enrollment number."""

    collection_name = 'candidates'

    def __init__(self, enrollment_number: str, name: str, votes: int = 0,
                 image_url: str = None, _id=None):
        self._id = _id
        self.enrollment_number = enrollment_number
        self.name = name
        self.votes = votes
        self.image_url = image_url

    def to_dict(self) -> dict:
        """Convert candidate to dictionary."""
        data = {
            'enrollment_number': self.enrollment_number,
            'name': self.name,
            'votes': self.votes,
            'image_url': self.image_url
        }
        if self._id:
            data['_id'] = self._id
        return data

    @classmethod
    def from_dict(cls, data: dict):
        """Create Candidate from dictionary."""
        if not data:
            return None
        return cls(
            enrollment_number=data.get('enrollment_number'),
            name=data.get('name'),
            votes=data.get('votes', 0),
            image_url=data.get('image_url'),
            _id=data.get('_id')
        )

    def to_public(self) -> dict:
        """JSON shape served by the candidate listings."""
        return {
            'enrollmentnum': self.enrollment_number,
            'name': self.name,
            'votes': self.votes,
            'imgsrc': self.image_url
        }

    def save(self, db):
        """Save candidate to database."""
        if self._id:
            db[self.collection_name].update_one(
                {'_id': self._id},
                {'$set': self.to_dict()}
            )
        else:
            result = db[self.collection_name].insert_one(self.to_dict())
            self._id = result.inserted_id
        return self

    @classmethod
    def create(cls, db, enrollment_number: str, name: str, image_url: str = None):
        """Create and save a new candidate with an empty tally."""
        candidate = cls(enrollment_number=enrollment_number, name=name, image_url=image_url)
        return candidate.save(db)

    @classmethod
    def find_by_enrollment_number(cls, db, enrollment_number: str):
        """Find candidate by enrollment number."""
        data = db[cls.collection_name].find_one({'enrollment_number': enrollment_number})
        return cls.from_dict(data)

    @classmethod
    def get_all(cls, db):
        """Get all candidates in natural (insertion) order."""
        return [cls.from_dict(c) for c in db[cls.collection_name].find()]

    @classmethod
    def get_top(cls, db, limit: int):
        """Get the highest-voted candidates.

        Ties keep insertion order (ObjectIds increase over time).
        """
        cursor = db[cls.collection_name].find().sort(
            [('votes', -1), ('_id', 1)]
        ).limit(limit)
        return [cls.from_dict(c) for c in cursor]

    @classmethod
    def increment_votes(cls, db, enrollment_number: str) -> bool:
        """Atomically add one vote to a candidate's tally."""
        result = db[cls.collection_name].update_one(
            {'enrollment_number': enrollment_number},
            {'$inc': {'votes': 1}}
        )
        return result.modified_count == 1

    @classmethod
    def set_tallies(cls, db, counts: dict) -> int:
        """Overwrite every tally from a {enrollment_number: count} mapping.

        Candidates missing from counts are reset to zero.

        Returns: number of candidates whose tally changed
        """
        changed = 0
        for data in db[cls.collection_name].find():
            expected = counts.get(data.get('enrollment_number'), 0)
            if data.get('votes', 0) != expected:
                db[cls.collection_name].update_one(
                    {'_id': data['_id']},
                    {'$set': {'votes': expected}}
                )
                changed += 1
        return changed
