from datetime import datetime


class Vote:
    """Vote record: one per student email, naming the chosen candidate.

    The votes collection is the source of truth for tallies. The unique
    index on ``email`` is what guarantees a single vote per student.
    """

    collection_name = 'votes'

    def __init__(self, email: str, enrollment_number: str,
                 cast_at: datetime = None, _id=None):
        self._id = _id
        self.email = email
        self.enrollment_number = enrollment_number  # Candidate voted for
        self.cast_at = cast_at or datetime.utcnow()

    def to_dict(self) -> dict:
        """Convert vote to dictionary."""
        data = {
            'email': self.email,
            'enrollment_number': self.enrollment_number,
            'cast_at': self.cast_at
        }
        if self._id:
            data['_id'] = self._id
        return data

    @classmethod
    def from_dict(cls, data: dict):
        """Create Vote from dictionary."""
        if not data:
            return None
        return cls(
            email=data.get('email'),
            enrollment_number=data.get('enrollment_number'),
            cast_at=data.get('cast_at'),
            _id=data.get('_id')
        )

    def save(self, db):
        """Insert the vote.

        Raises pymongo's DuplicateKeyError if this email already voted.
        """
        result = db[self.collection_name].insert_one(self.to_dict())
        self._id = result.inserted_id
        return self

    @classmethod
    def exists_for_email(cls, db, email: str) -> bool:
        return db[cls.collection_name].find_one({'email': email}, {'_id': 1}) is not None

    @classmethod
    def count_by_candidate(cls, db) -> dict:
        """Count votes per candidate enrollment number."""
        pipeline = [
            {'$group': {'_id': '$enrollment_number', 'count': {'$sum': 1}}}
        ]
        results = db[cls.collection_name].aggregate(pipeline)
        return {r['_id']: r['count'] for r in results}
