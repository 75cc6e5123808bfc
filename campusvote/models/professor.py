class Professor:
    """Faculty directory entry. Read-only for this application."""

    collection_name = 'professors'

    def __init__(self, name: str, role: str, image_url: str = None, _id=None):
        self._id = _id
        self.name = name
        self.role = role
        self.image_url = image_url

    def to_dict(self) -> dict:
        data = {
            'name': self.name,
            'role': self.role,
            'image_url': self.image_url
        }
        if self._id:
            data['_id'] = self._id
        return data

    @classmethod
    def from_dict(cls, data: dict):
        if not data:
            return None
        return cls(
            name=data.get('name'),
            role=data.get('role'),
            image_url=data.get('image_url'),
            _id=data.get('_id')
        )

    def to_public(self) -> dict:
        return {
            'name': self.name,
            'role': self.role,
            'imgsrc': self.image_url
        }

    @classmethod
    def get_all(cls, db):
        """All professors, projected to the public fields."""
        cursor = db[cls.collection_name].find({}, {'name': 1, 'role': 1, 'image_url': 1})
        return [cls.from_dict(p) for p in cursor]
