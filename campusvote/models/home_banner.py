class HomeBanner:
    """The single banner image shown on the home page."""

    collection_name = 'home'

    def __init__(self, image_url: str, _id=None):
        self._id = _id
        self.image_url = image_url

    @classmethod
    def from_dict(cls, data: dict):
        if not data:
            return None
        return cls(image_url=data.get('image_url'), _id=data.get('_id'))

    @classmethod
    def get(cls, db):
        """Return the banner document, or None if none is configured."""
        return cls.from_dict(db[cls.collection_name].find_one({}))

    @classmethod
    def set(cls, db, image_url: str):
        """Replace the banner image."""
        db[cls.collection_name].delete_many({})
        result = db[cls.collection_name].insert_one({'image_url': image_url})
        return cls(image_url=image_url, _id=result.inserted_id)
