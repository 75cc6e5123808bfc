"""MongoDB connection handle shared by all services."""
from pymongo import MongoClient

from campusvote.errors import StoreUnavailable


class MongoStore:
    """Owns the process-wide MongoClient and the application database.

    Created once by the application factory and handed to each service.
    Lifecycle: ``connect()`` -> serve -> ``close()``.
    """

    def __init__(self, uri: str, database_name: str, timeout_ms: int = 5000):
        self.uri = uri
        self.database_name = database_name
        self.timeout_ms = timeout_ms
        self.client = None
        self.db = None

    @classmethod
    def from_config(cls, config):
        """Build a store from a Flask config mapping."""
        return cls(
            uri=config['MONGODB_URI'],
            database_name=config['DATABASE_NAME'],
            timeout_ms=config.get('STORE_TIMEOUT_MS', 5000)
        )

    def connect(self):
        """Open the client and verify the server answers."""
        client = None
        try:
            client = MongoClient(
                self.uri,
                serverSelectionTimeoutMS=self.timeout_ms,
                connectTimeoutMS=self.timeout_ms,
                socketTimeoutMS=self.timeout_ms
            )
            # Verify connection works
            client.admin.command('ping')
        except Exception as e:
            if client is not None:
                client.close()
            raise StoreUnavailable(f"Could not connect to MongoDB: {str(e)}") from e

        self.client = client
        self.db = self.client[self.database_name]
        return self.db

    def ensure_indexes(self):
        """Create the indexes the services rely on."""
        db = self.db

        # Unique email is what makes signup and vote casting race-free
        db.students.create_index('email', unique=True)
        db.votes.create_index('email', unique=True)
        db.votes.create_index('enrollment_number')

        db.candidates.create_index('enrollment_number', unique=True)
        db.candidates.create_index([('votes', -1), ('_id', 1)])

        db.otp_challenges.create_index('email')

        # Rate limiting collection indexes
        db.rate_limits.create_index('key', unique=True)
        db.rate_limits.create_index('last_attempt', expireAfterSeconds=86400)  # TTL: 24 hours

    def close(self):
        """Close the client. Safe to call more than once."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None
