import logging

from pymongo.errors import DuplicateKeyError, PyMongoError

from campusvote.errors import ValidationError, AlreadyVoted, NotFound
from campusvote.models.candidate import Candidate
from campusvote.models.vote import Vote
from campusvote.utils.validators import normalize_email, sanitize_input

# Child of the Flask app logger ("campusvote"), so records share its handlers
logger = logging.getLogger(__name__)


class VoteService:
    """Service for casting votes and keeping candidate tallies.

    One vote per email is enforced by the unique index on ``votes.email``:
    the insert itself is the check, so concurrent requests for the same
    email cannot both succeed.
    """

    def __init__(self, db):
        self.db = db

    def cast_vote(self, email: str, enrollment_number: str) -> str:
        """Record a vote and add it to the candidate's tally.

        Args:
            email: The voter's email
            enrollment_number: The candidate being voted for

        Returns: success message
        """
        email = normalize_email(email)
        # Clients may send enrollment numbers as JSON numbers
        if isinstance(enrollment_number, int) and not isinstance(enrollment_number, bool):
            enrollment_number = str(enrollment_number)
        elif enrollment_number is not None and not isinstance(enrollment_number, str):
            raise ValidationError("Candidate must be an enrollment number")
        enrollment_number = sanitize_input(enrollment_number)

        if not email or not enrollment_number:
            raise ValidationError("Email and candidate are required")

        if not Candidate.find_by_enrollment_number(self.db, enrollment_number):
            raise NotFound("Candidate not found")

        try:
            Vote(email=email, enrollment_number=enrollment_number).save(self.db)
        except DuplicateKeyError:
            raise AlreadyVoted()

        # The vote is already durable; a failed increment only leaves the
        # tally behind the vote log until rebuild_tallies runs.
        try:
            if not Candidate.increment_votes(self.db, enrollment_number):
                logger.error(f"Tally for candidate {enrollment_number} was not incremented")
        except PyMongoError as e:
            logger.error(f"Failed to increment tally for {enrollment_number}: {str(e)}")

        return "Vote successful"

    def has_voted(self, email: str) -> bool:
        """Check whether a vote exists for this email."""
        email = normalize_email(email)
        if not email:
            return False
        return Vote.exists_for_email(self.db, email)

    def rebuild_tallies(self) -> dict:
        """Recount every candidate's tally from the vote log.

        Returns: {'candidates_updated': int, 'total_votes': int}
        """
        counts = Vote.count_by_candidate(self.db)
        changed = Candidate.set_tallies(self.db, counts)

        unknown = set(counts) - {c.enrollment_number for c in Candidate.get_all(self.db)}
        if unknown:
            logger.warning(f"Votes reference unknown candidates: {sorted(unknown)}")

        if changed:
            logger.info(f"Rebuilt tallies for {changed} candidates")

        return {
            'candidates_updated': changed,
            'total_votes': sum(counts.values())
        }
