"""OTP challenge tests for the Campus Vote API."""

import pytest
from datetime import datetime, timedelta

from campusvote.errors import InvalidOtp, MailDeliveryError, OtpExpired, ValidationError


class TestRequestOtp:
    """Tests for issuing signup codes."""

    def test_code_is_six_digits(self, otp_service, sent_codes):
        otp_service.request_otp('a@college.edu')

        email, code = sent_codes[-1]
        assert email == 'a@college.edu'
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999

    def test_response_does_not_contain_code(self, otp_service, sent_codes):
        message = otp_service.request_otp('a@college.edu')

        _, code = sent_codes[-1]
        assert code not in message

    def test_challenge_is_stored(self, otp_service, sent_codes, db):
        otp_service.request_otp('a@college.edu')

        stored = db.otp_challenges.find_one({'email': 'a@college.edu'})
        assert stored['code'] == sent_codes[-1][1]
        assert isinstance(stored['created_at'], datetime)

    def test_second_request_replaces_first(self, otp_service, sent_codes, db):
        """Test that at most one challenge exists per email."""
        otp_service.request_otp('a@college.edu')
        otp_service.request_otp('a@college.edu')

        assert db.otp_challenges.count_documents({'email': 'a@college.edu'}) == 1
        stored = db.otp_challenges.find_one({'email': 'a@college.edu'})
        assert stored['code'] == sent_codes[-1][1]

    def test_missing_email_rejected(self, otp_service, sent_codes):
        with pytest.raises(ValidationError):
            otp_service.request_otp('')
        with pytest.raises(ValidationError):
            otp_service.request_otp(None)
        assert sent_codes == []

    def test_mail_failure_propagates(self, db):
        from campusvote.services.otp_service import OtpService

        def failing_sender(email, code):
            raise MailDeliveryError()

        service = OtpService(db, send_code=failing_sender)

        with pytest.raises(MailDeliveryError):
            service.request_otp('a@college.edu')


class TestVerifyOtp:
    """Tests for checking signup codes."""

    def test_correct_code_verifies(self, otp_service, sent_codes):
        otp_service.request_otp('a@college.edu')
        _, code = sent_codes[-1]

        challenge = otp_service.verify('a@college.edu', code)

        assert challenge.email == 'a@college.edu'

    def test_wrong_code_rejected(self, otp_service, sent_codes):
        otp_service.request_otp('a@college.edu')
        _, code = sent_codes[-1]
        wrong = '100000' if code != '100000' else '100001'

        with pytest.raises(InvalidOtp):
            otp_service.verify('a@college.edu', wrong)

    def test_old_code_rejected_after_new_request(self, otp_service, sent_codes):
        otp_service.request_otp('a@college.edu')
        _, first = sent_codes[-1]
        otp_service.request_otp('a@college.edu')
        _, second = sent_codes[-1]

        if first != second:
            with pytest.raises(InvalidOtp):
                otp_service.verify('a@college.edu', first)
        otp_service.verify('a@college.edu', second)

    def test_expired_code_rejected(self, otp_service, db):
        """Test that a code older than five minutes fails with OtpExpired."""
        db.otp_challenges.insert_one({
            'email': 'late@college.edu',
            'code': '123456',
            'created_at': datetime.utcnow() - timedelta(minutes=5, seconds=1)
        })

        with pytest.raises(OtpExpired):
            otp_service.verify('late@college.edu', '123456')

    def test_code_just_inside_window_accepted(self, otp_service, db):
        db.otp_challenges.insert_one({
            'email': 'ontime@college.edu',
            'code': '654321',
            'created_at': datetime.utcnow() - timedelta(minutes=4, seconds=50)
        })

        assert otp_service.verify('ontime@college.edu', '654321') is not None

    def test_expired_signup_fails(self, auth_service, db):
        db.otp_challenges.insert_one({
            'email': 'late@college.edu',
            'code': '123456',
            'created_at': datetime.utcnow() - timedelta(minutes=6)
        })

        with pytest.raises(OtpExpired):
            auth_service.signup('Late Student', 'late@college.edu', 'ValidPass123!', otp='123456')
        assert db.students.count_documents({'email': 'late@college.edu'}) == 0

    def test_numeric_code_accepted(self, otp_service, sent_codes):
        """JSON clients may send the code as a number."""
        otp_service.request_otp('a@college.edu')
        _, code = sent_codes[-1]

        assert otp_service.verify('a@college.edu', int(code)) is not None

    def test_consume_removes_challenges(self, otp_service, db):
        otp_service.request_otp('a@college.edu')

        assert otp_service.consume('a@college.edu') == 1
        assert db.otp_challenges.count_documents({'email': 'a@college.edu'}) == 0
