# Database models
from campusvote.models.student import Student
from campusvote.models.otp_challenge import OtpChallenge
from campusvote.models.vote import Vote
from campusvote.models.candidate import Candidate
from campusvote.models.professor import Professor
from campusvote.models.home_banner import HomeBanner

__all__ = ['Student', 'OtpChallenge', 'Vote', 'Candidate', 'Professor', 'HomeBanner']
