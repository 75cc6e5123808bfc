# Service modules
from campusvote.services.auth_service import AuthService
from campusvote.services.otp_service import OtpService
from campusvote.services.vote_service import VoteService
from campusvote.services.directory_service import DirectoryService
from campusvote.services.token_service import TokenService
from campusvote.services.rate_limiter import RateLimiter

__all__ = ['AuthService', 'OtpService', 'VoteService', 'DirectoryService',
           'TokenService', 'RateLimiter']
