from userdir.common.exceptions import AppBaseException

class AuthBaseException(AppBaseException):
    '''Base for authentication/authorization failures'''

class CredentialsException(AuthBaseException):
    '''Email/password pair did not match. Same message whether the email exists or not'''
    def __init__(self, *args):
        super().__init__(*(args or ("Invalid email or password",)))

class InvalidTokenException(AuthBaseException):
    '''Bearer token is missing, malformed, forged or signed with an unexpected algorithm'''

class TokenExpiredException(InvalidTokenException):
    '''Token carries an `exp` claim in the past'''
