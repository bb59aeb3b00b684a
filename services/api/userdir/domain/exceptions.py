from userdir.common.exceptions import AppBaseException

class DomainLayerException(AppBaseException):
    '''Base for domain layer'''



### Access related
class AccessException(DomainLayerException):
    '''Base for all exceptions related to access issues'''

class NotResourceOwner(AccessException):
    """Raised when the authenticated subject acts on a resource of another user"""

### Store related
class ModelIntegrityError(Exception):
    '''Base for integrity violation exceptons. Use as adapter for repositories' integrity exceptions'''
    def __init__(self, *args, orig: Exception|None = None):
        super().__init__(*args)
        self.orig = orig

class StoreError(DomainLayerException, ModelIntegrityError):
    '''Raised when a round trip to the credential store fails. Message carries the store error text'''

####### Users

class BaseUserException(DomainLayerException):
    '''Base for user Exceptions'''

class UserValueError(BaseUserException):
    '''Use within User Domain model methods as ValueError'''

class UserDoesNotExist(BaseUserException):
    '''Raised when user does not exist'''

class UserIntegrityError(BaseUserException, ModelIntegrityError):
    '''Raised when user model integrity gets violated'''

class UserAlreadyExists(UserIntegrityError):
    '''Raised when user with such email already exists'''
