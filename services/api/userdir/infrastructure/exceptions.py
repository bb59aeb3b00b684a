from userdir.common.exceptions import AppBaseException

class CustomStorageException(AppBaseException):
    """Base for exceptions raised manually in storage services (databases)"""

### Startup
class StorageBootError(CustomStorageException):
    '''Storage service failed to boot within given time'''

class StorageNotInitialzied(CustomStorageException):
    '''Storage manager has no engine: either init() was never called or close() already was'''
