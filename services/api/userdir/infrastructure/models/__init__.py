from .users import User, UserType, UserMessage

TABLES = [model.__tablename__ for model in (UserType, User, UserMessage)]
