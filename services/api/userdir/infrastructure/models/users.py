import sqlmodel as sqlm
import sqlalchemy as sa
import datetime as dt


class UserType(sqlm.SQLModel, table=True):
    __tablename__ = 'user_types'
    type_key: str = sqlm.Field(primary_key=True, sa_type=sa.String(32), description='Role key, e.g. UTYPE_USER')
    permission_bitfield: int = sqlm.Field(default=0, description='Permission bits. Stored and listed, never interpreted')


class User(sqlm.SQLModel, table=True):
    __tablename__ = 'users'
    id: int | None = sqlm.Field(default=None, primary_key=True, description='Integer user identifier')
    username: str = sqlm.Field(sa_type=sa.String(64), description='Display username')
    email: str = sqlm.Field(unique=True, sa_type=sa.String(254), description='A unique email used for logging in')
    user_type: str = sqlm.Field(foreign_key='user_types.type_key', sa_type=sa.String(32), description='Role identifier')
    nickname: str | None = sqlm.Field(default=None, sa_type=sa.String(64), description='Optional nickname, NULL when unset')
    password_hash: str = sqlm.Field(sa_type=sa.String(128), description='A hashed password')


class UserMessage(sqlm.SQLModel, table=True):
    __tablename__ = 'user_messages'
    id: int | None = sqlm.Field(default=None, primary_key=True)
    user_id: int = sqlm.Field(foreign_key='users.id', index=True, description='Author and owner of the message')
    message: str = sqlm.Field(sa_type=sa.Text)
    created_at: dt.datetime | None = sqlm.Field(
        default=None,
        sa_column=sa.Column(sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        description='Assigned by the database on insert',
    )
