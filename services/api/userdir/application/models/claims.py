import pydantic as p, datetime as dt


class TokenClaims(p.BaseModel):
    '''Signed payload of an access token. Wire names match the tokens issued so far: {"id", "userType"}'''
    model_config = p.ConfigDict(populate_by_name=True)

    id: int
    user_type: str = p.Field(alias='userType')
    iat: int|None = None
    exp: int|None = None

    @classmethod
    def issue(cls, user_id: int, user_type: str, expires_minutes: int|None = None) -> "TokenClaims":
        now = dt.datetime.now(dt.timezone.utc)
        exp = int((now + dt.timedelta(minutes=expires_minutes)).timestamp()) if expires_minutes else None
        return cls(id=user_id, user_type=user_type, iat=int(now.timestamp()), exp=exp)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Subject(p.BaseModel):
    '''Identity the authorization gate extracts from a verified token'''
    id: int
    user_type: str
