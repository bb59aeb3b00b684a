import datetime as dt
import pydantic as p


class UserMessage(p.BaseModel):
    id: int|None = None
    user_id: int
    message: str
    created_at: dt.datetime|None = None #assigned by the store
