import pydantic as p

class LoginModel(p.BaseModel):
    email: str = p.Field(min_length=1)
    password: str = p.Field(min_length=1)

class TokenResponse(p.BaseModel):
    token: str
