from pydantic import BaseModel, Field


class LoginPayload(BaseModel):
    password: str


class RenamePayload(BaseModel):
    path: str = Field(..., min_length=1)
    newName: str = Field(..., min_length=1)


class AlbumPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class AlbumVideoPayload(BaseModel):
    path: str = Field(..., min_length=1)
