from pydantic import BaseModel, ConfigDict, Field

class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)
