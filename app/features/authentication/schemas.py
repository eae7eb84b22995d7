from pydantic import BaseModel

# ---------- Inputs ----------

class SignInIn(BaseModel):
    username: str
    password: str


# ---------- Outputs ----------

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes (durée de l'access token)
