from pydantic import BaseModel, Field

# --- Request Schemas ---

class LoginRequest(BaseModel):
    """Credentials submitted to the login endpoint."""
    username: str = Field(..., description="Username (case-sensitive)")
    password: str = Field(..., description="Password")

# --- Response Schemas ---

class TokenResponse(BaseModel):
    """Signed token returned after a successful login."""
    token: str = Field(..., description="Signed JWT carrying the username as subject and a 'roles' claim")

class MessageResponse(BaseModel):
    message: str
