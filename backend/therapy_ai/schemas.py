from __future__ import annotations
from datetime import date
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email
from pydantic.alias_generators import to_camel

Role = Literal["admin", "therapist"]
Sender = Literal["therapist", "ai"]


class StoredRecord(BaseModel):
    """
    Base for everything persisted in the key-value store.
    Attributes are snake_case in Python and camelCase in the stored JSON.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- stored records ---------------------------------------------------------

class User(StoredRecord):
    id: str
    role: Role
    name: str
    email: str
    password: str  # plaintext, demo only
    created_at: str


class Therapist(StoredRecord):
    id: str  # same id as the paired User
    name: str
    email: str
    created_at: str


class Child(StoredRecord):
    id: str
    therapist_id: str
    name: str
    dob: date
    age_years: int
    category: str = ""
    concern: str = ""
    guardian: str = ""
    notes: str = ""
    milestones: List[str] = Field(default_factory=list)
    strategies: List[str] = Field(default_factory=list)
    updated_at: str


class ChatMessage(StoredRecord):
    id: str
    sender: Sender = Field(..., alias="from")
    text: str
    ts: str


# --- service inputs ---------------------------------------------------------

def _check_email(v: str) -> str:
    # format check only; the address is stored exactly as typed
    validate_email(v)
    return v


EmailText = Annotated[str, AfterValidator(_check_email)]


class TherapistCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailText
    password: str = Field(..., min_length=1)


class TherapistUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailText] = None


class ChildCreate(BaseModel):
    name: str = Field(..., min_length=1)
    dob: date
    category: str = ""
    concern: str = ""
    guardian: str = ""
    notes: str = ""
    milestones: List[str] = []
    strategies: List[str] = []


class ChildUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    dob: Optional[date] = None
    category: Optional[str] = None
    concern: Optional[str] = None
    guardian: Optional[str] = None
    notes: Optional[str] = None
    milestones: Optional[List[str]] = None
    strategies: Optional[List[str]] = None


# --- HTTP requests / responses ----------------------------------------------

class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    user: "UserPublic"
    redirect_to: str


class UserPublic(StoredRecord):
    """User without the password, for responses."""
    id: str
    role: Role
    name: str
    email: str
    created_at: str


class ChildForm(BaseModel):
    """
    Add/edit child form. Only the year of birth is collected; the stored
    date of birth is January 1st of that year.
    """
    name: str = Field(..., min_length=1)
    year_of_birth: int = Field(..., ge=1900, le=2100)
    category: str = ""
    concern: str = ""
    notes: Optional[str] = ""

    def to_child_create(self) -> ChildCreate:
        return ChildCreate(
            name=self.name,
            dob=date(self.year_of_birth, 1, 1),
            category=self.category,
            concern=self.concern,
            guardian="",
            notes=self.notes or "",
        )

    def to_child_update(self) -> ChildUpdate:
        return ChildUpdate(
            name=self.name,
            dob=date(self.year_of_birth, 1, 1),
            category=self.category,
            concern=self.concern,
            guardian="",
            notes=self.notes or "",
        )


class TherapistRow(Therapist):
    client_count: int = 0


class PasswordResetResp(BaseModel):
    therapist_id: str
    password: str


class ChatSendReq(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a message")
        return v


class ChatSummary(BaseModel):
    child: Child
    message_count: int
    last_message: Optional[ChatMessage] = None


class ChatHistoryResp(BaseModel):
    child_id: str
    history: List[ChatMessage]


LoginResponse.model_rebuild()
