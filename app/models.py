# app/models.py
"""
Pydantic models for the two request shapes and the HubSpot payload.

BEGINNER NOTES:
- Inbound models are permissive on purpose: every field is optional and
  non-string values become None. Required-field rules live in the handlers
  so we can return our own messages (and collect several at once).
- Outbound models use aliases so .model_dump(by_alias=True) matches the
  HubSpot Forms API JSON exactly.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# HubSpot object type id for contacts
CONTACT_OBJECT_TYPE_ID = "0-1"


class _Inbound(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _strings_only(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None


class EmailCaptureRequest(_Inbound):
    email: Optional[str] = None
    page_uri: Optional[str] = Field(default=None, alias="pageUri")
    hutk: Optional[str] = None


class FullFormRequest(_Inbound):
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    page_uri: Optional[str] = Field(default=None, alias="pageUri")
    hutk: Optional[str] = None


class SubmissionField(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    object_type_id: str = Field(default=CONTACT_OBJECT_TYPE_ID, alias="objectTypeId")
    name: str
    value: str


class SubmissionContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page_uri: str = Field(default="", alias="pageUri")
    page_name: str = Field(alias="pageName")
    hutk: Optional[str] = None


class FormSubmission(BaseModel):
    fields: List[SubmissionField]
    context: SubmissionContext

    def to_json(self) -> dict:
        # hutk is left out entirely when we don't have one
        return self.model_dump(by_alias=True, exclude_none=True)


def build_submission(
    values: List[tuple[str, str]],
    page_name: str,
    page_uri: Optional[str] = None,
    hutk: Optional[str] = None,
) -> FormSubmission:
    """Build the payload from (name, already-trimmed value) pairs, in order."""
    return FormSubmission(
        fields=[SubmissionField(name=n, value=v) for n, v in values],
        context=SubmissionContext(page_uri=page_uri or "", page_name=page_name, hutk=hutk or None),
    )
