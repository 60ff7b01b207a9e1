from enum import Enum

from pydantic import BaseModel, Field, field_validator

from talentmatch.schemas.candidate import Skill


class ExperienceLevel(str, Enum):
    """Experience band a job posting asks for."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"

    @classmethod
    def _missing_(cls, value):
        """Allow case-insensitive string lookup."""
        if isinstance(value, str):
            value_lower = value.strip().lower()
            for member in cls:
                if member.value == value_lower:
                    return member
        return None


class JobStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    DRAFT = "draft"


class JobPosting(BaseModel):
    """A job posting as provided by the job service. Read-only here."""

    id: str = Field(description="Job identifier")
    title: str = Field(description="Job title")
    description: str = Field(description="Job description")
    required_skills: list[Skill] = Field(
        default_factory=list,
        description="Skills the posting requires",
    )
    responsibilities: list[str] = Field(default_factory=list, description="Responsibilities")
    qualifications: list[str] = Field(default_factory=list, description="Qualifications")
    experience_level: ExperienceLevel | None = Field(
        default=None,
        description="Requested experience band; unknown values are treated as unset",
    )
    location: str | None = Field(default=None, description="Job location")
    status: JobStatus = Field(default=JobStatus.ACTIVE, description="Posting status")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        """Accept numeric ids from stores that key records by integer."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("experience_level", mode="before")
    @classmethod
    def _unknown_level_is_unset(cls, value):
        if value is None or isinstance(value, ExperienceLevel):
            return value
        try:
            return ExperienceLevel(value)
        except ValueError:
            return None

    @property
    def required_skill_names(self) -> list[str]:
        return [skill.name for skill in self.required_skills]
