from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class SkillCategory(str, Enum):
    """Broad grouping of a skill, as stored in the skill catalog."""

    PROGRAMMING = "programming"
    FRAMEWORK = "framework"
    DATABASE = "database"
    CLOUD = "cloud"
    DEVOPS = "devops"
    DESIGN = "design"
    SOFT_SKILL = "soft-skill"
    LANGUAGE = "language"
    TOOL = "tool"
    OTHER = "other"


def canonicalize_skill_name(name: str) -> str:
    """Return the canonical (lowercased, trimmed) form of a skill name."""
    return name.strip().lower()


class Skill(BaseModel):
    """A catalog skill referenced by candidates and job postings."""

    name: str = Field(description="Canonical skill name (lowercased, trimmed)")
    category: SkillCategory = Field(
        default=SkillCategory.OTHER,
        description="Skill category",
    )
    synonyms: list[str] = Field(
        default_factory=list,
        description="Alternative names for the skill (e.g., 'js' for 'javascript')",
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_plain_name(cls, data):
        """Allow a bare string in place of a full skill record."""
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("name")
    @classmethod
    def _canonical_name(cls, value: str) -> str:
        return canonicalize_skill_name(value)

    @field_validator("synonyms")
    @classmethod
    def _canonical_synonyms(cls, value: list[str]) -> list[str]:
        return [canonicalize_skill_name(s) for s in value]


class ExperienceEntry(BaseModel):
    """A single position in a candidate's work history."""

    title: str = Field(default="", description="Position title")
    description: str = Field(default="", description="What the candidate did in the role")


class CandidateProfile(BaseModel):
    """Candidate profile as provided by the account service. Read-only here."""

    id: str = Field(description="Candidate identifier")
    bio: str | None = Field(default=None, description="Free-text biography")
    skills: list[Skill] = Field(default_factory=list, description="Candidate skills")
    experience: list[ExperienceEntry] = Field(
        default_factory=list,
        description="Work history, most recent first",
    )
    location: str | None = Field(default=None, description="Candidate location")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        """Accept numeric ids from stores that key records by integer."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]
